"""
Generate human-readable run reports in Markdown format.

RunReporter turns RunMetrics, manifest quality results and the selected
artifacts into a Markdown report.

Report sections:
- Header with run metadata (ID, version, target, duration)
- Summary table with core metrics
- Selection reasons and their frequency
- Selected artifacts
- Data quality check results
- Client health status
"""
from datetime import datetime
from typing import List, Optional, Sequence
from pathlib import Path
from tabulate import tabulate

from resolution import ArtifactEntry, OsName

from .metrics import RunMetrics
from .quality_checks import QualityCheckResult


class RunReporter:
    """
    Generates Markdown reports from run metrics.

    Reports are readable as plain text and render as GitHub-flavored Markdown.
    """

    def generate_report(
        self,
        metrics: RunMetrics,
        quality_results: List[QualityCheckResult],
        selected: Optional[Sequence[ArtifactEntry]] = None
    ) -> str:
        """
        Generate full run report in Markdown format.

        Args:
            metrics: RunMetrics object from a completed run
            quality_results: List of quality check results
            selected: Artifacts selected for the target

        Returns:
            Markdown-formatted report as string
        """
        lines = []

        # Header
        lines.append("# Artifact Resolution Report")
        lines.append(f"**Run ID:** {metrics.run_id}")
        lines.append(f"**Version:** {metrics.version_id or 'n/a'}")
        if metrics.target:
            target = ", ".join(f"{k}={v}" for k, v in metrics.target.items() if v)
            lines.append(f"**Target:** {target or 'unconstrained'}")
        lines.append(f"**Started:** {metrics.started_at.isoformat()}")
        if metrics.completed_at:
            duration = (metrics.completed_at - metrics.started_at).total_seconds()
            lines.append(f"**Duration:** {duration:.1f} seconds")
        lines.append("")

        # Summary table
        lines.append("## Summary")
        summary_data = [
            ["Manifest Versions", metrics.versions_total],
            ["Artifacts", metrics.artifacts_total],
            ["Selected", metrics.artifacts_selected],
            ["Excluded", metrics.artifacts_excluded],
            ["Errors", metrics.errors],
        ]
        lines.append(tabulate(summary_data, headers=["Metric", "Value"], tablefmt="github"))
        lines.append("")

        if metrics.reasons:
            lines.append("## Selection Reasons")
            reason_data = [[k, v] for k, v in sorted(metrics.reasons.items())]
            lines.append(tabulate(reason_data, headers=["Reason", "Count"], tablefmt="github"))
            lines.append("")

        if selected:
            lines.append("## Selected Artifacts")
            os_value = (metrics.target or {}).get("os")
            os_name = OsName.parse(os_value) if os_value else None
            arch = (metrics.target or {}).get("arch")
            artifact_data = [
                [
                    a.name,
                    a.download.size if a.download else "",
                    "yes" if a.has_rules else "no",
                    a.native_classifier(os_name, arch) or "",
                ]
                for a in selected
            ]
            lines.append(tabulate(
                artifact_data, headers=["Artifact", "Size", "Rules", "Natives"], tablefmt="github"
            ))
            lines.append("")

        # Quality checks
        lines.append("## Data Quality Checks")
        quality_data = []
        for qr in quality_results:
            status = "✓" if qr.passed else "✗"
            quality_data.append([status, qr.check_name, qr.message])
        lines.append(tabulate(quality_data, headers=["Status", "Check", "Details"], tablefmt="github"))
        lines.append("")

        if metrics.client_health:
            lines.append("## Client Health")
            health_data = []
            for source, health in metrics.client_health.items():
                status = "✓" if health.get("healthy", False) else "✗"
                records = health.get("records", 0)
                health_data.append([status, source, records])
            lines.append(tabulate(health_data, headers=["Status", "Client", "Records"], tablefmt="github"))
            lines.append("")

        return "\n".join(lines)

    def save_report(self, report: str, output_dir: Path) -> Path:
        """
        Save report to file with timestamp.

        Args:
            report: Markdown report content
            output_dir: Directory to save report in

        Returns:
            Path to saved report file
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.utcnow().strftime("%Y%m%d-%H%M%S")
        filepath = output_dir / f"resolution-report-{timestamp}.md"
        filepath.write_text(report)
        return filepath

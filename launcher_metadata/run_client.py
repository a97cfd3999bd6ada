#!/usr/bin/env python3
"""
Command-line runner for the launcher metadata client.

This module coordinates one resolution run:
1. Manifest: Fetch the version manifest
2. Quality: Run data quality checks on the manifest
3. Lookup: Resolve the requested version id (or release/snapshot alias)
4. Version: Fetch the version's descriptor document
5. Selection: Select the libraries that apply to the target machine
6. Reporting: Generate a run report and export the selected libraries

Usage:
    python run_client.py [--config path/to/config.yaml] [--version 1.19.3]
    python run_client.py --search 1.12
"""
import sys
import json
import re
import uuid
import yaml
import logging
import argparse
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# Add project root to Python path
sys.path.insert(0, str(Path(__file__).parent))

from catalog import VersionDescriptor, VersionDocument, VersionIndex, VersionManifest
from ingestion import AssetIndexClient, ManifestClient, VersionClient
from observability import ManifestQualityChecker, RunMetrics, RunReporter
from resolution import (
    ArtifactEntry,
    ArtifactSelector,
    RuleEngine,
    SelectionExplainer,
    TargetEnvironment,
    host_environment,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

REQUIRED_SOURCES = ["manifest", "version", "asset_index"]


class MetadataRun:
    """
    Orchestrates a resolution run from configuration.

    Design decisions:
    - Single run_id tracks the entire execution
    - Clients do I/O; the catalog and resolution layers stay pure
    - Metrics captured at every stage
    """

    def __init__(self, config_path: str = "config.yaml"):
        """
        Initialize the run with configuration.

        Args:
            config_path: Path to YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(self.config_path) as f:
            self.config = yaml.safe_load(f) or {}

        if "sources" not in self.config:
            raise ValueError("Missing 'sources' section in config")

        for source in REQUIRED_SOURCES:
            if source not in self.config["sources"]:
                raise ValueError(f"Missing required source configuration: sources.{source}")

        level = self.config.get("logging", {}).get("level")
        if level:
            logging.getLogger().setLevel(level.upper())

        sources = self.config["sources"]
        self.manifest_client = ManifestClient(sources["manifest"])
        self.version_client = VersionClient(sources["version"])
        self.asset_index_client = AssetIndexClient(sources["asset_index"])

        self.engine = RuleEngine()
        self.selector = ArtifactSelector(self.engine)
        self.explainer = SelectionExplainer()
        self.reporter = RunReporter()
        self.output_dir = Path(self.config.get("output", {}).get("dir", "output"))

        self.manifest: Optional[VersionManifest] = None
        self.index: Optional[VersionIndex] = None
        self.document: Optional[VersionDocument] = None
        self.selected: List[ArtifactEntry] = []
        self.explanations: List[Dict[str, Any]] = []
        self.target: Optional[TargetEnvironment] = None

        logger.info(f"Client initialized with config: {config_path}")

    def load_index(self) -> VersionIndex:
        """Fetch the manifest once and index it."""
        if self.index is None:
            self.manifest = self.manifest_client.fetch()
            self.index = VersionIndex.from_manifest(self.manifest)
        return self.index

    def search(self, pattern: str, regex: bool = False) -> List[VersionDescriptor]:
        """Search manifest versions by substring, or by regular expression."""
        index = self.load_index()
        return index.search(re.compile(pattern) if regex else pattern)

    def resolve_target(
        self,
        overrides: Optional[Dict[str, Any]] = None
    ) -> Tuple[Optional[str], Optional[TargetEnvironment]]:
        """
        Work out the host OS identifier and target environment to select for.

        Returns (None, None) when no target is configured, meaning no filtering.
        """
        target_cfg = dict(self.config.get("target") or {})
        for key, value in (overrides or {}).items():
            if value is not None:
                target_cfg[key] = value

        if target_cfg.get("all"):
            return None, None

        if target_cfg.get("use_host"):
            # Explicit settings take precedence over the detected host values
            env = host_environment()
            return target_cfg.get("os") or sys.platform, TargetEnvironment(
                arch=target_cfg.get("arch") or env.arch,
                os_version=target_cfg.get("os_version") or env.os_version,
            )

        host_os = target_cfg.get("os")
        arch = target_cfg.get("arch")
        os_version = target_cfg.get("os_version")
        if host_os is None and arch is None and os_version is None:
            return None, None

        return host_os, TargetEnvironment(arch=arch, os_version=os_version)

    def run(
        self,
        version_id: Optional[str] = None,
        target_overrides: Optional[Dict[str, Any]] = None
    ) -> RunMetrics:
        """
        Execute a complete resolution run.

        Args:
            version_id: Version id or release/snapshot alias. Defaults to the
                configured version, then the latest release.
            target_overrides: Target settings that take precedence over config

        Returns:
            RunMetrics object with execution statistics

        Raises:
            RuntimeError: If a stage fails
        """
        run_id = uuid.uuid4().hex[:12]
        metrics = RunMetrics(run_id=run_id, started_at=datetime.utcnow())
        requested = version_id or self.config.get("version") or "release"

        logger.info(f"=== Starting Run: {run_id} ===")

        try:
            logger.info("Stage 1: Fetching version manifest")
            index = self.load_index()
            metrics.versions_total = len(self.manifest.versions)

            logger.info("Stage 2: Running manifest quality checks")
            quality_results = ManifestQualityChecker(self.manifest).run_all_checks()
            for result in quality_results:
                if not result.passed:
                    logger.warning(f"  Quality check {result.check_name} failed: {result.message}")

            logger.info(f"Stage 3: Resolving version '{requested}'")
            descriptor = index.resolve(requested)
            if descriptor is None:
                raise LookupError(f"Version not found in manifest: {requested}")
            metrics.version_id = descriptor.id

            logger.info(f"Stage 4: Fetching version document for {descriptor.id}")
            self.document = self.version_client.fetch(descriptor)

            logger.info("Stage 5: Selecting libraries")
            host_os, target_env = self.resolve_target(target_overrides)
            self._select(metrics, host_os, target_env)

            if self.config.get("fetch_asset_index") and self.document.asset_index:
                logger.info("Stage 5b: Fetching asset index")
                assets = self.asset_index_client.fetch(self.document.asset_index)
                logger.info(f"  {len(assets)} asset objects, {assets.total_size} bytes")

            logger.info("Stage 6: Generating reports")
            self._record_health(metrics)
            metrics.completed_at = datetime.utcnow()
            report = self.reporter.generate_report(metrics, quality_results, self.selected)
            report_path = self.reporter.save_report(report, self.output_dir)
            self._export_selection(metrics)

            duration = (metrics.completed_at - metrics.started_at).total_seconds()
            logger.info(f"=== Run Complete ===")
            logger.info(f"Duration: {duration:.1f}s")
            logger.info(f"Selected: {metrics.artifacts_selected}/{metrics.artifacts_total}")
            logger.info(f"Report: {report_path}")

        except Exception as e:
            metrics.record_error(str(e), {"version_id": requested})
            self._record_health(metrics)
            logger.error(f"Run failed: {e}", exc_info=True)
            raise RuntimeError(f"Run failed: {e}") from e

        return metrics

    def _select(
        self,
        metrics: RunMetrics,
        host_os: Optional[str],
        target_env: Optional[TargetEnvironment]
    ):
        """
        Select libraries for the target and record one reason per artifact.
        """
        libraries = self.document.libraries
        self.selected = self.selector.select_applicable(libraries, host_os, target_env)

        if target_env is None:
            metrics.target = {}
            self.target = None
            self.explanations = []
            for entry in libraries:
                metrics.record_artifact(entry.name, True, "UNFILTERED")
            return

        effective = self.selector.effective_target(host_os, target_env)
        self.target = effective
        metrics.target = {
            "os": effective.os_name.value if effective.os_name else None,
            "arch": effective.arch,
            "os_version": effective.os_version,
        }

        self.explanations = []
        for entry in libraries:
            result = self.engine.explain(entry.rules, effective, artifact_name=entry.name)
            reason = result['reason_code']
            if reason == 'RULE_FAILED':
                failed = next(t for t in result['evaluation_trace'] if not t['matched'])
                reason = failed['outcome']
            metrics.record_artifact(entry.name, result['applicable'], reason)
            self.explanations.append(result)

        logger.info(
            f"  Selected {metrics.artifacts_selected} of {metrics.artifacts_total} libraries"
        )

    def _record_health(self, metrics: RunMetrics):
        for client in (self.manifest_client, self.version_client, self.asset_index_client):
            health = client.get_health()
            if health.last_fetch is None:
                continue
            metrics.client_health[health.source_id] = {
                "healthy": health.is_healthy,
                "records": health.records_fetched,
                "error": health.error_message
            }

    def _native_classifiers(self) -> Dict[str, str]:
        """Map selected artifact names to their native classifier for the target."""
        if self.target is None:
            return {}
        classifiers = {}
        for entry in self.selected:
            classifier = entry.native_classifier(self.target.os_name, self.target.arch)
            if classifier:
                classifiers[entry.name] = classifier
        return classifiers

    def _export_selection(self, metrics: RunMetrics):
        """
        Export the selected libraries to output/selected_libraries.json.

        Output format:
        {
          "generated_at": "2024-01-11T12:00:00Z",
          "version_id": "1.19.3",
          "target": {...},
          "library_count": 42,
          "libraries": [...],
          "natives": {"<library name>": "natives-windows-64"}
        }
        """
        output = {
            "generated_at": datetime.utcnow().isoformat() + "Z",
            "version_id": metrics.version_id,
            "target": metrics.target,
            "library_count": len(self.selected),
            "libraries": [entry.raw or {"name": entry.name} for entry in self.selected],
            "natives": self._native_classifiers(),
            "metrics": metrics.to_dict()
        }

        output_path = self.output_dir / "selected_libraries.json"
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            json.dump(output, f, indent=2)

        logger.info(f"  Exported {len(self.selected)} libraries to {output_path}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Resolve a game version's platform libraries"
    )
    parser.add_argument(
        "--config",
        default="config.yaml",
        help="Path to configuration file (default: config.yaml)"
    )
    parser.add_argument("--version", help="Version id, or 'release' / 'snapshot'")
    parser.add_argument("--search", help="List versions whose id contains this text")
    parser.add_argument("--regex", action="store_true", help="Treat --search as a regular expression")
    parser.add_argument("--os", help="Target OS (windows, linux, macos, or a platform id like win32)")
    parser.add_argument("--arch", help="Target architecture (e.g. x86, x86_64)")
    parser.add_argument("--os-version", help="Target OS version string")
    parser.add_argument("--host", action="store_true", help="Select for the running machine")
    parser.add_argument("--all", action="store_true", help="Do not filter libraries")
    parser.add_argument("--explain", action="store_true", help="Explain excluded libraries")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        client = MetadataRun(config_path=args.config)

        if args.search:
            matches = client.search(args.search, regex=args.regex)
            for version in matches:
                print(f"{version.id:30} {version.type.value:10} {version.release_time}")
            print(f"\n{len(matches)} version(s) found")
            sys.exit(0)

        metrics = client.run(
            version_id=args.version,
            target_overrides={
                "os": args.os,
                "arch": args.arch,
                "os_version": args.os_version,
                "use_host": True if args.host else None,
                "all": True if args.all else None,
            }
        )

        # Print summary
        print("\n" + "=" * 60)
        print("Resolution Summary")
        print("=" * 60)
        print(f"Run ID: {metrics.run_id}")
        print(f"Version: {metrics.version_id}")
        print(f"Libraries: {metrics.artifacts_selected} selected, {metrics.artifacts_excluded} excluded")
        print(f"Errors: {metrics.errors}")
        print("\nSelection Reasons:")
        for reason, count in sorted(metrics.reasons.items()):
            print(f"  {reason:24} {count:4}")
        if args.explain:
            print("\nExcluded Libraries:")
            for result in client.explanations:
                if not result['applicable']:
                    print(f"  {client.explainer.explain(result)}")
        print("=" * 60)

        sys.exit(0)

    except Exception as e:
        logger.error(f"Run failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

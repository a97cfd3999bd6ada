"""
Data quality checks for a fetched version manifest.

This module implements ManifestQualityChecker, which validates a parsed
VersionManifest before it is indexed.

Checks implemented:
- Unique ids: duplicate ids are tolerated by the index (last wins) but flagged
- Latest present: latest release/snapshot ids are listed in the manifest
- Secure URLs: every descriptor URL uses https
- Release times: every releaseTime parses as an ISO-8601 timestamp
"""
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List

from catalog import VersionManifest


@dataclass
class QualityCheckResult:
    """
    Result of a single quality check.

    Attributes:
        check_name: Unique identifier for the check
        passed: True if check passed, False otherwise
        message: Human-readable summary of the result
        details: Optional dict with additional context (e.g., counts)
    """
    check_name: str
    passed: bool
    message: str
    details: Dict[str, Any] = None


class ManifestQualityChecker:
    """Runs data quality checks against a parsed manifest."""

    def __init__(self, manifest: VersionManifest):
        self.manifest = manifest

    def run_all_checks(self) -> List[QualityCheckResult]:
        """
        Run all quality checks.

        Returns:
            List of QualityCheckResult objects, one per check
        """
        return [
            self.check_unique_ids(),
            self.check_latest_present(),
            self.check_secure_urls(),
            self.check_release_times(),
        ]

    def check_unique_ids(self) -> QualityCheckResult:
        counts = Counter(v.id for v in self.manifest.versions)
        duplicates = sorted(version_id for version_id, n in counts.items() if n > 1)

        if duplicates:
            return QualityCheckResult(
                check_name="unique_ids",
                passed=False,
                message=f"{len(duplicates)} duplicate version id(s); last entry wins",
                details={"duplicates": duplicates[:10]}
            )
        return QualityCheckResult(
            check_name="unique_ids",
            passed=True,
            message=f"All {len(counts)} version ids are unique"
        )

    def check_latest_present(self) -> QualityCheckResult:
        ids = {v.id for v in self.manifest.versions}
        latest = self.manifest.latest
        missing = [
            channel for channel, version_id in (
                ("release", latest.release), ("snapshot", latest.snapshot)
            )
            if version_id not in ids
        ]

        if missing:
            return QualityCheckResult(
                check_name="latest_present",
                passed=False,
                message=f"Latest {', '.join(missing)} not listed in versions",
                details={"missing": missing}
            )
        return QualityCheckResult(
            check_name="latest_present",
            passed=True,
            message=f"Latest release {latest.release} and snapshot {latest.snapshot} are listed"
        )

    def check_secure_urls(self) -> QualityCheckResult:
        insecure = [v.id for v in self.manifest.versions if not v.url.startswith("https://")]

        if insecure:
            return QualityCheckResult(
                check_name="secure_urls",
                passed=False,
                message=f"{len(insecure)} version(s) with non-https URLs",
                details={"sample": insecure[:10]}
            )
        return QualityCheckResult(
            check_name="secure_urls",
            passed=True,
            message="All version URLs use https"
        )

    def check_release_times(self) -> QualityCheckResult:
        invalid = []
        for version in self.manifest.versions:
            try:
                datetime.fromisoformat(version.release_time.replace("Z", "+00:00"))
            except (ValueError, AttributeError):
                invalid.append(version.id)

        if invalid:
            return QualityCheckResult(
                check_name="release_times",
                passed=False,
                message=f"{len(invalid)} version(s) with unparseable releaseTime",
                details={"sample": invalid[:10]}
            )
        return QualityCheckResult(
            check_name="release_times",
            passed=True,
            message="All release times are valid ISO-8601 timestamps"
        )

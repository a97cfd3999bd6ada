"""
Observability layer for the metadata client.

This module provides metrics collection, manifest quality checks, and
reporting for resolution runs.

Main exports:
- RunMetrics: Tracks metrics for a run
- ManifestQualityChecker: Runs data quality checks on a manifest
- QualityCheckResult: Result of a quality check
- RunReporter: Generates Markdown reports
"""
from .metrics import RunMetrics
from .quality_checks import ManifestQualityChecker, QualityCheckResult
from .reporter import RunReporter

__all__ = [
    "RunMetrics",
    "ManifestQualityChecker",
    "QualityCheckResult",
    "RunReporter",
]

"""
Metrics collection for client runs.

This module provides RunMetrics, a dataclass that tracks observability
metrics for a single resolution run:
- Version counts from the manifest and the version that was resolved
- How many artifacts were selected and excluded
- Which reason codes decided the artifacts and how often
- Client health indicators
- Errors encountered
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Any, Optional
from collections import defaultdict


@dataclass
class RunMetrics:
    """
    Metrics for a single client run.

    Serializable with to_dict() for inclusion in JSON output.
    """
    run_id: str
    started_at: datetime
    completed_at: Optional[datetime] = None

    # Manifest
    versions_total: int = 0
    version_id: Optional[str] = None
    target: Dict[str, Optional[str]] = field(default_factory=dict)

    # Artifact selection
    artifacts_total: int = 0
    artifacts_selected: int = 0
    artifacts_excluded: int = 0
    errors: int = 0

    # Key: reason code (e.g., "NO_RULES", "CONDITION_MISMATCH"), Value: count
    reasons: Dict[str, int] = field(default_factory=lambda: defaultdict(int))

    # Key: source_id, Value: dict with health status
    client_health: Dict[str, Dict] = field(default_factory=dict)

    issues: List[Dict] = field(default_factory=list)

    def record_artifact(self, name: str, applicable: bool, reason_code: str):
        """
        Record the selection outcome of one artifact.

        Args:
            name: Artifact name
            applicable: Whether the artifact was selected
            reason_code: Reason code that decided it
        """
        self.artifacts_total += 1
        if applicable:
            self.artifacts_selected += 1
        else:
            self.artifacts_excluded += 1
        self.reasons[reason_code] += 1

    def record_error(self, error: str, context: Dict = None):
        """
        Record an error encountered during the run.

        Args:
            error: Error message
            context: Optional dict with additional context (e.g., version_id)
        """
        self.errors += 1
        self.issues.append({
            "type": "error",
            "message": error,
            "context": context or {}
        })

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to a JSON-serializable dictionary."""
        return {
            "run_id": self.run_id,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "versions_total": self.versions_total,
            "version_id": self.version_id,
            "target": self.target,
            "artifacts_total": self.artifacts_total,
            "artifacts_selected": self.artifacts_selected,
            "artifacts_excluded": self.artifacts_excluded,
            "errors": self.errors,
            "reasons": dict(self.reasons),
            "client_health": self.client_health,
            "issues": self.issues
        }

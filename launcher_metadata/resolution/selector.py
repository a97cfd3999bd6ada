"""
Selection of the artifacts that apply to a target machine.
"""
import logging
from dataclasses import replace
from typing import Any, Iterable, List, Optional, Tuple

from .artifacts import ArtifactEntry
from .platform import canonical_os_name
from .rule_engine import RuleEngine
from .rules import TargetEnvironment

logger = logging.getLogger(__name__)


class ArtifactSelector:
    """
    Filters a version's artifact list down to those applicable to a target.

    This is the boundary where the host runtime's platform identifier is
    translated to a canonical OS name; the engine itself never sees native
    identifiers.
    """

    def __init__(self, engine: Optional[RuleEngine] = None):
        self.engine = engine or RuleEngine()

    def select_applicable(
        self,
        artifacts: Iterable[Any],
        host_os: Optional[str],
        target_env: Optional[TargetEnvironment] = None
    ) -> List[ArtifactEntry]:
        """
        Return the applicable artifacts in input order.

        Args:
            artifacts: ArtifactEntry objects or raw library mappings
            host_os: Native platform identifier (e.g. sys.platform). When None,
                target_env.os_name is used as given.
            target_env: Target description. When omitted no filtering happens.

        Returns:
            Applicable artifacts, never reordered or duplicated

        Raises:
            MalformedRule: If an artifact carries malformed rules
        """
        entries = [ArtifactEntry.from_dict(artifact) for artifact in artifacts]
        if target_env is None:
            return entries

        selected, _ = self._split(entries, self.effective_target(host_os, target_env))
        return selected

    def partition(
        self,
        artifacts: Iterable[Any],
        host_os: Optional[str],
        target_env: TargetEnvironment
    ) -> Tuple[List[ArtifactEntry], List[ArtifactEntry]]:
        """Split artifacts into (selected, excluded), both in input order."""
        entries = [ArtifactEntry.from_dict(artifact) for artifact in artifacts]
        return self._split(entries, self.effective_target(host_os, target_env))

    def effective_target(
        self,
        host_os: Optional[str],
        target_env: TargetEnvironment
    ) -> TargetEnvironment:
        """Combine the mapped host OS with the rest of the target description."""
        if host_os is None:
            return target_env
        return replace(target_env, os_name=canonical_os_name(host_os))

    def _split(
        self,
        entries: List[ArtifactEntry],
        target: TargetEnvironment
    ) -> Tuple[List[ArtifactEntry], List[ArtifactEntry]]:
        selected = []
        excluded = []
        for entry in entries:
            if self.engine.is_applicable(entry.rules, target):
                selected.append(entry)
            else:
                excluded.append(entry)

        logger.debug(
            "Selected %d of %d artifacts for %s",
            len(selected), len(entries), target
        )
        return selected, excluded

"""
Lookup structure over the versions listed in a manifest.

Built once from one manifest snapshot and read-only afterwards.
"""
import logging
import re
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .models import LatestVersions, VersionDescriptor, VersionManifest

logger = logging.getLogger(__name__)

# Ids accepted by resolve() in place of a concrete version id
LATEST_ALIASES = ("release", "snapshot")


class InvalidPattern(TypeError):
    """Raised when search() gets something other than a string or compiled regex."""


class VersionIndex:
    """
    Maps version id -> VersionDescriptor.

    If the source contains duplicate ids the last one wins, keeping the
    position of the first occurrence.
    """

    def __init__(
        self,
        versions: Iterable[VersionDescriptor] = (),
        latest: Optional[LatestVersions] = None
    ):
        self._by_id: Dict[str, VersionDescriptor] = {}
        for version in versions:
            self._by_id[version.id] = version
        self.latest = latest

    @classmethod
    def build(cls, versions: Iterable[VersionDescriptor]) -> "VersionIndex":
        """Build an index from a sequence of descriptors. Never fails."""
        return cls(versions)

    @classmethod
    def from_manifest(cls, manifest: Optional[VersionManifest]) -> "VersionIndex":
        """
        Build an index from a manifest, keeping its latest release/snapshot ids.

        Raises:
            ValueError: If manifest is None
        """
        if manifest is None:
            raise ValueError("The manifest parameter cannot be None.")
        index = cls(manifest.versions, latest=manifest.latest)
        logger.debug("Indexed %d versions", len(index))
        return index

    def lookup(self, version_id: str) -> Optional[VersionDescriptor]:
        """Return the descriptor for version_id, or None if it is not listed."""
        return self._by_id.get(version_id)

    def resolve(self, version_id: str) -> Optional[VersionDescriptor]:
        """
        Like lookup(), but "release" and "snapshot" resolve to the latest
        version of that channel.
        """
        if version_id in LATEST_ALIASES and self.latest is not None:
            version_id = getattr(self.latest, version_id)
        return self.lookup(version_id)

    def search(self, pattern: Any) -> List[VersionDescriptor]:
        """
        Find versions whose id matches pattern, in manifest order.

        A str matches by substring containment; a compiled regular expression
        matches if it is found anywhere in the id.

        Raises:
            InvalidPattern: If pattern is neither a str nor a compiled regex
        """
        if isinstance(pattern, str):
            return [v for v in self._by_id.values() if pattern in v.id]
        if isinstance(pattern, re.Pattern):
            return [v for v in self._by_id.values() if pattern.search(v.id)]
        raise InvalidPattern(
            "Invalid type of pattern. It must be a string or a compiled regular expression."
        )

    def latest_release(self) -> Optional[str]:
        return self.latest.release if self.latest else None

    def latest_snapshot(self) -> Optional[str]:
        return self.latest.snapshot if self.latest else None

    def versions(self) -> List[VersionDescriptor]:
        return list(self._by_id.values())

    def ids(self) -> List[str]:
        return list(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, version_id: object) -> bool:
        return version_id in self._by_id

    def __iter__(self) -> Iterator[VersionDescriptor]:
        return iter(self._by_id.values())

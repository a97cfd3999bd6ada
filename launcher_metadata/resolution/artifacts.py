"""
Dependency artifact records ("libraries" in a version document).
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .rules import MalformedRule, OsName, Rule, parse_rules

# Pointer width substituted for "${arch}" in legacy natives classifiers
ARCH_POINTER_BITS = {
    "x86": "32",
    "arm32": "32",
    "x86_64": "64",
    "arm64": "64",
}


@dataclass(frozen=True)
class DownloadInfo:
    """Location and checksum of one downloadable file."""
    path: Optional[str]
    sha1: str
    size: int
    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DownloadInfo":
        try:
            return cls(
                path=data.get("path"),
                sha1=data["sha1"],
                size=int(data["size"]),
                url=data["url"],
            )
        except KeyError as e:
            raise ValueError(f"Download entry is missing field {e}") from e


@dataclass(frozen=True)
class ArtifactEntry:
    """
    One dependency artifact of a version.

    rules is None when the artifact carries no rules at all, meaning it is
    included for every target.
    """
    name: str
    download: Optional[DownloadInfo] = None
    rules: Optional[Tuple[Rule, ...]] = None
    natives: Optional[Dict[str, str]] = field(default=None, compare=False)
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Any) -> "ArtifactEntry":
        """
        Parse a library entry from a version document.

        Raises:
            MalformedRule: If the entry's rules are malformed.
            ValueError: If the entry has no name.
        """
        if isinstance(data, ArtifactEntry):
            return data
        if not isinstance(data, Mapping):
            raise ValueError(f"Library entry must be an object, got {type(data).__name__}")
        if "name" not in data:
            raise ValueError("Library entry is missing 'name'")

        artifact = (data.get("downloads") or {}).get("artifact")
        rules = parse_rules(data.get("rules"))

        natives = data.get("natives")
        if natives is not None and not isinstance(natives, Mapping):
            raise MalformedRule(f"Library natives must be an object, got {type(natives).__name__}")

        return cls(
            name=data["name"],
            download=DownloadInfo.from_dict(artifact) if artifact else None,
            rules=tuple(rules) if rules is not None else None,
            natives=dict(natives) if natives is not None else None,
            raw=dict(data),
        )

    @property
    def has_rules(self) -> bool:
        return self.rules is not None

    def native_classifier(self, os_name: Optional[OsName], arch: Optional[str] = None) -> Optional[str]:
        """
        Classifier of the native jar this artifact ships for an OS.

        Older version documents map OS keys ("windows", "linux", "osx") to a
        classifier such as "natives-windows-${arch}". The placeholder is
        filled with the pointer width of arch when it is known.

        Returns None when the artifact has no natives for os_name.
        """
        if not self.natives or os_name is None:
            return None

        classifier = None
        for key, value in self.natives.items():
            try:
                if OsName.parse(key) is os_name:
                    classifier = value
                    break
            except MalformedRule:
                continue
        if classifier is None:
            return None

        bits = ARCH_POINTER_BITS.get(arch) if arch else None
        if bits is not None:
            classifier = classifier.replace("${arch}", bits)
        return classifier

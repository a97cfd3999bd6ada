"""
Records parsed from the launcher metadata documents.

- version_manifest_v2.json: VersionManifest with one VersionDescriptor per
  known game version
- <version>.json: VersionDocument with the artifact list and asset index
- <asset index>.json: AssetIndex with every asset object

All records are frozen; parse them once and share them freely.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from resolution.artifacts import ArtifactEntry


def _require(data: Mapping[str, Any], key: str, context: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"{context} is missing field '{key}'") from None


class VersionType(Enum):
    """Release channel of a game version."""
    RELEASE = "release"
    SNAPSHOT = "snapshot"
    ALPHA = "alpha"
    OLD_ALPHA = "old_alpha"
    OLD_BETA = "old_beta"

    @classmethod
    def parse(cls, value: Any) -> "VersionType":
        for version_type in cls:
            if version_type.value == value:
                return version_type
        raise ValueError(f"Unknown version type: {value!r}")


@dataclass(frozen=True)
class VersionDescriptor:
    """One manifest entry, pointing at a version's full document."""
    id: str
    type: VersionType
    url: str
    time: str
    release_time: str
    sha1: Optional[str] = None
    compliance_level: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VersionDescriptor":
        context = f"Version entry {data.get('id', '<unknown>')!r}"
        return cls(
            id=_require(data, "id", context),
            type=VersionType.parse(_require(data, "type", context)),
            url=_require(data, "url", context),
            time=_require(data, "time", context),
            release_time=_require(data, "releaseTime", context),
            sha1=data.get("sha1"),
            compliance_level=int(data.get("complianceLevel", 0)),
        )


@dataclass(frozen=True)
class LatestVersions:
    """Newest release and snapshot ids."""
    release: str
    snapshot: str


@dataclass(frozen=True)
class VersionManifest:
    """The top-level version manifest."""
    latest: LatestVersions
    versions: Tuple[VersionDescriptor, ...]

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "VersionManifest":
        if data is None:
            raise ValueError("The manifest parameter cannot be None.")

        latest = _require(data, "latest", "Manifest")
        return cls(
            latest=LatestVersions(
                release=_require(latest, "release", "Manifest 'latest'"),
                snapshot=_require(latest, "snapshot", "Manifest 'latest'"),
            ),
            versions=tuple(
                VersionDescriptor.from_dict(entry)
                for entry in _require(data, "versions", "Manifest")
            ),
        )


@dataclass(frozen=True)
class AssetIndexReference:
    """Pointer to a version's asset index document."""
    id: str
    sha1: str
    size: int
    total_size: int
    url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AssetIndexReference":
        context = "Asset index reference"
        return cls(
            id=_require(data, "id", context),
            sha1=_require(data, "sha1", context),
            size=int(_require(data, "size", context)),
            total_size=int(_require(data, "totalSize", context)),
            url=_require(data, "url", context),
        )


@dataclass(frozen=True)
class AssetObject:
    """One asset file named in an asset index."""
    name: str
    hash: str
    size: int

    @property
    def path(self) -> str:
        """Relative object path, sharded by the first two hash characters."""
        return f"{self.hash[:2]}/{self.hash}"


@dataclass(frozen=True)
class AssetIndex:
    """Contents of an asset index document."""
    objects: Dict[str, AssetObject] = field(default_factory=dict, compare=False)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "AssetIndex":
        if data is None:
            raise ValueError("The asset index parameter cannot be None.")

        objects = {}
        for name, entry in _require(data, "objects", "Asset index").items():
            objects[name] = AssetObject(
                name=name,
                hash=_require(entry, "hash", f"Asset {name!r}"),
                size=int(_require(entry, "size", f"Asset {name!r}")),
            )
        return cls(objects=objects)

    @property
    def total_size(self) -> int:
        return sum(obj.size for obj in self.objects.values())

    def __len__(self) -> int:
        return len(self.objects)


@dataclass(frozen=True)
class JavaVersion:
    """Java runtime a version requires."""
    component: str
    major_version: int


@dataclass(frozen=True)
class VersionDocument:
    """A version's full descriptor document."""
    id: str
    type: VersionType
    main_class: str
    assets: Optional[str]
    asset_index: Optional[AssetIndexReference]
    java_version: Optional[JavaVersion]
    libraries: Tuple[ArtifactEntry, ...]
    time: Optional[str] = None
    release_time: Optional[str] = None
    compliance_level: int = 0
    minimum_launcher_version: Optional[int] = None
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "VersionDocument":
        """
        Parse a version document.

        Raises:
            ValueError: If data is None or a required field is missing
            MalformedRule: If a library carries malformed rules
        """
        if data is None:
            raise ValueError("The version response parameter cannot be None.")

        context = f"Version document {data.get('id', '<unknown>')!r}"

        asset_index = data.get("assetIndex")
        java = data.get("javaVersion")

        return cls(
            id=_require(data, "id", context),
            type=VersionType.parse(_require(data, "type", context)),
            main_class=_require(data, "mainClass", context),
            assets=data.get("assets"),
            asset_index=AssetIndexReference.from_dict(asset_index) if asset_index else None,
            java_version=JavaVersion(
                component=java.get("component", ""),
                major_version=int(_require(java, "majorVersion", "Java version")),
            ) if java else None,
            libraries=tuple(
                ArtifactEntry.from_dict(entry) for entry in data.get("libraries", [])
            ),
            time=data.get("time"),
            release_time=data.get("releaseTime"),
            compliance_level=int(data.get("complianceLevel", 0)),
            minimum_launcher_version=data.get("minimumLauncherVersion"),
            raw=dict(data),
        )

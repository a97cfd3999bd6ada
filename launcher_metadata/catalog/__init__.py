"""
Version catalog: records parsed from the metadata documents and the
version index built over a manifest.
"""
from .models import (
    AssetIndex,
    AssetIndexReference,
    AssetObject,
    JavaVersion,
    LatestVersions,
    VersionDescriptor,
    VersionDocument,
    VersionManifest,
    VersionType,
)
from .version_index import InvalidPattern, VersionIndex
from .version_document import VersionDocumentView

__all__ = [
    "AssetIndex",
    "AssetIndexReference",
    "AssetObject",
    "JavaVersion",
    "LatestVersions",
    "VersionDescriptor",
    "VersionDocument",
    "VersionManifest",
    "VersionType",
    "InvalidPattern",
    "VersionIndex",
    "VersionDocumentView",
]

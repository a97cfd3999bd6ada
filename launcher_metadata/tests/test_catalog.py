"""
Tests for catalog records and version document accessors.
"""
import pytest

from catalog import (
    AssetIndex,
    VersionDocument,
    VersionDocumentView,
    VersionManifest,
    VersionType,
)
from resolution import TargetEnvironment


class TestManifestParsing:
    """Parsing version_manifest_v2.json."""

    def test_parses_versions(self, manifest):
        first = manifest.versions[0]

        assert len(manifest.versions) == 7
        assert first.id == "23w05a"
        assert first.type is VersionType.SNAPSHOT
        assert first.sha1 == "sha1-23w05a"
        assert first.compliance_level == 1
        assert manifest.versions[-1].type is VersionType.OLD_BETA

    def test_none_manifest(self):
        with pytest.raises(ValueError, match="The manifest parameter cannot be None."):
            VersionManifest.from_dict(None)

    def test_unknown_version_type(self, manifest_data):
        manifest_data["versions"][0]["type"] = "nightly"

        with pytest.raises(ValueError, match="Unknown version type"):
            VersionManifest.from_dict(manifest_data)

    def test_missing_field_is_named(self, manifest_data):
        del manifest_data["versions"][1]["url"]

        with pytest.raises(ValueError, match="'url'"):
            VersionManifest.from_dict(manifest_data)

    def test_descriptors_are_immutable(self, manifest):
        with pytest.raises(AttributeError):
            manifest.versions[0].id = "changed"


class TestVersionDocument:
    """Parsing a version document."""

    def test_parses_fields(self, version_document):
        assert version_document.id == "1.19.3"
        assert version_document.type is VersionType.RELEASE
        assert version_document.asset_index.total_size == 557994432
        assert version_document.minimum_launcher_version == 21
        assert len(version_document.libraries) == 7

    def test_none_document(self):
        with pytest.raises(ValueError):
            VersionDocument.from_dict(None)

    def test_missing_main_class(self, version_document_data):
        del version_document_data["mainClass"]

        with pytest.raises(ValueError, match="mainClass"):
            VersionDocument.from_dict(version_document_data)


class TestVersionDocumentView:
    """Accessors over a version document."""

    def test_rejects_none(self):
        with pytest.raises(ValueError):
            VersionDocumentView(None)

    def test_java_major_version(self, version_document):
        assert VersionDocumentView(version_document).java_major_version() == 17

    def test_asset_index(self, version_document):
        reference = VersionDocumentView(version_document).get_asset_index()

        assert reference.id == "2"
        assert reference.sha1 == "sha1-assets-2"
        assert reference.size == 385380
        assert reference.url.endswith("/2.json")

    def test_main_class(self, version_document):
        assert "net.minecraft.client.main" in VersionDocumentView(version_document).get_main_class()

    def test_all_libraries_without_target(self, version_document):
        libraries = VersionDocumentView(version_document).get_libraries()
        assert len(libraries) == len(version_document.libraries)

    def test_libraries_for_target(self, version_document):
        libraries = VersionDocumentView(version_document).get_libraries("win32", TargetEnvironment())

        assert 0 < len(libraries) < len(version_document.libraries)
        assert any("windows" in library.name for library in libraries)


class TestAssetIndex:
    """Parsing asset index contents."""

    def test_objects(self, asset_index_data):
        index = AssetIndex.from_dict(asset_index_data)
        icon = index.objects["icons/icon_16x16.png"]

        assert len(index) == 2
        assert icon.path == "bd/bdf48ef6b5d0d23bbb02e17d04865216179f510a"
        assert index.total_size == 23665

    def test_missing_objects(self):
        with pytest.raises(ValueError):
            AssetIndex.from_dict({})

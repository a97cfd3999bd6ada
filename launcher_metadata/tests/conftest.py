"""
Shared pytest fixtures for metadata client tests.

Provides sample manifest, version and asset index documents shaped like the
service's JSON, plus mock files and a config for offline client runs.
"""
import json
import sys
from pathlib import Path

import pytest
import yaml

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalog import VersionDocument, VersionManifest
from resolution import ArtifactEntry


def _version(version_id, version_type="release", release_time="2022-12-07T08:17:18+00:00"):
    return {
        "id": version_id,
        "type": version_type,
        "url": f"https://piston-meta.mojang.com/v1/packages/{version_id}/{version_id}.json",
        "time": "2022-12-07T08:23:05+00:00",
        "releaseTime": release_time,
        "sha1": f"sha1-{version_id}",
        "complianceLevel": 1,
    }


def _maven_path(name):
    """group:artifact:version[:classifier] -> Maven repository layout path."""
    group, artifact, version, *classifier = name.split(":")
    suffix = f"-{classifier[0]}" if classifier else ""
    return f"{group.replace('.', '/')}/{artifact}/{version}/{artifact}-{version}{suffix}.jar"


def _library(name, rules=None):
    path = _maven_path(name)
    library = {
        "name": name,
        "downloads": {
            "artifact": {
                "path": path,
                "sha1": f"sha1-{name}",
                "size": 1024,
                "url": f"https://libraries.minecraft.net/{path}",
            }
        },
    }
    if rules is not None:
        library["rules"] = rules
    return library


@pytest.fixture
def manifest_data():
    """Raw version_manifest_v2.json document."""
    return {
        "latest": {"release": "1.19.3", "snapshot": "23w05a"},
        "versions": [
            _version("23w05a", "snapshot", "2023-02-01T14:20:44+00:00"),
            _version("1.19.3"),
            _version("1.12"),
            _version("1.12.1"),
            _version("1.12.2"),
            _version("1.8"),
            _version("b1.7.3", "old_beta", "2011-07-07T22:00:00+00:00"),
        ],
    }


@pytest.fixture
def manifest(manifest_data):
    return VersionManifest.from_dict(manifest_data)


@pytest.fixture
def version_document_data():
    """Raw version document for 1.19.3 with platform-gated libraries."""
    return {
        "id": "1.19.3",
        "type": "release",
        "mainClass": "net.minecraft.client.main.Main",
        "assets": "2",
        "assetIndex": {
            "id": "2",
            "sha1": "sha1-assets-2",
            "size": 385380,
            "totalSize": 557994432,
            "url": "https://piston-meta.mojang.com/v1/packages/assets/2.json",
        },
        "javaVersion": {"component": "java-runtime-gamma", "majorVersion": 17},
        "complianceLevel": 1,
        "minimumLauncherVersion": 21,
        "time": "2022-12-07T08:23:05+00:00",
        "releaseTime": "2022-12-07T08:17:18+00:00",
        "libraries": [
            _library("com.mojang:logging:1.1.1"),
            _library(
                "org.lwjgl:lwjgl:3.3.1:natives-windows",
                [{"action": "allow", "os": {"name": "windows"}}],
            ),
            _library(
                "org.lwjgl:lwjgl:3.3.1:natives-linux",
                [{"action": "allow", "os": {"name": "linux"}}],
            ),
            _library(
                "org.lwjgl:lwjgl:3.3.1:natives-macos",
                [{"action": "allow", "os": {"name": "osx"}}],
            ),
            _library(
                "org.lwjgl:lwjgl:3.3.1:natives-windows-x86",
                [{"action": "allow", "os": {"name": "windows", "arch": "x86"}}],
            ),
            _library(
                "ca.weblite:java-objc-bridge:1.1",
                [{"action": "allow"}, {"action": "deny", "os": {"name": "linux"}}],
            ),
            _library(
                "tv.twitch:twitch-platform:5.16:natives-windows-10",
                [{"action": "allow", "os": {"name": "windows", "version": "^10\\."}}],
            ),
        ],
    }


@pytest.fixture
def version_document(version_document_data):
    return VersionDocument.from_dict(version_document_data)


@pytest.fixture
def libraries(version_document_data):
    return [ArtifactEntry.from_dict(entry) for entry in version_document_data["libraries"]]


@pytest.fixture
def asset_index_data():
    return {
        "objects": {
            "icons/icon_16x16.png": {"hash": "bdf48ef6b5d0d23bbb02e17d04865216179f510a", "size": 3665},
            "minecraft/sounds/ambient/cave/cave1.ogg": {"hash": "5b1c1e6e6f7d7e2b3d3f0c6e8b8d5c1e1a2b3c4d", "size": 20000},
        }
    }


@pytest.fixture
def mock_files(tmp_path, manifest_data, version_document_data, asset_index_data):
    """
    Write mock documents to disk the way the clients read them in mock mode.

    Returns:
        Dict of paths: manifest file, versions dir, asset index dir
    """
    manifest_file = tmp_path / "version_manifest_v2.json"
    manifest_file.write_text(json.dumps(manifest_data))

    versions_dir = tmp_path / "versions"
    versions_dir.mkdir()
    (versions_dir / "1.19.3.json").write_text(json.dumps(version_document_data))

    assets_dir = tmp_path / "assets"
    assets_dir.mkdir()
    (assets_dir / "2.json").write_text(json.dumps(asset_index_data))

    return {
        "manifest_file": manifest_file,
        "versions_dir": versions_dir,
        "assets_dir": assets_dir,
    }


@pytest.fixture
def config_file(tmp_path, mock_files):
    """Config file pointing every client at the mock documents."""
    config = {
        "sources": {
            "manifest": {"use_mock": True, "mock_file": str(mock_files["manifest_file"])},
            "version": {"use_mock": True, "mock_dir": str(mock_files["versions_dir"])},
            "asset_index": {"use_mock": True, "mock_dir": str(mock_files["assets_dir"])},
        },
        "version": "release",
        "target": {},
        "fetch_asset_index": True,
        "output": {"dir": str(tmp_path / "output")},
        "logging": {"level": "DEBUG"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(config))
    return path

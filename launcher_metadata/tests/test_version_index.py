"""
Tests for the version index.

Covers exact lookup, substring and regex search, and the latest-version
helpers.
"""
import re
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest
from catalog import InvalidPattern, VersionDescriptor, VersionIndex, VersionType


def descriptor(version_id, url=None):
    return VersionDescriptor(
        id=version_id,
        type=VersionType.RELEASE,
        url=url or f"https://example.com/{version_id}.json",
        time="2022-12-07T08:23:05+00:00",
        release_time="2022-12-07T08:17:18+00:00",
    )


@pytest.fixture
def small_index():
    return VersionIndex.build([descriptor(v) for v in ("1.12", "1.12.1", "1.12.2", "1.8")])


class TestBuildAndLookup:
    """Index construction and exact lookup."""

    def test_empty_input(self):
        index = VersionIndex.build([])

        assert len(index) == 0
        assert index.lookup("1.12") is None
        assert index.search("1") == []

    def test_lookup_existing(self, small_index):
        assert small_index.lookup("1.12.1").id == "1.12.1"

    def test_lookup_missing_returns_none(self, small_index):
        assert small_index.lookup("nonexistent-id") is None

    def test_duplicate_ids_last_wins(self):
        index = VersionIndex.build([
            descriptor("1.8", url="https://example.com/first.json"),
            descriptor("1.9"),
            descriptor("1.8", url="https://example.com/second.json"),
        ])

        assert len(index) == 2
        assert index.lookup("1.8").url == "https://example.com/second.json"
        assert index.ids() == ["1.8", "1.9"]

    def test_contains_and_iter(self, small_index):
        assert "1.8" in small_index
        assert "1.9" not in small_index
        assert [v.id for v in small_index] == ["1.12", "1.12.1", "1.12.2", "1.8"]


class TestSearch:
    """Substring and regular expression search."""

    def test_substring_search_in_manifest_order(self, small_index):
        assert [v.id for v in small_index.search("1.12")] == ["1.12", "1.12.1", "1.12.2"]

    def test_regex_search(self, small_index):
        assert [v.id for v in small_index.search(re.compile(r"^1\."))] == ["1.12", "1.12.1", "1.12.2", "1.8"]

    def test_regex_is_searched_not_anchored(self, small_index):
        assert [v.id for v in small_index.search(re.compile(r"\.2$"))] == ["1.12.2"]

    def test_no_match_is_empty(self, small_index):
        assert small_index.search("this-is-so-amazing-version") == []

    @pytest.mark.parametrize("pattern", [42, None, b"1.12", ["1.12"], 1.12])
    def test_invalid_pattern(self, small_index, pattern):
        with pytest.raises(InvalidPattern, match="Invalid type of pattern"):
            small_index.search(pattern)


class TestManifestHelpers:
    """Helpers available when built from a manifest."""

    def test_from_manifest_none(self):
        with pytest.raises(ValueError, match="cannot be None"):
            VersionIndex.from_manifest(None)

    def test_latest(self, manifest):
        index = VersionIndex.from_manifest(manifest)

        assert index.latest_release() == "1.19.3"
        assert index.latest_snapshot() == "23w05a"

    def test_latest_without_manifest(self, small_index):
        assert small_index.latest_release() is None
        assert small_index.resolve("release") is None

    def test_resolve_aliases(self, manifest):
        index = VersionIndex.from_manifest(manifest)

        assert index.resolve("release").id == "1.19.3"
        assert index.resolve("snapshot").id == "23w05a"
        assert index.resolve("1.8").id == "1.8"
        assert index.resolve("9.9.9") is None

    def test_versions_in_manifest_order(self, manifest):
        index = VersionIndex.from_manifest(manifest)
        assert [v.id for v in index.versions()] == [v.id for v in manifest.versions]

    def test_search_over_manifest(self, manifest):
        index = VersionIndex.from_manifest(manifest)

        assert [v.id for v in index.search("1.12")] == ["1.12", "1.12.1", "1.12.2"]
        assert [v.id for v in index.search(re.compile(r"^1\."))] == ["1.19.3", "1.12", "1.12.1", "1.12.2", "1.8"]

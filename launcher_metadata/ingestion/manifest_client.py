"""
Client for the version manifest (version_manifest_v2.json).
"""
import logging
from typing import Any, Dict, Optional

from catalog import VersionManifest

from .base_client import BaseClient
from .http_client import HttpClient

logger = logging.getLogger(__name__)

VERSION_MANIFEST_URL = "https://piston-meta.mojang.com/mc/game/version_manifest_v2.json"


class ManifestClient(BaseClient):
    """Fetches and parses the list of known game versions."""

    source_id = "manifest"

    def __init__(self, config: Optional[Dict[str, Any]] = None, http_client: Optional[HttpClient] = None):
        super().__init__(config, http_client)
        self.url = self.config.get("url") or VERSION_MANIFEST_URL

    def fetch(self) -> VersionManifest:
        """Fetch the manifest from the service or the configured mock file."""
        manifest = self._tracked(
            lambda: self.normalize(self._load_document(self.url, "version_manifest_v2")),
            lambda result: len(result.versions),
        )
        logger.info(
            "Manifest lists %d versions (latest release %s, snapshot %s)",
            len(manifest.versions), manifest.latest.release, manifest.latest.snapshot
        )
        return manifest

    def normalize(self, raw_document: Dict[str, Any]) -> VersionManifest:
        return VersionManifest.from_dict(raw_document)

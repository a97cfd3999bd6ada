"""
Client for per-version descriptor documents.
"""
import logging
from typing import Any, Dict

from catalog import VersionDescriptor, VersionDocument

from .base_client import BaseClient

logger = logging.getLogger(__name__)


class VersionClient(BaseClient):
    """Fetches the full document a manifest entry points at."""

    source_id = "version"

    def fetch(self, descriptor: VersionDescriptor) -> VersionDocument:
        """
        Fetch the document for one manifest entry.

        In mock mode the document is read from mock_file, or from
        mock_dir/<version id>.json.
        """
        if descriptor is None:
            raise ValueError("A version descriptor is required.")

        document = self._tracked(
            lambda: self.normalize(self._load_document(descriptor.url, descriptor.id)),
            lambda result: len(result.libraries),
        )
        logger.info("Version %s: %d libraries", document.id, len(document.libraries))
        return document

    def normalize(self, raw_document: Dict[str, Any]) -> VersionDocument:
        return VersionDocument.from_dict(raw_document)

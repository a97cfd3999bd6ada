"""
Client for asset index documents.
"""
import logging
from typing import Any, Dict

from catalog import AssetIndex, AssetIndexReference

from .base_client import BaseClient

logger = logging.getLogger(__name__)


class AssetIndexClient(BaseClient):
    """Fetches the asset objects listed by a version's asset index."""

    source_id = "asset_index"

    def fetch(self, reference: AssetIndexReference) -> AssetIndex:
        if reference is None:
            raise ValueError("An asset index reference is required.")

        index = self._tracked(
            lambda: self.normalize(self._load_document(reference.url, reference.id)),
            len,
        )
        logger.info("Asset index %s: %d objects", reference.id, len(index))
        return index

    def normalize(self, raw_document: Dict[str, Any]) -> AssetIndex:
        return AssetIndex.from_dict(raw_document)

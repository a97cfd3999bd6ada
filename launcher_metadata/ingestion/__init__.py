"""
Ingestion layer for the launcher metadata client.

Provides clients for fetching and parsing the service's JSON documents:
- Version manifest (all known versions)
- Version documents (libraries, asset index, main class)
- Asset indexes (asset objects)
"""
from .base_client import BaseClient, ClientHealth
from .http_client import HttpClient
from .manifest_client import VERSION_MANIFEST_URL, ManifestClient
from .version_client import VersionClient
from .asset_index_client import AssetIndexClient

__all__ = [
    "BaseClient",
    "ClientHealth",
    "HttpClient",
    "VERSION_MANIFEST_URL",
    "ManifestClient",
    "VersionClient",
    "AssetIndexClient",
]

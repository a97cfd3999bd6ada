"""
Base client interface for all metadata clients.

Defines the contract that every client implements and the shared health
record, plus loading of raw documents over HTTP or from a local mock file.
"""
import json
import logging
import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from .http_client import DEFAULT_TIMEOUT_SECONDS, HttpClient

logger = logging.getLogger(__name__)


@dataclass
class ClientHealth:
    """Health status of a metadata client."""
    source_id: str
    is_healthy: bool
    last_fetch: Optional[datetime]
    records_fetched: int
    error_message: Optional[str] = None


class BaseClient(ABC):
    """
    Abstract base class for metadata clients.

    All clients must implement fetch() and normalize(). Provides shared
    document loading and health check functionality.
    """

    source_id: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None, http_client: Optional[HttpClient] = None):
        self.config = config or {}
        self.use_mock = bool(self.config.get("use_mock", False))
        self.mock_file = Path(self.config["mock_file"]) if self.config.get("mock_file") else None
        self.mock_dir = Path(self.config["mock_dir"]) if self.config.get("mock_dir") else None
        self.client = http_client or HttpClient(
            source_id=self.source_id,
            timeout_seconds=self.config.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
            cache_enabled=self.config.get("cache_enabled", True),
        )
        self._last_fetch: Optional[datetime] = None
        self._last_error: Optional[str] = None
        self._records_fetched: int = 0

    @abstractmethod
    def fetch(self, *args, **kwargs) -> Any:
        """
        Fetch a document and return it normalized into records.
        """
        pass

    @abstractmethod
    def normalize(self, raw_document: Dict[str, Any]) -> Any:
        """
        Transform a raw JSON document into records.

        Args:
            raw_document: Parsed JSON from the service

        Returns:
            The parsed record
        """
        pass

    def get_health(self) -> ClientHealth:
        """Return health status of this client."""
        return ClientHealth(
            source_id=self.source_id,
            is_healthy=self._last_error is None,
            last_fetch=self._last_fetch,
            records_fetched=self._records_fetched,
            error_message=self._last_error
        )

    def _tracked(self, load: Callable[[], Any], count: Callable[[Any], int]) -> Any:
        """Run load(), recording the outcome on the health record. Errors are re-raised."""
        self._last_fetch = datetime.utcnow()

        try:
            result = load()
        except Exception as e:
            error_msg = f"{type(e).__name__}: {str(e)}"
            self._last_error = error_msg
            self._records_fetched = 0
            logger.error(f"{self.source_id} client failed: {error_msg}")
            logger.debug("Full traceback:\n%s", traceback.format_exc())
            raise

        self._records_fetched = count(result)
        self._last_error = None
        return result

    def _load_document(self, url: str, mock_name: Optional[str] = None) -> Dict[str, Any]:
        """Load a raw document from the mock location or over HTTP."""
        if self.use_mock:
            return self._load_mock(mock_name)
        return self.client.get_json(url)

    def _load_mock(self, mock_name: Optional[str]) -> Dict[str, Any]:
        if self.mock_file is not None:
            path = self.mock_file
        elif self.mock_dir is not None and mock_name:
            path = self.mock_dir / f"{mock_name}.json"
        else:
            raise ValueError(f"{self.source_id}: use_mock requires mock_file or mock_dir")

        if not path.exists():
            raise FileNotFoundError(f"Mock document not found: {path}")

        with open(path, "r") as handle:
            return json.load(handle)

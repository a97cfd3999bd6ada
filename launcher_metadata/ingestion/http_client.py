"""
HTTP utilities for the metadata clients.

A thin wrapper over a requests session: one attempt per request, a timeout,
and lightweight in-run response caching. Errors propagate to the caller.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class HttpClient:
    """HTTP client with a request timeout and per-instance response caching."""

    def __init__(
        self,
        source_id: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        cache_enabled: bool = True,
        session: Optional[requests.Session] = None,
    ):
        self.source_id = source_id
        self.session = session or requests.Session()
        self.timeout_seconds = timeout_seconds
        self.cache_enabled = cache_enabled
        self._cache: Dict[Tuple[str, Tuple[Tuple[str, Any], ...]], Any] = {}

    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> Any:
        cache_key = self._cache_key(url, params)
        if self.cache_enabled and cache_key in self._cache:
            logger.debug("%s cache hit: %s", self.source_id, url)
            return self._cache[cache_key]

        response = self._request("GET", url, params=params, headers=headers)
        payload = response.json()

        if self.cache_enabled:
            self._cache[cache_key] = payload

        return payload

    def clear_cache(self) -> None:
        self._cache.clear()

    def _request(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        logger.debug("%s %s %s", self.source_id, method, url)
        response = self.session.request(
            method,
            url,
            params=params,
            headers=headers,
            timeout=self.timeout_seconds,
        )
        response.raise_for_status()
        return response

    def _cache_key(self, url: str, params: Optional[Dict[str, Any]]) -> Tuple[str, Tuple[Tuple[str, Any], ...]]:
        params_tuple = tuple(sorted((params or {}).items()))
        return url, params_tuple

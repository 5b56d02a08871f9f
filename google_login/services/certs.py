"""Cache for Google's ID token signing keys."""

import asyncio
import time
import logging
from typing import Any, Callable
import httpx
from authlib.jose import JsonWebKey, KeySet

logger = logging.getLogger(__name__)

GOOGLE_CERTS_URL = "https://www.googleapis.com/oauth2/v3/certs"


class GoogleCertsCache:
    """Fetches and caches the JWKS Google signs ID tokens with.

    Keys are refetched when the TTL lapses. A token naming a key id that is
    not in the cached set may trigger one early refetch, at most once per
    ``min_refresh_interval``. Stale keys are served if a refetch fails.
    """

    def __init__(
        self,
        certs_url: str = GOOGLE_CERTS_URL,
        cache_ttl: float = 3600,
        min_refresh_interval: float = 60,
        timeout: float = 10.0,
    ):
        self.certs_url = certs_url
        self.cache_ttl = cache_ttl
        self.min_refresh_interval = min_refresh_interval
        self.timeout = timeout
        self._key_set: KeySet | None = None
        self._fetched_at: float = 0
        self._attempted_at: float = 0
        self._lock = asyncio.Lock()

    async def _fetch_jwks(self) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            response = await client.get(self.certs_url)
            response.raise_for_status()
            return response.json()

    def _expired(self) -> bool:
        return time.monotonic() - self._fetched_at >= self.cache_ttl

    def _refetch_allowed(self) -> bool:
        return time.monotonic() - self._attempted_at >= self.min_refresh_interval

    async def _refresh(self, needed: Callable[[], bool]) -> KeySet:
        """Fetch the key set, falling back to a stale copy on failure.

        Callers queue on a lock; a waiter whose need was met by the fetch
        ahead of it reuses that result.
        """
        async with self._lock:
            if self._key_set is not None and not needed():
                return self._key_set

            self._attempted_at = time.monotonic()
            try:
                jwks = await self._fetch_jwks()
                key_set = JsonWebKey.import_key_set(jwks)
            except (httpx.HTTPError, ValueError) as e:
                if self._key_set is None:
                    raise
                logger.warning(f"Google certs refresh failed, using stale keys: {e}")
                return self._key_set

            self._key_set = key_set
            self._fetched_at = time.monotonic()
            logger.info(f"Loaded {len(key_set.keys)} Google signing keys")
            return self._key_set

    async def get_key_set(self) -> KeySet:
        """Return signing keys, refetching once the TTL has lapsed."""
        if self._key_set is None or self._expired():
            return await self._refresh(lambda: self._expired())
        return self._key_set

    async def refresh_for_unknown_kid(self) -> KeySet:
        """Refetch after a possible key rotation, rate limited."""
        if self._key_set is not None and not self._refetch_allowed():
            logger.debug("Skipping Google certs refetch inside minimum interval")
            return self._key_set
        return await self._refresh(lambda: self._refetch_allowed())

    def clear(self) -> None:
        """Drop cached keys so the next lookup fetches again."""
        self._key_set = None
        self._fetched_at = 0
        self._attempted_at = 0

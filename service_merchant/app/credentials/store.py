"""
Credential store: caches the access credential and refreshes it through a
single-flight gate.
"""

from __future__ import annotations

import time
from typing import Callable, Optional, Protocol, Tuple

from shared.errors import CredentialFetchFailed
from shared.logging import get_logger, mask_secret
from shared.metrics import MerchantMetrics, get_metrics

from ..domain.models import Credential
from .gate import RefreshGate
from .persistence import TokenPersistence


class TokenSource(Protocol):
    async def fetch(self) -> Tuple[str, int]:
        """Return ``(access_token, expires_in)`` or raise CredentialFetchFailed."""
        ...


class CredentialStore:
    """Owns the cached credential.

    ``get_valid`` returns the cached credential while it is inside its TTL
    minus the safety margin, and otherwise waits on the refresh gate. Only
    the gate's fetch writes the cache.
    """

    def __init__(
        self,
        token_source: TokenSource,
        *,
        safety_margin: float = 300,
        clock: Callable[[], float] = time.time,
        persistence: Optional[TokenPersistence] = None,
        metrics: Optional[MerchantMetrics] = None,
    ) -> None:
        self.token_source = token_source
        self.safety_margin = safety_margin
        self.clock = clock
        self.persistence = persistence
        self.metrics = metrics or get_metrics()
        self.logger = get_logger("merchant.credentials")

        self._credential: Optional[Credential] = None
        self._rejected: Optional[Credential] = None
        self._gate: RefreshGate[Credential] = RefreshGate(self._refresh)
        self.fetch_count = 0

    @property
    def current(self) -> Optional[Credential]:
        return self._credential

    async def get_valid(self) -> Credential:
        credential = self._credential
        if credential is not None and credential.is_valid(self.clock(), self.safety_margin):
            return credential
        return await self._gate.run()

    def invalidate(self, credential: Credential) -> bool:
        """Drop ``credential`` if it is still the cached one.

        Returns False when a newer credential already replaced it (or the
        cache is empty), in which case nothing changes.
        """
        if self._credential is None or self._credential != credential:
            self.logger.debug("Ignoring stale invalidation", credential=mask_secret(credential.value))
            return False

        self.logger.info("Invalidating credential", credential=mask_secret(credential.value))
        self._credential = None
        self._rejected = credential
        return True

    async def _refresh(self) -> Credential:
        self._credential = None

        loaded = await self._load_persisted()
        if loaded is not None:
            self._credential = loaded
            return loaded

        try:
            value, ttl_seconds = await self.token_source.fetch()
        except CredentialFetchFailed as e:
            self.metrics.record_credential_fetch("failure")
            self.logger.error("Credential fetch failed", error=e.message, errcode=e.errcode)
            raise

        if ttl_seconds <= self.safety_margin:
            self.metrics.record_credential_fetch("failure")
            self.logger.error(
                "Fetched credential expires inside the safety margin",
                ttl_seconds=ttl_seconds,
                safety_margin=self.safety_margin
            )
            raise CredentialFetchFailed(
                f"Credential lifetime {ttl_seconds}s does not exceed the {self.safety_margin}s safety margin",
                details={"ttl_seconds": ttl_seconds, "safety_margin": self.safety_margin}
            )

        credential = Credential(value=value, obtained_at=self.clock(), ttl_seconds=ttl_seconds)
        self.fetch_count += 1
        self.metrics.record_credential_fetch("success")
        self.logger.info(
            "Fetched credential",
            credential=mask_secret(value),
            ttl_seconds=ttl_seconds,
            fetch_count=self.fetch_count
        )

        self._credential = credential
        await self._save_persisted(credential)
        return credential

    async def _load_persisted(self) -> Optional[Credential]:
        if self.persistence is None:
            return None
        try:
            loaded = await self.persistence.load()
        except Exception as e:
            self.logger.warning("Loading persisted credential failed", error=str(e))
            return None

        if loaded is None or not loaded.is_valid(self.clock(), self.safety_margin):
            return None
        if self._rejected is not None and loaded.value == self._rejected.value:
            return None

        self.logger.info("Adopted persisted credential", credential=mask_secret(loaded.value))
        return loaded

    async def _save_persisted(self, credential: Credential) -> None:
        if self.persistence is None:
            return
        try:
            await self.persistence.save(credential)
        except Exception as e:
            self.logger.warning("Saving credential failed", error=str(e))

"""
Merchant API client facade.
"""

from typing import Callable, Optional
import time

import httpx

from shared.config import MerchantAPISettings, get_settings
from shared.logging import configure_logging, get_logger
from shared.metrics import MerchantMetrics, get_metrics
from shared.retry import RetryConfig

from .adapters import RequestInvoker, TokenClient
from .credentials import CredentialStore, TokenPersistence
from .dispatch import Dispatcher
from .groups import GroupClient


class MerchantAPI:
    """Wires settings, one shared HTTP client and the dispatch core together.

    Usage::

        async with MerchantAPI(get_settings()) as api:
            created = await api.groups.create_group("new arrivals", ["p1", "p2"])
    """

    def __init__(
        self,
        settings: Optional[MerchantAPISettings] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        persistence: Optional[TokenPersistence] = None,
        clock: Callable[[], float] = time.time,
        metrics: Optional[MerchantMetrics] = None,
    ):
        self.settings = settings or get_settings()
        self.logger = get_logger("merchant.api")
        self.metrics = metrics or get_metrics()

        self._owns_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient(
            timeout=self.settings.request_timeout_seconds,
            headers={"User-Agent": self.settings.user_agent} if self.settings.user_agent else None,
        )

        self.token_client = TokenClient(
            self.http_client,
            self.settings.api_prefix,
            self.settings.app_id,
            self.settings.app_secret,
            timeout=self.settings.token_timeout_seconds,
        )
        self.store = CredentialStore(
            self.token_client,
            safety_margin=self.settings.credential_safety_margin_seconds,
            clock=clock,
            persistence=persistence,
            metrics=self.metrics,
        )
        self.invoker = RequestInvoker(self.http_client, timeout=self.settings.request_timeout_seconds)
        self.dispatcher = Dispatcher(
            self.store,
            self.invoker,
            transport_retry=self._transport_retry(),
            metrics=self.metrics,
        )
        self.groups = GroupClient(self.dispatcher, self.settings.merchant_prefix)

    def _transport_retry(self) -> Optional[RetryConfig]:
        if self.settings.transport_max_attempts <= 1:
            return None
        return RetryConfig(
            max_attempts=self.settings.transport_max_attempts,
            base_delay=self.settings.transport_retry_base_delay,
        )

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "MerchantAPI":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


def create_api(**overrides) -> MerchantAPI:
    """Configure logging and build a MerchantAPI from environment settings plus overrides."""
    settings = get_settings(**overrides)
    configure_logging("merchant-api", settings.log_level)
    return MerchantAPI(settings)

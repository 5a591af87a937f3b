"""
Shared metrics for the merchant API client.
"""

from typing import Dict, Any, Optional

from prometheus_client import Counter, CollectorRegistry, REGISTRY


class MerchantMetrics:
    """Prometheus counters for credential fetches and dispatch attempts."""

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.registry = registry if registry is not None else REGISTRY
        self._metrics: Dict[str, Any] = {}
        self._setup_metrics()

    def _setup_metrics(self):
        self._metrics["credential_fetch_total"] = Counter(
            "merchant_credential_fetch_total",
            "Upstream credential fetches",
            ["outcome"],
            registry=self.registry
        )

        self._metrics["dispatch_attempts_total"] = Counter(
            "merchant_dispatch_attempts_total",
            "Dispatcher attempts by classified outcome",
            ["operation", "outcome"],
            registry=self.registry
        )

        self._metrics["credential_retries_total"] = Counter(
            "merchant_credential_retries_total",
            "Refresh-and-retry cycles triggered by credential errors",
            ["operation"],
            registry=self.registry
        )

    def record_credential_fetch(self, outcome: str):
        self._metrics["credential_fetch_total"].labels(outcome=outcome).inc()

    def record_attempt(self, operation: str, outcome: str):
        self._metrics["dispatch_attempts_total"].labels(operation=operation, outcome=outcome).inc()

    def record_credential_retry(self, operation: str):
        self._metrics["credential_retries_total"].labels(operation=operation).inc()


_default_metrics: Optional[MerchantMetrics] = None


def get_metrics() -> MerchantMetrics:
    """Return the process-wide metrics bound to the default registry."""
    global _default_metrics
    if _default_metrics is None:
        _default_metrics = MerchantMetrics()
    return _default_metrics

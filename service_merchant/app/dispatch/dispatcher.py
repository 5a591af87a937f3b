"""
Dispatcher: the single entry point every domain call goes through.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from shared.errors import BusinessError, PersistentCredentialError, TransportError
from shared.logging import correlation_scope, get_logger, mask_secret
from shared.metrics import MerchantMetrics, get_metrics
from shared.retry import RetryConfig, call_with_retry

from ..adapters.invoker import RequestInvoker
from ..credentials.store import CredentialStore
from ..domain.models import (
    ApiResult,
    BusinessErrorResult,
    Credential,
    DispatchAttempt,
    DomainRequest,
    SuccessResult,
)

RequestBuilder = Callable[[Credential], DomainRequest]

MAX_ATTEMPTS = 2


class Dispatcher:
    """Runs a request builder against the upstream with one credential retry.

    Flow per call: obtain a valid credential, build and invoke the request.
    A success is returned unchanged and a business error is raised at once.
    A credential error on the first attempt invalidates the credential it
    was built with, waits for a fresh one and tries again; a second
    credential error raises PersistentCredentialError.
    """

    def __init__(
        self,
        store: CredentialStore,
        invoker: RequestInvoker,
        *,
        transport_retry: Optional[RetryConfig] = None,
        metrics: Optional[MerchantMetrics] = None,
    ):
        self.store = store
        self.invoker = invoker
        self.transport_retry = transport_retry
        self.metrics = metrics or get_metrics()
        self.logger = get_logger("merchant.dispatcher")

    async def run(self, build_request: RequestBuilder, operation: Optional[str] = None) -> Any:
        operation = operation or getattr(build_request, "__name__", "request")
        with correlation_scope(operation):
            return await self._dispatch(build_request, operation)

    async def _dispatch(self, build_request: RequestBuilder, operation: str) -> Any:
        credential = await self.store.get_valid()
        for attempt_number in range(1, MAX_ATTEMPTS + 1):
            attempt = DispatchAttempt(attempt_number=attempt_number, credential=credential)
            result = await self._invoke(build_request(attempt.credential))

            if isinstance(result, SuccessResult):
                self.metrics.record_attempt(operation, "success")
                if attempt.attempt_number > 1:
                    self.logger.info("Call succeeded after credential refresh")
                return result.data

            if isinstance(result, BusinessErrorResult):
                self.metrics.record_attempt(operation, "business_error")
                self.logger.warning("Upstream rejected call", errcode=result.errcode, errmsg=result.errmsg)
                raise BusinessError(result.errcode, result.errmsg, details={"body": result.body})

            self.metrics.record_attempt(operation, "credential_error")
            if attempt.attempt_number == MAX_ATTEMPTS:
                self.logger.error(
                    "Credential rejected again after refresh",
                    errcode=result.errcode,
                    credential=mask_secret(attempt.credential.value)
                )
                raise PersistentCredentialError(result.errcode, result.errmsg)

            self.logger.warning(
                "Credential rejected, refreshing and retrying once",
                errcode=result.errcode,
                credential=mask_secret(attempt.credential.value)
            )
            self.metrics.record_credential_retry(operation)
            self.store.invalidate(attempt.credential)
            credential = await self.store.get_valid()

        # Unreachable: the last attempt either returns or raises.
        raise AssertionError("dispatch loop exited without a result")

    async def _invoke(self, request: DomainRequest) -> ApiResult:
        if self.transport_retry is None:
            return await self.invoker.invoke(request)
        return await call_with_retry(
            lambda: self.invoker.invoke(request),
            (TransportError,),
            self.transport_retry,
            name="invoke"
        )

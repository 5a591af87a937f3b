"""
Request invoker: performs one upstream JSON call and classifies the response.
"""

from typing import Any, Dict

import httpx

from shared.errors import MalformedResponse, TransportError
from shared.logging import get_logger

from ..domain.errcodes import classify_response, extract_errcode
from ..domain.models import ApiResult, DomainRequest, HttpMethod


class RequestInvoker:
    """Sends DomainRequests over a shared httpx client."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = 10.0):
        self.client = client
        self.timeout = timeout
        self.logger = get_logger("merchant.invoker")

    async def invoke(self, request: DomainRequest) -> ApiResult:
        """Perform the call and return its classified result.

        Raises TransportError for timeouts, connection failures and error
        statuses that carry no errcode, and MalformedResponse when the body
        is not JSON.
        """
        kwargs: Dict[str, Any] = {"timeout": self.timeout}
        if request.method == HttpMethod.POST and request.payload is not None:
            kwargs["json"] = request.payload

        try:
            response = await self.client.request(request.method.value, request.url, **kwargs)
        except httpx.TimeoutException as e:
            self.logger.error("Upstream call timed out", method=request.method.value, error=str(e))
            raise TransportError("Upstream call timed out", details={"error": str(e)}) from e
        except httpx.HTTPError as e:
            self.logger.error("Upstream HTTP error", method=request.method.value, error=str(e))
            raise TransportError("Upstream unavailable", details={"http_error": str(e)}) from e

        try:
            body = response.json()
        except ValueError as e:
            raise MalformedResponse(
                "Upstream returned a non-JSON body",
                details={"status_code": response.status_code, "body": response.text[:200]}
            ) from e

        if response.status_code >= 400 and extract_errcode(body) is None:
            raise TransportError(
                f"Upstream error status: {response.status_code}",
                details={"status_code": response.status_code}
            )

        return classify_response(body)

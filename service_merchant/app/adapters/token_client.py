"""
Token endpoint client.
"""

from typing import Any, Dict, Tuple

import httpx

from shared.errors import CredentialFetchFailed
from shared.logging import get_logger

from ..domain.errcodes import extract_errcode

DEFAULT_EXPIRES_IN = 7200


class TokenClient:
    """Fetches access tokens for one application from the upstream token endpoint."""

    def __init__(self, client: httpx.AsyncClient, api_prefix: str, app_id: str, app_secret: str,
                 timeout: float = 10.0):
        self.client = client
        self.api_prefix = api_prefix
        self.app_id = app_id
        self.app_secret = app_secret
        self.timeout = timeout
        self.logger = get_logger("merchant.token_client")

    @property
    def token_url(self) -> str:
        return f"{self.api_prefix}token"

    async def fetch(self) -> Tuple[str, int]:
        """Request a new access token, returning ``(access_token, expires_in)``."""
        params = {
            "grant_type": "client_credential",
            "appid": self.app_id,
            "secret": self.app_secret,
        }

        try:
            response = await self.client.get(self.token_url, params=params, timeout=self.timeout)
        except httpx.TimeoutException as e:
            self.logger.error("Token endpoint timed out", error=str(e))
            raise CredentialFetchFailed("Token endpoint timed out", details={"error": str(e)}) from e
        except httpx.HTTPError as e:
            self.logger.error("Token endpoint HTTP error", error=str(e))
            raise CredentialFetchFailed("Token endpoint unavailable", details={"http_error": str(e)}) from e

        try:
            body = response.json()
        except ValueError as e:
            raise CredentialFetchFailed(
                "Token endpoint returned a non-JSON body",
                details={"status_code": response.status_code, "body": response.text[:200]}
            ) from e

        return self._parse(body, response.status_code)

    def _parse(self, body: Any, status_code: int) -> Tuple[str, int]:
        if not isinstance(body, dict) or not body.get("access_token"):
            details: Dict[str, Any] = {"status_code": status_code}
            errcode = None
            errmsg = "missing access_token"
            if isinstance(body, dict):
                errcode = extract_errcode(body)
                errmsg = body.get("errmsg", errmsg)
            raise CredentialFetchFailed(
                f"Token endpoint rejected the request: {errmsg}",
                errcode=errcode,
                details=details
            )

        expires_in = body.get("expires_in", DEFAULT_EXPIRES_IN)
        try:
            expires_in = int(expires_in)
        except (TypeError, ValueError):
            expires_in = 0
        if expires_in <= 0:
            raise CredentialFetchFailed(
                "Token endpoint returned an invalid expires_in",
                details={"expires_in": body.get("expires_in")}
            )

        return str(body["access_token"]), expires_in

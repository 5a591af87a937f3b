"""
Shared error handling for the merchant API client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error payload for reporting failures to callers."""

    code: str
    message: str
    errcode: Optional[int] = None
    details: Dict[str, Any] = {}


class MerchantAPIException(Exception):
    """Base exception for the merchant API client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            errcode=getattr(self, "errcode", None),
            details=self.details
        )


class CredentialFetchFailed(MerchantAPIException):
    """The token endpoint was unreachable or rejected the application identifiers."""

    def __init__(self, message: str = "Credential fetch failed", errcode: Optional[int] = None,
                 details: Optional[Dict[str, Any]] = None):
        self.errcode = errcode
        super().__init__("CREDENTIAL_FETCH_FAILED", message, details)


class BusinessError(MerchantAPIException):
    """Upstream rejected the call for domain reasons. Never retried."""

    def __init__(self, errcode: int, errmsg: str, details: Optional[Dict[str, Any]] = None):
        self.errcode = errcode
        self.errmsg = errmsg
        super().__init__("BUSINESS_ERROR", f"{errcode}: {errmsg}", details)


class PersistentCredentialError(MerchantAPIException):
    """Upstream rejected the credential again right after a refresh."""

    def __init__(self, errcode: int, errmsg: str, details: Optional[Dict[str, Any]] = None):
        self.errcode = errcode
        self.errmsg = errmsg
        super().__init__(
            "PERSISTENT_CREDENTIAL_ERROR",
            f"Credential rejected after refresh: {errcode}: {errmsg}",
            details
        )


class MalformedResponse(MerchantAPIException):
    """Upstream body could not be parsed as JSON."""

    def __init__(self, message: str = "Malformed upstream response", details: Optional[Dict[str, Any]] = None):
        super().__init__("MALFORMED_RESPONSE", message, details)


class TransportError(MerchantAPIException):
    """HTTP-level failure: timeout, connection error or an error status without errcode."""

    def __init__(self, message: str = "Transport error", details: Optional[Dict[str, Any]] = None):
        super().__init__("TRANSPORT_ERROR", message, details)

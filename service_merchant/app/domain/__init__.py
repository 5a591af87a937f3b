"""
Domain types for the merchant client: credentials, requests and the
classified result of an upstream call.
"""

from .models import (
    ApiResult,
    BusinessErrorResult,
    Credential,
    CredentialErrorResult,
    DispatchAttempt,
    DomainRequest,
    HttpMethod,
    SuccessResult,
)
from .errcodes import CREDENTIAL_ERROR_CODES, classify_response

__all__ = [
    "ApiResult",
    "BusinessErrorResult",
    "CREDENTIAL_ERROR_CODES",
    "Credential",
    "CredentialErrorResult",
    "DispatchAttempt",
    "DomainRequest",
    "HttpMethod",
    "SuccessResult",
    "classify_response",
]

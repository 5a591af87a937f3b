"""
Classification of upstream responses.

This table is the only place that decides whether an upstream ``errcode``
means "the credential is bad" or "the request itself failed".
"""

from typing import Any, FrozenSet, Optional

from .models import ApiResult, BusinessErrorResult, CredentialErrorResult, SuccessResult

INVALID_CREDENTIAL = 40001
INVALID_ACCESS_TOKEN = 40014
ACCESS_TOKEN_MISSING = 41001
ACCESS_TOKEN_EXPIRED = 42001

CREDENTIAL_ERROR_CODES: FrozenSet[int] = frozenset({
    INVALID_CREDENTIAL,
    INVALID_ACCESS_TOKEN,
    ACCESS_TOKEN_MISSING,
    ACCESS_TOKEN_EXPIRED,
})


def extract_errcode(body: Any) -> Optional[int]:
    """Return the integer ``errcode`` of a response body, or None when absent."""
    if not isinstance(body, dict) or "errcode" not in body:
        return None
    raw = body["errcode"]
    if raw is None:
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        # Unknown non-numeric codes are still failures.
        return -1


def is_credential_error(errcode: Optional[int]) -> bool:
    return errcode is not None and errcode in CREDENTIAL_ERROR_CODES


def classify_response(body: Any) -> ApiResult:
    """Map a parsed upstream body onto an ApiResult."""
    errcode = extract_errcode(body)
    if errcode is None or errcode == 0:
        return SuccessResult(data=body)

    errmsg = str(body.get("errmsg", ""))
    if is_credential_error(errcode):
        return CredentialErrorResult(errcode=errcode, errmsg=errmsg)
    return BusinessErrorResult(errcode=errcode, errmsg=errmsg, body=body)

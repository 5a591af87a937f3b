"""
Value types shared by the credential store, invoker and dispatcher.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class Credential:
    """Access credential as handed out by the token endpoint."""

    value: str
    obtained_at: float
    ttl_seconds: int

    @property
    def expires_at(self) -> float:
        return self.obtained_at + self.ttl_seconds

    def is_valid(self, now: float, safety_margin: float = 0) -> bool:
        """True while ``now`` is before expiry minus the safety margin."""
        return now < self.expires_at - safety_margin


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class DomainRequest:
    """One upstream call built by a domain operation for a given credential."""

    url: str
    payload: Optional[Any] = None
    method: HttpMethod = HttpMethod.POST

    def __post_init__(self) -> None:
        if self.method == HttpMethod.GET and self.payload is not None:
            raise ValueError("GET requests carry no JSON body")


@dataclass(frozen=True)
class SuccessResult:
    data: Any


@dataclass(frozen=True)
class BusinessErrorResult:
    errcode: int
    errmsg: str
    body: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class CredentialErrorResult:
    errcode: int
    errmsg: str


ApiResult = Union[SuccessResult, BusinessErrorResult, CredentialErrorResult]


@dataclass(frozen=True)
class DispatchAttempt:
    """Bookkeeping for one attempt inside a single dispatcher invocation."""

    attempt_number: int
    credential: Credential

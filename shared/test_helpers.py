"""
Test helper functions and fakes for the merchant API client.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import httpx

from shared.errors import CredentialFetchFailed


class FakeClock:
    """Manually advanced clock, callable like ``time.time``."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeTokenSource:
    """Token source handing out ``token-1``, ``token-2``... and counting calls."""

    def __init__(self, ttl_seconds: int = 7200, delay: float = 0.0, fail: bool = False):
        self.ttl_seconds = ttl_seconds
        self.delay = delay
        self.fail = fail
        self.calls = 0

    async def fetch(self) -> Tuple[str, int]:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.fail:
            raise CredentialFetchFailed("invalid appid", errcode=40013)
        return f"token-{self.calls}", self.ttl_seconds


class ScriptedInvoker:
    """Invoker returning (or raising) pre-baked results in order."""

    def __init__(self, results: Sequence[Any]):
        self.results = list(results)
        self.requests: List[Any] = []

    async def invoke(self, request: Any) -> Any:
        self.requests.append(request)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def upstream_ok(**fields: Any) -> Dict[str, Any]:
    """Successful upstream body."""
    return {"errcode": 0, "errmsg": "success", **fields}


def upstream_error(errcode: int, errmsg: str = "error") -> Dict[str, Any]:
    """Failed upstream body."""
    return {"errcode": errcode, "errmsg": errmsg}


def mock_client(handler: Callable[[httpx.Request], httpx.Response],
                base_url: Optional[str] = None) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    kwargs: Dict[str, Any] = {"transport": httpx.MockTransport(handler)}
    if base_url:
        kwargs["base_url"] = base_url
    return httpx.AsyncClient(**kwargs)

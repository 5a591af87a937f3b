"""
HTTP adapters for the upstream merchant API.

- TokenClient: the token endpoint, used as the credential store's source
- RequestInvoker: business endpoints, classifying every response

Both share one httpx.AsyncClient owned by the caller.
"""

from .invoker import RequestInvoker
from .token_client import TokenClient

__all__ = [
    "RequestInvoker",
    "TokenClient",
]

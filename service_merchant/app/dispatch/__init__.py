"""
Dispatch of domain request builders with credential refresh and one retry.
"""

from .dispatcher import Dispatcher, RequestBuilder

__all__ = [
    "Dispatcher",
    "RequestBuilder",
]

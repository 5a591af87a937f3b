"""
Shop group domain operations.
"""

from .client import GroupClient

__all__ = [
    "GroupClient",
]

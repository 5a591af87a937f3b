"""
Credential caching and single-flight refresh.
"""

from .gate import RefreshGate
from .persistence import InMemoryTokenPersistence, TokenPersistence
from .store import CredentialStore, TokenSource

__all__ = [
    "CredentialStore",
    "InMemoryTokenPersistence",
    "RefreshGate",
    "TokenPersistence",
    "TokenSource",
]

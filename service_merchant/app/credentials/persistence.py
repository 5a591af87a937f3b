"""
Pluggable storage for the access credential.

Deployments running several processes against one application can share a
credential by providing their own TokenPersistence (a cache, a database row);
the default keeps nothing outside the store.
"""

from __future__ import annotations

from typing import Optional, Protocol

from ..domain.models import Credential


class TokenPersistence(Protocol):
    async def load(self) -> Optional[Credential]:
        ...

    async def save(self, credential: Credential) -> None:
        ...


class InMemoryTokenPersistence:
    """Process-local persistence, mostly useful for tests and for sharing
    one credential between several stores in the same process."""

    def __init__(self, credential: Optional[Credential] = None) -> None:
        self.credential = credential
        self.saves = 0

    async def load(self) -> Optional[Credential]:
        return self.credential

    async def save(self, credential: Credential) -> None:
        self.credential = credential
        self.saves += 1

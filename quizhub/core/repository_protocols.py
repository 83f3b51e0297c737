"""Boundary Protocols — contracts between core and the document store shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All store IO accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - A DocumentTransaction holds write locks on what it reads until it ends
    - Its writes are conditional on the version it read; a mismatch raises
      ConcurrencyError and the whole transaction rolls back

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the core functions that decide what to write are never async themselves
"""

from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Awaitable, Callable, Protocol, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class DocumentSnapshot:
    """A document as read from the store at one version."""
    id: str
    data: dict[str, Any] = field(default_factory=dict)
    version: int = 0
    exists: bool = True

    @classmethod
    def missing(cls, document_id: str) -> "DocumentSnapshot":
        return cls(id=document_id, exists=False)


class DocumentTransaction(Protocol):
    """Read-then-write unit spanning any number of documents."""
    async def get(self, collection: str, document_id: str) -> DocumentSnapshot: ...
    async def merge_update(
        self, collection: str, document_id: str, fields: dict[str, Any],
    ) -> DocumentSnapshot: ...


class DocumentStore(Protocol):
    """Contract for the document database — implemented by shell."""
    async def add(self, collection: str, fields: dict[str, Any]) -> str: ...
    async def get(self, collection: str, document_id: str) -> DocumentSnapshot: ...
    async def merge_update(
        self, collection: str, document_id: str, fields: dict[str, Any],
    ) -> None: ...
    async def delete(self, collection: str, document_id: str) -> None: ...
    async def query(
        self,
        collection: str,
        order_by: str,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[DocumentSnapshot]: ...
    def transaction(self) -> AsyncContextManager[DocumentTransaction]: ...
    async def run_transaction(
        self,
        operation: Callable[[DocumentTransaction], Awaitable[T]],
        max_attempts: int = 5,
    ) -> T: ...
    async def health_check(self) -> bool: ...

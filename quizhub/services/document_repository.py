"""Document Repository — uniform-result CRUD over one collection of the document store.

Invariants:
    - Every operation returns RepositoryResult(status, data); no store exception
      ever escapes (DocumentStoreError, ConcurrencyError and malformed stored
      documents all become INTERNAL_ERROR with empty data)
    - create/update re-read the document after writing and return id + all fields
    - update does not check existence first; the store reports a missing
      document as a failure, which becomes INTERNAL_ERROR
    - delete does not check existence; deleting a missing id reports OK

Design Decisions:
    - Generic over the entity schema: one repository instance per collection,
      the schema shapes what clients see (aliases, defaults, dropped extras)
    - Store is injected, never imported as a global
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ValidationError

from quizhub.core.domain_types import Collection, ResultStatus
from quizhub.core.errors import QuizHubError
from quizhub.core.repository_protocols import DocumentSnapshot, DocumentStore

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class RepositoryResult:
    """Outcome of one repository call — status plus JSON-ready payload."""
    status: ResultStatus
    data: dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status is ResultStatus.OK

    @classmethod
    def not_found(cls) -> "RepositoryResult":
        return cls(ResultStatus.NOT_FOUND)

    @classmethod
    def internal_error(cls) -> "RepositoryResult":
        return cls(ResultStatus.INTERNAL_ERROR)


class DocumentRepository(Generic[ModelT]):
    """CRUD helpers bound to one collection and one entity schema."""

    def __init__(
        self, store: DocumentStore, collection: Collection, model: type[ModelT],
    ):
        self.store = store
        self.collection = collection
        self.model = model

    def to_payload(self, snapshot: DocumentSnapshot) -> dict[str, Any]:
        """Shape a stored document (plus its id) through the entity schema."""
        entity = self.model.model_validate({**snapshot.data, "id": snapshot.id})
        return entity.model_dump(by_alias=True, mode="json", exclude_none=True)

    async def create(self, payload: dict[str, Any]) -> RepositoryResult:
        try:
            document_id = await self.store.add(self.collection.value, payload)
        except QuizHubError as e:
            return self._failed("create", None, e)
        return await self.get(document_id)

    async def get(self, document_id: str) -> RepositoryResult:
        try:
            snapshot = await self.store.get(self.collection.value, document_id)
            if not snapshot.exists:
                return RepositoryResult.not_found()
            return RepositoryResult(ResultStatus.OK, self.to_payload(snapshot))
        except (QuizHubError, ValidationError) as e:
            return self._failed("get", document_id, e)

    async def update(
        self, document_id: str, partial: dict[str, Any],
    ) -> RepositoryResult:
        """Merge partial into the document, then return the full document."""
        try:
            await self.store.merge_update(self.collection.value, document_id, partial)
        except QuizHubError as e:
            return self._failed("update", document_id, e)
        return await self.get(document_id)

    async def delete(self, document_id: str) -> RepositoryResult:
        try:
            await self.store.delete(self.collection.value, document_id)
        except QuizHubError as e:
            return self._failed("delete", document_id, e)
        return RepositoryResult(ResultStatus.OK)

    def _failed(
        self, operation: str, document_id: str | None, exc: Exception,
    ) -> RepositoryResult:
        logger.error(
            f"{self.collection.value} {operation} failed: {exc}",
            extra={
                "collection": self.collection.value,
                "document_id": document_id,
                "error_code": getattr(exc, "code", type(exc).__name__),
            },
        )
        return RepositoryResult.internal_error()

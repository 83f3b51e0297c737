"""SQL Document Store — DocumentStore Protocol over the async SQLAlchemy engine.

Invariants:
    - Document ids are generated by the store (UUID4), never by callers
    - Every write goes through a version-conditional UPDATE; zero matched rows
      raises ConcurrencyError and the enclosing session rolls back
    - Field transforms (SERVER_TIMESTAMP, ArrayUnion, Increment) are resolved
      against the row as read in the same transaction
    - transaction() holds write locks on everything it reads until commit:
      SELECT ... FOR UPDATE where the dialect has row locks, BEGIN IMMEDIATE on
      SQLite (database-level lock), so concurrent transactions queue instead of
      racing
    - delete() of a missing id is a no-op, not an error
    - All SQLAlchemy failures surface as DocumentStoreError (via DatabaseSessionManager)

Design Decisions:
    - Locks decide who goes first; the version check stays on every write so a
      row changed outside a locked read still fails loudly instead of being
      overwritten
    - run_transaction retries the whole read-decide-write callback, so the
      callback must be safe to run more than once (reads happen inside it)
    - Ordered queries use a JSON path on the data column; timestamps are stored
      as fixed-width ISO strings so lexical order is chronological
"""

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncContextManager, AsyncGenerator, Awaitable, Callable, TypeVar

from sqlalchemy import delete, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession

from quizhub.core.errors import ConcurrencyError, DocumentNotFoundError, ErrorContext
from quizhub.core.field_transforms import resolve_fields
from quizhub.core.repository_protocols import DocumentSnapshot
from quizhub.infrastructure import database
from quizhub.models.document import Document

logger = logging.getLogger(__name__)

T = TypeVar("T")

SessionScope = Callable[[], AsyncContextManager[AsyncSession]]


class SqlTransaction:
    """Version-tracking transaction bound to one AsyncSession.

    With lock_rows=True every read is SELECT ... FOR UPDATE (a no-op clause on
    SQLite, where the caller already holds the database write lock).
    """

    def __init__(self, session: AsyncSession, now: datetime, lock_rows: bool = False):
        self._session = session
        self._now = now
        self._lock_rows = lock_rows
        self._seen: dict[tuple[str, str], DocumentSnapshot] = {}

    async def get(self, collection: str, document_id: str) -> DocumentSnapshot:
        stmt = (
            select(Document.data, Document.version)
            .where(Document.collection == collection)
            .where(Document.id == document_id)
        )
        if self._lock_rows:
            stmt = stmt.with_for_update()
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            snapshot = DocumentSnapshot.missing(document_id)
        else:
            snapshot = DocumentSnapshot(
                id=document_id, data=dict(row.data or {}), version=row.version,
            )
        self._seen[(collection, document_id)] = snapshot
        return snapshot

    async def merge_update(
        self, collection: str, document_id: str, fields: dict[str, Any],
    ) -> DocumentSnapshot:
        """Merge fields into a document, conditional on the version read."""
        snapshot = self._seen.get((collection, document_id))
        if snapshot is None:
            snapshot = await self.get(collection, document_id)
        if not snapshot.exists:
            raise DocumentNotFoundError(collection, document_id)

        merged = resolve_fields(snapshot.data, fields, self._now)
        result = await self._session.execute(
            update(Document)
            .where(Document.collection == collection)
            .where(Document.id == document_id)
            .where(Document.version == snapshot.version)
            .values(data=merged, version=snapshot.version + 1, updated_at=self._now)
            .execution_options(synchronize_session=False),
        )
        if result.rowcount != 1:
            raise ConcurrencyError(
                f"{collection}/{document_id} changed since version {snapshot.version}",
                ErrorContext(collection=collection, document_id=document_id),
            )

        written = DocumentSnapshot(
            id=document_id, data=merged, version=snapshot.version + 1,
        )
        self._seen[(collection, document_id)] = written
        return written


class SqlDocumentStore:
    """Document store backed by the `documents` table."""

    def __init__(self, session_scope: SessionScope):
        self._session_scope = session_scope

    async def add(self, collection: str, fields: dict[str, Any]) -> str:
        now = _utcnow()
        document_id = str(uuid.uuid4())
        async with self._session_scope() as session:
            session.add(Document(
                collection=collection,
                id=document_id,
                data=resolve_fields({}, fields, now),
                version=1,
                created_at=now,
                updated_at=now,
            ))
            await session.commit()
        logger.debug(
            f"Added document to {collection}",
            extra={"collection": collection, "document_id": document_id},
        )
        return document_id

    async def get(self, collection: str, document_id: str) -> DocumentSnapshot:
        async with self._session_scope() as session:
            return await SqlTransaction(session, _utcnow()).get(collection, document_id)

    async def merge_update(
        self, collection: str, document_id: str, fields: dict[str, Any],
    ) -> None:
        """Merge-update one document; raises DocumentNotFoundError if absent."""
        async def _merge(txn: SqlTransaction) -> None:
            await txn.merge_update(collection, document_id, fields)

        await self.run_transaction(_merge)

    async def delete(self, collection: str, document_id: str) -> None:
        async with self._session_scope() as session:
            await session.execute(
                delete(Document)
                .where(Document.collection == collection)
                .where(Document.id == document_id),
            )
            await session.commit()

    async def query(
        self,
        collection: str,
        order_by: str,
        descending: bool = True,
        limit: int | None = None,
    ) -> list[DocumentSnapshot]:
        """Documents of a collection ordered by one data field."""
        sort_key = Document.data[order_by].as_string()
        tie_break = Document.created_at
        stmt = select(Document).where(Document.collection == collection).order_by(
            sort_key.desc() if descending else sort_key.asc(),
            tie_break.desc() if descending else tie_break.asc(),
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        async with self._session_scope() as session:
            result = await session.execute(stmt)
            return [
                DocumentSnapshot(id=doc.id, data=dict(doc.data or {}), version=doc.version)
                for doc in result.scalars().all()
            ]

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[SqlTransaction, None]:
        """Single locked attempt: commit on clean exit, roll back on any exception."""
        async with self._session_scope() as session:
            await _begin_write(session)
            txn = SqlTransaction(session, _utcnow(), lock_rows=True)
            try:
                yield txn
            except Exception:
                await session.rollback()
                raise
            await session.commit()

    async def run_transaction(
        self,
        operation: Callable[[SqlTransaction], Awaitable[T]],
        max_attempts: int = 5,
    ) -> T:
        """Run operation in a transaction, retrying on ConcurrencyError."""
        for attempt in range(1, max_attempts + 1):
            try:
                async with self.transaction() as txn:
                    return await operation(txn)
            except ConcurrencyError as e:
                logger.info(
                    f"Transaction conflict, retrying: {e.message}",
                    extra={
                        "attempt": attempt,
                        "collection": e.context.collection,
                        "document_id": e.context.document_id,
                    },
                )
        raise ConcurrencyError(
            f"Transaction abandoned after {max_attempts} conflicting attempts",
        )

    async def health_check(self) -> bool:
        try:
            async with self._session_scope() as session:
                await session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Document store health check failed: {e}")
            return False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def _begin_write(session: AsyncSession) -> None:
    """SQLite has no row locks: take the database write lock before reading."""
    connection = await session.connection()
    if connection.dialect.name == "sqlite":
        await connection.exec_driver_sql("BEGIN IMMEDIATE")


def get_document_store() -> SqlDocumentStore:
    """FastAPI dependency — store bound to the process session manager."""
    if not database.db_manager:
        raise RuntimeError("Database not initialized")
    return SqlDocumentStore(database.db_manager.session)

"""Document ORM — one row per stored document, any collection.

Invariants:
    - (collection, id) is the primary key; id is assigned by SqlDocumentStore.add
    - data holds the entity fields as JSON, exactly as clients see them
    - version starts at 1 and is incremented by every write (conditional writes)
    - created_at is set once on insert; updated_at on every write

Design Decisions:
    - JSON column over per-entity tables: entities are schemaless documents,
      validated at the API boundary, not by the storage layer
    - version column alongside row locks: every UPDATE is conditional on the
      version read, on PostgreSQL and SQLite alike
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column

from quizhub.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Document(Base):
    """A single stored record with a store-assigned identifier."""
    __tablename__ = "documents"
    __table_args__ = (
        Index("ix_documents_collection_created_at", "collection", "created_at"),
    )

    collection: Mapped[str] = mapped_column(String(64), primary_key=True)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )

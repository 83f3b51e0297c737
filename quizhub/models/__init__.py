"""ORM Models — SQLAlchemy declarative models backing the document store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Documents of every collection share one table, keyed by (collection, id)

Design Decisions:
    - All models imported here so Base.metadata is complete before
      create_all or alembic autogenerate runs
"""

from quizhub.models.document import Document  # noqa: F401

"""Infrastructure Layer — document store implementation and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from services/ or api/
    - All SQLAlchemy failures mapped to DocumentStoreError before leaving this layer

Design Decisions:
    - Store implementation lives behind the core DocumentStore Protocol so routes
      and services receive it by injection
"""

"""Service Layer — repositories and the enrollment transaction (imperative shell).

Invariants:
    - Services receive the DocumentStore by injection, never import a global
    - Services return RepositoryResult; HTTP shaping stays in api/

Design Decisions:
    - Pure rules live in core/, services orchestrate IO around them
"""

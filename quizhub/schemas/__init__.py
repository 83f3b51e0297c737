"""API Schemas — Pydantic request and document models for the HTTP boundary.

Invariants:
    - Request models validate before any handler runs (FastAPI raises
      RequestValidationError, mapped to 400)
    - Wire field names are camelCase (quizIds, userCount, createdOn) via aliases;
      Python attributes are snake_case

Design Decisions:
    - Unknown request fields are dropped (extra="ignore"): clients cannot write
      fields the API does not declare
"""

"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, QuizId, DocumentId wrap str — store-assigned ids are opaque strings
    - Collection names are encoded as an Enum — no raw string collection names
    - ResultStatus values ARE the HTTP status codes routes respond with

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log extras without custom encoders
"""

from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DocumentId = NewType("DocumentId", str)
UserId = NewType("UserId", str)
QuizId = NewType("QuizId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Collection(str, Enum):
    """Named document collections, one entity type each."""
    USERS = "users"
    QUIZZES = "quizzes"


class ResultStatus(IntEnum):
    """Uniform repository outcome — value doubles as the HTTP status."""
    OK = 200
    NOT_FOUND = 404
    INTERNAL_ERROR = 500

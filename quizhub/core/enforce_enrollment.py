"""Enrollment Enforcement — pure guard and write plan for enrolling a user in a quiz.

Invariants:
    - check_enrollment_allowed is PURE: raises on violation, never mutates
    - A user already holding quiz_id in quizIds is never enrolled again
      (no second append, no second increment)
    - build_enrollment_writes only emits store transforms (ArrayUnion, Increment),
      so replaying the writes against a fresher read stays correct

Design Decisions:
    - Separated from the service: the service owns the transaction and retry,
      this module owns the rule
"""

from typing import Any

from quizhub.core.errors import AlreadyEnrolledError
from quizhub.core.field_transforms import ArrayUnion, Increment


ALREADY_ENROLLED_MESSAGE: str = "User already enrolled in quiz"
QUIZ_IDS_FIELD: str = "quizIds"
USER_COUNT_FIELD: str = "userCount"


def is_enrolled(user_data: dict[str, Any], quiz_id: str) -> bool:
    quiz_ids = user_data.get(QUIZ_IDS_FIELD) or []
    return quiz_id in quiz_ids


def check_enrollment_allowed(
    user_id: str, user_data: dict[str, Any], quiz_id: str,
) -> None:
    """Raise AlreadyEnrolledError when the user already holds the quiz."""
    if is_enrolled(user_data, quiz_id):
        raise AlreadyEnrolledError(user_id, quiz_id)


def build_enrollment_writes(quiz_id: str) -> tuple[dict, dict]:
    """Return (user_fields, quiz_fields) to merge for one enrollment."""
    user_fields = {QUIZ_IDS_FIELD: ArrayUnion((quiz_id,))}
    quiz_fields = {USER_COUNT_FIELD: Increment(1)}
    return user_fields, quiz_fields

"""Enrollment Service — adds a quiz to a user and bumps the quiz's user count, atomically.

Invariants:
    - User is looked up before quiz; a missing user wins over a missing quiz
    - Both writes (quizIds array-union, userCount increment) commit together or
      not at all — one store transaction, conditional on the versions read
    - The transaction locks the user and quiz as it reads them, so concurrent
      enrollments queue and the already-enrolled guard sees the committed state
    - A version conflict still retries the whole read-guard-write sequence
    - Already enrolled -> 404 with {"data": ALREADY_ENROLLED_MESSAGE}, no writes
    - Any store failure or exhausted retries -> 500 with empty data

Design Decisions:
    - Read-then-write under lock instead of a server-side increment: the guard
      needs the read anyway
    - Response documents come from the transaction's own writes, not a re-read,
      so they reflect exactly this enrollment
"""

import logging

from pydantic import ValidationError

from quizhub.core.domain_types import Collection, QuizId, ResultStatus, UserId
from quizhub.core.enforce_enrollment import (
    ALREADY_ENROLLED_MESSAGE,
    build_enrollment_writes,
    check_enrollment_allowed,
)
from quizhub.core.errors import (
    AlreadyEnrolledError, ConcurrencyError, QuizHubError, ResourceNotFoundError,
)
from quizhub.core.repository_protocols import DocumentStore, DocumentTransaction
from quizhub.schemas.quiz import QuizDocument
from quizhub.schemas.user import UserDocument
from quizhub.services.document_repository import DocumentRepository, RepositoryResult

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Enroll users in quizzes through one locked store transaction."""

    def __init__(
        self,
        store: DocumentStore,
        users: DocumentRepository[UserDocument],
        quizzes: DocumentRepository[QuizDocument],
        max_attempts: int = 10,
    ):
        self.store = store
        self.users = users
        self.quizzes = quizzes
        self.max_attempts = max_attempts

    async def enroll(self, user_id: UserId, quiz_id: QuizId) -> RepositoryResult:
        async def _enroll(txn: DocumentTransaction) -> RepositoryResult:
            user = await txn.get(Collection.USERS.value, user_id)
            if not user.exists:
                raise ResourceNotFoundError("User", user_id)
            quiz = await txn.get(Collection.QUIZZES.value, quiz_id)
            if not quiz.exists:
                raise ResourceNotFoundError("Quiz", quiz_id)

            check_enrollment_allowed(user_id, user.data, quiz_id)

            user_fields, quiz_fields = build_enrollment_writes(quiz_id)
            updated_user = await txn.merge_update(
                Collection.USERS.value, user_id, user_fields,
            )
            updated_quiz = await txn.merge_update(
                Collection.QUIZZES.value, quiz_id, quiz_fields,
            )
            return RepositoryResult(ResultStatus.OK, {
                "quiz": self.quizzes.to_payload(updated_quiz),
                "user": self.users.to_payload(updated_user),
            })

        try:
            result = await self.store.run_transaction(_enroll, self.max_attempts)
        except ResourceNotFoundError as e:
            logger.info(f"Enrollment target missing: {e.message}")
            return RepositoryResult.not_found()
        except AlreadyEnrolledError as e:
            logger.info(f"Enrollment skipped: {e.message}")
            return RepositoryResult(
                ResultStatus.NOT_FOUND, {"data": ALREADY_ENROLLED_MESSAGE},
            )
        except ConcurrencyError as e:
            logger.error(
                f"Enrollment gave up: {e.message}",
                extra={"error_code": e.code, "document_id": quiz_id},
            )
            return RepositoryResult.internal_error()
        except (QuizHubError, ValidationError) as e:
            logger.error(
                f"Enrollment failed: {e}",
                extra={
                    "error_code": getattr(e, "code", type(e).__name__),
                    "document_id": user_id,
                },
            )
            return RepositoryResult.internal_error()

        logger.info(
            f"User {user_id} enrolled in quiz {quiz_id}",
            extra={"collection": Collection.QUIZZES.value, "document_id": quiz_id},
        )
        return result

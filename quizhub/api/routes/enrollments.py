"""Enrollment Route — POST /users/{userId}/quizzes/{quizId}.

Invariants:
    - Request body is ignored; both ids come from the path
    - 200 {"quiz", "user"} on success; 404 for a missing user, missing quiz or an
      existing enrollment; 500 on store failure

Design Decisions:
    - /users/{userId}/quizes/{quizId} kept as a hidden alias for older clients
"""

from fastapi import APIRouter, Depends

from quizhub.api.dependencies import get_enrollment_service
from quizhub.api.responses import result_response
from quizhub.core.domain_types import QuizId, UserId
from quizhub.services.enrollment import EnrollmentService

router = APIRouter(prefix="/users", tags=["enrollments"])


@router.post("/{user_id}/quizzes/{quiz_id}")
@router.post("/{user_id}/quizes/{quiz_id}", include_in_schema=False)
async def enroll_user(
    user_id: str,
    quiz_id: str,
    service: EnrollmentService = Depends(get_enrollment_service),
):
    """Add the quiz to the user and increment the quiz's userCount."""
    result = await service.enroll(UserId(user_id), QuizId(quiz_id))
    return result_response(result)

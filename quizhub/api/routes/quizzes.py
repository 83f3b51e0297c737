"""Quiz Routes — create, list, fetch, partially update and delete quizzes.

Invariants:
    - POST applies defaults (active=false, userCount=0, createdOn=server time)
    - PATCH merges only the fields sent; createdOn and userCount are never touched
    - GET /quizzes returns at most quiz_list_limit quizzes, newest createdOn first;
      a failed query answers 500 with no body
    - DELETE reports 200 {} whether or not the quiz existed

Design Decisions:
    - Listing queries the store directly (no repository method): it is the only
      multi-document read and has its own failure shape
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from pydantic import ValidationError

from quizhub.api.dependencies import get_document_store, get_quiz_repository
from quizhub.api.responses import result_response
from quizhub.config import Settings, get_settings
from quizhub.core.domain_types import Collection
from quizhub.core.errors import QuizHubError
from quizhub.core.repository_protocols import DocumentStore
from quizhub.schemas.quiz import QuizCreate, QuizDocument, QuizUpdate
from quizhub.services.document_repository import DocumentRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/quizzes", tags=["quizzes"])


@router.post("")
async def create_quiz(
    body: QuizCreate,
    quizzes: DocumentRepository[QuizDocument] = Depends(get_quiz_repository),
):
    """Create a quiz with defaults applied."""
    return result_response(await quizzes.create(body.to_document()))


@router.get("")
async def list_quizzes(
    store: DocumentStore = Depends(get_document_store),
    quizzes: DocumentRepository[QuizDocument] = Depends(get_quiz_repository),
    settings: Settings = Depends(get_settings),
):
    """Latest quizzes by creation time, newest first (no pagination)."""
    try:
        snapshots = await store.query(
            Collection.QUIZZES.value,
            order_by="createdOn",
            descending=True,
            limit=settings.quiz_list_limit,
        )
        return [quizzes.to_payload(snapshot) for snapshot in snapshots]
    except (QuizHubError, ValidationError) as e:
        logger.error(
            f"Listing quizzes failed: {e}",
            extra={"collection": Collection.QUIZZES.value},
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@router.patch("/{quiz_id}")
async def update_quiz(
    quiz_id: str,
    body: QuizUpdate,
    quizzes: DocumentRepository[QuizDocument] = Depends(get_quiz_repository),
):
    """Partially update a quiz and return the full updated document."""
    return result_response(await quizzes.update(quiz_id, body.to_fields()))


@router.get("/{quiz_id}")
async def get_quiz(
    quiz_id: str,
    quizzes: DocumentRepository[QuizDocument] = Depends(get_quiz_repository),
):
    return result_response(await quizzes.get(quiz_id))


@router.delete("/{quiz_id}")
async def delete_quiz(
    quiz_id: str,
    quizzes: DocumentRepository[QuizDocument] = Depends(get_quiz_repository),
):
    return result_response(await quizzes.delete(quiz_id))

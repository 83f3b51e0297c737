"""User Routes — create, fetch and delete users.

Invariants:
    - POST body validated by UserCreate before the handler runs (400 otherwise)
    - Status and body come straight from the repository result
    - DELETE reports 200 {} whether or not the user existed

Design Decisions:
    - Create answers 200 (not 201) with the stored user: existing clients
      expect 200
"""

import logging

from fastapi import APIRouter, Depends

from quizhub.api.dependencies import get_user_repository
from quizhub.api.responses import result_response
from quizhub.core.domain_types import Collection
from quizhub.schemas.user import UserCreate, UserDocument
from quizhub.services.document_repository import DocumentRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/users", tags=["users"])


@router.post("")
async def create_user(
    body: UserCreate,
    users: DocumentRepository[UserDocument] = Depends(get_user_repository),
):
    """Create a user; quizIds defaults to []."""
    result = await users.create(body.to_document())
    if result.ok:
        logger.info(
            f"Created user {result.data['id']}",
            extra={
                "collection": Collection.USERS.value,
                "document_id": result.data["id"],
            },
        )
    return result_response(result)


@router.get("/{user_id}")
async def get_user(
    user_id: str,
    users: DocumentRepository[UserDocument] = Depends(get_user_repository),
):
    return result_response(await users.get(user_id))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    users: DocumentRepository[UserDocument] = Depends(get_user_repository),
):
    return result_response(await users.delete(user_id))

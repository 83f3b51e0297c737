"""Request Dependencies — per-request wiring of store, repositories and services.

Invariants:
    - Every request gets its own repository/service objects; nothing mutable is
      shared between requests except the connection pool behind the store
    - Tests swap the store by overriding get_document_store only

Design Decisions:
    - Depends() chain over module globals: explicit injection of the store client
"""

from fastapi import Depends

from quizhub.config import Settings, get_settings
from quizhub.core.domain_types import Collection
from quizhub.core.repository_protocols import DocumentStore
from quizhub.infrastructure.document_store import get_document_store
from quizhub.schemas.quiz import QuizDocument
from quizhub.schemas.user import UserDocument
from quizhub.services.document_repository import DocumentRepository
from quizhub.services.enrollment import EnrollmentService


def get_user_repository(
    store: DocumentStore = Depends(get_document_store),
) -> DocumentRepository[UserDocument]:
    return DocumentRepository(store, Collection.USERS, UserDocument)


def get_quiz_repository(
    store: DocumentStore = Depends(get_document_store),
) -> DocumentRepository[QuizDocument]:
    return DocumentRepository(store, Collection.QUIZZES, QuizDocument)


def get_enrollment_service(
    store: DocumentStore = Depends(get_document_store),
    users: DocumentRepository[UserDocument] = Depends(get_user_repository),
    quizzes: DocumentRepository[QuizDocument] = Depends(get_quiz_repository),
    settings: Settings = Depends(get_settings),
) -> EnrollmentService:
    return EnrollmentService(
        store, users, quizzes, max_attempts=settings.enrollment_max_attempts,
    )

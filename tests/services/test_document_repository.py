"""Document Repository — uniform results over the document store.

Invariants:
    - create/get/update return OK with id + all fields
    - get of a missing id returns NOT_FOUND with {}
    - update of a missing id returns INTERNAL_ERROR (store reports it as a failure)
    - delete always returns OK with {}, even for a missing id
    - store failures become INTERNAL_ERROR with {}, never an exception
"""

import pytest

from quizhub.core.domain_types import Collection, ResultStatus
from quizhub.schemas.quiz import QuizCreate, QuizDocument
from quizhub.schemas.user import UserDocument
from quizhub.services.document_repository import DocumentRepository, RepositoryResult

from tests.services.fake_stores import FailingStore


@pytest.fixture
def users(store):
    return DocumentRepository(store, Collection.USERS, UserDocument)


@pytest.fixture
def quizzes(store):
    return DocumentRepository(store, Collection.QUIZZES, QuizDocument)


async def test_create_returns_document_with_id(users):
    result = await users.create({"name": "Bob", "quizIds": []})
    assert result.status is ResultStatus.OK
    assert result.ok
    assert set(result.data) == {"id", "name", "quizIds"}
    assert result.data["name"] == "Bob"
    assert result.data["quizIds"] == []


async def test_get_returns_stored_document(users):
    created = await users.create({"name": "Bob", "quizIds": ["q1"]})
    result = await users.get(created.data["id"])
    assert result.status is ResultStatus.OK
    assert result.data == created.data


async def test_get_missing_returns_not_found(users):
    result = await users.get("does-not-exist")
    assert result == RepositoryResult(ResultStatus.NOT_FOUND, {})


async def test_update_merges_and_returns_full_document(quizzes):
    created = await quizzes.create(
        QuizCreate.model_validate({"name": "Quiz", "description": "desc"}).to_document(),
    )
    result = await quizzes.update(created.data["id"], {"active": True})
    assert result.status is ResultStatus.OK
    assert result.data["active"] is True
    assert result.data["name"] == "Quiz"
    assert result.data["description"] == "desc"
    assert result.data["createdOn"] == created.data["createdOn"]


async def test_update_missing_returns_internal_error(quizzes):
    result = await quizzes.update("does-not-exist", {"active": True})
    assert result == RepositoryResult(ResultStatus.INTERNAL_ERROR, {})


async def test_delete_returns_ok_even_when_missing(users):
    assert await users.delete("does-not-exist") == RepositoryResult(ResultStatus.OK, {})


async def test_delete_then_get_is_not_found(users):
    created = await users.create({"name": "Bob", "quizIds": []})
    await users.delete(created.data["id"])
    assert (await users.get(created.data["id"])).status is ResultStatus.NOT_FOUND


async def test_quiz_payload_omits_absent_description(quizzes):
    created = await quizzes.create(
        QuizCreate.model_validate({"name": "Quiz"}).to_document(),
    )
    assert "description" not in created.data
    assert created.data["active"] is False
    assert created.data["userCount"] == 0
    assert created.data["createdOn"]


async def test_malformed_stored_document_is_internal_error(store, users):
    doc_id = await store.add("users", {"quizIds": []})
    assert (await users.get(doc_id)).status is ResultStatus.INTERNAL_ERROR


async def test_store_failures_become_internal_errors():
    failing = FailingStore()
    repo = DocumentRepository(failing, Collection.USERS, UserDocument)

    for result in [
        await repo.create({"name": "Bob"}),
        await repo.get("u1"),
        await repo.update("u1", {"name": "Rob"}),
        await repo.delete("u1"),
    ]:
        assert result == RepositoryResult(ResultStatus.INTERNAL_ERROR, {})
    assert failing.calls == ["add", "get", "merge_update", "delete"]

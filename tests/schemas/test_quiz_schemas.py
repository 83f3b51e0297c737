"""Quiz Schemas — create defaults, partial update shape, blank-text rejection.

Invariants:
    - QuizCreate: active=False, userCount=0, createdOn=SERVER_TIMESTAMP by default
    - QuizCreate/QuizUpdate: name and description may not be blank
    - QuizUpdate.to_fields() contains only what the client sent
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from quizhub.core.field_transforms import SERVER_TIMESTAMP
from quizhub.schemas.quiz import QuizCreate, QuizDocument, QuizUpdate


def test_quiz_create_applies_defaults():
    doc = QuizCreate.model_validate({"name": "Quiz 1"}).to_document()
    assert doc == {
        "name": "Quiz 1",
        "active": False,
        "userCount": 0,
        "createdOn": SERVER_TIMESTAMP,
    }


def test_quiz_create_keeps_description_when_given():
    doc = QuizCreate.model_validate(
        {"name": "Quiz 1", "description": "about things", "active": True},
    ).to_document()
    assert doc["description"] == "about things"
    assert doc["active"] is True


def test_quiz_create_keeps_client_created_on():
    moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
    doc = QuizCreate.model_validate(
        {"name": "Quiz 1", "createdOn": moment.isoformat()},
    ).to_document()
    assert doc["createdOn"] == moment


def test_quiz_create_rejects_blank_name_and_description():
    with pytest.raises(ValidationError):
        QuizCreate.model_validate({"name": ""})
    with pytest.raises(ValidationError):
        QuizCreate.model_validate({"name": "Quiz", "description": ""})


def test_quiz_create_rejects_negative_user_count():
    with pytest.raises(ValidationError):
        QuizCreate.model_validate({"name": "Quiz", "userCount": -1})


def test_quiz_update_only_sent_fields():
    assert QuizUpdate.model_validate({"active": True}).to_fields() == {"active": True}
    assert QuizUpdate.model_validate({}).to_fields() == {}


def test_quiz_update_ignores_server_owned_fields():
    fields = QuizUpdate.model_validate(
        {"name": "Renamed", "userCount": 99, "createdOn": "2020-01-01T00:00:00Z"},
    ).to_fields()
    assert fields == {"name": "Renamed"}


def test_quiz_update_rejects_blank_name():
    with pytest.raises(ValidationError):
        QuizUpdate.model_validate({"name": ""})


def test_quiz_document_parses_stored_timestamp():
    doc = QuizDocument.model_validate({
        "id": "q1", "name": "Quiz", "active": False, "userCount": 3,
        "createdOn": "2026-10-19T12:30:00.000000+00:00",
    })
    assert doc.user_count == 3
    assert doc.created_on == datetime(2026, 10, 19, 12, 30, tzinfo=timezone.utc)

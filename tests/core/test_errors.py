"""Error Hierarchy — verifies codes, statuses and the REST envelope.

Tests:
    - every concrete error carries the documented HTTP status
    - to_response() includes code, category, severity and document context
    - DocumentNotFoundError is a DocumentStoreError (repositories treat it as 500)
"""

from quizhub.core.errors import (
    AlreadyEnrolledError,
    ConcurrencyError,
    DocumentNotFoundError,
    DocumentStoreError,
    ErrorCategory,
    ErrorContext,
    ErrorSeverity,
    QuizHubError,
    ResourceNotFoundError,
)


def test_http_statuses():
    assert ResourceNotFoundError("User", "u1").http_status == 404
    assert AlreadyEnrolledError("u1", "q1").http_status == 404
    assert DocumentStoreError("boom", "query").http_status == 500
    assert ConcurrencyError("raced").http_status == 409


def test_resource_not_found_message():
    err = ResourceNotFoundError("Quiz", "q9")
    assert err.message == "Quiz 'q9' not found"
    assert err.code == "RESOURCE_NOT_FOUND"


def test_document_not_found_is_store_error():
    err = DocumentNotFoundError("quizzes", "q1")
    assert isinstance(err, DocumentStoreError)
    assert isinstance(err, QuizHubError)
    assert err.operation == "update"
    assert err.context.collection == "quizzes"
    assert err.context.document_id == "q1"


def test_to_response_envelope():
    err = ResourceNotFoundError(
        "User", "u1", ErrorContext(collection="users", document_id="u1"),
    )
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["category"] == ErrorCategory.RESOURCE_NOT_FOUND.value
    assert body["severity"] == ErrorSeverity.ERROR.value
    assert body["context"] == {"collection": "users", "document_id": "u1"}
    assert "timestamp" in body


def test_store_errors_are_critical():
    assert DocumentStoreError("x", "commit").severity == ErrorSeverity.CRITICAL

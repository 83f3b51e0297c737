"""Result Rendering — RepositoryResult to HTTP response.

Invariants:
    - HTTP status is the ResultStatus value (200 / 404 / 500)
    - Body is the result data verbatim ({} for not-found and internal errors)
"""

from fastapi.responses import JSONResponse

from quizhub.services.document_repository import RepositoryResult


def result_response(result: RepositoryResult) -> JSONResponse:
    return JSONResponse(status_code=result.status.value, content=result.data)

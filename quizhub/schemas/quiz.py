"""Quiz Schemas — request validation and document shape for the quizzes collection.

Invariants:
    - QuizCreate.name: required, at least 1 char; description optional but never blank
    - QuizCreate defaults: active=False, userCount=0, createdOn=server timestamp
    - QuizUpdate applies NO defaults: only fields the client sent are merged,
      so a PATCH never resets active, userCount or createdOn

Design Decisions:
    - userCount and createdOn are not patchable: userCount belongs to enrollment,
      createdOn is set once at creation
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from quizhub.core.field_transforms import SERVER_TIMESTAMP


class QuizCreate(BaseModel):
    """POST /quizzes body."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1)
    description: str | None = Field(None, min_length=1)
    active: bool = False
    user_count: int = Field(0, ge=0, alias="userCount")
    created_on: datetime | None = Field(None, alias="createdOn")

    def to_document(self) -> dict:
        """Normalized fields to store; createdOn falls back to the server timestamp."""
        document = self.model_dump(
            by_alias=True, exclude_none=True, exclude={"created_on"},
        )
        document["createdOn"] = self.created_on or SERVER_TIMESTAMP
        return document


class QuizUpdate(BaseModel):
    """PATCH /quizzes/{quizId} body — any subset of the editable fields."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    active: bool | None = None

    def to_fields(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class QuizDocument(BaseModel):
    """Quiz as returned by the API."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    description: str | None = None
    active: bool = False
    user_count: int = Field(0, alias="userCount")
    created_on: datetime | None = Field(None, alias="createdOn")

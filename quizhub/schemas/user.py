"""User Schemas — request validation and document shape for the users collection.

Invariants:
    - UserCreate.name: required, at least 1 char
    - UserCreate.quizIds defaults to [] when absent
    - UserDocument is the full stored user plus its id

Design Decisions:
    - quizIds accepted on create for imports; duplicates are only prevented by
      enrollment (array-union), not here
"""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """POST /users body."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(min_length=1)
    quiz_ids: list[str] = Field(default_factory=list, alias="quizIds")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class UserDocument(BaseModel):
    """User as returned by the API."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    quiz_ids: list[str] = Field(default_factory=list, alias="quizIds")

from typing import Any

from pydantic import BaseModel, Field


class QuestionMetadataResponse(BaseModel):
    year: int
    questionId: str
    hasOverride: bool
    metadata: dict[str, Any] | None = None


class SimuladoQuestionsRequest(BaseModel):
    year: int
    questionIds: list[str] = Field(default_factory=list)


class SimuladoQuestionsResponse(BaseModel):
    questions: list[dict[str, Any]] = Field(default_factory=list)

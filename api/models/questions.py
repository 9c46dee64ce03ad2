"""Pydantic models for the canonical question payload."""
from pydantic import BaseModel, Field

from models import QuestionType


class ContentEntry(BaseModel):
    """One blank's answer, matched to its placeholder by positionId."""

    id: str | None = None
    value: str = ""
    positionId: str = Field(..., min_length=1)
    correct: bool = True
    positionOrder: int | None = None


class QuestionContent(BaseModel):
    data: list[ContentEntry] = Field(default_factory=list)


class QuestionPayload(BaseModel):
    """Canonical payload exchanged with the platform backend."""

    questionType: QuestionType = QuestionType.FILL_IN_THE_BLANK
    questionText: str = ""
    content: QuestionContent = Field(default_factory=QuestionContent)
    points: float = Field(1, gt=0)


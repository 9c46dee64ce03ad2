"""Editor event models sent by the UI surface."""
from typing import Literal

from pydantic import BaseModel, Field

from api.models.questions import QuestionPayload
from models import Caret, QuestionType, Rect, TextRun


class EditorCreate(BaseModel):
    """Open an editor, empty or hydrated from a payload or a stored question."""

    questionType: QuestionType = QuestionType.FILL_IN_THE_BLANK
    points: float = Field(1, gt=0)
    payload: QuestionPayload | None = None
    questionId: str | None = None


class CaretModel(BaseModel):
    offset: int = Field(0, ge=0)
    blankId: str | None = None
    answerOffset: int | None = Field(None, ge=0)

    def to_caret(self) -> Caret:
        return Caret(offset=self.offset, blank_id=self.blankId, answer_offset=self.answerOffset)


class RectModel(BaseModel):
    left: float
    top: float
    width: float = 0
    height: float = 0

    def to_rect(self) -> Rect:
        return Rect(left=self.left, top=self.top, width=self.width, height=self.height)


class TextInput(BaseModel):
    caret: CaretModel
    text: str


class DeleteRange(BaseModel):
    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class ContentItem(BaseModel):
    """A text run, or a reference to an existing blank by id."""

    type: Literal["text", "blank"]
    text: str = ""
    id: str | None = None


class ContentUpdate(BaseModel):
    items: list[ContentItem]

    def to_items(self) -> list[TextRun | str]:
        items: list[TextRun | str] = []
        for item in self.items:
            if item.type == "text":
                items.append(TextRun(item.text))
            elif item.id:
                items.append(item.id)
        return items


class SelectionChange(BaseModel):
    caret: CaretModel | None = None
    caretRect: RectModel | None = None
    containerRect: RectModel | None = None


class AnswerInput(BaseModel):
    value: str = ""


class PreviewMove(BaseModel):
    dragId: str = Field(..., min_length=1)
    dropId: str = Field(..., min_length=1)


class PointsUpdate(BaseModel):
    points: float

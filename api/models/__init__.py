"""Pydantic models."""
from api.models.editor import (
    AnswerInput,
    CaretModel,
    ContentItem,
    ContentUpdate,
    DeleteRange,
    EditorCreate,
    PointsUpdate,
    PreviewMove,
    RectModel,
    SelectionChange,
    TextInput,
)
from api.models.questions import (
    ContentEntry,
    QuestionContent,
    QuestionPayload,
)

__all__ = [
    "AnswerInput",
    "CaretModel",
    "ContentEntry",
    "ContentItem",
    "ContentUpdate",
    "DeleteRange",
    "EditorCreate",
    "PointsUpdate",
    "PreviewMove",
    "QuestionContent",
    "QuestionPayload",
    "RectModel",
    "SelectionChange",
    "TextInput",
]

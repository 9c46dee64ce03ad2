"""Saved cloze question model."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

import sqlalchemy as sa
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from api.database import Base


class QuestionRecord(Base):
    """
    A canonical payload accepted by the editor's save.
    questionText and content.data are stored exactly as serialized.
    """

    __tablename__ = "questions"

    id: Mapped[str] = mapped_column(
        String(32), primary_key=True, default=lambda: uuid.uuid4().hex
    )
    question_type: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    question_text: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[dict[str, Any]] = mapped_column(sa.JSON, nullable=False)
    points: Mapped[float] = mapped_column(sa.Float, default=1, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def to_payload(self) -> dict[str, Any]:
        return {
            "questionType": self.question_type,
            "questionText": self.question_text,
            "content": self.content,
            "points": self.points,
        }

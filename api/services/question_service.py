"""Service layer for saved questions."""
from typing import Any

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session as DbSession

from api.models.db.question import QuestionRecord


def save_question(
    db: DbSession, payload: dict[str, Any], question_id: str | None = None
) -> QuestionRecord:
    """
    Persist a canonical payload.
    Updates the stored question when question_id is given, otherwise inserts.
    """
    record = db.get(QuestionRecord, question_id) if question_id else None
    if record is None:
        record = QuestionRecord()
        if question_id:
            record.id = question_id
        db.add(record)

    record.question_type = payload["questionType"]
    record.question_text = payload["questionText"]
    record.content = payload["content"]
    record.points = payload["points"]
    db.commit()
    db.refresh(record)
    return record


def get_question(db: DbSession, question_id: str) -> QuestionRecord:
    """Get stored question by ID."""
    record = db.get(QuestionRecord, question_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Question not found")
    return record


def list_questions(db: DbSession, question_type: str | None = None) -> list[QuestionRecord]:
    """List stored questions, newest first."""
    stmt = select(QuestionRecord).order_by(QuestionRecord.created_at.desc())
    if question_type:
        stmt = stmt.where(QuestionRecord.question_type == question_type)
    return list(db.execute(stmt).scalars().all())


def delete_question(db: DbSession, question_id: str) -> None:
    """Delete stored question."""
    record = get_question(db, question_id)
    db.delete(record)
    db.commit()

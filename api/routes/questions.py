"""Saved question endpoints."""
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.services import question_service
from api.utils import validate_id

router = APIRouter(prefix="/api/questions", tags=["questions"])


@router.get("")
def list_questions(
    db: Annotated[DbSession, Depends(get_db)],
    question_type: Annotated[str | None, Query(alias="questionType")] = None,
) -> list[dict[str, object]]:
    """List saved questions."""
    return [
        {"id": record.id, **record.to_payload()}
        for record in question_service.list_questions(db, question_type)
    ]


@router.get("/{question_id}")
def get_question(
    question_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Get saved question payload."""
    record = question_service.get_question(db, validate_id("questionId", question_id))
    return {"id": record.id, **record.to_payload()}


@router.delete("/{question_id}")
def delete_question(
    question_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, str]:
    """Delete saved question."""
    question_service.delete_question(db, validate_id("questionId", question_id))
    return {"status": "deleted"}

"""Editing session endpoints: one call per UI event."""
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session as DbSession

from api.database import get_db
from api.models import (
    AnswerInput,
    ContentUpdate,
    DeleteRange,
    EditorCreate,
    PointsUpdate,
    PreviewMove,
    SelectionChange,
    TextInput,
)
from api.services import editor_service, question_service
from api.services.editor_service import editor_response, get_editor
from api.utils import validate_id
from models import Caret

router = APIRouter(prefix="/api/editors", tags=["editors"])


def _editor_id(editor_id: str) -> str:
    return validate_id("editorId", editor_id)


def _caret_dict(caret: Caret) -> dict[str, object]:
    return {"offset": caret.offset, "blankId": caret.blank_id, "answerOffset": caret.answer_offset}


@router.post("")
def create_editor(
    payload: EditorCreate,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Open a new editor, optionally hydrated from a payload or stored question."""
    source = None
    question_id = None
    if payload.questionId:
        question_id = validate_id("questionId", payload.questionId)
        source = question_service.get_question(db, question_id).to_payload()
    elif payload.payload is not None:
        source = payload.payload.model_dump(mode="json", exclude_none=True)

    editor_id, editor = editor_service.open_editor(
        payload.questionType, payload.points, source, question_id
    )
    return editor_response(editor_id, editor)


@router.get("/{editor_id}")
def get_editor_view(editor_id: str) -> dict[str, object]:
    """Get current editor view."""
    editor_id = _editor_id(editor_id)
    return editor_response(editor_id, get_editor(editor_id))


@router.delete("/{editor_id}")
def cancel_editor(editor_id: str) -> dict[str, str]:
    """Cancel editing; nothing is persisted."""
    editor_service.close_editor(_editor_id(editor_id))
    return {"status": "cancelled"}


@router.post("/{editor_id}/text")
def type_text(editor_id: str, payload: TextInput) -> dict[str, object]:
    """Typed text at the caret."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    caret = editor.type_text(payload.caret.to_caret(), payload.text)
    return editor_response(editor_id, editor, caret=_caret_dict(caret))


@router.post("/{editor_id}/delete")
def delete_range(editor_id: str, payload: DeleteRange) -> dict[str, object]:
    """Generic deletion of a range of the document."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    caret = editor.delete_range(payload.start, payload.end)
    return editor_response(editor_id, editor, caret=_caret_dict(caret))


@router.put("/{editor_id}/content")
def replace_content(editor_id: str, payload: ContentUpdate) -> dict[str, object]:
    """Bulk content update from the editing surface."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    editor.replace_content(payload.to_items())
    return editor_response(editor_id, editor)


@router.post("/{editor_id}/selection")
def selection_changed(editor_id: str, payload: SelectionChange) -> dict[str, object]:
    """Caret moved; updates the insert-blank affordance."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    editor.selection_changed(
        payload.caret.to_caret() if payload.caret else None,
        payload.caretRect.to_rect() if payload.caretRect else None,
        payload.containerRect.to_rect() if payload.containerRect else None,
    )
    return editor_response(editor_id, editor)


@router.post("/{editor_id}/blanks")
def insert_blank(editor_id: str) -> dict[str, object]:
    """Insert a blank at the last captured caret."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    token = editor.insert_at_anchor()
    return editor_response(editor_id, editor, blankId=token.id if token else None)


def _require_blank(editor, blank_id: str) -> None:
    if blank_id not in editor.registry:
        raise HTTPException(status_code=404, detail="Blank not found")


@router.post("/{editor_id}/blanks/{blank_id}/expand")
def expand_blank(editor_id: str, blank_id: str) -> dict[str, object]:
    """Blank clicked."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    _require_blank(editor, blank_id)
    editor.click_token(blank_id)
    return editor_response(editor_id, editor)


@router.post("/{editor_id}/blanks/{blank_id}/input")
def blank_input(editor_id: str, blank_id: str, payload: AnswerInput) -> dict[str, object]:
    """Answer typed into an expanded blank."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    _require_blank(editor, blank_id)
    editor.input_token(blank_id, payload.value)
    return editor_response(editor_id, editor)


@router.post("/{editor_id}/blanks/{blank_id}/blur")
def blur_blank(editor_id: str, blank_id: str) -> dict[str, object]:
    """Blank input lost focus."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    _require_blank(editor, blank_id)
    token = editor.blur_token(blank_id)
    return editor_response(editor_id, editor, deleted=token is None)


@router.delete("/{editor_id}/blanks/{blank_id}")
def delete_blank(editor_id: str, blank_id: str) -> dict[str, object]:
    """Delete control activated."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    _require_blank(editor, blank_id)
    editor.delete_token(blank_id)
    return editor_response(editor_id, editor)


@router.post("/{editor_id}/preview/shuffle")
def shuffle_preview(editor_id: str) -> dict[str, object]:
    """Re-shuffle the Reorder preview."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    editor.reshuffle_preview()
    return editor_response(editor_id, editor)


@router.post("/{editor_id}/preview/move")
def move_preview_item(editor_id: str, payload: PreviewMove) -> dict[str, object]:
    """Preview item dropped onto another."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    editor.move_preview(payload.dragId, payload.dropId)
    return editor_response(editor_id, editor)


@router.put("/{editor_id}/points")
def set_points(editor_id: str, payload: PointsUpdate) -> dict[str, object]:
    """Change question points."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    editor.set_points(payload.points)
    return editor_response(editor_id, editor)


@router.post("/{editor_id}/save")
def save_editor(
    editor_id: str,
    db: Annotated[DbSession, Depends(get_db)],
) -> dict[str, object]:
    """Validate and persist; a blocked save keeps the editor open."""
    editor_id = _editor_id(editor_id)
    editor = get_editor(editor_id)
    result = editor.save()
    if not result.ok:
        return editor_response(
            editor_id,
            editor,
            status="blocked",
            issues=[{"code": issue.code, "message": issue.message} for issue in result.issues],
        )

    record = question_service.save_question(
        db, result.payload, editor_service.source_question_id(editor_id)
    )
    editor_service.close_editor(editor_id, discard=False)
    return {
        "status": "saved",
        "questionId": record.id,
        "payload": record.to_payload(),
    }

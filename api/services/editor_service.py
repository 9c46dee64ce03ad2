"""In-process store of open editing sessions."""
import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import HTTPException

from api.config import EDITOR_IDLE_MINUTES, EDITOR_LIMITS, INPUT_DEBOUNCE_SECONDS
from blank_editor import BlankEditor
from models import QuestionType

logger = logging.getLogger(__name__)

_editors: dict[str, BlankEditor] = {}
_sources: dict[str, str | None] = {}
_last_used: dict[str, datetime] = {}
_lock = threading.Lock()


def _now() -> datetime:
    return datetime.now(timezone.utc)


def open_editor(
    question_type: QuestionType,
    points: float,
    payload: dict[str, Any] | None = None,
    question_id: str | None = None,
) -> tuple[str, BlankEditor]:
    """Create an editor, empty or hydrated from a payload."""
    if payload is not None:
        editor = BlankEditor.from_payload(
            payload,
            limits=EDITOR_LIMITS,
            debounce_delay=INPUT_DEBOUNCE_SECONDS,
        )
    else:
        editor = BlankEditor(
            question_type,
            points,
            limits=EDITOR_LIMITS,
            debounce_delay=INPUT_DEBOUNCE_SECONDS,
        )

    editor_id = uuid.uuid4().hex
    with _lock:
        _editors[editor_id] = editor
        _sources[editor_id] = question_id
        _last_used[editor_id] = _now()
    logger.info(f"Opened editor {editor_id} ({editor.question_type.value})")
    return editor_id, editor


def get_editor(editor_id: str) -> BlankEditor:
    """Get open editor by ID and mark it as used."""
    with _lock:
        editor = _editors.get(editor_id)
        if editor is not None:
            _last_used[editor_id] = _now()
    if editor is None:
        raise HTTPException(status_code=404, detail="Editor not found")
    return editor


def source_question_id(editor_id: str) -> str | None:
    """Stored question the editor was opened from, if any."""
    with _lock:
        return _sources.get(editor_id)


def close_editor(editor_id: str, discard: bool = True) -> None:
    """Remove editor from the store; discarding drops its document unsaved."""
    with _lock:
        editor = _editors.pop(editor_id, None)
        _sources.pop(editor_id, None)
        _last_used.pop(editor_id, None)
    if editor is None:
        raise HTTPException(status_code=404, detail="Editor not found")
    if discard:
        editor.cancel()
    logger.info(f"Closed editor {editor_id}")


def expire_idle_editors(idle_minutes: int = EDITOR_IDLE_MINUTES) -> int:
    """Discard editors that have not been used for ``idle_minutes``."""
    if idle_minutes <= 0:
        return 0

    cutoff = _now() - timedelta(minutes=idle_minutes)
    with _lock:
        expired = [editor_id for editor_id, used in _last_used.items() if used < cutoff]
        editors = [_editors.pop(editor_id) for editor_id in expired if editor_id in _editors]
        for editor_id in expired:
            _sources.pop(editor_id, None)
            _last_used.pop(editor_id, None)
    for editor in editors:
        editor.cancel()
    if expired:
        logger.info(f"Expired {len(expired)} idle editors")
    return len(expired)


def editor_response(editor_id: str, editor: BlankEditor, **extra: Any) -> dict[str, Any]:
    """Editor view plus pending notices."""
    response: dict[str, Any] = {
        "editorId": editor_id,
        "view": editor.view(),
        "notices": [
            {"level": notice.level, "message": notice.message}
            for notice in editor.drain_notices()
        ],
    }
    response.update(extra)
    return response


def clear_editors() -> None:
    """Discard all open editors."""
    with _lock:
        editors = list(_editors.values())
        _editors.clear()
        _sources.clear()
        _last_used.clear()
    for editor in editors:
        editor.cancel()

"""
Editing session for Fill in the Blank and Reorder questions.

A ``BlankEditor`` owns one document, its blank registry, the cursor anchor,
the Reorder preview and the debounce timers. UI events are forwarded to the
handler methods below; every handler leaves the registry reconciled with the
document and renumbered. Nothing here raises on user error: problems become
notices, and save returns the validation issues that blocked it.
"""
from __future__ import annotations

import functools
import logging
import random
import threading
from dataclasses import asdict
from typing import Any, Iterable, List, Optional, Union

from blank_token import BlankEvent, color_for, new_blank, next_state
from cursor_anchor import CursorAnchorTracker
from debounce import FieldScheduler
from document import Document
from models import (
    AnchorPoint,
    BlankToken,
    Caret,
    DisplayState,
    Node,
    Notice,
    PreviewItem,
    QuestionType,
    Rect,
    SaveResult,
    TextRun,
    ValidationIssue,
)
from pattern_detect import convert_first_pattern, find_first_pattern
from position_keys import generate_position_id
from registry import BlankRegistry, renumber
from serialization import (
    blank_to_record,
    build_question_payload,
    deserialize_question_text,
    document_to_view,
)
from shuffle_preview import ShufflePreview
from validation import EditorLimits, validate_question

log = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3
QUESTION_FIELD = "question"


def synchronized(method):
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper


def _answer_field(blank_id: str) -> str:
    return f"answer:{blank_id}"


class BlankEditor:
    def __init__(
        self,
        question_type: Union[QuestionType, str] = QuestionType.FILL_IN_THE_BLANK,
        points: float = 1,
        *,
        nodes: Optional[Iterable[Node]] = None,
        limits: Optional[EditorLimits] = None,
        debounce_delay: float = DEFAULT_DEBOUNCE_SECONDS,
        rng: Optional[random.Random] = None,
    ):
        self.question_type = QuestionType(question_type)
        self.points = points
        self.limits = limits or EditorLimits()
        self.document = Document(nodes)
        self.registry = BlankRegistry()
        self.anchor = CursorAnchorTracker()
        self.preview: Optional[ShufflePreview] = None
        if self.question_type is QuestionType.REARRANGE:
            self.preview = ShufflePreview(rng)
        self.notices: List[Notice] = []
        self.issues: List[ValidationIssue] = []
        self.char_count = 0
        self.closed = False
        self._rng = rng
        self._scheduler = FieldScheduler(debounce_delay)
        self._lock = threading.RLock()

        self._sync_structure()
        self._refresh_counts()

    @classmethod
    def from_payload(cls, payload: dict[str, Any], **kwargs: Any) -> "BlankEditor":
        """Hydrate an editor from a canonical payload; all blanks start collapsed."""
        question_type = payload.get("questionType") or QuestionType.FILL_IN_THE_BLANK.value
        content = payload.get("content") or {}
        nodes = deserialize_question_text(
            str(payload.get("questionText") or ""),
            content.get("data") if isinstance(content, dict) else None,
        )
        editor = cls(question_type, payload.get("points") or 1, nodes=nodes, **kwargs)
        log.info(
            "Loaded %s question with %s blanks", editor.question_type.value, len(editor.registry)
        )
        return editor

    # ---- free text ----
    @synchronized
    def type_text(self, caret: Caret, text: str) -> Caret:
        """Insert typed text at the caret and run pattern detection."""
        if caret.inside_blank:
            return self._type_in_blank(caret, text)

        before = self.document.snapshot()
        offset = self.document.insert_text(caret.offset, text)
        if not self._within_length():
            self.document.restore(before)
            self._notify(
                f"Maximum {self.limits.max_question_length} characters allowed for the question"
            )
            return Caret(self.document.clamp(caret.offset))
        start = offset - len(text)
        self.anchor.remap(start, start, len(text))
        return self._after_text_change(offset)

    def _type_in_blank(self, caret: Caret, text: str) -> Caret:
        token = self.registry.get(caret.blank_id)
        if token is None or token.state is not DisplayState.EXPANDED:
            return caret
        answer = token.answer
        at = len(answer)
        if caret.answer_offset is not None:
            at = max(0, min(caret.answer_offset, at))
        self.input_token(token.id, answer[:at] + text + answer[at:])
        at = min(at + len(text), len(token.answer))
        return Caret(caret.offset, blank_id=token.id, answer_offset=at)

    @synchronized
    def delete_range(self, start: int, end: int) -> Caret:
        """Generic deletion; blanks caught in the range are dropped from the registry."""
        start, end = sorted((self.document.clamp(start), self.document.clamp(end)))
        self.document.delete(start, end)
        self.anchor.remap(start, end, 0)
        return self._after_text_change(start)

    @synchronized
    def replace_content(self, items: Iterable[Union[TextRun, str]]) -> Caret:
        """
        Bulk update from the UI surface. ``items`` are text runs and blank ids;
        unknown or repeated blank ids are skipped.
        """
        before = self.document.snapshot()
        nodes: List[Node] = []
        placed: set[str] = set()
        for item in items:
            if isinstance(item, TextRun):
                nodes.append(TextRun(item.text))
                continue
            token = self.registry.get(item)
            if token is None or token.id in placed:
                log.debug("Skipping unknown or repeated blank %s in bulk update", item)
                continue
            placed.add(token.id)
            nodes.append(token)
        self.document.restore(nodes)
        if not self._within_length():
            self.document.restore(before)
            self._notify(
                f"Maximum {self.limits.max_question_length} characters allowed for the question"
            )
        # Offsets are not comparable across a bulk replace.
        self.anchor.clear()
        return self._after_text_change(len(self.document))

    def _after_text_change(self, offset: int) -> Caret:
        self._sync_structure()
        created = self._detect_pattern()
        if created is not None:
            self._sync_structure()
        self._scheduler.schedule(QUESTION_FIELD, self._refresh_counts)
        if created is not None:
            return Caret(self.document.token_offset(created.id), blank_id=created.id)
        return Caret(self.document.clamp(offset))

    def _within_length(self) -> bool:
        return len(self.document.plain_text().strip()) <= self.limits.max_question_length

    def _detect_pattern(self) -> Optional[BlankToken]:
        if find_first_pattern(self.document) is None:
            return None
        if len(self.registry) >= self.limits.max_blanks:
            self._notify(f"Maximum {self.limits.max_blanks} blanks allowed")
            return None
        token = convert_first_pattern(self.document, self._make_blank)
        if token is None:
            return None
        self.registry.register(token)
        self._focus(token)
        log.debug("Pattern converted into blank %s", token.id)
        return token

    # ---- cursor anchor ----
    @synchronized
    def selection_changed(
        self,
        caret: Optional[Caret],
        caret_rect: Optional[Rect] = None,
        container_rect: Optional[Rect] = None,
    ) -> Optional[AnchorPoint]:
        if caret is not None and not caret.inside_blank:
            caret = Caret(self.document.clamp(caret.offset))
        return self.anchor.update_anchor(caret, caret_rect, container_rect)

    @synchronized
    def insert_at_anchor(self) -> Optional[BlankToken]:
        """Insert a blank at the snapshotted caret; no-op without a usable anchor."""
        caret = self.anchor.usable_caret()
        if caret is None:
            if self.anchor.snapshot is not None:
                self._notify("Cannot insert blank inside another blank")
            return None
        if len(self.registry) >= self.limits.max_blanks:
            self._notify(f"Maximum {self.limits.max_blanks} blanks allowed")
            self.anchor.visible = False
            return None

        token = self._make_blank()
        self.document.insert_blank(caret.offset, token)
        self.registry.register(token)
        self._focus(token)
        self._sync_structure()
        self._scheduler.schedule(QUESTION_FIELD, self._refresh_counts)
        log.debug("Inserted blank %s at offset %s", token.id, caret.offset)
        return token

    # ---- blank tokens ----
    @synchronized
    def click_token(self, blank_id: str) -> Optional[BlankToken]:
        token = self.registry.get(blank_id)
        if token is None:
            return None
        self._focus(token)
        self._sync_structure()
        return token

    @synchronized
    def input_token(self, blank_id: str, value: str) -> Optional[BlankToken]:
        token = self.registry.get(blank_id)
        if token is None or token.state is not DisplayState.EXPANDED:
            return None
        token.answer = (value or "")[: self.limits.max_answer_length]
        self._scheduler.schedule(_answer_field(blank_id), self._refresh_counts)
        return token

    @synchronized
    def blur_token(self, blank_id: str) -> Optional[BlankToken]:
        """Collapse the blank, or delete it when its answer is empty."""
        return self._dispatch(blank_id, BlankEvent.BLUR)

    @synchronized
    def delete_token(self, blank_id: str) -> bool:
        if self.registry.get(blank_id) is None:
            return False
        self._dispatch(blank_id, BlankEvent.DELETE)
        return True

    def _focus(self, token: BlankToken) -> None:
        for other in self.registry.records:
            if other.id != token.id and other.state is DisplayState.EXPANDED:
                self._dispatch(other.id, BlankEvent.BLUR)
        self._dispatch(token.id, BlankEvent.CLICK)
        self.anchor.clear()

    def _dispatch(self, blank_id: str, event: BlankEvent) -> Optional[BlankToken]:
        token = self.registry.get(blank_id)
        if token is None:
            log.debug("Ignoring %s for unknown blank %s", event.value, blank_id)
            return None
        state = next_state(token.state, event, token.answer)
        if state is None:
            offset = self.document.token_offset(blank_id)
            self.document.remove_token(blank_id)
            if offset is not None:
                self.anchor.remap(offset, offset + 1, 0)
            self.registry.drop(blank_id)
            self._scheduler.cancel(_answer_field(blank_id))
            log.debug("Blank %s deleted on %s", blank_id, event.value)
            self._sync_structure()
            self._scheduler.schedule(QUESTION_FIELD, self._refresh_counts)
            return None
        token.state = state
        if self.preview is not None:
            self.preview.sync(self.registry)
        return token

    def _make_blank(self) -> BlankToken:
        position_id = generate_position_id(existing=set(self.registry.position_ids()), rng=self._rng)
        return new_blank(position_id, color_for(len(self.registry)))

    def _sync_structure(self) -> None:
        dropped, _ = self.registry.reconcile(self.document)
        for token in dropped:
            log.info("Blank %s deleted on %s", token.id, BlankEvent.REMOVED.value)
            self._scheduler.cancel(_answer_field(token.id))
        renumber(self.document, self.registry)
        if self.preview is not None:
            self.preview.sync(self.registry)

    # ---- reorder preview ----
    @synchronized
    def preview_items(self) -> List[PreviewItem]:
        if self.preview is None:
            return []
        return self.preview.sync(self.registry)

    @synchronized
    def reshuffle_preview(self) -> List[PreviewItem]:
        if self.preview is None:
            return []
        return self.preview.reshuffle(self.registry)

    @synchronized
    def move_preview(self, drag_id: str, drop_id: str) -> List[PreviewItem]:
        if self.preview is None:
            return []
        return self.preview.move(self.registry, drag_id, drop_id)

    # ---- question settings ----
    @synchronized
    def set_points(self, points: float) -> bool:
        if isinstance(points, bool) or not isinstance(points, (int, float)) or points <= 0:
            self._notify("Points must be a positive number")
            return False
        self.points = points
        return True

    # ---- counting, notices ----
    @synchronized
    def _refresh_counts(self) -> None:
        self.char_count = len(self.document.plain_text().strip())
        self.issues = validate_question(
            self.document, self.question_type, self.points, self.limits
        )

    @synchronized
    def flush_pending(self) -> int:
        return self._scheduler.flush_all()

    def _notify(self, message: str, level: str = "warning") -> None:
        log.info("Notice: %s", message)
        self.notices.append(Notice(level=level, message=message))

    @synchronized
    def drain_notices(self) -> List[Notice]:
        notices, self.notices = self.notices, []
        return notices

    # ---- lifecycle ----
    @synchronized
    def save(self) -> SaveResult:
        if self.closed:
            return SaveResult(issues=[ValidationIssue("closed", "Editor is closed")])
        self._scheduler.flush_all()
        self._sync_structure()
        issues = validate_question(self.document, self.question_type, self.points, self.limits)
        self.issues = issues
        if issues:
            self._notify(issues[0].message)
            log.info("Save blocked: %s", ", ".join(issue.code for issue in issues))
            return SaveResult(issues=issues)

        payload = build_question_payload(self.document, self.question_type, self.points)
        log.info(
            "Saved %s question with %s blanks",
            self.question_type.value,
            len(payload["content"]["data"]),
        )
        return SaveResult(payload=payload)

    @synchronized
    def cancel(self) -> None:
        """Discard the document and registry without persisting anything."""
        self._scheduler.cancel_all()
        self.document = Document()
        self.registry.clear()
        self.anchor.clear()
        if self.preview is not None:
            self.preview = ShufflePreview(self._rng)
        self.notices = []
        self.issues = []
        self.closed = True

    @synchronized
    def view(self) -> dict[str, Any]:
        """Projection of the editor state for the UI surface."""
        return {
            "questionType": self.question_type.value,
            "points": self.points,
            "content": document_to_view(self.document, self.limits.max_answer_length),
            "blanks": [blank_to_record(token) for token in self.registry],
            "anchor": self.anchor.to_dict(),
            "preview": (
                [asdict(item) for item in self.preview.sync(self.registry)]
                if self.preview is not None
                else None
            ),
            "charCount": self.char_count,
            "maxChars": self.limits.max_question_length,
            "issues": [asdict(issue) for issue in self.issues],
            "closed": self.closed,
        }

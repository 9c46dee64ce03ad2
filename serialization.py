from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from blank_token import color_for, new_blank
from document import Document
from models import BlankToken, DisplayState, Node, QuestionType, TextRun
from position_keys import generate_position_id

log = logging.getLogger(__name__)


INLINE_TEXT_TYPE = "text"
INLINE_BLANK_TYPE = "blank"

PLACEHOLDER_RE = re.compile(r"\[\[pos_([A-Za-z0-9]+)\]\]")
POSITION_PREFIX = "pos_"


def placeholder(position_id: str) -> str:
    return f"[[{POSITION_PREFIX}{position_id}]]"


def _strip_prefix(position_id: object) -> str:
    key = str(position_id or "")
    if key.startswith(POSITION_PREFIX):
        return key[len(POSITION_PREFIX):]
    return key


def _entry_ids(tokens: list[BlankToken]) -> list[str]:
    used = {token.entry_id for token in tokens if token.entry_id}
    ids = []
    counter = 1
    for token in tokens:
        if token.entry_id:
            ids.append(token.entry_id)
            continue
        while f"opt{counter}" in used:
            counter += 1
        entry_id = f"opt{counter}"
        used.add(entry_id)
        ids.append(entry_id)
    return ids


def serialize_document(
    document: Document,
    question_type: QuestionType = QuestionType.FILL_IN_THE_BLANK,
) -> tuple[str, list[dict[str, Any]]]:
    tokens = document.tokens()
    entry_ids = dict(zip((token.id for token in tokens), _entry_ids(tokens)))

    parts: list[str] = []
    data: list[dict[str, Any]] = []
    for node in document:
        if isinstance(node, TextRun):
            parts.append(node.text)
            continue
        parts.append(placeholder(node.position_id))
        entry: dict[str, Any] = {
            "id": entry_ids[node.id],
            "value": node.answer,
            "positionId": node.position_id,
            "correct": True,
        }
        if question_type is QuestionType.REARRANGE:
            entry["positionOrder"] = len(data) + 1
        data.append(entry)
    return "".join(parts), data


def build_question_payload(
    document: Document,
    question_type: QuestionType,
    points: float,
) -> dict[str, Any]:
    question_text, data = serialize_document(document, question_type)
    return {
        "questionType": question_type.value,
        "questionText": question_text,
        "content": {"data": data},
        "points": points,
    }


def deserialize_question_text(
    question_text: str,
    content_data: Iterable[dict[str, Any]] | None,
) -> list[Node]:
    entries: dict[str, dict[str, Any]] = {}
    for item in content_data or []:
        if isinstance(item, dict) and item.get("positionId"):
            entries.setdefault(_strip_prefix(item["positionId"]), item)

    nodes: list[Node] = []
    seen: set[str] = set()
    last_index = 0
    blank_count = 0
    for match in PLACEHOLDER_RE.finditer(question_text or ""):
        if match.start() > last_index:
            nodes.append(TextRun(question_text[last_index:match.start()]))
        last_index = match.end()

        position_id = match.group(1)
        entry = entries.get(position_id)
        if entry is None:
            log.warning("No content entry for placeholder pos_%s; loading it empty", position_id)
            answer = ""
            entry_id = None
        else:
            value = entry.get("value")
            answer = "" if value is None else str(value)
            entry_id = str(entry["id"]) if entry.get("id") is not None else None

        if position_id in seen:
            fresh = generate_position_id(existing=seen)
            log.warning("Duplicate placeholder pos_%s re-keyed as pos_%s", position_id, fresh)
            position_id = fresh
            entry_id = None
        seen.add(position_id)

        nodes.append(
            new_blank(
                position_id,
                color_for(blank_count),
                answer=answer,
                state=DisplayState.COLLAPSED,
                entry_id=entry_id,
            )
        )
        blank_count += 1

    if last_index < len(question_text or ""):
        nodes.append(TextRun(question_text[last_index:]))
    return nodes


def deserialize_question(payload: dict[str, Any]) -> Document:
    content = payload.get("content") or {}
    data = content.get("data") if isinstance(content, dict) else None
    return Document(deserialize_question_text(str(payload.get("questionText") or ""), data))


def document_to_view(document: Document, max_answer_length: int | None = None) -> list[dict[str, Any]]:
    inlines: list[dict[str, Any]] = []
    for node in document:
        if isinstance(node, TextRun):
            inlines.append({"type": INLINE_TEXT_TYPE, "text": node.text})
            continue
        inline: dict[str, Any] = {
            "type": INLINE_BLANK_TYPE,
            "id": node.id,
            "positionId": node.position_id,
            "answer": node.answer,
            "color": node.color,
            "state": node.state.value,
            "ordinal": node.ordinal,
        }
        if max_answer_length is not None:
            inline["counter"] = f"{len(node.answer)}/{max_answer_length}"
        inlines.append(inline)
    return inlines


def blank_to_record(token: BlankToken) -> dict[str, Any]:
    return {
        "id": token.id,
        "positionId": token.position_id,
        "answer": token.answer,
        "color": token.color,
        "displayState": token.state.value,
        "ordinal": token.ordinal,
    }

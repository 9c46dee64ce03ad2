"""Turns typed trigger patterns (``__`` and ``[]``) into blanks."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from document import Document
from models import BlankToken

log = logging.getLogger(__name__)

TRIGGER_PATTERNS = ("__", "[]")


def find_trigger(text: str) -> Optional[Tuple[int, str]]:
    """Return (index, pattern) of the earliest trigger in ``text``."""
    best: Optional[Tuple[int, str]] = None
    for pattern in TRIGGER_PATTERNS:
        index = text.find(pattern)
        if index == -1:
            continue
        if best is None or index < best[0]:
            best = (index, pattern)
    return best


def find_first_pattern(document: Document) -> Optional[Tuple[int, str]]:
    """
    Scan the document's text runs in order and return (offset, pattern) of the
    first trigger. Blank answers are never scanned; they are not text runs.
    """
    for start, run in document.text_runs():
        match = find_trigger(run.text)
        if match is not None:
            index, pattern = match
            return start + index, pattern
    return None


def convert_first_pattern(
    document: Document,
    make_blank: Callable[[], BlankToken],
) -> Optional[BlankToken]:
    """
    Replace the first trigger with a new blank plus padding.

    Only one pattern is converted per call; any later match is picked up by
    the next change event, against fresh offsets.
    """
    match = find_first_pattern(document)
    if match is None:
        return None
    offset, pattern = match
    token = make_blank()
    document.delete(offset, offset + len(pattern))
    document.insert_blank(offset, token)
    log.debug("Converted %r at offset %s into %s", pattern, offset, token.id)
    return token

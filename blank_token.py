"""Blank token construction and the collapsed/expanded/deleted state machine."""
from __future__ import annotations

import uuid
from enum import Enum
from typing import Optional

from models import BLANK_COLORS, BlankToken, DisplayState


class BlankEvent(str, Enum):
    CLICK = "click"
    BLUR = "blur"
    DELETE = "delete"
    REMOVED = "removed"  # token node vanished through a generic edit


def color_for(index: int) -> str:
    return BLANK_COLORS[index % len(BLANK_COLORS)]


def new_blank(
    position_id: str,
    color: str,
    answer: str = "",
    state: DisplayState = DisplayState.EXPANDED,
    entry_id: Optional[str] = None,
) -> BlankToken:
    return BlankToken(
        id=f"blank-{uuid.uuid4().hex[:8]}-{position_id}",
        position_id=position_id,
        answer=answer,
        color=color,
        state=state,
        entry_id=entry_id,
    )


def next_state(
    state: DisplayState, event: BlankEvent, answer: str
) -> Optional[DisplayState]:
    """
    Return the state a token moves to, or None when the token is deleted.
    Leaving Expanded with an empty answer always deletes the token.
    """
    if event in (BlankEvent.DELETE, BlankEvent.REMOVED):
        return None
    if event is BlankEvent.CLICK:
        return DisplayState.EXPANDED
    if event is BlankEvent.BLUR:
        if state is not DisplayState.EXPANDED:
            return state
        if not answer or not answer.strip():
            return None
        return DisplayState.COLLAPSED
    raise ValueError(f"Unknown blank event: {event!r}")

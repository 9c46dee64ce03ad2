"""Tracks the caret for the floating "insert blank" affordance."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional

from models import AnchorPoint, Caret, Rect

# Gap between the caret's bottom edge and the affordance.
AFFORDANCE_OFFSET_Y = 5


@dataclass
class AnchorSnapshot:
    caret: Caret
    inside_blank: bool


class CursorAnchorTracker:
    def __init__(self) -> None:
        self.snapshot: Optional[AnchorSnapshot] = None
        self.point: Optional[AnchorPoint] = None
        self.visible = False

    def update_anchor(
        self,
        caret: Optional[Caret],
        caret_rect: Optional[Rect] = None,
        container_rect: Optional[Rect] = None,
    ) -> Optional[AnchorPoint]:
        """
        Handle a selection change. Hides the affordance when there is no caret
        or the caret sits inside a blank; otherwise places it just under the
        caret, relative to the container, and snapshots the caret.
        """
        if caret is None:
            self.clear()
            return None

        self.snapshot = AnchorSnapshot(caret=replace(caret), inside_blank=caret.inside_blank)
        if caret.inside_blank:
            self.visible = False
            self.point = None
            return None

        if caret_rect is not None and container_rect is not None:
            self.point = AnchorPoint(
                x=caret_rect.left - container_rect.left,
                y=caret_rect.top - container_rect.top + caret_rect.height + AFFORDANCE_OFFSET_Y,
            )
        else:
            self.point = None
        self.visible = True
        return self.point

    def remap(self, start: int, end: int, inserted: int) -> None:
        """
        Carry the snapshot caret across an edit that replaced units
        ``[start, end)`` with ``inserted`` units. A caret inside the replaced
        range lands at ``start``; a caret exactly at ``start`` stays put.
        """
        if self.snapshot is None or self.snapshot.inside_blank:
            return
        caret = self.snapshot.caret
        if caret.offset <= start:
            return
        if caret.offset >= end:
            caret.offset += inserted - (end - start)
        else:
            caret.offset = start
        # Pixel position is stale until the next selection change.
        self.point = None

    def usable_caret(self) -> Optional[Caret]:
        """The snapshot caret, or None if it cannot take an insertion."""
        if self.snapshot is None or self.snapshot.inside_blank:
            return None
        return replace(self.snapshot.caret)

    def clear(self) -> None:
        self.snapshot = None
        self.point = None
        self.visible = False

    def to_dict(self) -> dict[str, object]:
        return {
            "visible": self.visible,
            "x": self.point.x if self.point else None,
            "y": self.point.y if self.point else None,
            "offset": self.snapshot.caret.offset if self.snapshot else None,
        }

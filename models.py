from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Union


# Non-red hues first
BLANK_COLORS = [
    "#2563eb",  # blue
    "#059669",  # green
    "#9333ea",  # purple
    "#ea580c",  # orange
    "#0891b2",  # cyan
    "#d946ef",  # magenta
    "#84cc16",  # lime
    "#f59e0b",  # amber
]


class DisplayState(str, Enum):
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class QuestionType(str, Enum):
    FILL_IN_THE_BLANK = "FILL_IN_THE_BLANK"
    REARRANGE = "REARRANGE"


@dataclass
class TextRun:
    text: str


@dataclass(eq=False)
class BlankToken:
    id: str
    position_id: str
    answer: str = ""
    color: str = BLANK_COLORS[0]
    state: DisplayState = DisplayState.EXPANDED
    ordinal: int = 0
    entry_id: Optional[str] = None  # content.data id this blank was loaded with


Node = Union[TextRun, BlankToken]


@dataclass
class Caret:
    offset: int
    blank_id: Optional[str] = None  # set when the caret sits in a blank's input
    answer_offset: Optional[int] = None  # position inside the answer; None means its end

    @property
    def inside_blank(self) -> bool:
        return self.blank_id is not None


@dataclass
class Rect:
    left: float
    top: float
    width: float = 0.0
    height: float = 0.0


@dataclass
class AnchorPoint:
    x: float
    y: float


@dataclass
class PreviewItem:
    id: str
    text: str
    color: str
    rank: int


@dataclass
class Notice:
    level: str  # "warning" | "info"
    message: str


@dataclass
class ValidationIssue:
    code: str
    message: str


@dataclass
class SaveResult:
    payload: Optional[dict] = None
    issues: List[ValidationIssue] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.payload is not None and not self.issues

"""Student-facing shuffled preview for Reorder (REARRANGE) questions."""
from __future__ import annotations

import logging
import random
from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from models import BlankToken, PreviewItem

log = logging.getLogger(__name__)

T = TypeVar("T")


def fisher_yates(items: Sequence[T], rng: random.Random) -> List[T]:
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def _answered(tokens: Iterable[BlankToken]) -> List[BlankToken]:
    return [token for token in tokens if token.answer and token.answer.strip()]


class ShufflePreview:
    """
    Keeps a permutation of blank ids. Items are rebuilt from the given tokens
    on every call, so texts and colors always reflect the registry. The
    permutation is reshuffled whenever the answered set changes.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self._order: List[str] = []
        self._signature: Optional[Tuple[Tuple[str, str], ...]] = None

    def sync(self, tokens: Iterable[BlankToken]) -> List[PreviewItem]:
        answered = _answered(tokens)
        signature = tuple(sorted((token.id, token.answer) for token in answered))
        if signature != self._signature:
            self._order = fisher_yates([token.id for token in answered], self._rng)
            self._signature = signature
            log.debug("Preview reshuffled over %s items", len(self._order))
        return self._build(answered)

    def reshuffle(self, tokens: Iterable[BlankToken]) -> List[PreviewItem]:
        self._signature = None
        return self.sync(tokens)

    def move(
        self, tokens: Iterable[BlankToken], drag_id: str, drop_id: str
    ) -> List[PreviewItem]:
        """Move the dragged item to the drop target's index, then re-rank."""
        answered = _answered(tokens)
        self.sync(answered)
        if drag_id == drop_id or drag_id not in self._order or drop_id not in self._order:
            return self._build(answered)
        from_index = self._order.index(drag_id)
        to_index = self._order.index(drop_id)
        self._order.pop(from_index)
        self._order.insert(to_index, drag_id)
        return self._build(answered)

    def _build(self, answered: List[BlankToken]) -> List[PreviewItem]:
        by_id = {token.id: token for token in answered}
        return [
            PreviewItem(id=blank_id, text=by_id[blank_id].answer, color=by_id[blank_id].color, rank=rank)
            for rank, blank_id in enumerate(self._order, start=1)
        ]

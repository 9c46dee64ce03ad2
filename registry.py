"""Authoritative ordered list of blank records, kept in document order."""
from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Tuple

from document import Document
from models import BlankToken

log = logging.getLogger(__name__)


class BlankRegistry:
    def __init__(self) -> None:
        self._records: List[BlankToken] = []

    def __iter__(self) -> Iterator[BlankToken]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, blank_id: object) -> bool:
        return any(record.id == blank_id for record in self._records)

    @property
    def records(self) -> List[BlankToken]:
        return list(self._records)

    def position_ids(self) -> List[str]:
        return [record.position_id for record in self._records]

    def get(self, blank_id: str) -> Optional[BlankToken]:
        for record in self._records:
            if record.id == blank_id:
                return record
        return None

    def register(self, token: BlankToken) -> None:
        if token.id in self:
            return
        self._records.append(token)

    def drop(self, blank_id: str) -> Optional[BlankToken]:
        record = self.get(blank_id)
        if record is not None:
            self._records.remove(record)
        return record

    def clear(self) -> None:
        self._records = []

    def reconcile(self, document: Document) -> Tuple[List[BlankToken], List[BlankToken]]:
        """
        Drop records whose token is no longer in the document and adopt live
        tokens the registry does not know about. Returns (dropped, adopted).
        """
        live: Dict[str, BlankToken] = {token.id: token for token in document.tokens()}
        dropped = [record for record in self._records if record.id not in live]
        for record in dropped:
            log.debug("Dropping orphaned blank %s", record.id)
            self._records.remove(record)

        adopted = []
        for blank_id, token in live.items():
            if blank_id not in self:
                log.debug("Adopting unregistered blank %s", blank_id)
                self._records.append(token)
                adopted.append(token)
        return dropped, adopted

    def reorder(self, blank_ids: List[str]) -> None:
        rank = {blank_id: index for index, blank_id in enumerate(blank_ids)}
        self._records.sort(key=lambda record: rank.get(record.id, len(rank)))


def renumber(document: Document, registry: BlankRegistry) -> List[BlankToken]:
    """Assign ordinals 1..n in document order and sort the registry to match."""
    live = document.tokens()
    for index, token in enumerate(live, start=1):
        token.ordinal = index
    registry.reorder([token.id for token in live])
    return live

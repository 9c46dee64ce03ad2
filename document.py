"""
Owned document model: an ordered list of text runs and blank tokens.

Positions are flat offsets. Every character of a text run counts as one
unit and every blank token counts as one unit, so offset ``n`` is the gap
before the ``n``-th unit.
"""
from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Tuple

from models import BlankToken, Node, TextRun


def node_size(node: Node) -> int:
    if isinstance(node, TextRun):
        return len(node.text)
    return 1


class Document:
    def __init__(self, nodes: Optional[Iterable[Node]] = None):
        self.nodes: List[Node] = list(nodes or [])
        self.normalize()

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return sum(node_size(node) for node in self.nodes)

    def normalize(self) -> None:
        """Merge adjacent text runs and drop empty ones."""
        merged: List[Node] = []
        for node in self.nodes:
            if isinstance(node, TextRun):
                if not node.text:
                    continue
                if merged and isinstance(merged[-1], TextRun):
                    merged[-1] = TextRun(merged[-1].text + node.text)
                    continue
                merged.append(TextRun(node.text))
            else:
                merged.append(node)
        self.nodes = merged

    def snapshot(self) -> List[Node]:
        """Copy of the node list; tokens are shared, text runs are copied."""
        return [
            TextRun(node.text) if isinstance(node, TextRun) else node
            for node in self.nodes
        ]

    def restore(self, nodes: List[Node]) -> None:
        self.nodes = list(nodes)
        self.normalize()

    # ---- queries ----
    def tokens(self) -> List[BlankToken]:
        return [node for node in self.nodes if isinstance(node, BlankToken)]

    def token_ids(self) -> List[str]:
        return [token.id for token in self.tokens()]

    def find_token(self, blank_id: str) -> Optional[Tuple[int, BlankToken]]:
        for index, node in enumerate(self.nodes):
            if isinstance(node, BlankToken) and node.id == blank_id:
                return index, node
        return None

    def token_offset(self, blank_id: str) -> Optional[int]:
        position = 0
        for node in self.nodes:
            if isinstance(node, BlankToken) and node.id == blank_id:
                return position
            position += node_size(node)
        return None

    def text_runs(self) -> List[Tuple[int, TextRun]]:
        """Text runs with the flat offset at which each one starts."""
        runs = []
        position = 0
        for node in self.nodes:
            if isinstance(node, TextRun):
                runs.append((position, node))
            position += node_size(node)
        return runs

    def plain_text(self) -> str:
        return "".join(
            node.text for node in self.nodes if isinstance(node, TextRun)
        )

    def clamp(self, offset: int) -> int:
        return max(0, min(offset, len(self)))

    # ---- mutations ----
    def _split(self, offset: int) -> int:
        """Split the run containing ``offset``; return the node index at that gap."""
        offset = self.clamp(offset)
        position = 0
        for index, node in enumerate(self.nodes):
            size = node_size(node)
            if offset == position:
                return index
            if isinstance(node, TextRun) and position < offset < position + size:
                cut = offset - position
                self.nodes[index:index + 1] = [
                    TextRun(node.text[:cut]),
                    TextRun(node.text[cut:]),
                ]
                return index + 1
            position += size
        return len(self.nodes)

    def insert_text(self, offset: int, text: str) -> int:
        """Insert free text at ``offset``; return the offset after it."""
        offset = self.clamp(offset)
        if not text:
            return offset
        index = self._split(offset)
        self.nodes.insert(index, TextRun(text))
        self.normalize()
        return offset + len(text)

    def delete(self, start: int, end: int) -> List[BlankToken]:
        """Remove units in ``[start, end)``; return the tokens that were removed."""
        start, end = sorted((self.clamp(start), self.clamp(end)))
        if start == end:
            return []
        kept: List[Node] = []
        removed: List[BlankToken] = []
        position = 0
        for node in self.nodes:
            size = node_size(node)
            if isinstance(node, TextRun):
                text = node.text
                lo = max(start - position, 0)
                hi = min(end - position, size)
                if lo < hi:
                    text = text[:lo] + text[hi:]
                kept.append(TextRun(text))
            elif start <= position < end:
                removed.append(node)
            else:
                kept.append(node)
            position += size
        self.nodes = kept
        self.normalize()
        return removed

    def insert_blank(self, offset: int, token: BlankToken) -> int:
        """
        Insert ``token`` at ``offset`` with single-space padding on each side.

        A space is added before the token only when the preceding content does
        not already end in whitespace, and after it only when the following
        content does not already start with whitespace. Returns the offset just
        past the token and its trailing padding.
        """
        index = self._split(offset)
        left = self.nodes[index - 1] if index > 0 else None
        right = self.nodes[index] if index < len(self.nodes) else None

        pad_left = isinstance(left, BlankToken) or (
            isinstance(left, TextRun) and not left.text[-1].isspace()
        )
        pad_right = not (isinstance(right, TextRun) and right.text[0].isspace())

        inserted: List[Node] = []
        if pad_left:
            inserted.append(TextRun(" "))
        inserted.append(token)
        if pad_right:
            inserted.append(TextRun(" "))
        self.nodes[index:index] = inserted
        self.normalize()

        token_offset = self.token_offset(token.id)
        return token_offset + 1 + (1 if pad_right else 0)

    def remove_token(self, blank_id: str) -> Optional[BlankToken]:
        found = self.find_token(blank_id)
        if found is None:
            return None
        index, token = found
        del self.nodes[index]
        self.normalize()
        return token

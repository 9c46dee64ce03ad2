from blank_token import new_blank
from document import Document
from models import TextRun
from pattern_detect import convert_first_pattern, find_first_pattern, find_trigger


def _make(key: str):
    return lambda: new_blank(key, "#2563eb")


def test_find_trigger_returns_earliest_pattern() -> None:
    assert find_trigger("a [] b __") == (2, "[]")
    assert find_trigger("a __ b []") == (2, "__")
    assert find_trigger("a _ b [ ]") is None


def test_convert_replaces_only_first_pattern() -> None:
    document = Document([TextRun("x __ y __")])
    token = convert_first_pattern(document, _make("k1"))

    assert token is not None
    assert document.tokens() == [token]
    assert document.plain_text() == "x  y __"
    assert find_first_pattern(document) == (6, "__")


def test_convert_pads_glued_pattern() -> None:
    document = Document([TextRun("word[]next")])
    token = convert_first_pattern(document, _make("k1"))
    texts = [node.text if isinstance(node, TextRun) else node.id for node in document]
    assert texts == ["word ", token.id, " next"]


def test_pattern_after_existing_blank_uses_flat_offsets() -> None:
    first = new_blank("k1", "#2563eb", answer="__")
    document = Document([TextRun("a "), first, TextRun(" __")])
    # The answer "__" is not text and must not be matched.
    assert find_first_pattern(document) == (4, "__")

    second = convert_first_pattern(document, _make("k2"))
    assert document.tokens() == [first, second]
    assert document.plain_text() == "a   "


def test_no_pattern_no_change() -> None:
    document = Document([TextRun("plain text")])
    assert convert_first_pattern(document, _make("k1")) is None
    assert document.tokens() == []

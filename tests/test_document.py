from blank_token import new_blank
from document import Document
from models import BlankToken, TextRun


def _shape(document: Document) -> list[object]:
    return [
        node.text if isinstance(node, TextRun) else node.position_id
        for node in document
    ]


def test_insert_text_merges_runs_and_counts_tokens_as_one_unit() -> None:
    token = new_blank("k1", "#2563eb", answer="cat")
    document = Document([TextRun("A "), token, TextRun(" B")])
    assert len(document) == 5
    assert document.token_offset(token.id) == 2

    end = document.insert_text(5, "!")
    assert end == 6
    assert _shape(document) == ["A ", "k1", " B!"]

    document.insert_text(1, "x")
    assert _shape(document) == ["Ax ", "k1", " B!"]


def test_delete_returns_tokens_caught_in_range() -> None:
    first = new_blank("k1", "#2563eb")
    second = new_blank("k2", "#059669")
    document = Document([TextRun("A "), first, TextRun(" B "), second, TextRun(" C")])

    removed = document.delete(1, 4)
    assert removed == [first]
    assert _shape(document) == ["AB ", "k2", " C"]
    assert document.tokens() == [second]


def test_insert_blank_pads_between_words() -> None:
    document = Document([TextRun("ab")])
    token = new_blank("k1", "#2563eb")
    after = document.insert_blank(1, token)
    assert _shape(document) == ["a ", "k1", " b"]
    assert after == 4


def test_insert_blank_reuses_existing_whitespace() -> None:
    document = Document([TextRun("I  programming")])
    token = new_blank("k1", "#2563eb")
    after = document.insert_blank(2, token)
    assert _shape(document) == ["I ", "k1", " programming"]
    assert after == 3


def test_insert_blank_at_document_edges() -> None:
    document = Document()
    token = new_blank("k1", "#2563eb")
    document.insert_blank(0, token)
    assert _shape(document) == ["k1", " "]

    document = Document([TextRun("end")])
    document.insert_blank(3, new_blank("k2", "#2563eb"))
    assert _shape(document) == ["end ", "k2", " "]


def test_insert_blank_next_to_another_blank_is_separated() -> None:
    first = new_blank("k1", "#2563eb")
    document = Document([first])
    document.insert_blank(1, new_blank("k2", "#059669"))
    assert _shape(document) == ["k1", " ", "k2", " "]


def test_snapshot_restore_keeps_token_identity() -> None:
    token = new_blank("k1", "#2563eb")
    document = Document([TextRun("A "), token])
    before = document.snapshot()
    document.insert_text(0, "zzz")
    document.restore(before)
    assert _shape(document) == ["A ", "k1"]
    assert document.tokens()[0] is token


def test_remove_token_merges_neighbouring_text() -> None:
    token = new_blank("k1", "#2563eb")
    document = Document([TextRun("A "), token, TextRun(" B")])
    assert document.remove_token(token.id) is token
    assert _shape(document) == ["A  B"]
    assert document.remove_token(token.id) is None
    assert isinstance(token, BlankToken)


def test_plain_text_excludes_answers() -> None:
    document = Document([TextRun("A "), new_blank("k1", "#2563eb", answer="secret"), TextRun(" B")])
    assert document.plain_text() == "A  B"

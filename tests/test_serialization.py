from blank_token import new_blank
from document import Document
from models import DisplayState, QuestionType, TextRun
from serialization import (
    PLACEHOLDER_RE,
    build_question_payload,
    deserialize_question,
    document_to_view,
    serialize_document,
)


def _rearrange_payload() -> dict:
    return {
        "questionType": "REARRANGE",
        "questionText": "[[pos_a1b2c3]] [[pos_d4e5f6]] [[pos_g7h8i9]]",
        "content": {
            "data": [
                {"id": "opt1", "value": "I", "positionId": "a1b2c3", "correct": True, "positionOrder": 1},
                {"id": "opt2", "value": "go", "positionId": "d4e5f6", "correct": True, "positionOrder": 2},
                {"id": "opt3", "value": "home", "positionId": "g7h8i9", "correct": True, "positionOrder": 3},
            ]
        },
        "points": 2,
    }


def test_load_then_save_is_identity() -> None:
    payload = _rearrange_payload()
    document = deserialize_question(payload)
    assert build_question_payload(document, QuestionType.REARRANGE, 2) == payload


def test_deserialize_builds_collapsed_blanks_between_runs() -> None:
    document = deserialize_question(
        {
            "questionText": "A [[pos_k1]] B",
            "content": {"data": [{"positionId": "k1", "value": "cat", "correct": True}]},
        }
    )
    nodes = list(document)
    assert isinstance(nodes[0], TextRun) and nodes[0].text == "A "
    assert nodes[1].position_id == "k1"
    assert nodes[1].answer == "cat"
    assert nodes[1].state is DisplayState.COLLAPSED
    assert isinstance(nodes[2], TextRun) and nodes[2].text == " B"


def test_serialize_fill_in_the_blank_has_no_position_order() -> None:
    document = Document([TextRun("I "), new_blank("k1", "#2563eb", answer="love"), TextRun(" programming")])
    text, data = serialize_document(document)
    assert text == "I [[pos_k1]] programming"
    assert data == [{"id": "opt1", "value": "love", "positionId": "k1", "correct": True}]


def test_placeholders_and_entries_are_a_bijection() -> None:
    document = Document(
        [
            new_blank("k1", "#2563eb", answer="a"),
            TextRun(" x "),
            new_blank("k2", "#059669", answer="b"),
            TextRun(" y "),
            new_blank("k3", "#9333ea", answer="c"),
        ]
    )
    text, data = serialize_document(document, QuestionType.REARRANGE)
    placeholders = [match.group(1) for match in PLACEHOLDER_RE.finditer(text)]
    assert placeholders == [entry["positionId"] for entry in data]
    assert [entry["positionOrder"] for entry in data] == [1, 2, 3]
    assert len({entry["id"] for entry in data}) == 3


def test_missing_entry_loads_empty_blank() -> None:
    document = deserialize_question({"questionText": "A [[pos_zz]]", "content": {"data": []}})
    (token,) = document.tokens()
    assert token.position_id == "zz"
    assert token.answer == ""


def test_prefixed_position_ids_are_tolerated() -> None:
    payload = {
        "questionText": "A [[pos_k1]]",
        "content": {"data": [{"id": "opt1", "value": "cat", "positionId": "pos_k1", "correct": True}]},
    }
    document = deserialize_question(payload)
    assert document.tokens()[0].answer == "cat"
    _, data = serialize_document(document)
    assert data[0]["positionId"] == "k1"


def test_duplicate_placeholder_is_rekeyed() -> None:
    payload = {
        "questionText": "[[pos_k1]] and [[pos_k1]]",
        "content": {"data": [{"id": "opt1", "value": "cat", "positionId": "k1", "correct": True}]},
    }
    document = deserialize_question(payload)
    first, second = document.tokens()
    assert first.position_id == "k1"
    assert second.position_id != "k1"
    text, data = serialize_document(document)
    assert len({entry["positionId"] for entry in data}) == 2
    assert len({entry["id"] for entry in data}) == 2
    assert text.count("[[pos_k1]]") == 1


def test_new_blanks_get_unused_entry_ids() -> None:
    loaded = new_blank("k1", "#2563eb", answer="a", entry_id="opt1")
    fresh = new_blank("k2", "#059669", answer="b")
    document = Document([fresh, TextRun(" "), loaded])
    _, data = serialize_document(document)
    assert [entry["id"] for entry in data] == ["opt2", "opt1"]


def test_round_trip_preserves_text_and_answers() -> None:
    document = Document(
        [
            TextRun("Tôi "),
            new_blank("k1", "#2563eb", answer="yêu"),
            TextRun(" lập trình, "),
            new_blank("k2", "#059669", answer="rất"),
            TextRun(" nhiều."),
        ]
    )
    payload = build_question_payload(document, QuestionType.FILL_IN_THE_BLANK, 1)
    reloaded = deserialize_question(payload)

    def shape(doc: Document) -> list:
        return [
            ("text", node.text) if isinstance(node, TextRun) else ("blank", node.answer)
            for node in doc
        ]

    assert shape(reloaded) == shape(document)


def test_document_to_view_includes_answer_counter() -> None:
    document = Document([TextRun("A "), new_blank("k1", "#2563eb", answer="cat")])
    view = document_to_view(document, max_answer_length=50)
    assert view[0] == {"type": "text", "text": "A "}
    assert view[1]["type"] == "blank"
    assert view[1]["counter"] == "3/50"
    assert view[1]["state"] == "expanded"


def test_falsy_values_load_as_text() -> None:
    document = deserialize_question(
        {"questionText": "[[pos_k1]] + 1", "content": {"data": [{"positionId": "k1", "value": 0}]}}
    )
    assert document.tokens()[0].answer == "0"

    document = deserialize_question(
        {"questionText": "[[pos_k1]]", "content": {"data": [{"positionId": "k1", "value": None}]}}
    )
    assert document.tokens()[0].answer == ""

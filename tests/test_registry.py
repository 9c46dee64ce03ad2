from blank_token import new_blank
from document import Document
from models import TextRun
from registry import BlankRegistry, renumber


def test_reconcile_drops_orphans_and_adopts_unknown_tokens() -> None:
    kept = new_blank("k1", "#2563eb")
    orphan = new_blank("k2", "#059669")
    stray = new_blank("k3", "#9333ea")
    registry = BlankRegistry()
    registry.register(kept)
    registry.register(orphan)

    document = Document([TextRun("A "), stray, TextRun(" "), kept])
    dropped, adopted = registry.reconcile(document)

    assert dropped == [orphan]
    assert adopted == [stray]
    assert orphan.id not in registry
    assert {record.id for record in registry} == {kept.id, stray.id}


def test_renumber_follows_document_order() -> None:
    first = new_blank("k1", "#2563eb")
    second = new_blank("k2", "#059669")
    registry = BlankRegistry()
    registry.register(second)
    registry.register(first)

    document = Document([first, TextRun(" and "), second])
    renumber(document, registry)

    assert [record.id for record in registry] == [first.id, second.id]
    assert (first.ordinal, second.ordinal) == (1, 2)

    document.remove_token(first.id)
    registry.reconcile(document)
    renumber(document, registry)
    assert second.ordinal == 1
    assert registry.position_ids() == ["k2"]


def test_register_is_idempotent() -> None:
    token = new_blank("k1", "#2563eb")
    registry = BlankRegistry()
    registry.register(token)
    registry.register(token)
    assert len(registry) == 1
    assert registry.get(token.id) is token
    assert registry.drop(token.id) is token
    assert registry.get(token.id) is None

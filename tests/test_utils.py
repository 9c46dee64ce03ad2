from pathlib import Path

import pytest
from fastapi import HTTPException

from api.utils import json_utils, validation


def test_json_dump_and_read(tmp_path: Path) -> None:
    payload = {"questionText": "Tôi [[pos_ab12cd]] lập trình", "points": 2}
    dumped = json_utils.json_dump(payload)
    assert "Tôi" in dumped

    path = tmp_path / "payload.json"
    path.write_text(dumped, encoding="utf-8")
    assert json_utils.read_json_file(path, {}) == payload
    assert json_utils.read_json_file(tmp_path / "missing.json", {"fallback": True}) == {"fallback": True}


def test_validate_id() -> None:
    assert validation.validate_id("editorId", " abc123 ") == "abc123"
    assert validation.validate_id("blankId", "blank-1f2e-k1") == "blank-1f2e-k1"
    with pytest.raises(HTTPException):
        validation.validate_id("editorId", "")
    with pytest.raises(HTTPException):
        validation.validate_id("editorId", "../bad")
    with pytest.raises(HTTPException):
        validation.validate_id("editorId", None)  # type: ignore[arg-type]

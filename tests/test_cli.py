import json
from pathlib import Path

from cli import check_payload, main

PAYLOAD = {
    "questionType": "FILL_IN_THE_BLANK",
    "questionText": "I [[pos_k1]] programming",
    "content": {"data": [{"id": "opt1", "value": "love", "positionId": "k1", "correct": True}]},
    "points": 1,
}


def test_check_accepts_valid_payload(tmp_path: Path, capsys) -> None:
    path = tmp_path / "question.json"
    path.write_text(json.dumps(PAYLOAD), encoding="utf-8")
    assert main(["check", str(path)]) == 0
    assert capsys.readouterr().out.strip() == "OK"


def test_check_reports_problems() -> None:
    payload = dict(PAYLOAD, questionText="I [[pos_k1]] and [[pos_k1]]")
    problems = check_payload(payload)
    assert any(problem.startswith("round-trip") for problem in problems)


def test_render_prints_view(tmp_path: Path, capsys) -> None:
    path = tmp_path / "question.json"
    path.write_text(json.dumps(dict(PAYLOAD, questionType="REARRANGE")), encoding="utf-8")
    assert main(["render", str(path), "--shuffle", "--seed", "4"]) == 0
    view = json.loads(capsys.readouterr().out)
    assert view["blanks"][0]["answer"] == "love"
    assert [item["text"] for item in view["preview"]] == ["love"]


def test_missing_file(tmp_path: Path) -> None:
    assert main(["check", str(tmp_path / "missing.json")]) == 2


def test_unknown_question_type_is_reported(tmp_path: Path, capsys) -> None:
    path = tmp_path / "question.json"
    path.write_text(json.dumps(dict(PAYLOAD, questionType="MULTIPLE_CHOICE")), encoding="utf-8")

    assert main(["check", str(path)]) == 1
    assert "unsupported question type 'MULTIPLE_CHOICE'" in capsys.readouterr().out

    assert main(["render", str(path)]) == 2
    assert "MULTIPLE_CHOICE" in capsys.readouterr().err

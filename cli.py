import argparse
import random
import sys
from pathlib import Path

from api.utils.json_utils import json_dump, read_json_file
from blank_editor import BlankEditor
from core.logging_setup import setup_console_logging
from models import QuestionType
from serialization import PLACEHOLDER_RE, build_question_payload


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect cloze question payloads")
    parser.add_argument("command", choices=["render", "check"], help="What to do with the payload")
    parser.add_argument("file", type=Path, help="Path to a question payload .json file")
    parser.add_argument(
        "--shuffle",
        action="store_true",
        help="Print a student preview permutation (REARRANGE only)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --shuffle")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def unsupported_type(payload: dict[str, object]) -> str | None:
    """Problem text when the payload names a question type the editor cannot open."""
    question_type = payload.get("questionType") or QuestionType.FILL_IN_THE_BLANK.value
    try:
        QuestionType(question_type)
    except ValueError:
        return f"questionType: unsupported question type {question_type!r}"
    return None


def check_payload(payload: dict[str, object]) -> list[str]:
    """Problems found when loading and re-serializing ``payload``."""
    problem = unsupported_type(payload)
    if problem is not None:
        return [problem]
    problems: list[str] = []
    editor = BlankEditor.from_payload(payload)
    for issue in editor.save().issues:
        problems.append(f"{issue.code}: {issue.message}")

    rebuilt = build_question_payload(editor.document, editor.question_type, editor.points)
    if rebuilt["questionText"] != payload.get("questionText"):
        problems.append("round-trip: questionText changed on reload")

    placeholders = [match.group(1) for match in PLACEHOLDER_RE.finditer(rebuilt["questionText"])]
    entries = [entry["positionId"] for entry in rebuilt["content"]["data"]]
    if placeholders != entries or len(set(entries)) != len(entries):
        problems.append("bijection: placeholders and content entries do not match")
    editor.cancel()
    return problems


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_console_logging(args.log_level)

    payload = read_json_file(args.file)
    if not isinstance(payload, dict):
        print(f"Not a question payload: {args.file}", file=sys.stderr)
        return 2

    if args.command == "check":
        problems = check_payload(payload)
        for problem in problems:
            print(problem)
        if not problems:
            print("OK")
        return 1 if problems else 0

    problem = unsupported_type(payload)
    if problem is not None:
        print(problem, file=sys.stderr)
        return 2

    rng = random.Random(args.seed) if args.seed is not None else None
    editor = BlankEditor.from_payload(payload, rng=rng)
    view = editor.view()
    if not args.shuffle:
        view.pop("preview", None)
    print(json_dump(view))
    editor.cancel()
    return 0


if __name__ == "__main__":
    sys.exit(main())

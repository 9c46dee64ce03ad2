"""Pre-save checks for cloze questions. Problems are reported, never raised."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from document import Document
from models import QuestionType, ValidationIssue
from serialization import PLACEHOLDER_RE

MAX_BLANKS = 10
MAX_ANSWER_LENGTH = 50
MAX_QUESTION_LENGTH = 1000


@dataclass(frozen=True)
class EditorLimits:
    max_blanks: int = MAX_BLANKS
    max_answer_length: int = MAX_ANSWER_LENGTH
    max_question_length: int = MAX_QUESTION_LENGTH


def duplicate_answers(answers: List[str]) -> List[str]:
    """Answers that appear more than once, compared case-insensitively after trim."""
    seen: set[str] = set()
    duplicates: List[str] = []
    for answer in answers:
        key = answer.strip().lower()
        if not key:
            continue
        if key in seen and key not in duplicates:
            duplicates.append(key)
        seen.add(key)
    return duplicates


def validate_question(
    document: Document,
    question_type: QuestionType,
    points: float = 1,
    limits: EditorLimits = EditorLimits(),
) -> List[ValidationIssue]:
    issues: List[ValidationIssue] = []
    tokens = document.tokens()
    text = document.plain_text()

    if not text.strip() and not tokens:
        issues.append(ValidationIssue("empty_question", "Please enter the question text"))
    if not tokens:
        issues.append(
            ValidationIssue("no_blanks", "At least one blank required (use __ or [])")
        )
    if len(tokens) > limits.max_blanks:
        issues.append(
            ValidationIssue("too_many_blanks", f"Maximum {limits.max_blanks} blanks allowed")
        )
    if any(not token.answer or not token.answer.strip() for token in tokens):
        issues.append(ValidationIssue("empty_answer", "Please fill in all blank answers"))
    if any(len(token.answer) > limits.max_answer_length for token in tokens):
        issues.append(
            ValidationIssue(
                "answer_too_long",
                f"Blank answers are limited to {limits.max_answer_length} characters",
            )
        )
    if question_type is QuestionType.REARRANGE and duplicate_answers(
        [token.answer for token in tokens]
    ):
        issues.append(
            ValidationIssue(
                "duplicate_answer",
                "Cannot create duplicate answers. Please ensure all blank answers are unique.",
            )
        )
    if len(text.strip()) > limits.max_question_length:
        issues.append(
            ValidationIssue(
                "question_too_long",
                f"Maximum {limits.max_question_length} characters allowed for the question",
            )
        )
    if PLACEHOLDER_RE.search(text):
        issues.append(
            ValidationIssue(
                "reserved_placeholder",
                "Question text cannot contain [[pos_...]] placeholder text",
            )
        )
    if not isinstance(points, (int, float)) or points <= 0:
        issues.append(ValidationIssue("invalid_points", "Points must be a positive number"))
    return issues

"""Application configuration and constants."""
import os
from pathlib import Path

from validation import (
    MAX_ANSWER_LENGTH as DEFAULT_MAX_ANSWER_LENGTH,
    MAX_BLANKS as DEFAULT_MAX_BLANKS,
    MAX_QUESTION_LENGTH as DEFAULT_MAX_QUESTION_LENGTH,
    EditorLimits,
)


def _parse_int_env(name: str, default: int) -> int:
    """Parse integer from environment variable."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Database
DB_DIR = Path(os.environ.get("DB_DIR", Path.cwd() / "data"))
DB_DIR.mkdir(parents=True, exist_ok=True)
DATABASE_URL = os.environ.get(
    "DATABASE_URL", f"sqlite:///{DB_DIR / 'questions.db'}"
)

# Editor limits
MAX_BLANKS = _parse_int_env("MAX_BLANKS", DEFAULT_MAX_BLANKS)
MAX_ANSWER_LENGTH = _parse_int_env("MAX_ANSWER_LENGTH", DEFAULT_MAX_ANSWER_LENGTH)
MAX_QUESTION_LENGTH = _parse_int_env("MAX_QUESTION_LENGTH", DEFAULT_MAX_QUESTION_LENGTH)
EDITOR_LIMITS = EditorLimits(
    max_blanks=MAX_BLANKS,
    max_answer_length=MAX_ANSWER_LENGTH,
    max_question_length=MAX_QUESTION_LENGTH,
)

# Debounce delay for counters and live validation
INPUT_DEBOUNCE_SECONDS = _parse_int_env("INPUT_DEBOUNCE_MS", 300) / 1000

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

# Open editors untouched for this long are discarded by the cleanup sweep
EDITOR_IDLE_MINUTES = _parse_int_env("EDITOR_IDLE_MINUTES", 60)
EDITOR_SWEEP_SECONDS = _parse_int_env("EDITOR_SWEEP_SECONDS", 300)

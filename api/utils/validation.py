"""Validation utilities."""
import re

from fastapi import HTTPException

_ID_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_id(name: str, value: str) -> str:
    """Validate ID string: non-empty, letters, digits, '-' and '_' only."""
    if not isinstance(value, str):
        raise HTTPException(status_code=400, detail=f"{name} is required")
    cleaned = value.strip()
    if not cleaned:
        raise HTTPException(status_code=400, detail=f"{name} is required")
    if not _ID_RE.match(cleaned):
        raise HTTPException(status_code=400, detail=f"Invalid {name}")
    return cleaned

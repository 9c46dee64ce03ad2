"""JSON serialization utilities."""
import json
from pathlib import Path


def json_dump(payload: object) -> str:
    """Serialize object to pretty JSON string."""
    return json.dumps(payload, ensure_ascii=False, indent=2)


def read_json_file(path: Path, default: object = None) -> object:
    """Read and parse JSON file, return default if not exists."""
    if not path.exists():
        return default
    return json.loads(path.read_text(encoding="utf-8"))

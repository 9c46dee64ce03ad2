"""Short random keys that address a blank independent of its position."""
from __future__ import annotations

import random
import string
from typing import Collection, Optional

POSITION_ID_ALPHABET = string.ascii_lowercase + string.digits
POSITION_ID_LENGTH = 6
MAX_ATTEMPTS = 100

_rng = random.SystemRandom()


def generate_position_id(
    existing: Optional[Collection[str]] = None,
    length: int = POSITION_ID_LENGTH,
    rng: Optional[random.Random] = None,
) -> str:
    """Return a random lowercase alphanumeric key.

    When ``existing`` is given the key is regenerated until it does not
    collide with any of those keys.
    """
    source = rng or _rng
    for _ in range(MAX_ATTEMPTS):
        key = "".join(source.choice(POSITION_ID_ALPHABET) for _ in range(length))
        if not existing or key not in existing:
            return key
    raise RuntimeError(f"Could not generate a unique position id after {MAX_ATTEMPTS} attempts")

"""Human-facing tracking code generation."""

import random
import re
import time
from typing import Optional

TRACKING_CODE_PREFIX = "MTK"
TRACKING_CODE_PATTERN = re.compile(r"^MTK\d{9}$")


def generate_tracking_code(now_ms: Optional[int] = None, rng: Optional[random.Random] = None) -> str:
    """
    Build a code from the last 6 digits of the epoch-millisecond clock and a
    zero-padded random number in [0, 999], e.g. 'MTK123456042'.

    Codes are not guaranteed unique: two calls inside the same millisecond
    window can collide, so callers must check against existing codes.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = (rng or random).randint(0, 999)
    return f"{TRACKING_CODE_PREFIX}{str(now_ms)[-6:].zfill(6)}{suffix:03d}"


def is_tracking_code(value: str) -> bool:
    return bool(TRACKING_CODE_PATTERN.match(value or ""))

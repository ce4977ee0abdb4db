import re
import threading
import time
from datetime import datetime, timezone
from typing import Optional

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_id_lock = threading.Lock()
_last_id = 0


def new_id() -> int:
    """
    Millisecond timestamp id, strictly increasing within this process
    :return: the new id
    """
    global _last_id
    with _id_lock:
        candidate = int(time.time() * 1000)
        if candidate <= _last_id:
            candidate = _last_id + 1
        _last_id = candidate
        return candidate


def iso_now() -> str:
    """UTC timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.000Z"""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_id(raw: str) -> Optional[int]:
    """
    Parse a path id the lenient way clients have always relied on:
    leading digits are taken, trailing junk is ignored ("12abc" -> 12).
    :return: the id, or None when there are no leading digits
    """
    match = _INT_PREFIX.match(raw or "")
    if not match:
        return None
    return int(match.group(1))

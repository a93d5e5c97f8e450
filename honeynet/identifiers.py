"""Node id and honeypot label allocation.

Raw node ids increase forever and are never handed out twice.  Honeypot
label numbers are recomputed from the live set, so a retired number is
free again immediately.
"""

import re
from typing import Iterable

_LABEL_RE = re.compile(r"Honeypot (\d+)")


def next_honeypot_number(live_numbers: Iterable[int]) -> int:
    """Return the smallest positive integer not in *live_numbers*."""
    used = set(live_numbers)
    number = 1
    while number in used:
        number += 1
    return number


def parse_label_number(label: str) -> int:
    """Extract N from ``"Honeypot N"``; labels without a number map to 0."""
    match = _LABEL_RE.search(label)
    return int(match.group(1)) if match else 0


class IdAllocator:
    def __init__(self, start: int = 1):
        self._next = start

    def next_node_id(self) -> str:
        node_id = str(self._next)
        self._next += 1
        return node_id

    def peek(self) -> str:
        return str(self._next)

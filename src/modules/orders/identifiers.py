"""Human-readable order codes: ``<prefix>/<year>/<NNNN>``.

The sequence resets every calendar year.  The next code is one more
than the highest sequence already used for that year among the codes
passed in; codes for other years and malformed codes are ignored.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

DEFAULT_PREFIX = "SP"
SEQUENCE_WIDTH = 4

# ASCII digits only: str.isdigit() also accepts "²", which int() rejects.
_SEQUENCE = re.compile(r"[0-9]+")


def year_prefix(year: int, prefix: str = DEFAULT_PREFIX) -> str:
    return f"{prefix}/{year}/"


def is_order_code(code: str, prefix: str = DEFAULT_PREFIX) -> bool:
    """``True`` when ``code`` is ``<prefix>/<4-digit year>/<4+ digit sequence>``."""
    pattern = rf"{re.escape(prefix)}/[0-9]{{4}}/[0-9]{{{SEQUENCE_WIDTH},}}"
    return re.fullmatch(pattern, code) is not None


def parse_order_sequence(code: str, year: int, prefix: str = DEFAULT_PREFIX) -> Optional[int]:
    """Return the sequence number of ``code`` if it belongs to ``year``."""
    head = year_prefix(year, prefix)
    if not code.startswith(head):
        return None
    tail = code[len(head):]
    if not _SEQUENCE.fullmatch(tail):
        return None
    return int(tail)


def generate_order_id(
    existing_codes: Iterable[str],
    year: int,
    prefix: str = DEFAULT_PREFIX,
) -> str:
    """Next free code for ``year``.

    >>> generate_order_id(["SP/2024/0001", "SP/2024/0003"], 2024)
    'SP/2024/0004'
    """
    highest = 0
    for code in existing_codes:
        sequence = parse_order_sequence(code, year, prefix)
        if sequence is not None and sequence > highest:
            highest = sequence
    return f"{year_prefix(year, prefix)}{highest + 1:0{SEQUENCE_WIDTH}d}"

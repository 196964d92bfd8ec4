"""Report export helpers.

JSON export is the nested report as-is.  CSV export flattens it into
``key,value`` rows where nested keys are joined with dots and list items
are addressed by index (``top_customers.0.revenue``).
"""

from __future__ import annotations

import csv
import io
from typing import Any, Iterator, Tuple


def flatten(data: Any, prefix: str = "") -> Iterator[Tuple[str, Any]]:
    if isinstance(data, dict):
        for key, value in data.items():
            yield from flatten(value, f"{prefix}.{key}" if prefix else str(key))
    elif isinstance(data, (list, tuple)):
        if not data and prefix:
            yield prefix, ""
        for index, value in enumerate(data):
            yield from flatten(value, f"{prefix}.{index}" if prefix else str(index))
    else:
        yield prefix, "" if data is None else data


def to_csv(data: Any) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(["key", "value"])
    for key, value in flatten(data):
        writer.writerow([key, value])
    return buffer.getvalue()

"""Row tokenization for delimited text and spreadsheet cells.

Delimited text is split one line at a time. Quoted fields may contain the
delimiter; a doubled quote inside quotes is a literal quote. Malformed
quoting never raises: the tokenizer returns whatever it accumulated.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, time
from typing import Iterable, List

_LINE_BREAK_RE = re.compile(r"\r?\n")


def tokenize_line(line: str, delimiter: str = ",") -> List[str]:
    """Split one line into trimmed field values."""
    fields: List[str] = []
    current: List[str] = []
    in_quote = False
    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if ch == '"':
            if in_quote and i + 1 < n and line[i + 1] == '"':
                current.append('"')
                i += 1
            else:
                in_quote = not in_quote
        elif ch == delimiter and not in_quote:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
        i += 1
    fields.append("".join(current).strip())
    return fields


def split_lines(text: str) -> List[str]:
    """Split decoded text into physical lines.

    A terminating newline does not produce an extra empty row.
    """
    if not text:
        return []
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _cell_to_str(cell) -> str:
    if cell is None:
        return ""
    if isinstance(cell, bool):
        return "true" if cell else "false"
    if isinstance(cell, datetime):
        # NaT compares unequal to itself
        if cell != cell:
            return ""
        if cell.time() == time(0):
            return cell.date().isoformat()
        return cell.isoformat(sep=" ")
    if isinstance(cell, date):
        return cell.isoformat()
    if isinstance(cell, float):
        if math.isnan(cell):
            return ""
        if cell.is_integer():
            return str(int(cell))
    return str(cell).strip()


def coerce_cells(cells: Iterable) -> List[str]:
    """Convert spreadsheet cell values to strings and drop trailing blanks."""
    values = [_cell_to_str(c) for c in cells]
    while values and not values[-1]:
        values.pop()
    return values

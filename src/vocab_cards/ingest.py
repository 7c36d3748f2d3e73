"""Input readers for vocabulary files.

Text input is decoded as a whole before tokenization: strict UTF-8 first,
then strict Big5, then a lenient UTF-8 decode that cannot fail.
Spreadsheet input is the first sheet of a workbook, read with pandas.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import pandas as pd

from .tokenizer import split_lines

LOGGER = logging.getLogger(__name__)

DEFAULT_ENCODINGS = ("utf-8", "big5")
SPREADSHEET_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


class SpreadsheetReadError(RuntimeError):
    """Raised when a workbook cannot be opened or its sheet read."""


def _codec(name: str) -> str:
    # A leading BOM is not part of the first field.
    if name.lower().replace("_", "-") in ("utf-8", "utf8"):
        return "utf-8-sig"
    return name


def decode_bytes(data: bytes, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> str:
    """Decode raw bytes, trying each encoding strictly before a lenient UTF-8 pass."""
    for enc in encodings:
        try:
            return data.decode(_codec(enc))
        except (UnicodeDecodeError, LookupError) as e:
            LOGGER.warning("Decoding as %s failed (%s); trying next encoding", enc, e)
    return data.decode("utf-8-sig", errors="replace")


def is_spreadsheet(path: str | Path) -> bool:
    return Path(path).suffix.lower() in SPREADSHEET_SUFFIXES


def read_text_lines(path: str | Path, encodings: Sequence[str] = DEFAULT_ENCODINGS) -> List[str]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    return split_lines(decode_bytes(path.read_bytes(), encodings))


def read_spreadsheet_rows(path: str | Path, sheet: int | str = 0) -> List[list]:
    """Read raw cell values of one worksheet.

    Args:
        path: Workbook path (.xlsx, .xlsm or .xls)
        sheet: Sheet index or name (default: first sheet)

    Returns:
        One list of cell values per worksheet row

    Raises:
        FileNotFoundError: If the workbook doesn't exist
        SpreadsheetReadError: If the workbook is corrupt, unsupported, or lacks the sheet
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Input file not found: {path}")
    try:
        df = pd.read_excel(path, sheet_name=sheet, header=None, dtype=object)
    except Exception as e:
        raise SpreadsheetReadError(f"Failed to read spreadsheet {path}: {e}") from e
    LOGGER.debug("Read %d rows from sheet %r of %s", len(df), sheet, path)
    return [list(row) for row in df.itertuples(index=False, name=None)]


def write_csv(path: str | Path, rows: Iterable[dict], fieldnames: Sequence[str] | None = None) -> None:
    """Write dict rows as UTF-8 CSV.

    Columns follow fieldnames when given (written as a header even with no
    rows), otherwise the keys of the first row. Keys outside the columns
    are ignored.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = list(rows)
    columns = list(fieldnames) if fieldnames else (list(rows[0].keys()) if rows else [])
    with path.open("w", encoding="utf-8", newline="") as f:
        if not columns:
            return
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)

"""
Spreadsheet bridge - CSF tables to and from xlsx workbooks.

Each row holds one label:

    A: label name    B: value text    C: extra value (optional)
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from ...errors import CsfError
from ...formats.csf import EntryStore, Entry

logger = logging.getLogger(__name__)


SHEET = "Sheet1"
LABEL_COLUMN = "A"
VALUE_COLUMN = "B"
EXTRA_VALUE_COLUMN = "C"

Row = Tuple[str, ...]


class SpreadsheetError(CsfError):
    """The workbook cannot be used as a CSF source."""


class RowShapeError(SpreadsheetError, ValueError):
    """A row does not have 1 to 3 columns."""

    def __init__(self, row: int, columns: int):
        self.row = row
        self.columns = columns
        super().__init__(f"wrong column count, want 1~3, got {columns}, at row: {row}")


def export_rows(store: EntryStore) -> List[Row]:
    """Rows for every label in order: (label, value) or (label, value, extra)."""
    rows = []
    for entry in store:
        if entry.value.has_extra:
            rows.append((entry.label.name_string, entry.value.text, entry.value.extra_string))
        else:
            rows.append((entry.label.name_string, entry.value.text))
    return rows


def export_xlsx(store: EntryStore, output: Union[str, Path]) -> int:
    """
    Write every label to a new workbook. Returns the row count.

    Raises:
        SpreadsheetError: a text holds control characters xlsx cannot store
    """
    wb = Workbook()
    ws = wb.active
    ws.title = SHEET

    rows = export_rows(store)
    for i, row in enumerate(rows, start=1):
        for column, text in zip((LABEL_COLUMN, VALUE_COLUMN, EXTRA_VALUE_COLUMN), row):
            _set_text(ws[f"{column}{i}"], text, row[0])

    wb.save(str(output))
    logger.info(f"Exported {len(rows)} rows to {output}")
    return len(rows)


def _set_text(cell, text: str, label: str):
    """Store text as a plain string cell, never as a formula."""
    try:
        cell.value = text
    except IllegalCharacterError as e:
        raise SpreadsheetError(f"label {label} cannot be stored in a worksheet: {text!r}") from e
    cell.data_type = "s"


def _cell_text(value) -> str:
    if value is None:
        return ""
    return str(value)


def _trim_row(cells) -> List[str]:
    """Cell texts with trailing empty cells dropped."""
    values = [_cell_text(c) for c in cells]
    while values and values[-1] == "":
        values.pop()
    return values


def read_rows(input_path: Union[str, Path], sheet: Optional[str] = None) -> List[List[str]]:
    """
    Read and validate all rows of a workbook.

    Raises:
        SpreadsheetError: the sheet has no rows (trailing empty rows ignored)
        RowShapeError: a row has other than 1 to 3 columns (1-based row number)
    """
    wb = load_workbook(str(input_path), read_only=True, data_only=True)
    try:
        sheet = sheet or SHEET
        ws = wb[sheet] if sheet in wb.sheetnames else wb.active
        rows = [_trim_row(cells) for cells in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    while rows and not rows[-1]:
        rows.pop()
    if not rows:
        raise SpreadsheetError("no data to read")

    for i, row in enumerate(rows, start=1):
        if not 1 <= len(row) <= 3:
            raise RowShapeError(i, len(row))
    return rows


def row_to_entry(row: List[str]) -> Entry:
    if len(row) == 1:
        return Entry.create(row[0], "")
    if len(row) == 2:
        return Entry.create(row[0], row[1])
    return Entry.create(row[0], row[1], row[2])


def import_rows(store: EntryStore, rows: List[List[str]]) -> int:
    """Write rows into store, keeping existing label casing. Returns the row count."""
    for row in rows:
        store.write(row_to_entry(row), False)
    return len(rows)


def import_xlsx(input_path: Union[str, Path], store: EntryStore) -> int:
    """Read a workbook into store. The store is untouched if any row is invalid."""
    rows = read_rows(input_path)
    count = import_rows(store, rows)
    logger.info(f"Imported {count} rows from {input_path}")
    return count

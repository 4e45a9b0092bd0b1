"""Reading and writing layout-shaped xlsx workbooks with openpyxl."""

import logging
import zipfile
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable, Sequence, Union

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font
from openpyxl.utils.exceptions import InvalidFileException

from ledgerport.domain import errors
from ledgerport.domain.errors import ImportFileError
from ledgerport.domain.layouts import SheetLayout

logger = logging.getLogger(__name__)

HEADER_FONT = Font(bold=True)
MAX_COLUMN_WIDTH = 50


@dataclass(frozen=True)
class SheetRow:
    """One data row, keyed by column key, with its spreadsheet row number."""

    row_number: int
    values: dict[str, str]

    def get(self, key: str) -> str:
        return self.values.get(key, "")


def cell_text(value: Any) -> str:
    """Coerce a cell value to trimmed text.

    Integral floats lose their trailing ``.0`` so that an ID typed as 1001
    reads back as "1001"; dates render as ISO strings.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        if value.time() == time.min:
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    return str(value).strip()


def read_sheet(path: Union[str, Path], layout: SheetLayout) -> list[SheetRow]:
    """Read the layout's sheet from an xlsx file.

    The first row is the header row. Fully blank rows are skipped, and row
    numbers are the actual sheet row numbers (header is row 1).

    Raises:
        ImportFileError: If the file can't be opened, the sheet is missing,
            or the sheet has no data rows
    """
    try:
        wb = load_workbook(path, read_only=True, data_only=True)
    except (OSError, InvalidFileException, zipfile.BadZipFile, KeyError) as e:
        raise ImportFileError(f"Could not read workbook '{path}': {e}") from e

    try:
        if layout.sheet_name not in wb.sheetnames:
            raise ImportFileError(errors.sheet_not_found(layout.sheet_name))

        rows = wb[layout.sheet_name].iter_rows(values_only=True)
        header = next(rows, None)
        positions = layout.match_headers(header or ())
        logger.debug("Matched columns in %s sheet: %s", layout.sheet_name, sorted(positions.values()))

        records = []
        for row_number, cells in enumerate(rows, start=2):
            if not any(cell_text(cell) for cell in cells):
                continue
            values = {
                key: cell_text(cells[index]) if index < len(cells) else ""
                for index, key in positions.items()
            }
            records.append(SheetRow(row_number=row_number, values=values))
    finally:
        wb.close()

    if not records:
        raise ImportFileError(errors.no_records_found())
    return records


def _excel_value(value: Any) -> Any:
    # Empty cells rather than placeholders, so exports re-import cleanly
    if value is None or value == "":
        return None
    return value


def _auto_width(ws) -> None:
    """Size columns to their longest value."""
    for column_cells in ws.columns:
        longest = max((len(str(cell.value)) for cell in column_cells if cell.value is not None), default=0)
        ws.column_dimensions[column_cells[0].column_letter].width = min(longest + 2, MAX_COLUMN_WIDTH)


def write_sheet(
    path: Union[str, Path],
    layout: SheetLayout,
    headers: Sequence[str],
    rows: Iterable[dict[str, Any]],
) -> int:
    """Write rows (keyed by header) to a new workbook with one layout sheet.

    Returns:
        Number of data rows written
    """
    wb = Workbook()
    ws = wb.active
    ws.title = layout.sheet_name

    ws.append(list(headers))
    for cell in ws[1]:
        cell.font = HEADER_FONT

    count = 0
    for row in rows:
        ws.append([_excel_value(row.get(header)) for header in headers])
        count += 1

    _auto_width(ws)
    wb.save(path)
    return count


def write_template(path: Union[str, Path], layout: SheetLayout) -> int:
    """Write the layout's static example document. Returns rows written."""
    return write_sheet(path, layout, layout.import_headers, layout.template_rows)


"""Spreadsheet row source - reads uploaded .xls/.xlsx workbooks into RawRows"""

import logging
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Sequence

import openpyxl
import xlrd
from openpyxl.utils import column_index_from_string

from aging_report.config import Settings, settings
from aging_report.domain.exceptions import RowSourceError, UnsupportedFileTypeError
from aging_report.domain.models import RawRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnMapping:
    """Fixed column letters for each role, plus the first data row (1-based)"""

    code: str = "A"
    name: str = "B"
    contact: str = "C"
    balance: str = "E"
    last_payment: str = "F"
    first_data_row: int = 2

    @classmethod
    def from_settings(cls, config: Settings) -> "ColumnMapping":
        return cls(
            code=config.column_code,
            name=config.column_name,
            contact=config.column_contact,
            balance=config.column_balance,
            last_payment=config.column_last_payment,
            first_data_row=config.first_data_row,
        )

    def indexes(self) -> Dict[str, int]:
        """Role -> 0-based column index"""
        return {
            role: column_index_from_string(getattr(self, role)) - 1
            for role in ("code", "name", "contact", "balance", "last_payment")
        }


def _xls_date(value: float, datemode: int) -> Optional[datetime]:
    """Date cell serial in the workbook's own epoch (1900 or 1904)"""
    try:
        return xlrd.xldate_as_datetime(value, datemode)
    except (ValueError, OverflowError):
        return None


def _xls_rows(content: bytes, first_data_row: int) -> Iterator[Sequence[Any]]:
    book = xlrd.open_workbook(file_contents=content)
    sheets = book.sheets()
    if not sheets:
        return
    # The sheet the workbook was saved on
    sheet = next((s for s in sheets if s.sheet_selected), sheets[0])

    for row_index in range(first_data_row - 1, sheet.nrows):
        values = []
        for cell in sheet.row(row_index):
            if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
                values.append(None)
            elif cell.ctype == xlrd.XL_CELL_DATE:
                values.append(_xls_date(cell.value, book.datemode))
            else:
                values.append(cell.value)
        yield values


def _xlsx_rows(content: bytes, first_data_row: int) -> Iterator[Sequence[Any]]:
    workbook = openpyxl.load_workbook(BytesIO(content), read_only=True, data_only=True)
    try:
        sheet = workbook.active
        yield from sheet.iter_rows(min_row=first_data_row, values_only=True)
    finally:
        workbook.close()


READERS: Dict[str, Callable[[bytes, int], Iterator[Sequence[Any]]]] = {
    ".xls": _xls_rows,
    ".xlsx": _xlsx_rows,
}


class SpreadsheetRowSource:
    """Reads the active sheet of an uploaded workbook as RawRows"""

    def __init__(self, columns: Optional[ColumnMapping] = None):
        self.columns = columns or ColumnMapping.from_settings(settings)
        self._indexes = self.columns.indexes()

    @staticmethod
    def supported_extensions() -> Iterable[str]:
        return READERS.keys()

    def read_rows(self, content: bytes, filename: str) -> Iterator[RawRow]:
        """
        Open the workbook and stream its data rows in sheet order.

        Raises:
            UnsupportedFileTypeError: extension is not .xls or .xlsx
            RowSourceError: workbook cannot be opened or read
        """
        extension = Path(filename or "").suffix.lower()
        reader = READERS.get(extension)
        if reader is None:
            raise UnsupportedFileTypeError(
                f"Unsupported file type '{extension or filename}'. Please upload a .xls or .xlsx file."
            )

        rows = reader(content, self.columns.first_data_row)
        try:
            first = next(rows, None)
        except Exception as e:
            logger.warning("Could not open workbook %s: %s", filename, e)
            raise RowSourceError(f"Could not read Excel file: {e}") from e

        if first is None:
            return iter(())
        return self._to_raw_rows(first, rows)

    def _to_raw_rows(self, first: Sequence[Any], rest: Iterator[Sequence[Any]]) -> Iterator[RawRow]:
        yield self._raw_row(first)
        try:
            for values in rest:
                yield self._raw_row(values)
        except Exception as e:
            raise RowSourceError(f"Could not read Excel file: {e}") from e

    def _raw_row(self, values: Sequence[Any]) -> RawRow:
        def cell(role: str) -> Any:
            index = self._indexes[role]
            value = values[index] if index < len(values) else None
            if isinstance(value, str) and value == "":
                return None
            return value

        return RawRow(
            code=cell("code"),
            name=cell("name"),
            contact=cell("contact"),
            balance=cell("balance"),
            last_payment=cell("last_payment"),
        )

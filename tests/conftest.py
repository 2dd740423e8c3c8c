"""Pytest fixtures for testing"""

from datetime import date
from io import BytesIO
from typing import Any, Callable, Sequence

import openpyxl
import pytest
import xlwt
from fastapi.testclient import TestClient

from aging_report.api.dependencies import get_reference_date
from aging_report.api.main import create_app
from aging_report.domain.aging import select_policy
from aging_report.domain.models import AgingPolicy

REFERENCE_DATE = date(2024, 6, 15)
HEADER = ["Code", "Client", "Contact", "Agence", "Solde", "Dernier paiement"]


@pytest.fixture
def reference_date() -> date:
    return REFERENCE_DATE


@pytest.fixture
def overdue_policy() -> AgingPolicy:
    """Overdue policy anchored at 2024-06-15: last payment on or before 2024-05-16"""
    return select_policy("overdue", REFERENCE_DATE)


@pytest.fixture
def make_workbook() -> Callable[[Sequence[Sequence[Any]]], bytes]:
    """Build .xlsx bytes: a header row followed by the given data rows (columns A-F)"""

    def build(rows: Sequence[Sequence[Any]]) -> bytes:
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        sheet.append(HEADER)
        for row in rows:
            sheet.append(list(row))
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return build


@pytest.fixture
def make_xls_workbook() -> Callable[..., bytes]:
    """Build legacy .xls bytes; datetime cells are written as formatted date serials"""
    date_style = xlwt.easyxf(num_format_str="YYYY-MM-DD")

    def build(sheets: Sequence[Sequence[Sequence[Any]]], dates_1904: bool = False, selected: int = 0) -> bytes:
        workbook = xlwt.Workbook()
        workbook.dates_1904 = dates_1904
        for sheet_index, rows in enumerate(sheets):
            sheet = workbook.add_sheet(f"Sheet{sheet_index + 1}")
            sheet.set_selected(sheet_index == selected)
            for row_index, row in enumerate([HEADER, *rows]):
                for col_index, value in enumerate(row):
                    if isinstance(value, date):
                        sheet.write(row_index, col_index, value, date_style)
                    elif value is not None:
                        sheet.write(row_index, col_index, value)
        workbook.set_active_sheet(selected)
        buffer = BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return build


@pytest.fixture
def sample_rows() -> list[list[Any]]:
    """Client extract in sheet order; see comments for the expected outcome under overdue"""
    return [
        ["C001", "  Alpha SARL ", "0600000001", "Paris", "1 234,50", "14/03/2024"],  # accepted
        ["C002", "Beta", "", "Lyon", 500, "2024-05-16"],  # accepted, boundary, contact defaulted
        ["C003", "Gamma", "0600000003", "Lyon", "0", "2024-01-10"],  # zero balance
        ["C004", "Delta", "0600000004", "Nice", "750,00", None],  # no payment date
        ["C005", "Epsilon", "0600000005", "Nice", "80", "2024-05-17"],  # too recent
        ["C006", "Zeta", "0600000006", "Lille", "99,99", "pas de date"],  # unparseable date
        [1007, "Eta", "0600000007", "Lille", 45.5, 45366],  # accepted, serial date 2024-03-15
    ]


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client with a fixed reference date"""
    app = create_app()
    app.dependency_overrides[get_reference_date] = lambda: REFERENCE_DATE
    return TestClient(app)

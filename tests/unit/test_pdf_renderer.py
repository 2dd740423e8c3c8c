"""Unit tests for PDF rendering"""

from datetime import date

import pytest

from aging_report.domain.exceptions import RenderingError
from aging_report.domain.models import RawRow
from aging_report.domain.reporting import build_report
from aging_report.infrastructure.rendering.pdf import PdfReportRenderer

REFERENCE = date(2024, 6, 15)


@pytest.fixture
def renderer() -> PdfReportRenderer:
    return PdfReportRenderer(font_path="")


def test_renders_report_with_records(renderer):
    rows = [
        RawRow(code=f"C{i:03}", name="Client <&> name", contact="", balance="1 000,00", last_payment="2024-01-01")
        for i in range(120)
    ]
    report = build_report(rows, "overdue", REFERENCE)

    pdf = renderer.render(report)

    assert pdf.startswith(b"%PDF")
    assert len(report.records) == 120


def test_renders_empty_report(renderer):
    report = build_report([], "30_37", REFERENCE)

    pdf = renderer.render(report)

    assert report.no_records is True
    assert pdf.startswith(b"%PDF")


def test_missing_font_file_is_a_rendering_error():
    with pytest.raises(RenderingError):
        PdfReportRenderer(font_path="/nonexistent/DejaVuSans.ttf")

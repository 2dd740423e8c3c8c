"""PDF rendering of aging reports with reportlab"""

import logging
from io import BytesIO
from typing import List, Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas
from reportlab.platypus import Flowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from aging_report.config import settings
from aging_report.domain.exceptions import RenderingError
from aging_report.domain.models import Report

logger = logging.getLogger(__name__)

NO_RECORDS_MESSAGE = "No records matched the chosen criteria."
COLUMN_HEADERS = ["Client Code", "Name", "Contact", "Solde", "Date of Last Payment"]

BRAND = colors.HexColor("#2468f2")
GRID = colors.HexColor("#e6eefc")
HEADER_BG = colors.HexColor("#f6fbff")
STRIPE_BG = colors.HexColor("#fbfdff")
TOTALS_BG = colors.HexColor("#f1f6ff")

CUSTOM_FONT = "ReportFont"


def _numbered_canvas(font_name: str):
    """Canvas class that writes 'Page N / M' once the page count is known"""

    class NumberedCanvas(canvas.Canvas):
        def __init__(self, *args, **kwargs):
            super().__init__(*args, **kwargs)
            self._saved_page_states = []

        def showPage(self):
            self._saved_page_states.append(dict(self.__dict__))
            self._startPage()

        def save(self):
            page_count = len(self._saved_page_states)
            for state in self._saved_page_states:
                self.__dict__.update(state)
                self._draw_page_number(page_count)
                super().showPage()
            super().save()

        def _draw_page_number(self, page_count: int) -> None:
            # Footer is cosmetic: a failure here must not lose the document
            try:
                width, _ = self._pagesize
                self.setFont(font_name, 9)
                self.drawRightString(width - 15 * mm, 10 * mm, f"Page {self._pageNumber} / {page_count}")
            except Exception as e:
                logger.warning("Could not draw page footer: %s", e)

    return NumberedCanvas


class PdfReportRenderer:
    """Turns a Report into printable A4 PDF bytes"""

    def __init__(self, font_path: Optional[str] = None):
        font_path = font_path if font_path is not None else settings.pdf_font_path
        self.font = "Helvetica"
        self.bold_font = "Helvetica-Bold"
        self.arrow = "->"  # builtin fonts have no arrow glyph

        if font_path:
            try:
                pdfmetrics.registerFont(TTFont(CUSTOM_FONT, font_path))
            except Exception as e:
                raise RenderingError(f"Could not load PDF font {font_path}: {e}") from e
            self.font = self.bold_font = CUSTOM_FONT
            self.arrow = "→"

        styles = getSampleStyleSheet()
        self.title_style = ParagraphStyle(
            "ReportTitle", parent=styles["Title"], fontName=self.bold_font, textColor=BRAND, alignment=0
        )
        self.meta_style = ParagraphStyle(
            "ReportMeta", parent=styles["Normal"], fontName=self.font, fontSize=9, textColor=colors.grey
        )
        self.body_style = ParagraphStyle("ReportBody", parent=styles["Normal"], fontName=self.font, fontSize=10)
        self.cell_style = ParagraphStyle("ReportCell", parent=self.body_style, fontSize=9, leading=11)

    def render(self, report: Report) -> bytes:
        """
        Render report to PDF.

        Raises:
            RenderingError: reportlab failed to lay out or write the document
        """
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=20 * mm,
            title=report.label,
        )

        try:
            doc.build(self._story(report), canvasmaker=_numbered_canvas(self.font))
        except Exception as e:
            raise RenderingError(f"Could not render report: {e}") from e

        return buffer.getvalue()

    def _story(self, report: Report) -> List[Flowable]:
        date_range = report.range_description.replace("→", self.arrow)
        story: List[Flowable] = [
            Paragraph(escape(report.label), self.title_style),
            Paragraph(
                escape(f"Generated: {report.reference_date.isoformat()}  |  Date range: {date_range}"),
                self.meta_style,
            ),
            Spacer(1, 6 * mm),
        ]

        if report.no_records:
            story.append(Paragraph(NO_RECORDS_MESSAGE, self.body_style))
            return story

        story.append(self._table(report))
        return story

    def _table(self, report: Report) -> Table:
        data = [COLUMN_HEADERS]
        for record in report.records:
            data.append([
                Paragraph(escape(record.code), self.cell_style),
                Paragraph(escape(record.name), self.cell_style),
                Paragraph(escape(record.contact), self.cell_style),
                record.balance_display,
                record.last_payment_date.isoformat(),
            ])
        data.append(["Total outstanding", "", "", report.total_display, ""])

        table = Table(data, colWidths=[25 * mm, 60 * mm, 40 * mm, 30 * mm, 25 * mm], repeatRows=1)
        table.setStyle(TableStyle([
            ("FONTNAME", (0, 0), (-1, -1), self.font),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("FONTNAME", (0, 0), (-1, 0), self.bold_font),
            ("BACKGROUND", (0, 0), (-1, 0), HEADER_BG),
            ("GRID", (0, 0), (-1, -1), 0.5, GRID),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("ALIGN", (3, 1), (3, -1), "RIGHT"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -2), [STRIPE_BG, colors.white]),
            ("SPAN", (0, -1), (2, -1)),
            ("FONTNAME", (0, -1), (-1, -1), self.bold_font),
            ("BACKGROUND", (0, -1), (-1, -1), TOTALS_BG),
        ]))
        return table

"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Request

from aging_report.infrastructure.rendering.pdf import PdfReportRenderer
from aging_report.infrastructure.sources.spreadsheet import SpreadsheetRowSource


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_reference_date() -> date:
    """'Today' anchor for aging offsets"""
    return date.today()


def get_row_source() -> SpreadsheetRowSource:
    """Provide spreadsheet reader instance"""
    return SpreadsheetRowSource()


def get_renderer() -> PdfReportRenderer:
    """Provide PDF renderer instance"""
    return PdfReportRenderer()

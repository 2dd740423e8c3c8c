"""POST /v1/reports - aging report generation endpoints"""

import logging
import time
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import Response

from aging_report.api.dependencies import get_reference_date, get_renderer, get_request_id, get_row_source
from aging_report.api.v1.schemas import ReportResponse, ReportTypeItem, ReportTypesResponse
from aging_report.config import settings
from aging_report.domain.aging import available_report_types
from aging_report.domain.exceptions import RenderingError, RowSourceError, UnsupportedFileTypeError
from aging_report.domain.models import Report
from aging_report.domain.reporting import build_report
from aging_report.infrastructure.observability.logging import log_report
from aging_report.infrastructure.observability.metrics import (
    record_report,
    render_failures_counter,
    row_source_failures_counter,
)
from aging_report.infrastructure.rendering.pdf import PdfReportRenderer
from aging_report.infrastructure.sources.spreadsheet import SpreadsheetRowSource

router = APIRouter()


def _generate_report(
    request_id: str,
    upload: UploadFile,
    report_type: Optional[str],
    reference_date: date,
    row_source: SpreadsheetRowSource,
) -> Report:
    """
    Read the uploaded workbook and run it through the aging engine.

    Flow:
    1. Read upload (size-capped)
    2. Stream rows from the active sheet
    3. Classify, aggregate and assemble the report
    4. Record metrics and logs
    """
    start_time = time.time()

    content = upload.file.read(settings.max_upload_bytes + 1)
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="Uploaded file is too large")

    try:
        rows = row_source.read_rows(content, upload.filename or "")
        report = build_report(
            rows,
            report_type or settings.default_report_type,
            reference_date,
            unknown_contact=settings.unknown_contact,
        )

    except UnsupportedFileTypeError as e:
        logging.warning(f"Unsupported upload: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=415, detail=str(e))

    except RowSourceError as e:
        row_source_failures_counter.inc()
        logging.error(f"Row source error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    duration_ms = (time.time() - start_time) * 1000
    record_report(report)
    log_report(request_id, report, duration_ms)
    return report


@router.get("/report-types", response_model=ReportTypesResponse)
def list_report_types():
    """Selectable aging buckets and their labels"""
    return ReportTypesResponse(
        default=settings.default_report_type,
        report_types=[ReportTypeItem(report_type=value, label=label) for value, label in available_report_types()],
    )


@router.post("/reports/preview", response_model=ReportResponse)
def preview_report(
    request: Request,
    xls_file: UploadFile = File(..., description="Client balances workbook (.xls or .xlsx)"),
    report_type: Optional[str] = Form(None, description="overdue | 30_37 | 37_44 | 24_31"),
    reference_date: Optional[date] = Form(None, description="Override for 'today' (YYYY-MM-DD)"),
    today: date = Depends(get_reference_date),
    row_source: SpreadsheetRowSource = Depends(get_row_source),
):
    """Run the report and return its contents as JSON instead of a PDF"""
    request_id = get_request_id(request)
    report = _generate_report(request_id, xls_file, report_type, reference_date or today, row_source)
    return ReportResponse.from_report(report)


@router.post(
    "/reports",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}},
)
def generate_report(
    request: Request,
    xls_file: UploadFile = File(..., description="Client balances workbook (.xls or .xlsx)"),
    report_type: Optional[str] = Form(None, description="overdue | 30_37 | 37_44 | 24_31"),
    reference_date: Optional[date] = Form(None, description="Override for 'today' (YYYY-MM-DD)"),
    today: date = Depends(get_reference_date),
    row_source: SpreadsheetRowSource = Depends(get_row_source),
    renderer: PdfReportRenderer = Depends(get_renderer),
):
    """
    Generate the aging report as a downloadable PDF.

    Returns:
        application/pdf attachment named <report_type>_report.pdf
    """
    request_id = get_request_id(request)
    report = _generate_report(request_id, xls_file, report_type, reference_date or today, row_source)

    try:
        pdf = renderer.render(report)
    except RenderingError as e:
        render_failures_counter.inc()
        logging.error(f"Rendering error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail=str(e))
    except Exception as e:
        render_failures_counter.inc()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    filename = f"{report.report_type.value}_report.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

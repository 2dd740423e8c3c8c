"""Pydantic schemas for API responses"""

from datetime import date
from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel

from aging_report.domain.models import Report


class RecordSchema(BaseModel):
    """Single accepted client row"""

    code: str
    name: str
    contact: str
    balance_raw: Decimal
    balance_display: str
    last_payment_date: date


class DiagnosticsSchema(BaseModel):
    """Row outcome counters for one run"""

    rows_seen: int
    rows_accepted: int
    rows_excluded: int
    malformed_balances: int
    exclusions: Dict[str, int]


class ReportResponse(BaseModel):
    """Response for POST /v1/reports/preview"""

    report_type: str
    label: str
    range_description: str
    reference_date: date
    records: List[RecordSchema]
    total_outstanding: Decimal
    total_display: str
    no_records: bool
    diagnostics: DiagnosticsSchema

    @classmethod
    def from_report(cls, report: Report) -> "ReportResponse":
        stats = report.diagnostics
        return cls(
            report_type=report.report_type.value,
            label=report.label,
            range_description=report.range_description,
            reference_date=report.reference_date,
            records=[
                RecordSchema(
                    code=r.code,
                    name=r.name,
                    contact=r.contact,
                    balance_raw=r.balance_raw,
                    balance_display=r.balance_display,
                    last_payment_date=r.last_payment_date,
                )
                for r in report.records
            ],
            total_outstanding=report.total_outstanding,
            total_display=report.total_display,
            no_records=report.no_records,
            diagnostics=DiagnosticsSchema(
                rows_seen=stats.rows_seen,
                rows_accepted=stats.rows_accepted,
                rows_excluded=stats.rows_excluded,
                malformed_balances=stats.malformed_balances,
                exclusions={reason.value: count for reason, count in stats.exclusions.items()},
            ),
        )


class ReportTypeItem(BaseModel):
    """One selectable aging bucket"""

    report_type: str
    label: str


class ReportTypesResponse(BaseModel):
    """Response for GET /v1/report-types"""

    default: str
    report_types: List[ReportTypeItem]

"""Report assembly - core entry point from raw rows to a finished Report"""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from aging_report.domain.aggregation import aggregate
from aging_report.domain.aging import range_description, select_policy
from aging_report.domain.classification import UNKNOWN_CONTACT, classify_row
from aging_report.domain.models import (
    AgingPolicy,
    ClassificationStats,
    RawRow,
    Record,
    Report,
    ReportType,
)
from aging_report.domain.normalization import format_amount


def assemble(
    policy: AgingPolicy,
    records: Sequence[Record],
    total: Decimal,
    diagnostics: Optional[ClassificationStats] = None,
) -> Report:
    """Package policy, records and total into the Report handed to rendering"""
    return Report(
        report_type=policy.report_type,
        label=policy.label,
        range_description=range_description(policy),
        reference_date=policy.reference_date,
        records=tuple(records),
        total_outstanding=total,
        total_display=format_amount(total),
        no_records=len(records) == 0,
        diagnostics=diagnostics or ClassificationStats(),
    )


def build_report(
    rows: Iterable[RawRow],
    report_type: str | ReportType | None,
    reference_date: date,
    unknown_contact: str = UNKNOWN_CONTACT,
) -> Report:
    """
    Main entry point: classify every row and assemble the report.

    Flow:
    1. Select the aging policy once from report type + reference date
    2. Classify each row independently, keeping source order
    3. Sum the accepted balances
    4. Assemble the Report with per-run diagnostics
    """
    policy = select_policy(report_type, reference_date)
    stats = ClassificationStats()
    records = []

    for row in rows:
        stats.rows_seen += 1
        result = classify_row(row, policy, unknown_contact)

        if result.balance_malformed:
            stats.malformed_balances += 1

        if result.record is not None:
            stats.rows_accepted += 1
            records.append(result.record)
        else:
            stats.count_exclusion(result.reason)

    return assemble(policy, records, aggregate(records), stats)

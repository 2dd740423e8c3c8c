"""Aging policy selection - maps a report type to its inclusive date window"""

from datetime import date
from typing import Dict, List, Optional, Tuple

from aging_report.domain.models import AgingPolicy, ReportType
from aging_report.utils.date_utils import days_before, describe_range

# report type -> (days back for min_date or None, days back for max_date, label)
AGING_BUCKETS: Dict[ReportType, Tuple[Optional[int], int, str]] = {
    ReportType.OVERDUE: (None, 30, "Over 30 days overdue (overdue)"),
    ReportType.EARLY_30_37: (37, 30, "Early Warning (30-37 days)"),
    ReportType.ADVANCED_37_44: (44, 37, "Advanced Warning (37-44 days)"),
    ReportType.EARLY_24_31: (31, 24, "Early Warning (24-31 days)"),
}


def resolve_report_type(report_type: str | ReportType | None) -> ReportType:
    """Map user input to a known report type, falling back to overdue"""
    if isinstance(report_type, ReportType):
        return report_type
    try:
        return ReportType((report_type or "").strip())
    except ValueError:
        return ReportType.OVERDUE


def select_policy(report_type: str | ReportType | None, reference_date: date) -> AgingPolicy:
    """
    Build the aging policy for a run.

    All offsets are whole days back from reference_date and both ends are
    inclusive. Unknown selectors never fail; they get the overdue policy.
    """
    resolved = resolve_report_type(report_type)
    min_days, max_days, label = AGING_BUCKETS[resolved]

    return AgingPolicy(
        report_type=resolved,
        reference_date=reference_date,
        min_date=days_before(reference_date, min_days) if min_days is not None else None,
        max_date=days_before(reference_date, max_days),
        label=label,
    )


def range_description(policy: AgingPolicy, arrow: str = "→") -> str:
    return describe_range(policy.min_date, policy.max_date, arrow=arrow)


def available_report_types() -> List[Tuple[str, str]]:
    """(selector, label) pairs in display order"""
    return [(report_type.value, bucket[2]) for report_type, bucket in AGING_BUCKETS.items()]

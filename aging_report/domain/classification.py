"""Record classifier - decides whether a raw row belongs in the report"""

from dataclasses import dataclass
from typing import Any, Optional

from aging_report.domain.models import AgingPolicy, ExclusionReason, RawRow, Record
from aging_report.domain.normalization import format_amount, normalize_amount, parse_date

UNKNOWN_CONTACT = "inconnu"


@dataclass(frozen=True)
class ClassificationResult:
    """Outcome for one row: a record, or the reason it was left out"""

    record: Optional[Record] = None
    reason: Optional[ExclusionReason] = None
    balance_malformed: bool = False

    @property
    def accepted(self) -> bool:
        return self.record is not None


def _cell_text(value: Any) -> str:
    """Trimmed text of a cell; integral floats lose their '.0' (1001.0 -> '1001')"""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def classify_row(
    row: RawRow,
    policy: AgingPolicy,
    unknown_contact: str = UNKNOWN_CONTACT,
) -> ClassificationResult:
    """
    Run one row through the inclusion rules.

    Order:
    1. balance must be > 0
    2. last-payment date must be present and parseable
    3. date must fall inside the policy window (inclusive)
    """
    amount = normalize_amount(row.balance)
    malformed = not amount.clean

    if amount.value <= 0:
        return ClassificationResult(reason=ExclusionReason.NON_POSITIVE_BALANCE, balance_malformed=malformed)

    last_payment = parse_date(row.last_payment, default=policy.reference_date)
    if last_payment is None:
        reason = (
            ExclusionReason.MISSING_DATE
            if _cell_text(row.last_payment) == ""
            else ExclusionReason.UNPARSEABLE_DATE
        )
        return ClassificationResult(reason=reason, balance_malformed=malformed)

    if policy.min_date is not None and last_payment < policy.min_date:
        return ClassificationResult(reason=ExclusionReason.BEFORE_RANGE, balance_malformed=malformed)
    if last_payment > policy.max_date:
        return ClassificationResult(reason=ExclusionReason.AFTER_RANGE, balance_malformed=malformed)

    contact = _cell_text(row.contact) or unknown_contact

    record = Record(
        code=_cell_text(row.code),
        name=_cell_text(row.name),
        contact=contact,
        balance_raw=amount.value,
        balance_display=format_amount(amount.value),
        last_payment_date=last_payment,
    )
    return ClassificationResult(record=record, balance_malformed=malformed)


def classify(row: RawRow, policy: AgingPolicy, unknown_contact: str = UNKNOWN_CONTACT) -> Optional[Record]:
    """Accepted record for the row, or None when it is excluded"""
    return classify_row(row, policy, unknown_contact).record

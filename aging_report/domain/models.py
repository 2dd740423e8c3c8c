"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class ReportType(str, Enum):
    """Aging bucket selector for a report run"""

    OVERDUE = "overdue"
    EARLY_30_37 = "30_37"
    ADVANCED_37_44 = "37_44"
    EARLY_24_31 = "24_31"


class ExclusionReason(str, Enum):
    """Why a row did not make it into the report"""

    NON_POSITIVE_BALANCE = "non_positive_balance"
    MISSING_DATE = "missing_date"
    UNPARSEABLE_DATE = "unparseable_date"
    BEFORE_RANGE = "before_range"
    AFTER_RANGE = "after_range"


@dataclass(frozen=True)
class RawRow:
    """One spreadsheet row addressed by column role"""

    code: Any = None
    name: Any = None
    contact: Any = None
    balance: Any = None
    last_payment: Any = None


@dataclass(frozen=True)
class AgingPolicy:
    """Inclusive last-payment date window for one report run"""

    report_type: ReportType
    reference_date: date
    min_date: Optional[date]  # None = unbounded below
    max_date: date
    label: str

    def contains(self, day: date) -> bool:
        if self.min_date is not None and day < self.min_date:
            return False
        return day <= self.max_date


@dataclass(frozen=True)
class Record:
    """Accepted, normalized row"""

    code: str
    name: str
    contact: str
    balance_raw: Decimal
    balance_display: str  # "1 234,50"
    last_payment_date: date


@dataclass
class ClassificationStats:
    """Per-run counters describing what happened to each row"""

    rows_seen: int = 0
    rows_accepted: int = 0
    malformed_balances: int = 0
    exclusions: Dict[ExclusionReason, int] = field(default_factory=dict)

    @property
    def rows_excluded(self) -> int:
        return sum(self.exclusions.values())

    def count_exclusion(self, reason: ExclusionReason) -> None:
        self.exclusions[reason] = self.exclusions.get(reason, 0) + 1


@dataclass(frozen=True)
class Report:
    """Output of a report run, handed to the renderer"""

    report_type: ReportType
    label: str
    range_description: str
    reference_date: date
    records: Tuple[Record, ...]
    total_outstanding: Decimal
    total_display: str
    no_records: bool
    diagnostics: ClassificationStats = field(default_factory=ClassificationStats)

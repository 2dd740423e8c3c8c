"""Totals over accepted records"""

from decimal import Decimal, localcontext
from typing import Iterable

from aging_report.domain.models import Record


def aggregate(records: Iterable[Record]) -> Decimal:
    """Exact sum of raw balances (display strings are never summed)"""
    balances = [record.balance_raw for record in records]
    if not balances:
        return Decimal("0")

    # Enough digits for the widest balance, the finest fraction and every carry
    top = max(balance.adjusted() for balance in balances) + len(str(len(balances)))
    bottom = min(balance.as_tuple().exponent for balance in balances)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, top - bottom + 2)
        return sum(balances, Decimal("0"))

from __future__ import annotations

from datetime import date, datetime

from ..excel.values import DATE_FORMAT
from ..models.ledger_state import LedgerState
from ..models.transaction import Transaction

"""Presentation ordering of the ledger.

Most recent date first; transactions whose date does not parse as
DD/MM/YYYY (including "") are kept and placed after every dated one.
The sort is stable, so equal dates keep the ledger's iteration order.
No secondary sort key is applied.
"""

__all__ = [
    "parse_display_date",
    "sorted_transactions",
]


def parse_display_date(value: str) -> date | None:
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def _sort_key(tx: Transaction) -> tuple[int, int]:
    parsed = parse_display_date(tx.date)
    if parsed is None:
        return (1, 0)
    return (0, -parsed.toordinal())


def sorted_transactions(ledger: LedgerState) -> list[Transaction]:
    return sorted(ledger.transactions.values(), key=_sort_key)

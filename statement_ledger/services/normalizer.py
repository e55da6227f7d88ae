from __future__ import annotations

from ..excel.values import cell_text, parse_amount, parse_date
from ..models.config_models import DEFAULT_LAYOUT, StatementLayout
from ..models.transaction import RawRow, Transaction
from .classifier import cell_at

"""Raw row → Transaction mapping.

Pure: the same row always yields the same Transaction and therefore the
same dedup key.
"""

__all__ = [
    "to_transaction",
]


def to_transaction(row: RawRow, layout: StatementLayout = DEFAULT_LAYOUT) -> Transaction:
    return Transaction(
        date=parse_date(cell_at(row, layout.date_column)),
        description=cell_text(cell_at(row, layout.description_column)).strip(),
        reference=cell_text(cell_at(row, layout.reference_column)).strip(),
        debit=parse_amount(cell_at(row, layout.debit_column)),
        credit=parse_amount(cell_at(row, layout.credit_column)),
    )

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

"""Transaction domain model for the statement ledger.

A Transaction is the canonical, immutable record produced from one raw
spreadsheet row. Its `key` is the only deduplication identity: two rows that
normalize to the same (date, description, reference, debit, credit) collapse
into a single ledger entry, regardless of which file they came from.
"""

__all__ = [
    "Cell",
    "RawRow",
    "Transaction",
    "format_key_amount",
]

# 生セル: text / number / None (日付書式セルは datetime で届く場合あり)
Cell = Any
RawRow = list[Cell]

KEY_SEPARATOR = "|"


def format_key_amount(amount: float) -> str:
    """Render an amount for the dedup key.

    Integral values drop the fractional part so that `100`, `100.0` and a
    parsed `"100,00"` all produce the same text.
    """
    if math.isfinite(amount) and amount == int(amount):
        return str(int(amount))
    return repr(float(amount))


@dataclass(frozen=True)
class Transaction:
    """Normalized bank-statement transaction.

    Attributes:
        date: DD/MM/YYYY (or the original text when the cell was textual)
        description: trimmed, never empty for rows accepted by the classifier
        reference: trimmed, may be empty
        debit: amount leaving the account (0 when absent)
        credit: amount entering the account (0 when absent)
    """
    date: str
    description: str
    reference: str
    debit: float
    credit: float

    @property
    def key(self) -> str:
        return KEY_SEPARATOR.join(
            (
                self.date,
                self.description,
                self.reference,
                format_key_amount(self.debit),
                format_key_amount(self.credit),
            )
        )

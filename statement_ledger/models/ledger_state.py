from __future__ import annotations

import math
from collections.abc import Iterable

from .transaction import Transaction

"""LedgerState: the in-memory, deduplicated transaction store.

One instance is created per run and passed explicitly to the ingestion
pipeline and the renderers. Aggregates are always recomputed from the full
transaction mapping so they never drift from it.

State transitions: empty → (ingest)* → reset → empty
"""

__all__ = [
    "LedgerState",
]


class LedgerState:
    """Transactions keyed by dedup key plus derived aggregates.

    Invariants:
    - at most one Transaction per key
    - income == sum(credit), outcome == sum(debit) over `transactions`
    - net_balance == income - outcome (computed, never stored)
    """

    def __init__(self) -> None:
        self.transactions: dict[str, Transaction] = {}
        self.loaded_files: set[str] = set()
        self.income: float = 0.0
        self.outcome: float = 0.0

    @property
    def net_balance(self) -> float:
        return self.income - self.outcome

    def __len__(self) -> int:
        return len(self.transactions)

    def __contains__(self, key: object) -> bool:
        return key in self.transactions

    def add_file(self, file_name: str) -> None:
        self.loaded_files.add(file_name)

    def upsert(self, transactions: Iterable[Transaction]) -> tuple[int, int]:
        """Insert transactions by key and recompute aggregates.

        An existing key is overwritten by the (identical) new value.

        Returns:
            tuple: (new_count, duplicate_count)
        """
        new_count = 0
        duplicate_count = 0
        for tx in transactions:
            key = tx.key
            if key in self.transactions:
                duplicate_count += 1
            else:
                new_count += 1
            self.transactions[key] = tx
        self.recompute_totals()
        return new_count, duplicate_count

    def recompute_totals(self) -> None:
        # fsum: 加算順序に依存しない (ingest 順序の可換性)
        self.income = math.fsum(tx.credit for tx in self.transactions.values())
        self.outcome = math.fsum(tx.debit for tx in self.transactions.values())

    def reset(self) -> None:
        """Return to the empty initial state (total, unconditional)."""
        self.transactions.clear()
        self.loaded_files.clear()
        self.income = 0.0
        self.outcome = 0.0

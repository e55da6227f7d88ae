from __future__ import annotations

from ..excel.values import format_currency
from ..models.ledger_state import LedgerState
from ..models.transaction import Transaction
from .ordering import sorted_transactions

"""Display rendering of the ledger (dashboard, loaded files, transaction table)."""

__all__ = [
    "TABLE_HEADER",
    "render_dashboard",
    "render_loaded_files",
    "render_table",
    "render_transaction_cells",
]

TABLE_HEADER = ("Date", "Description", "Reference", "Debit", "Credit")


def render_transaction_cells(tx: Transaction) -> tuple[str, str, str, str, str]:
    """Five display cells: date, description, reference, -debit or "", +credit or ""."""
    return (
        tx.date,
        tx.description,
        tx.reference,
        f"-{tx.debit:.2f}" if tx.debit else "",
        f"+{tx.credit:.2f}" if tx.credit else "",
    )


def render_loaded_files(ledger: LedgerState) -> str:
    if not ledger.loaded_files:
        return "No files loaded"
    return f"Loaded files: {', '.join(sorted(ledger.loaded_files))}"


def render_dashboard(ledger: LedgerState, currency_symbol: str = "$") -> dict[str, str]:
    return {
        "income": format_currency(ledger.income, currency_symbol),
        "outcome": format_currency(ledger.outcome, currency_symbol),
        "net_balance": format_currency(ledger.net_balance, currency_symbol),
    }


def render_table(ledger: LedgerState) -> list[str]:
    """Sorted transaction table as aligned text lines (header first)."""
    rows = [TABLE_HEADER] + [render_transaction_cells(tx) for tx in sorted_transactions(ledger)]
    widths = [max(len(r[i]) for r in rows) for i in range(len(TABLE_HEADER))]
    lines = []
    for r in rows:
        cells = [
            # 金額列は右寄せ
            c.rjust(w) if i >= 3 else c.ljust(w)
            for i, (c, w) in enumerate(zip(r, widths))
        ]
        lines.append("  ".join(cells).rstrip())
    return lines

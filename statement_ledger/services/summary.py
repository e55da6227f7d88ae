from __future__ import annotations

from ..excel.values import format_currency
from ..models.ledger_state import LedgerState
from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering for a ledger run."""


def render_summary_line(result: ProcessingResult, ledger: LedgerState, currency_symbol: str = "$") -> str:
    """Render the SUMMARY line of a run.

    Format:
    SUMMARY files={total} success={success} failed={failed} transactions={ledger size}
    duplicates={duplicates} income={income} outcome={outcome} net={net}

    Examples:
        >>> from datetime import datetime, timezone
        >>> t = datetime(2024, 1, 1, tzinfo=timezone.utc)
        >>> result = ProcessingResult(
        ...     success_files=1, failed_files=0, new_transactions=1,
        ...     duplicate_transactions=0, skipped_rows=1, start_time=t, end_time=t,
        ...     elapsed_seconds=0.0,
        ... )
        >>> render_summary_line(result, LedgerState())
        'SUMMARY files=1 success=1 failed=0 transactions=0 duplicates=0 income=$0.00 outcome=$0.00 net=$0.00'
    """
    return (
        f"SUMMARY files={result.total_files} "
        f"success={result.success_files} "
        f"failed={result.failed_files} "
        f"transactions={len(ledger)} "
        f"duplicates={result.duplicate_transactions} "
        f"income={format_currency(ledger.income, currency_symbol)} "
        f"outcome={format_currency(ledger.outcome, currency_symbol)} "
        f"net={format_currency(ledger.net_balance, currency_symbol)}"
    )

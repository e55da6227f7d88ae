"""Statement ledger.

Ingests bank-statement spreadsheet exports, deduplicates transactions that
appear in overlapping exports, and keeps income/outcome/net-balance totals
plus a date-ordered transaction list.
"""

__version__ = "0.1.0"

from .excel.values import format_currency, parse_amount, parse_date
from .models.ledger_state import LedgerState
from .models.transaction import Transaction
from .services.classifier import is_valid_data_row
from .services.ingestion import find_header_row_index, ingest, reset
from .services.normalizer import to_transaction
from .services.ordering import sorted_transactions

__all__ = [
    "LedgerState",
    "Transaction",
    "find_header_row_index",
    "format_currency",
    "ingest",
    "is_valid_data_row",
    "parse_amount",
    "parse_date",
    "reset",
    "sorted_transactions",
    "to_transaction",
]

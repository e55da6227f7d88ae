"""Domain models for the statement ledger.

This package contains the transaction record, the ledger store and the
result/configuration models used throughout the application.
"""

from .config_models import DEFAULT_LAYOUT, LedgerConfig, StatementLayout
from .ledger_state import LedgerState
from .processing_result import FileStat, IngestResult, ProcessingResult
from .transaction import RawRow, Transaction

__all__ = [
    # Configuration models
    "DEFAULT_LAYOUT",
    "LedgerConfig",
    "StatementLayout",
    # Ledger models
    "LedgerState",
    "RawRow",
    "Transaction",
    # Result models
    "FileStat",
    "IngestResult",
    "ProcessingResult",
]

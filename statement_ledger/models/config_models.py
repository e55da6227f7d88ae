from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the statement ledger.

StatementLayout fixes the column contract with the upstream statement
format. Positions are 0-based and never inferred from header names.
"""


@dataclass(frozen=True)
class StatementLayout:
    """Column positions and markers of the statement spreadsheet format."""
    date_column: int = 1
    description_column: int = 2
    debit_column: int = 4
    credit_column: int = 5
    reference_column: int = 7
    min_row_length: int = 5
    header_marker: str = "FECHA"  # date column label of the header row
    balance_marker: str = "SALDO"  # running-balance rows, not transactions


DEFAULT_LAYOUT = StatementLayout()


@dataclass(frozen=True)
class LedgerConfig:
    """Root configuration object for a ledger run."""
    source_directory: str = "./statements"  # Directory scanned when no files are given
    file_extensions: tuple[str, ...] = (".xlsx",)
    currency_symbol: str = "$"
    error_log_directory: str = "./logs"
    layout: StatementLayout = field(default_factory=StatementLayout)

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models for the statement ledger.

IngestResult describes what one raw-row batch contributed to the ledger,
FileStat is its per-file summary, ProcessingResult aggregates a whole run.
"""


@dataclass(frozen=True)
class IngestResult:
    """Outcome of feeding one file's raw rows through the pipeline."""
    file_name: str
    header_index: int | None  # None: header marker not found
    candidate_rows: int  # rows after the header
    accepted_rows: int  # rows that passed the classifier
    new_transactions: int  # keys not seen before
    duplicate_transactions: int  # keys already in the ledger (or repeated in this file)

    @property
    def skipped_rows(self) -> int:
        return self.candidate_rows - self.accepted_rows

    @property
    def header_found(self) -> bool:
        return self.header_index is not None


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str
    status: str  # success/failed
    accepted_rows: int
    new_transactions: int
    duplicate_transactions: int
    elapsed_seconds: float
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of one run over a set of statement files."""
    success_files: int
    failed_files: int
    new_transactions: int
    duplicate_transactions: int
    skipped_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files

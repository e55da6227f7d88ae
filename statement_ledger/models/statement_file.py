from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

from .processing_result import IngestResult

"""StatementFile domain model and FileStatus enum.

A StatementFile is the outcome record of one spreadsheet after reading,
decoding and ingestion. A failed file never touches the ledger.
"""


class FileStatus(Enum):
    """Final status of a processed statement file.

    - SUCCESS: File decoded and ingested (possibly contributing zero rows)
    - FAILED: File could not be read or decoded
    """
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class StatementFile:
    """Processing outcome for a single statement file."""
    path: Path                            # Full path to the spreadsheet
    name: str                             # File name (provenance label)
    status: FileStatus
    start_time: datetime | None = None    # Processing start (UTC)
    end_time: datetime | None = None      # Processing end (UTC)
    ingest: IngestResult | None = None    # Set on success only
    error_type: str | None = None         # FILE_READ_ERROR / SPREADSHEET_PARSE_ERROR
    error: str | None = None              # Failure reason summary

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for error logging.

Structured error record written as one JSON line per file-level failure
(unreadable file, undecodable spreadsheet). Row-level problems are never
errors and never produce records; `row=-1` marks a file-level record.
"""

__all__ = [
    "ErrorRecord",
    "FILE_READ_ERROR",
    "SPREADSHEET_PARSE_ERROR",
]

FILE_READ_ERROR = "FILE_READ_ERROR"
SPREADSHEET_PARSE_ERROR = "SPREADSHEET_PARSE_ERROR"


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: statement filename being processed
        row: Row number (1-based). -1 for file-level errors
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Exception message or description
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, error_type: str, message: str, row: int = -1) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to a JSON line (fixed key set, no extras)."""
        return json.dumps(asdict(self), ensure_ascii=False)

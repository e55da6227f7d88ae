from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from statement_ledger.models.error_record import ErrorRecord

"""Run error log for statement files that could not be ingested.

- JSON Lines, fixed ErrorRecord schema (no extra keys)
- one `errors-YYYYMMDD-HHMMSS.log` (UTC) per run under the configured
  error_log_directory, created only when a run has something to report
- records are buffered while files are processed and written once at the end
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Buffered file-level error records of one ingestion run.

    Files are processed serially; no locking.
    """
    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR

    @property
    def logs_dir(self) -> Path:
        return self._logs_dir

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    @property
    def failed_files(self) -> list[str]:
        """Names of the statement files with at least one buffered record, sorted."""
        return sorted({r.file for r in self._records})

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def counts_by_type(self) -> dict[str, int]:
        """Buffered record count per error_type, e.g. {"FILE_READ_ERROR": 1}."""
        return dict(sorted(Counter(r.error_type for r in self._records).items()))

    def describe(self) -> str:
        """Compact `TYPE=n` listing for log lines ("" when empty)."""
        return " ".join(f"{k}={v}" for k, v in self.counts_by_type().items())

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the run log and clear the buffer.

        Returns the log path, or None when nothing was buffered (no
        directory or file is created in that case).
        """
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp

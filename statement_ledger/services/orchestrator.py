from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import decode_statement, read_statement_bytes
from ..logging.error_log import ErrorLogBuffer
from ..models.config_models import LedgerConfig
from ..models.error_record import FILE_READ_ERROR, SPREADSHEET_PARSE_ERROR, ErrorRecord
from ..models.ledger_state import LedgerState
from ..models.processing_result import FileStat, ProcessingResult
from ..models.statement_file import FileStatus, StatementFile
from .ingestion import ingest
from .progress import ProgressTracker

"""Service orchestration for statement ingestion.

Coordinates a run: scanning the source directory, reading and decoding each
statement file, feeding its rows to the ingestion pipeline and aggregating
per-file statistics.

Failure isolation: a file that cannot be read or decoded is logged and
recorded in the error log; it never stops the remaining files and never
touches the ledger.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents a run from starting."""
    pass


def scan_statement_files(directory: Path, extensions: Iterable[str] = (".xlsx",)) -> list[Path]:
    """Scan directory for statement files (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    wanted = {e.lower() for e in extensions}
    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in wanted),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _failed(file_path: Path, start_time: datetime, error_type: str, error: Exception) -> StatementFile:
    return StatementFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error_type=error_type,
        error=str(error),
    )


def _process_single_file(
    file_path: Path,
    ledger: LedgerState,
    config: LedgerConfig,
    error_log: ErrorLogBuffer,
) -> StatementFile:
    """Read, decode and ingest one statement file.

    Read failures (OSError) and decoder failures are converted into a FAILED
    StatementFile plus an ErrorRecord; the ledger is only mutated once the
    file is fully decoded.
    """
    start_time = datetime.now(UTC)

    try:
        content = read_statement_bytes(file_path)
    except OSError as e:
        logger.error(f"Failed to read file: {file_path.name}: {e}")
        error_log.append(ErrorRecord.create(file=file_path.name, error_type=FILE_READ_ERROR, message=str(e)))
        return _failed(file_path, start_time, FILE_READ_ERROR, e)

    try:
        rows = decode_statement(content)
    except Exception as e:  # openpyxl/zipfile/pandas raise a wide range of types
        logger.error(f"Failed to parse spreadsheet: {file_path.name}: {e}")
        error_log.append(
            ErrorRecord.create(file=file_path.name, error_type=SPREADSHEET_PARSE_ERROR, message=str(e))
        )
        return _failed(file_path, start_time, SPREADSHEET_PARSE_ERROR, e)

    result = ingest(rows, ledger, file_path.name, config.layout)
    logger.info(
        f"{file_path.name}: {result.accepted_rows} rows "
        f"({result.new_transactions} new, {result.duplicate_transactions} duplicate, "
        f"{result.skipped_rows} skipped)"
    )
    return StatementFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        ingest=result,
    )


def process_files(
    file_paths: Iterable[Path],
    ledger: LedgerState,
    config: LedgerConfig | None = None,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Ingest every file into `ledger`, isolating per-file failures.

    Args:
        file_paths: statement files, processed in the given order
        ledger: ledger to mutate in place
        config: run configuration (defaults when None)
        error_log: buffer for file-level error records (one per run when None)

    Returns:
        ProcessingResult with aggregated counts and per-file stats
    """
    config = config if config is not None else LedgerConfig()
    if error_log is None:
        error_log = ErrorLogBuffer(Path(config.error_log_directory))
    paths = list(file_paths)
    start_time = datetime.now(UTC)

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    new_total = 0
    duplicate_total = 0
    skipped_total = 0

    with ProgressTracker(len(paths)) as progress:
        for file_path in paths:
            progress.start_file(file_path)
            sf = _process_single_file(file_path, ledger, config, error_log)
            elapsed = sf.elapsed_seconds

            if sf.status == FileStatus.SUCCESS and sf.ingest is not None:
                success_count += 1
                new_total += sf.ingest.new_transactions
                duplicate_total += sf.ingest.duplicate_transactions
                skipped_total += sf.ingest.skipped_rows
                file_stats.append(
                    FileStat(
                        file_name=sf.name,
                        status=sf.status.value,
                        accepted_rows=sf.ingest.accepted_rows,
                        new_transactions=sf.ingest.new_transactions,
                        duplicate_transactions=sf.ingest.duplicate_transactions,
                        elapsed_seconds=elapsed,
                    )
                )
            else:
                failed_count += 1
                file_stats.append(
                    FileStat(
                        file_name=sf.name,
                        status=sf.status.value,
                        accepted_rows=0,
                        new_transactions=0,
                        duplicate_transactions=0,
                        elapsed_seconds=elapsed,
                        error=sf.error,
                    )
                )

            progress.finish_file(success=(sf.status == FileStatus.SUCCESS))
            progress.set_postfix(transactions=len(ledger), failed=progress.failed_files)

    error_counts = error_log.describe()
    try:
        log_path = error_log.flush()
    except OSError as e:
        # エラーログ書き込み失敗で run 全体は失敗させない
        logger.warning(f"failed to write error log: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log written: {log_path} ({error_counts})")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        new_transactions=new_total,
        duplicate_transactions=duplicate_total,
        skipped_rows=skipped_total,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )


def process_all(config: LedgerConfig, ledger: LedgerState) -> ProcessingResult:
    """Scan `config.source_directory` and ingest every statement file found.

    Raises:
        ProcessingError: when the source directory cannot be scanned
    """
    directory = Path(config.source_directory)
    file_paths = scan_statement_files(directory, config.file_extensions)
    if not file_paths:
        logger.info(f"no statement files in {directory}")
    return process_files(file_paths, ledger, config)

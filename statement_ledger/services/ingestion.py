from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.config_models import DEFAULT_LAYOUT, StatementLayout
from ..models.ledger_state import LedgerState
from ..models.processing_result import IngestResult
from ..models.transaction import RawRow
from .classifier import is_valid_data_row
from .normalizer import to_transaction

"""Ingestion pipeline: one raw-row batch (one file) into the ledger.

Steps:
1. Record the file name in loaded_files
2. Locate the header row (first row with a text cell containing the marker)
3. Take the rows strictly after it as the data region
4. Filter with the row classifier, map with the normalizer
5. Upsert by dedup key
6. Recompute aggregates from the whole ledger

A batch without a header contributes nothing. Batches commute, and
re-ingesting a batch leaves transactions and aggregates unchanged.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "find_header_row_index",
    "ingest",
    "reset",
]


def find_header_row_index(rows: Sequence[RawRow | None], marker: str = DEFAULT_LAYOUT.header_marker) -> int | None:
    """Index of the first row holding a text cell that contains `marker` (case-insensitive)."""
    needle = marker.upper()
    for index, row in enumerate(rows):
        if not row:
            continue
        if any(isinstance(cell, str) and needle in cell.upper() for cell in row):
            return index
    return None


def ingest(
    rows: Sequence[RawRow | None],
    ledger: LedgerState,
    file_name: str,
    layout: StatementLayout = DEFAULT_LAYOUT,
) -> IngestResult:
    """Feed one file's raw rows through classifier + normalizer into the ledger."""
    ledger.add_file(file_name)

    header_index = find_header_row_index(rows, layout.header_marker)
    if header_index is None:
        logger.warning(f"{file_name}: header row ({layout.header_marker}) not found, no rows ingested")
        data_rows: Sequence[RawRow | None] = []
    else:
        data_rows = rows[header_index + 1:]

    transactions = [to_transaction(row, layout) for row in data_rows if is_valid_data_row(row, layout)]
    new_count, duplicate_count = ledger.upsert(transactions)

    result = IngestResult(
        file_name=file_name,
        header_index=header_index,
        candidate_rows=len(data_rows),
        accepted_rows=len(transactions),
        new_transactions=new_count,
        duplicate_transactions=duplicate_count,
    )
    logger.debug(
        f"{file_name}: header={header_index} candidates={result.candidate_rows} "
        f"accepted={result.accepted_rows} skipped={result.skipped_rows} "
        f"new={new_count} duplicates={duplicate_count}"
    )
    return result


def reset(ledger: LedgerState) -> None:
    ledger.reset()
    logger.debug("ledger reset")

from __future__ import annotations

import io
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.transaction import RawRow

"""Statement spreadsheet reader.

Decodes a workbook into positional raw rows, the shape the ingestion
pipeline consumes:
- no header row (rows are plain positional lists)
- raw cell values preserved (dtype=object, nothing pre-stringified);
  text such as "NA", "N/A" or "NULL" stays text
- absent cells as None
- fully blank rows omitted

The workbook format (.xlsx/.xlsm via openpyxl, legacy .xls via xlrd) is
detected by pandas from the content itself.

Reading bytes and decoding them are separate steps so callers can tell an
unreadable file (OSError) from an undecodable one (anything the decoder raises).
"""

__all__ = [
    "decode_statement",
    "read_statement_bytes",
    "read_statement_file",
]


def read_statement_bytes(path: Path) -> bytes:
    """Read the raw file content. Raises OSError when the file is unreadable."""
    return path.read_bytes()


def _to_cell(value: Any) -> Any:
    if value is None:
        return None
    # pd.isna は list 等で配列を返すためスカラー判定を先に行う
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    # numpy スカラー → Python ネイティブ
    if hasattr(value, "item") and not isinstance(value, (pd.Timestamp, str, bytes)):
        try:
            return value.item()
        except (TypeError, ValueError):
            return value
    return value


def decode_statement(content: bytes, sheet: int | str = 0) -> list[RawRow]:
    """Decode workbook bytes into raw rows of the given sheet (first by default).

    Parameters
    ----------
    content: workbook bytes (.xlsx / .xlsm / .xls)
    sheet: sheet index or name
    """
    # 既定の NA 文字列 ("NA", "NULL", ...) は変換しない: 空セル ("") のみ NaN
    df = pd.read_excel(
        io.BytesIO(content),
        sheet_name=sheet,
        header=None,
        dtype=object,
        keep_default_na=False,
        na_values=[""],
    )
    rows: list[RawRow] = []
    for raw in df.itertuples(index=False, name=None):
        cells = [_to_cell(v) for v in raw]
        # 全セル空の行はスキップ
        if all(c is None for c in cells):
            continue
        rows.append(cells)
    return rows


def read_statement_file(path: Path, sheet: int | str = 0) -> list[RawRow]:
    return decode_statement(read_statement_bytes(path), sheet=sheet)

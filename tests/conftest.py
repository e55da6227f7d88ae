# Shared pytest fixtures
from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path

import pandas as pd
import pytest

HEADER = ["N", "Fecha", "Concepto", "Oficina", "Cargo", "Abono", "Saldo", "Referencia"]


def make_statement_xlsx(path: Path, rows: list[list[object]]) -> Path:
    """Write positional rows (no header handling) to a single-sheet workbook."""
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Movimientos", header=False, index=False)
    return path


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "statements").mkdir()
        monkeypatch.chdir(p)
        for var in ("STATEMENT_LEDGER_CONFIG", "STATEMENT_LEDGER_SOURCE_DIR", "STATEMENT_LEDGER_CURRENCY"):
            monkeypatch.delenv(var, raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./statements
file_extensions: [".xlsx"]
currency_symbol: "$"
error_log_directory: ./logs
layout:
  date_column: 1
  description_column: 2
  debit_column: 4
  credit_column: 5
  reference_column: 7
  min_row_length: 5
  header_marker: FECHA
  balance_marker: SALDO
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "ledger.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def january_rows() -> list[list[object]]:
    return [
        ["Banco Ejemplo", "Extracto de cuenta"],
        HEADER,
        [1, "", "SALDO ANTERIOR", None, None, None, 1000, None],
        [2, "03/01/2024", "PAGO TARJETA", "0001", "1.234,56", None, None, "REF-001"],
        [3, "05/01/2024", "NOMINA ENERO", "0001", None, 2500, None, "REF-002"],
        [4, "10/01/2024", "RECIBO LUZ", "0001", 80.25, None, None, "REF-003"],
    ]


@pytest.fixture()
def february_rows() -> list[list[object]]:
    # 10/01 の行は january_rows と重複 (同じ期間を二度エクスポート)
    return [
        ["Banco Ejemplo", "Extracto de cuenta"],
        HEADER,
        [1, "10/01/2024", "RECIBO LUZ", "0001", 80.25, None, None, "REF-003"],
        [2, "03/02/2024", "NOMINA FEBRERO", "0001", None, 2500, None, "REF-004"],
        [3, "15/02/2024", "ALQUILER", "0001", 900, None, None, "REF-005"],
        [4, "", "SALDO FINAL", None, None, None, 1219.19, None],
    ]


@pytest.fixture()
def statement_factory(temp_workdir: Path) -> Callable[[str, list[list[object]]], Path]:
    def _make(name: str, rows: list[list[object]]) -> Path:
        return make_statement_xlsx(temp_workdir / "statements" / name, rows)
    return _make


@pytest.fixture(autouse=True)
def _detach_app_logger():
    """Drop handlers bound to a previous test's captured stdout."""
    yield
    from statement_ledger.logging.init import APP_LOGGER_NAME, reset_logging

    reset_logging()
    logger = logging.getLogger(APP_LOGGER_NAME)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True

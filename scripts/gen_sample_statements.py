#!/usr/bin/env python3
"""Synthetic bank-statement generator for manual runs and performance tests.

Generates statement workbooks in the layout the ledger expects:
- Row 1: Bank / account title row
- Row 2: Header row (N, Fecha, Concepto, Oficina, Cargo, Abono, Saldo, Referencia)
- Row 3: "SALDO ANTERIOR" opening balance row
- Row 4+: movements (date as text or as a date cell, amounts as numbers or
  Spanish-formatted text)
- Last row: "SALDO FINAL"

Consecutive files overlap by `--overlap` movements so that deduplication
across uploads can be observed.
"""
from __future__ import annotations

import argparse
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADER = ["N", "Fecha", "Concepto", "Oficina", "Cargo", "Abono", "Saldo", "Referencia"]

CONCEPTS_DEBIT = ["PAGO TARJETA", "RECIBO LUZ", "RECIBO AGUA", "ALQUILER", "COMPRA SUPERMERCADO", "CAJERO"]
CONCEPTS_CREDIT = ["NOMINA", "TRANSFERENCIA RECIBIDA", "DEVOLUCION", "INTERESES"]


def _es_amount(value: float) -> str:
    """1234.5 -> '1.234,50'"""
    return f"{value:,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")


def generate_movements(count: int, seed: int = 42, start: datetime | None = None) -> list[list[Any]]:
    """Generate `count` movement rows (no title/header/balance rows).

    Movement i is fully determined by (seed, i), so two calls with the same
    seed share their rows; that is how overlapping files are produced.
    """
    start = start or datetime(2024, 1, 1)
    rows: list[list[Any]] = []
    for i in range(count):
        rng = np.random.default_rng([seed, i])
        day = start + timedelta(days=int(i // 3))
        is_credit = rng.random() < 0.25
        amount = float(np.round(rng.uniform(1, 3000 if is_credit else 500), 2))
        concept = rng.choice(CONCEPTS_CREDIT if is_credit else CONCEPTS_DEBIT)
        date_cell: Any = day if rng.random() < 0.5 else day.strftime("%d/%m/%Y")
        amount_cell: Any = _es_amount(amount) if rng.random() < 0.5 else amount
        rows.append(
            [
                i + 1,
                date_cell,
                f"{concept} {i:05d}",
                "0001",
                None if is_credit else amount_cell,
                amount_cell if is_credit else None,
                None,
                f"REF-{seed}-{i:06d}",
            ]
        )
    return rows


def build_statement(movements: list[list[Any]], title: str = "Banco Ejemplo - Extracto de cuenta") -> list[list[Any]]:
    return [
        [title],
        HEADER,
        [None, None, "SALDO ANTERIOR", None, None, None, 0, None],
        *movements,
        [None, None, "SALDO FINAL", None, None, None, 0, None],
    ]


def create_statement_file(output_path: Path, rows: list[list[Any]]) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Movimientos", header=False, index=False)
    return output_path


def create_overlapping_statements(
    output_dir: Path, files: int, rows: int, overlap: int, seed: int = 42
) -> list[Path]:
    """Write `files` statements of `rows` movements each; neighbours share `overlap` movements."""
    step = max(1, rows - overlap)
    movements = generate_movements(step * (files - 1) + rows, seed=seed)
    paths = []
    for n in range(files):
        chunk = movements[n * step:n * step + rows]
        paths.append(create_statement_file(output_dir / f"extracto_{n + 1:02d}.xlsx", build_statement(chunk)))
    return paths


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic bank statements",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s statements/
  %(prog)s statements/ --files 3 --rows 5000 --overlap 500 --seed 7
        """,
    )
    parser.add_argument("output_dir", type=Path, help="Directory for the generated .xlsx files")
    parser.add_argument("--files", type=int, default=2, help="Number of statement files (default: 2)")
    parser.add_argument("--rows", type=int, default=1000, help="Movements per file (default: 1000)")
    parser.add_argument("--overlap", type=int, default=100, help="Movements shared by neighbouring files (default: 100)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.files < 1 or args.rows < 1 or args.overlap < 0:
        print("Error: --files and --rows must be positive, --overlap non-negative", file=sys.stderr)
        return 1

    paths = create_overlapping_statements(args.output_dir, args.files, args.rows, args.overlap, args.seed)
    for p in paths:
        print(f"Created statement: {p}")
    unique = max(1, args.rows - args.overlap) * (args.files - 1) + args.rows
    print(f"  Movements per file: {args.rows}, unique movements: {unique}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

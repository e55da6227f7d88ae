from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from statement_ledger.config.loader import (
    DEFAULT_CONFIG_PATH,
    ENV_CONFIG_PATH,
    ConfigError,
    build_config,
    load_config,
)
from statement_ledger.excel.reader import read_statement_file
from statement_ledger.excel.values import cell_text
from statement_ledger.logging.init import enable_debug, log_summary, setup_logging
from statement_ledger.models.config_models import LedgerConfig
from statement_ledger.models.ledger_state import LedgerState
from statement_ledger.services.display import render_dashboard, render_loaded_files, render_table
from statement_ledger.services.ingestion import find_header_row_index
from statement_ledger.services.orchestrator import (
    ProcessingError,
    process_all,
    process_files,
    scan_statement_files,
)
from statement_ledger.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env, then config (explicit path must exist; the default may be absent)
- Ingest the files given on the command line, or every statement file in
  source_directory
- Print dashboard figures, loaded files, optionally the transaction table
- Finish with a SUMMARY line; exit code reflects per-file failures
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv (values override the process environment)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Bank statement ledger: ingest, deduplicate and total statement exports")
    p.add_argument("files", nargs="*", type=Path, help="Statement files (default: scan source_directory)")
    p.add_argument("--config", type=Path, default=None, help=f"Config file (default: {DEFAULT_CONFIG_PATH})")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--show-transactions", action="store_true", help="Print the sorted transaction table")
    p.add_argument("--inspect-data", action="store_true", help="Print detected header & first data rows then exit")
    return p.parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> LedgerConfig:
    explicit = args.config or (Path(os.environ[ENV_CONFIG_PATH]) if os.getenv(ENV_CONFIG_PATH) else None)
    if explicit is not None:
        return load_config(explicit)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    # 設定ファイルなし: 既定値 + 環境変数のみ
    return build_config({})


def _inspect_data(paths: list[Path], cfg: LedgerConfig) -> int:
    if not paths:
        print("inspect: no statement files")
        return EXIT_SUCCESS_ALL
    for f in paths:
        print(f"FILE: {f.name}")
        try:
            rows = read_statement_file(f)
        except Exception as e:
            print(f"  read_error: {e}")
            continue
        header = find_header_row_index(rows, cfg.layout.header_marker)
        if header is None:
            print(f"  header: not found ({cfg.layout.header_marker}) rows={len(rows)}")
            continue
        print(f"  header: row {header} cells={[cell_text(c) for c in rows[header]]}")
        for row in rows[header + 1:header + 1 + INSPECT_SAMPLE_ROWS]:
            print(f"    {[cell_text(c) for c in row]}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # 空リスト [] はそのまま使う (None のときのみ sys.argv を読む)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = _resolve_config(args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    ledger = LedgerState()
    try:
        if args.files:
            if args.inspect_data:
                return _inspect_data(list(args.files), cfg)
            result = process_files(args.files, ledger, cfg)
        else:
            logger.info(f"Processing files from: {cfg.source_directory}")
            if args.inspect_data:
                return _inspect_data(scan_statement_files(Path(cfg.source_directory), cfg.file_extensions), cfg)
            result = process_all(cfg, ledger)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    dashboard = render_dashboard(ledger, cfg.currency_symbol)
    logger.info(render_loaded_files(ledger))
    logger.info(
        f"income={dashboard['income']} outcome={dashboard['outcome']} net_balance={dashboard['net_balance']}"
    )
    if args.show_transactions:
        for line in render_table(ledger):
            print(line)

    summary_line = render_summary_line(result, ledger, cfg.currency_symbol)
    # log_summary が "SUMMARY " を付与するため除去
    log_summary(summary_line[len("SUMMARY "):])

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL

from __future__ import annotations

from pathlib import Path

from statement_ledger.cli import main as cli_main
from statement_ledger.logging.init import reset_logging


def test_cli_no_files_success(write_config, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "INFO No files loaded" in out
    assert "SUMMARY files=0 success=0 failed=0 transactions=0" in out


def test_cli_without_config_file_uses_defaults(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 0
    assert "Processing files from: ./statements" in out


def test_cli_explicit_missing_config_is_fatal(temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["--config", "config/nope.yml"])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR config: config file not found" in out


def test_cli_config_path_from_env(temp_workdir: Path, monkeypatch, capsys):
    reset_logging()
    monkeypatch.setenv("STATEMENT_LEDGER_CONFIG", "config/other.yml")
    code = cli_main([])
    assert code == 1
    assert "config/other.yml" in capsys.readouterr().out


def test_cli_directory_missing(write_config, temp_workdir: Path, capsys):
    reset_logging()
    text = write_config.read_text(encoding="utf-8").replace("./statements", "./missing_dir")
    write_config.write_text(text, encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == 1
    assert "ERROR processing: Directory not found:" in out


def test_cli_dotenv_overrides_source_directory(write_config, temp_workdir: Path, monkeypatch, capsys):
    reset_logging()
    monkeypatch.delenv("STATEMENT_LEDGER_SOURCE_DIR", raising=False)
    (temp_workdir / "otros").mkdir()
    (temp_workdir / ".env").write_text("STATEMENT_LEDGER_SOURCE_DIR=./otros\n", encoding="utf-8")
    try:
        code = cli_main([])
    finally:
        import os
        os.environ.pop("STATEMENT_LEDGER_SOURCE_DIR", None)
    assert code == 0
    assert "Processing files from: ./otros" in capsys.readouterr().out


def test_cli_debug_mode(write_config, temp_workdir: Path, capsys):
    reset_logging()
    code = cli_main(["--debug"])
    out = capsys.readouterr().out
    assert code == 0
    assert "DEBUG debug mode enabled" in out
    reset_logging()


def test_cli_inspect_data(write_config, statement_factory, january_rows, capsys):
    reset_logging()
    statement_factory("enero.xlsx", january_rows)
    code = cli_main(["--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: enero.xlsx" in out
    assert "header: row 1" in out
    assert "SALDO ANTERIOR" in out
    assert "SUMMARY" not in out

from __future__ import annotations

import json
from pathlib import Path

from statement_ledger.logging.error_log import ErrorLogBuffer, ErrorRecord
from statement_ledger.models.error_record import FILE_READ_ERROR, SPREADSHEET_PARSE_ERROR

KEYS = {"timestamp", "file", "row", "error_type", "message"}


def test_error_record_creation_and_json_line():
    rec = ErrorRecord.create(file="enero.xlsx", error_type=FILE_READ_ERROR, message="permission denied")
    data = json.loads(rec.to_json_line())
    assert data["file"] == "enero.xlsx"
    assert data["row"] == -1
    assert data["error_type"] == "FILE_READ_ERROR"
    assert data["timestamp"].endswith("Z")
    assert set(data.keys()) == KEYS


def test_error_record_keeps_non_ascii():
    rec = ErrorRecord.create(file="año.xlsx", error_type=SPREADSHEET_PARSE_ERROR, message="formato inválido")
    assert "año.xlsx" in rec.to_json_line()


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("a.xlsx", FILE_READ_ERROR, "denied"))
    buf.append(ErrorRecord.create("b.xlsx", SPREADSHEET_PARSE_ERROR, "not a zip file"))
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == temp_workdir / "logs"
    assert path.name.startswith("errors-") and path.suffix == ".log"
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        assert set(json.loads(raw).keys()) == KEYS
    # flush 後バッファクリア
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes_append(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    buf.append(ErrorRecord.create("a.xlsx", FILE_READ_ERROR, "denied"))
    path = buf.flush()
    size1 = path.stat().st_size
    buf.append(ErrorRecord.create("a.xlsx", FILE_READ_ERROR, "denied again"))
    path2 = buf.flush()
    assert path == path2
    assert path2.stat().st_size > size1


def test_empty_flush_creates_nothing(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs_empty")
    assert buf.flush() is None
    assert not (temp_workdir / "logs_empty").exists()


def test_error_counts_and_failed_files(temp_workdir: Path):
    buf = ErrorLogBuffer(temp_workdir / "logs")
    assert buf.describe() == ""
    buf.append(ErrorRecord.create("roto.xlsx", SPREADSHEET_PARSE_ERROR, "not a zip file"))
    buf.append(ErrorRecord.create("a.xlsx", FILE_READ_ERROR, "denied"))
    buf.append(ErrorRecord.create("b.xlsx", FILE_READ_ERROR, "denied"))

    assert buf.counts_by_type() == {"FILE_READ_ERROR": 2, "SPREADSHEET_PARSE_ERROR": 1}
    assert buf.describe() == "FILE_READ_ERROR=2 SPREADSHEET_PARSE_ERROR=1"
    assert buf.failed_files == ["a.xlsx", "b.xlsx", "roto.xlsx"]
    assert len(buf) == 3
    buf.flush()
    assert buf.failed_files == []

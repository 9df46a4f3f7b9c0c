from __future__ import annotations

from pathlib import Path

import pytest

from textflow.components import FileHandler, retry_on_exception
from textflow.variables import CONST_DEFAULT_OUTPUT_SUFFIX, CONST_DOCUMENT_OUTPUT_SUFFIX, PATH_OUTPUT_DIR


def test_timestamped_output_uses_input_stem(monkeypatch, tmp_path):
    # 固定时间戳，避免不稳定性
    monkeypatch.setattr("time.strftime", lambda fmt: "20250101_120000")
    out = FileHandler.timestamped_output_path(Path("/tmp/manual.pdf"), output_dir=tmp_path)
    assert out.parent == tmp_path
    assert out.name == f"manual_20250101_120000{CONST_DEFAULT_OUTPUT_SUFFIX}"


def test_timestamped_output_defaults(monkeypatch):
    monkeypatch.setattr("time.strftime", lambda fmt: "20250101_120000")
    out = FileHandler.timestamped_output_path(None, suffix=CONST_DOCUMENT_OUTPUT_SUFFIX)
    assert out.parent == PATH_OUTPUT_DIR
    assert out.name == f"output_20250101_120000{CONST_DOCUMENT_OUTPUT_SUFFIX}"


def test_validate_readable_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError, match=r"\[1001\]"):
        FileHandler.validate_readable_file(tmp_path / "missing.pdf")


def test_retry_on_exception_recovers(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda s: None)
    calls = []

    @retry_on_exception(retries=2)
    def flaky():
        calls.append(1)
        if len(calls) < 3:
            raise OSError("busy")
        return "ok"

    assert flaky() == "ok"
    assert len(calls) == 3


def test_retry_on_exception_gives_up(monkeypatch):
    monkeypatch.setattr("time.sleep", lambda s: None)

    @retry_on_exception(retries=1)
    def always_fails():
        raise OSError("disk")

    with pytest.raises(OSError):
        always_fails()

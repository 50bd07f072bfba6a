"""Tests for pydantic-settings configuration."""
from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from apilog.config import Settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path: Path) -> None:
    for var in (
        "APILOG_LOG_FILE_PATH",
        "APILOG_OUTPUT_FILE_PATH",
        "APILOG_WORKERS",
        "APILOG_REPORT_LANGUAGE",
        "APILOG_ENCODING",
        "APILOG_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings()
        assert s.log_file_path is None
        assert s.output_file_path is None
        assert s.workers == 1
        assert s.encoding == "utf-8"
        assert s.report_language == "en"

    def test_env_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("APILOG_LOG_FILE_PATH", "/var/log/api.log")
        monkeypatch.setenv("APILOG_WORKERS", "4")
        s = Settings()
        assert s.log_file_path == Path("/var/log/api.log")
        assert s.workers == 4

    def test_dotenv_file(self, tmp_path: Path) -> None:
        (tmp_path / ".env").write_text("APILOG_OUTPUT_FILE_PATH=out/report.txt\n", encoding="utf-8")
        assert Settings().output_file_path == Path("out/report.txt")

    @pytest.mark.parametrize("var,value", [
        ("APILOG_WORKERS", "0"),
        ("APILOG_REPORT_LANGUAGE", "fr"),
        ("APILOG_ENCODING", "no-such-codec"),
        ("APILOG_LOG_LEVEL", "verbose"),
    ])
    def test_invalid_values(self, monkeypatch, var: str, value: str) -> None:
        monkeypatch.setenv(var, value)
        with pytest.raises(ValidationError):
            Settings()

    def test_log_level_case_insensitive(self, monkeypatch) -> None:
        monkeypatch.setenv("APILOG_LOG_LEVEL", "debug")
        assert Settings().log_level == "DEBUG"

    def test_encoding_alias_accepted(self, monkeypatch) -> None:
        monkeypatch.setenv("APILOG_ENCODING", "latin-1")
        assert Settings().encoding == "latin-1"

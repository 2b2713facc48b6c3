"""
Unit tests for errhandling.core.termination.
"""

import logging

import pytest

from errhandling.core.chain import construct
from errhandling.core.config import ErrhandlingConfig, reset_config, set_config
from errhandling.core.termination import Unrecoverable, terminate


class TestTerminate:
    def test_raises_unrecoverable_by_default(self, quiet_termination):
        error = construct("fatal")

        with pytest.raises(Unrecoverable) as exc_info:
            terminate(error, "Stopping")

        assert exc_info.value.error is error
        assert exc_info.value.reason == "Stopping"
        assert str(exc_info.value) == "Stopping: fatal"

    def test_unrecoverable_is_not_an_exception(self):
        assert not issubclass(Unrecoverable, Exception)
        assert issubclass(Unrecoverable, BaseException)

    def test_foreign_error_promoted(self, quiet_termination):
        with pytest.raises(Unrecoverable) as exc_info:
            terminate(RuntimeError("boom"), "Stopping")

        assert exc_info.value.error.message == "boom"

    def test_exit_code(self):
        set_config(
            ErrhandlingConfig.model_validate(
                {"termination": {"exit_code": 70, "log_report": False}}
            )
        )

        with pytest.raises(SystemExit) as exc_info:
            terminate(construct("fatal"), "Stopping")

        assert exc_info.value.code == 70
        assert isinstance(exc_info.value.__cause__, Unrecoverable)

    def test_logs_full_report(self, caplog):
        error = construct("top", construct("root"))

        with caplog.at_level(logging.CRITICAL, logger="errhandling"):
            with pytest.raises(Unrecoverable):
                terminate(error, "Stopping")

        assert len(caplog.records) == 1
        record = caplog.records[0]
        assert record.levelno == logging.CRITICAL
        assert record.name == "errhandling.core.termination"
        assert record.getMessage() == f"Stopping\n{error.full_report()}"

    def test_log_report_disabled(self, caplog, quiet_termination):
        with caplog.at_level(logging.DEBUG, logger="errhandling"):
            with pytest.raises(Unrecoverable):
                terminate(construct("fatal"), "Stopping")

        assert not [r for r in caplog.records if r.levelno == logging.CRITICAL]

    def test_broken_config_file_still_terminates(self, tmp_path, monkeypatch, caplog):
        """An unreadable configuration falls back to the default settings."""
        path = tmp_path / "errhandling.yaml"
        path.write_text("termination: [unclosed")
        monkeypatch.setenv("ERRHANDLING_CONFIG", str(path))
        reset_config()
        error = construct("fatal")

        with caplog.at_level(logging.WARNING, logger="errhandling"):
            with pytest.raises(Unrecoverable) as exc_info:
                terminate(error, "Stopping")

        assert exc_info.value.error is error
        levels = [r.levelno for r in caplog.records]
        assert logging.WARNING in levels
        assert logging.CRITICAL in levels

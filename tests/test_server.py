"""Tests for the process entry point, errors and logging setup."""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from taskboard.errors import AppError, ErrorKind
from taskboard.logging_setup import _NoiseFilter
from taskboard.server import main


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ("ENV", "PORT", "DATABASE_URL", "HOST", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("taskboard.server.setup_logging", lambda level: None)
    return monkeypatch


def test_main_exits_on_missing_config(clean_env, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 1
    assert "PORT: empty string" in capsys.readouterr().err


def test_main_exits_on_database_failure(clean_env, tmp_path: Path, capsys) -> None:
    clean_env.setenv("PORT", "8000")
    clean_env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'no' / 'such' / 'dir.db'}")
    with pytest.raises(SystemExit) as excinfo:
        main()
    assert excinfo.value.code == 1
    assert "failed to prepare database" in capsys.readouterr().err


def test_main_serves_app(clean_env, tmp_path: Path) -> None:
    clean_env.setenv("PORT", "8123")
    clean_env.setenv("HOST", "127.0.0.1")
    clean_env.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'tasks.db'}")

    with patch("taskboard.server.uvicorn.run") as mock_run:
        main()

    mock_run.assert_called_once()
    _, kwargs = mock_run.call_args
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 8123
    assert kwargs["log_config"] is None


def test_error_status_codes() -> None:
    assert AppError.validation("bad").status_code == 400
    assert AppError.storage("db").status_code == 500
    assert AppError.render("tpl").status_code == 500
    assert AppError.render("tpl").kind is ErrorKind.RENDER
    assert str(AppError.validation("bad")) == "bad"


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_noise_filter() -> None:
    noise = _NoiseFilter()
    assert noise.filter(_record("taskboard.database", logging.DEBUG))
    assert noise.filter(_record("uvicorn.access", logging.INFO))
    assert not noise.filter(_record("sqlalchemy.engine", logging.INFO))
    assert noise.filter(_record("sqlalchemy.engine", logging.WARNING))

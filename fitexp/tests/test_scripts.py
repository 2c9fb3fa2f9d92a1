import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

import scripts
from exceptions import UnauthorizedError
from logging_config import configure_logging
from models.workout import TimeExp
from services.workout_sync import SyncResult, SyncState


@pytest.fixture
def logging_setup(monkeypatch):
    setup = MagicMock()
    monkeypatch.setattr(scripts, "configure_logging", setup)
    return setup


def test_sync_workout_configures_logging_once(monkeypatch, logging_setup, capsys):
    sync = AsyncMock(return_value=SyncResult(
        athlete_id=42,
        discord_id="discord-1",
        activity_id=1001,
        state=SyncState.DONE,
        exp=TimeExp(minutes=30),
        total_exp=30,
        thirty_day_exp=120,
        message_id="msg-1",
        created=True
    ))
    monkeypatch.setattr(scripts, "_sync", sync)
    monkeypatch.setattr("sys.argv", ["sync-workout", "42", "1001"])

    scripts.sync_workout()

    logging_setup.assert_called_once_with()
    sync.assert_awaited_once_with(42, 1001)
    assert "Posted activity 1001 (message msg-1)" in capsys.readouterr().out


def test_sync_workout_exits_on_failure(monkeypatch, logging_setup):
    monkeypatch.setattr(scripts, "_sync", AsyncMock(side_effect=UnauthorizedError("not linked", athlete_id=42)))
    monkeypatch.setattr("sys.argv", ["sync-workout", "42", "1001"])

    with pytest.raises(SystemExit) as exc_info:
        scripts.sync_workout()

    assert exc_info.value.code == 1


def test_sync_workout_rejects_non_numeric_ids(monkeypatch, logging_setup):
    monkeypatch.setattr("sys.argv", ["sync-workout", "42", "latest"])

    with pytest.raises(SystemExit):
        scripts.sync_workout()

    logging_setup.assert_not_called()


def test_configure_logging_twice_keeps_one_uvicorn_handler():
    configure_logging()
    configure_logging()

    assert len(logging.getLogger("uvicorn").handlers) == 1

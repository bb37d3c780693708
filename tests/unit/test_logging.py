"""Tests for structlog setup and the events emitted by the session."""

import logging
from datetime import date

import pytest
import structlog
from structlog.testing import capture_logs

from src.core.logging import setup_logging
from src.session import LifeSession

TODAY = date(2024, 1, 1)


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestSetupLogging:
    def test_renders_to_stdout(self, capsys, reset_structlog):
        setup_logging()
        structlog.get_logger("life_calendar").info("cycle_computed", total_days=29220)

        out = capsys.readouterr().out
        assert "cycle_computed" in out
        assert "29220" in out

    def test_filters_below_level(self, capsys, reset_structlog):
        setup_logging(logging.WARNING)
        log = structlog.get_logger("life_calendar")
        log.info("hidden_event")
        log.warning("shown_event")

        out = capsys.readouterr().out
        assert "hidden_event" not in out
        assert "shown_event" in out


class TestSessionEvents:
    def test_rejection_is_logged_as_warning(self):
        with capture_logs() as logs:
            session = LifeSession(today_provider=lambda: TODAY)
            session.submit_profile("2999-01-01", 80)

        (entry,) = [e for e in logs if e["event"] == "profile_rejected"]
        assert entry["log_level"] == "warning"
        assert entry["reason"] == "invalid_profile"
        assert entry["component"] == "life_session"

    def test_cycle_and_commit_events(self):
        with capture_logs() as logs:
            session = LifeSession(today_provider=lambda: TODAY)
            session.submit_profile("2000-01-01", 80)
            session.submit_marker("A", "2010-01-01", marker_id="a")
            session.get_summary()

        events = [e["event"] for e in logs]
        assert "profile_committed" in events
        assert "marker_added" in events
        (cycle,) = [e for e in logs if e["event"] == "cycle_computed"]
        assert cycle["total_days"] == 29220
        assert cycle["lived_days"] == 8766
        assert cycle["markers"] == 1

"""Tests for the terminal dashboard commands."""
import click
import pytest
from click.testing import CliRunner

import dashboard.run as dashboard
from seva_store.store import SevaStore

from conftest import counter_ids


@pytest.fixture
def demo_store(monkeypatch: pytest.MonkeyPatch) -> SevaStore:
    """The store the dashboard seeds, kept reachable so tests can inspect it."""
    store = SevaStore(id_factory=counter_ids("new"))
    monkeypatch.setattr(dashboard, "SevaStore", lambda: store)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    return store


def test_parse_weekdays() -> None:
    assert dashboard.parse_weekdays("MTWRF") == {1, 2, 3, 4, 5}
    assert dashboard.parse_weekdays("us") == {0, 6}
    with pytest.raises(click.BadParameter):
        dashboard.parse_weekdays("MX")


def test_schedule_single_day(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(
        dashboard.main, ["schedule", "--seva", "s1", "--person", "p2", "--start-date", "2024-01-15"]
    )

    assert result.exit_code == 0, result.output
    assert "Scheduled 1 seva(s)" in result.output
    assert len(demo_store.schedule) == 7
    entry = demo_store.get_entry("new1")
    assert (entry.date, entry.start_time, entry.end_time) == ("2024-01-15", "05:00", "05:45")


def test_schedule_recurring_weekdays(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(
        dashboard.main,
        [
            "schedule", "--seva", "s2", "--person", "p3",
            "--start-date", "2024-01-01", "--end-date", "2024-01-14", "--weekdays", "MTWRF",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Scheduled 10 seva(s)" in result.output
    series = [e for e in demo_store.schedule if e.group_id == "new1"]
    assert len(series) == 10


def test_schedule_with_no_matching_days_fails(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(
        dashboard.main,
        [
            "schedule", "--seva", "s1", "--person", "p1",
            "--start-date", "2024-01-01", "--end-date", "2024-01-05", "--weekdays", "US",
        ],
    )

    assert result.exit_code == 1
    assert "No dates selected within the range." in result.output


def test_schedule_rejects_unknown_weekday_letter(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(
        dashboard.main,
        ["schedule", "--seva", "s1", "--person", "p1", "--start-date", "2024-01-01", "--weekdays", "MX"],
    )

    assert result.exit_code == 2


def test_calendar_rejects_bad_month(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(dashboard.main, ["calendar", "--month", "2024-13"])
    assert result.exit_code == 2


def test_remind_without_key_shows_fallback(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(dashboard.main, ["remind", "sch1"])

    assert result.exit_code == 0, result.output
    assert "API Key is missing" in result.output


def test_remind_unknown_entry(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(dashboard.main, ["remind", "missing"])
    assert result.exit_code == 1


def test_schedule_with_empty_weekdays_is_rejected(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(
        dashboard.main,
        [
            "schedule", "--seva", "s1", "--person", "p1",
            "--start-date", "2024-01-01", "--end-date", "2024-01-07", "--weekdays", "",
        ],
    )

    assert result.exit_code == 1
    assert "No dates selected within the range." in result.output
    assert len(demo_store.schedule) == 6


def test_upcoming_rejects_bad_date(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(dashboard.main, ["upcoming", "--today", "tomorrow"])

    assert result.exit_code == 2
    assert "--today" in result.output


def test_calendar_shift_moves_month(demo_store: SevaStore) -> None:
    result = CliRunner().invoke(dashboard.main, ["calendar", "--month", "2024-01", "--shift", "-1"])

    assert result.exit_code == 0, result.output
    assert "December 2023" in result.output

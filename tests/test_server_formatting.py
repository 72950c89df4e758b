"""Tests for the plain-text listings returned by the MCP tools."""
from datetime import date

from scheduler.form import author_schedule
from seva_store.models import UNKNOWN_LABEL
from seva_store.server import format_month_calendar, format_upcoming
from seva_store.store import SevaStore


def test_empty_month(store: SevaStore) -> None:
    assert format_month_calendar(store, "2024-01") == "📅 No sevas scheduled in January 2024."


def test_month_listing(stocked_store: SevaStore) -> None:
    author_schedule(stocked_store, "id2", "id1", "2024-01-15")
    author_schedule(stocked_store, "id2", "id1", "2024-01-15", start_time="18:30")
    author_schedule(stocked_store, "id2", "id1", "2024-01-20")

    output = format_month_calendar(stocked_store, "2024-01")

    assert output.startswith("📅 SEVA CALENDAR - JANUARY 2024")
    assert "Morning Aarti" in output
    assert "Rahul Sharma" in output
    assert "06:00-07:00" in output
    assert output.index("06:00-07:00") < output.index("18:30-19:30")
    assert output.endswith("Total: 3 seva(s) on 2 day(s)")


def test_month_listing_labels_deleted_references(stocked_store: SevaStore) -> None:
    author_schedule(stocked_store, "id2", "id1", "2024-01-15")
    stocked_store.remove_person("id1")

    output = format_month_calendar(stocked_store, "2024-01")

    assert UNKNOWN_LABEL in output
    assert "Rahul Sharma" not in output


def test_upcoming_empty(stocked_store: SevaStore) -> None:
    assert format_upcoming(stocked_store, today=date(2024, 1, 15)) == "🙏 No upcoming sevas for today or tomorrow."


def test_upcoming_listing(stocked_store: SevaStore) -> None:
    for day in ("2024-01-15", "2024-01-16", "2024-01-17"):
        author_schedule(stocked_store, "id2", "id1", day)

    output = format_upcoming(stocked_store, today=date(2024, 1, 15))
    lines = output.splitlines()

    assert lines[0] == "🙏 UPCOMING SEVAS"
    assert lines[2].startswith("Today")
    assert lines[3].startswith("Tomorrow")
    assert lines[-1] == "Total: 2 seva(s)"

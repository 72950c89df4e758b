"""Tests for recurrence expansion, end-time arithmetic and submission."""
from datetime import date, timedelta

import pytest

from scheduler.models import ALL_WEEKDAYS, ScheduleRequest
from scheduler.recurrence import (
    MAX_EXPANSION_DAYS,
    ScheduleValidationError,
    calculate_end_time,
    expand_schedule,
    submit_schedule,
    sunday_weekday,
)
from seva_store.models import ScheduleStatus
from seva_store.store import SevaStore

from conftest import counter_ids


def _request(start: str, end: str, recurring: bool = True, weekdays=ALL_WEEKDAYS) -> ScheduleRequest:
    return ScheduleRequest(
        start_date=start,
        end_date=end,
        start_time="06:00",
        end_time="07:00",
        seva_id="s1",
        person_id="p1",
        recurring=recurring,
        selected_weekdays=frozenset(weekdays),
    )


@pytest.mark.parametrize(
    "start, duration, expected",
    [
        ("06:00", 60, "07:00"),
        ("05:00", 45, "05:45"),
        ("23:00", 90, "00:30"),
        ("23:30", 90, "01:00"),
        ("00:00", 24 * 60, "00:00"),
    ],
)
def test_calculate_end_time_wraps_midnight(start: str, duration: int, expected: str) -> None:
    assert calculate_end_time(start, duration) == expected


@pytest.mark.parametrize("bad", ["6", "24:00", "12:60", "ab:cd", ""])
def test_calculate_end_time_rejects_malformed_time(bad: str) -> None:
    with pytest.raises(ValueError):
        calculate_end_time(bad, 30)


def test_sunday_weekday_numbering() -> None:
    assert sunday_weekday(date(2024, 1, 7)) == 0   # Sunday
    assert sunday_weekday(date(2024, 1, 1)) == 1   # Monday
    assert sunday_weekday(date(2024, 1, 6)) == 6   # Saturday


def test_single_day_ignores_weekday_filter() -> None:
    """A non-recurring request yields one entry on its start date, even on an unselected weekday."""
    request = _request("2024-01-06", "2024-02-28", recurring=False, weekdays=set())

    result = expand_schedule(request, id_factory=counter_ids())

    assert len(result.entries) == 1
    entry = result.entries[0]
    assert entry.date == "2024-01-06"
    assert entry.group_id is None
    assert entry.status == ScheduleStatus.SCHEDULED
    assert result.group_id is None


def test_recurring_all_weekdays_covers_every_day() -> None:
    request = _request("2024-02-25", "2024-03-03")

    result = expand_schedule(request, id_factory=counter_ids())

    assert [e.date for e in result.entries] == [
        "2024-02-25", "2024-02-26", "2024-02-27", "2024-02-28",
        "2024-02-29", "2024-03-01", "2024-03-02", "2024-03-03",
    ]
    assert {e.group_id for e in result.entries} == {result.group_id}
    assert result.group_id is not None


def test_recurring_ids_are_fresh() -> None:
    result = expand_schedule(_request("2024-01-01", "2024-01-03"), id_factory=counter_ids())

    # the group id is drawn first, then one id per entry
    assert result.group_id == "id1"
    assert [e.id for e in result.entries] == ["id2", "id3", "id4"]


def test_recurring_weekdays_only_over_two_weeks() -> None:
    """Mon-Fri over 2024-01-01..2024-01-14 gives the ten weekdays, one series."""
    result = expand_schedule(
        _request("2024-01-01", "2024-01-14", weekdays={1, 2, 3, 4, 5}),
        id_factory=counter_ids(),
    )

    assert len(result.entries) == 10
    assert len({e.group_id for e in result.entries}) == 1
    assert all(date.fromisoformat(e.date).weekday() < 5 for e in result.entries)


def test_recurring_with_no_weekdays_is_empty() -> None:
    result = expand_schedule(_request("2024-01-01", "2024-01-31", weekdays=set()))
    assert result.entries == []


def test_end_before_start_is_empty() -> None:
    result = expand_schedule(_request("2024-01-10", "2024-01-01"))
    assert result.entries == []
    assert result.truncated_days == 0


def test_exactly_one_year_is_not_truncated() -> None:
    result = expand_schedule(_request("2023-01-01", "2023-12-31"), id_factory=counter_ids())

    assert len(result.entries) == MAX_EXPANSION_DAYS
    assert result.truncated is False


def test_longer_range_is_truncated_and_reported() -> None:
    start = date(2024, 1, 1)
    end = start + timedelta(days=499)  # 500 days

    result = expand_schedule(
        _request(start.isoformat(), end.isoformat()), id_factory=counter_ids()
    )

    assert len(result.entries) == MAX_EXPANSION_DAYS
    assert result.truncated is True
    assert result.truncated_days == 500 - MAX_EXPANSION_DAYS
    assert result.entries[-1].date == (start + timedelta(days=364)).isoformat()


def test_submit_schedule_stores_batch(store: SevaStore) -> None:
    result = submit_schedule(store, _request("2024-01-01", "2024-01-07", weekdays={0, 6}))

    assert [e.date for e in store.schedule] == ["2024-01-06", "2024-01-07"]
    assert store.schedule == tuple(result.entries)


@pytest.mark.parametrize("field", ["seva_id", "person_id"])
def test_submit_schedule_requires_selection(store: SevaStore, field: str) -> None:
    request = _request("2024-01-01", "2024-01-01", recurring=False)
    setattr(request, field, "")

    with pytest.raises(ScheduleValidationError, match="Seva Type and a Volunteer"):
        submit_schedule(store, request)
    assert store.schedule == ()


def test_submit_schedule_rejects_empty_expansion(store: SevaStore) -> None:
    with pytest.raises(ScheduleValidationError, match="No dates selected"):
        submit_schedule(store, _request("2024-01-01", "2024-01-05", weekdays={0, 6}))
    assert store.schedule == ()

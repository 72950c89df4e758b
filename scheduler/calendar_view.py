# -*- coding: utf-8 -*-
"""Calendar aggregation over the full schedule.

Every function here is pure and recomputes from the entries it is given.
"""
from __future__ import annotations

import calendar
import typing as t
from datetime import date, timedelta

from seva_store.models import ScheduleEntry
from scheduler.models import MonthGrid


DateLike = t.Union[str, date]


def _date_str(value: DateLike) -> str:
    return value.isoformat() if isinstance(value, date) else value


def parse_year_month(year_month: str) -> tuple[int, int]:
    """Split "YYYY-MM" into (year, month).

    :raises ValueError: If the string is not a valid year and month.
    """
    try:
        year_str, month_str = year_month.split("-")
        year, month = int(year_str), int(month_str)
    except (ValueError, AttributeError):
        raise ValueError(f"Invalid month {year_month!r}, expected YYYY-MM")
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month {year_month!r}, expected YYYY-MM")
    return year, month


def month_grid(year_month: str) -> MonthGrid:
    """Days in the month and blank cells before day 1 in a Sunday-first grid."""
    year, month = parse_year_month(year_month)
    first_weekday, days_in_month = calendar.monthrange(year, month)
    # calendar counts Monday as 0; the grid starts on Sunday
    leading = (first_weekday + 1) % 7
    return MonthGrid(year=year, month=month, days_in_month=days_in_month, leading_blank_cells=leading)


def shift_month(year_month: str, delta: int) -> str:
    """Move a "YYYY-MM" value by delta months."""
    year, month = parse_year_month(year_month)
    index = year * 12 + (month - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def month_dates(year_month: str) -> list[str]:
    grid = month_grid(year_month)
    return [
        f"{grid.year:04d}-{grid.month:02d}-{day:02d}"
        for day in range(1, grid.days_in_month + 1)
    ]


def entries_for_date(entries: t.Iterable[ScheduleEntry], day: DateLike) -> list[ScheduleEntry]:
    """Entries on exactly this date, earliest start time first."""
    day_str = _date_str(day)
    return sorted((e for e in entries if e.date == day_str), key=lambda e: e.start_time)


def month_view(entries: t.Iterable[ScheduleEntry], year_month: str) -> dict[str, list[ScheduleEntry]]:
    """Every day of the month mapped to its sorted entries, in calendar order."""
    entries = list(entries)
    return {day: entries_for_date(entries, day) for day in month_dates(year_month)}


def upcoming(entries: t.Iterable[ScheduleEntry], today: t.Optional[date] = None) -> list[ScheduleEntry]:
    """Entries for today and tomorrow, ordered by date then start time."""
    today = today or date.today()
    window = {today.isoformat(), (today + timedelta(days=1)).isoformat()}
    return sorted(
        (e for e in entries if e.date in window),
        key=lambda e: (e.date, e.start_time),
    )


def is_today(day: DateLike, today: t.Optional[date] = None) -> bool:
    return _date_str(day) == (today or date.today()).isoformat()

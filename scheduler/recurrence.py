"""Recurrence expansion: turn a date range, weekday filter and template into entries.

Also holds the clock arithmetic used to derive an end time from a seva's
default duration, and the validating submission step that feeds a batch into
the store.
"""
from __future__ import annotations

import logging
import typing as t
from datetime import date, timedelta

from seva_store.models import ScheduleEntry, ScheduleStatus, parse_time
from seva_store.store import SevaStore, new_id
from scheduler.models import ExpansionResult, ScheduleRequest

logger = logging.getLogger(__name__)

# Hard ceiling on the number of days one expansion will walk
MAX_EXPANSION_DAYS = 365

MINUTES_PER_DAY = 24 * 60


class ScheduleValidationError(ValueError):
    """Raised when a scheduling submission cannot produce any entries."""


def calculate_end_time(start_time: str, duration_minutes: int) -> str:
    """Add a duration to a clock time, wrapping past midnight.

    Only the time of day survives: 23:30 + 90 minutes gives "01:00" and the
    day rollover is lost.
    """
    hours, minutes = parse_time(start_time)
    total = (hours * 60 + minutes + duration_minutes) % MINUTES_PER_DAY
    return f"{total // 60:02d}:{total % 60:02d}"


def sunday_weekday(day: date) -> int:
    """Weekday number with Sunday = 0 and Saturday = 6."""
    return (day.weekday() + 1) % 7


def expand_schedule(
    request: ScheduleRequest,
    id_factory: t.Callable[[], str] = new_id,
    max_days: int = MAX_EXPANSION_DAYS,
) -> ExpansionResult:
    """Expand a request into concrete schedule entries.

    A single-day request always yields exactly one entry on its start date,
    whatever weekday that is. A recurring request yields one entry per day in
    [start_date, end_date] whose weekday is selected, all sharing a new group
    id. At most ``max_days`` days are walked; the rest of the range is
    reported in ``truncated_days``.

    An empty ``entries`` list means nothing matched and the submission should
    be rejected.
    """
    start = date.fromisoformat(request.start_date)
    end = date.fromisoformat(request.end_date) if request.recurring else start
    group_id = id_factory() if request.recurring else None

    entries: list[ScheduleEntry] = []
    current = start
    visited = 0
    while current <= end and visited < max_days:
        visited += 1
        if not request.recurring or sunday_weekday(current) in request.selected_weekdays:
            entries.append(ScheduleEntry(
                id=id_factory(),
                group_id=group_id,
                date=current.isoformat(),
                start_time=request.start_time,
                end_time=request.end_time,
                seva_id=request.seva_id,
                person_id=request.person_id,
                status=ScheduleStatus.SCHEDULED,
            ))
        current += timedelta(days=1)

    truncated_days = max(0, (end - start).days + 1 - visited)
    if truncated_days:
        logger.warning(
            f"Recurring schedule {request.start_date}..{request.end_date} stopped after "
            f"{max_days} days; {truncated_days} day(s) were not scheduled"
        )

    return ExpansionResult(entries=entries, group_id=group_id, truncated_days=truncated_days)


def submit_schedule(
    store: SevaStore,
    request: ScheduleRequest,
    id_factory: t.Optional[t.Callable[[], str]] = None,
) -> ExpansionResult:
    """Validate a request, expand it and add the whole batch to the store.

    :param store: The store receiving the entries.
    :param request: The scheduling template.
    :param id_factory: Id source for entries and the group; defaults to the store's.
    :return: The ExpansionResult that was stored.
    :raises ScheduleValidationError: If no seva or volunteer is chosen, or
        the range produces no entries.
    """
    if not request.seva_id or not request.person_id:
        raise ScheduleValidationError("Please ensure a Seva Type and a Volunteer are selected.")

    result = expand_schedule(request, id_factory=id_factory or store.id_factory)
    if not result.entries:
        raise ScheduleValidationError("No dates selected within the range.")

    store.add_schedule_entries(result.entries)
    return result

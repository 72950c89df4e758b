# -*- coding: utf-8 -*-
"""Authoring state for scheduling a seva.

Times follow a one-way derivation: picking a seva or a start time recomputes
the end time from the seva's duration, while editing the end time directly
re-derives nothing.
"""
from __future__ import annotations

import typing as t
from datetime import date

from seva_store.models import parse_time
from seva_store.store import SevaStore
from scheduler.models import ALL_WEEKDAYS, ExpansionResult, ScheduleRequest
from scheduler.recurrence import calculate_end_time, submit_schedule


DEFAULT_START_TIME = "06:00"
DEFAULT_DURATION_MINUTES = 60


class ScheduleForm:
    """Mutable form state backed by a store's current people and sevas."""

    def __init__(
        self,
        store: SevaStore,
        initial_date: t.Optional[str] = None,
        today: t.Optional[date] = None,
    ) -> None:
        self.store = store
        first_seva = store.sevas[0] if store.sevas else None
        first_person = store.people[0] if store.people else None

        start_time = (first_seva.default_start_time if first_seva else None) or DEFAULT_START_TIME
        duration = first_seva.default_duration_minutes if first_seva else DEFAULT_DURATION_MINUTES
        day = initial_date or (today or date.today()).isoformat()

        self.seva_id: str = first_seva.id if first_seva else ""
        self.person_id: str = first_person.id if first_person else ""
        self.start_date: str = day
        self.end_date: str = day
        self.start_time: str = start_time
        self.end_time: str = calculate_end_time(start_time, duration)
        self.recurring: bool = False
        self.selected_weekdays: set[int] = set(ALL_WEEKDAYS)
        self.end_time_overridden: bool = False

    def missing_prerequisites(self) -> list[str]:
        """What has to be created before anything can be scheduled."""
        missing = []
        if not self.store.sevas:
            missing.append("Seva Types")
        if not self.store.people:
            missing.append("Volunteers")
        return missing

    def _selected_duration(self) -> int:
        seva = self.store.get_seva(self.seva_id)
        return seva.default_duration_minutes if seva else DEFAULT_DURATION_MINUTES

    def select_seva(self, seva_id: str) -> None:
        """Pick a seva; its default start time and duration drive the times."""
        self.seva_id = seva_id
        seva = self.store.get_seva(seva_id)
        if seva:
            if seva.default_start_time:
                self.start_time = seva.default_start_time
            self.end_time = calculate_end_time(self.start_time, seva.default_duration_minutes)
            self.end_time_overridden = False

    def set_start_time(self, start_time: str) -> None:
        self.start_time = start_time
        self.end_time = calculate_end_time(start_time, self._selected_duration())
        self.end_time_overridden = False

    def set_end_time(self, end_time: str) -> None:
        parse_time(end_time)
        self.end_time = end_time
        self.end_time_overridden = True

    def select_person(self, person_id: str) -> None:
        self.person_id = person_id

    def set_recurring(self, recurring: bool) -> None:
        self.recurring = recurring

    def set_dates(self, start_date: str, end_date: t.Optional[str] = None) -> None:
        self.start_date = start_date
        self.end_date = end_date or start_date

    def toggle_weekday(self, weekday: int) -> None:
        """Flip one weekday (0 = Sunday) in the recurrence filter."""
        if not 0 <= weekday <= 6:
            raise ValueError(f"Weekday must be between 0 and 6, got {weekday}")
        self.selected_weekdays ^= {weekday}

    def build_request(self) -> ScheduleRequest:
        return ScheduleRequest(
            start_date=self.start_date,
            end_date=self.end_date if self.recurring else self.start_date,
            start_time=self.start_time,
            end_time=self.end_time,
            seva_id=self.seva_id,
            person_id=self.person_id,
            recurring=self.recurring,
            selected_weekdays=frozenset(self.selected_weekdays),
        )

    def submit(self) -> ExpansionResult:
        """Expand the current state into entries and store them.

        :raises ScheduleValidationError: If the submission is rejected.
        """
        return submit_schedule(self.store, self.build_request())


def author_schedule(
    store: SevaStore,
    seva_id: str,
    person_id: str,
    start_date: str,
    end_date: t.Optional[str] = None,
    start_time: t.Optional[str] = None,
    end_time: t.Optional[str] = None,
    recurring: bool = False,
    weekdays: t.Optional[t.Iterable[int]] = None,
) -> ExpansionResult:
    """Fill in a ScheduleForm the way a user would, then submit it.

    Times not given fall back to the seva's defaults; an explicit end time
    wins over the derived one.

    :raises ScheduleValidationError: If nothing can be scheduled.
    """
    form = ScheduleForm(store, initial_date=start_date)
    form.select_seva(seva_id)
    form.select_person(person_id)
    if start_time:
        form.set_start_time(start_time)
    if end_time:
        form.set_end_time(end_time)
    form.set_recurring(recurring)
    form.set_dates(start_date, end_date)
    if weekdays is not None:
        form.selected_weekdays = set(weekdays)
    return form.submit()

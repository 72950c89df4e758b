# -*- coding: utf-8 -*-
from __future__ import annotations

from dataclasses import dataclass, field
import typing as t

from seva_store.models import ScheduleEntry


ALL_WEEKDAYS = frozenset(range(7))  # 0 = Sunday .. 6 = Saturday


@dataclass
class ScheduleRequest:
    """Template for one scheduling action, single-day or recurring."""
    start_date: str   # "YYYY-MM-DD"
    end_date: str     # "YYYY-MM-DD", ignored unless recurring
    start_time: str   # "HH:MM"
    end_time: str     # "HH:MM"
    seva_id: str
    person_id: str
    recurring: bool = False
    selected_weekdays: frozenset[int] = ALL_WEEKDAYS


@dataclass
class ExpansionResult:
    """Entries produced by one expansion, plus how many days were cut off."""
    entries: list[ScheduleEntry] = field(default_factory=list)
    group_id: t.Optional[str] = None
    truncated_days: int = 0  # days of the range never visited because of the ceiling

    @property
    def truncated(self) -> bool:
        return self.truncated_days > 0


@dataclass
class MonthGrid:
    """Shape of a Sunday-first month calendar."""
    year: int
    month: int
    days_in_month: int
    leading_blank_cells: int

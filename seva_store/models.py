"""
Data models for the seva store: volunteers, seva types and schedule entries.

This module contains all the dataclasses used to represent the people, the
services they perform and the concrete calendar assignments between them.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import typing as t


class NotificationChannel(str, Enum):
    """How a volunteer prefers to be reminded."""
    EMAIL = "EMAIL"
    WHATSAPP = "WHATSAPP"
    BOTH = "BOTH"


class ScheduleStatus(str, Enum):
    """Lifecycle of a schedule entry. COMPLETED and CANCELLED are terminal."""
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


TERMINAL_STATUSES = frozenset({ScheduleStatus.COMPLETED, ScheduleStatus.CANCELLED})

# Label shown wherever an entry points at a person or seva that no longer exists
UNKNOWN_LABEL = "Unknown"


def parse_time(value: str) -> tuple[int, int]:
    """Split an "HH:MM" string into (hours, minutes).

    :raises ValueError: If the string is not a valid 24h clock time.
    """
    try:
        hours_str, minutes_str = value.split(":")
        hours, minutes = int(hours_str), int(minutes_str)
    except (ValueError, AttributeError):
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return hours, minutes


@dataclass
class Person:
    """Represents a registered volunteer."""
    id: str
    full_name: str
    email: str = ""
    mobile: str = ""
    preferred_channel: NotificationChannel = NotificationChannel.WHATSAPP
    active: bool = True


@dataclass
class Seva:
    """Represents a type of service with its default timing."""
    id: str
    name: str
    description: str = ""
    default_duration_minutes: int = 60
    default_start_time: t.Optional[str] = None  # "HH:MM" 24h
    color: str = ""  # presentation tag, e.g. "bg-orange-100"

    def __post_init__(self) -> None:
        if self.default_duration_minutes <= 0:
            raise ValueError(
                f"default_duration_minutes must be positive, got {self.default_duration_minutes}"
            )
        if self.default_start_time is not None:
            parse_time(self.default_start_time)


@dataclass
class ScheduleEntry:
    """
    One volunteer assigned to one seva on one day.

    start_time and end_time are stored independently; nothing enforces
    end_time > start_time.
    """
    id: str
    date: str          # "YYYY-MM-DD"
    start_time: str    # "HH:MM" 24h
    end_time: str      # "HH:MM" 24h
    seva_id: str
    person_id: str
    status: ScheduleStatus = ScheduleStatus.SCHEDULED
    group_id: t.Optional[str] = None  # shared by entries of one recurring creation

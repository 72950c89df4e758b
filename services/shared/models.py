"""
Shared Pydantic models for REST API serialization.

This module contains Pydantic equivalents of the dataclass models in
seva_store.models, plus the request/response bodies of the seva service.
"""
from __future__ import annotations

import typing as t
from dataclasses import asdict

from pydantic import BaseModel, Field

from seva_store.models import NotificationChannel, ScheduleStatus


class Person(BaseModel):
    """A registered volunteer."""
    id: str
    full_name: str
    email: str = ""
    mobile: str = ""
    preferred_channel: NotificationChannel = NotificationChannel.WHATSAPP
    active: bool = True


class Seva(BaseModel):
    """A seva type with its default timing."""
    id: str
    name: str
    description: str = ""
    default_duration_minutes: int
    default_start_time: t.Optional[str] = None
    color: str = ""


class ScheduleEntry(BaseModel):
    """One volunteer assigned to one seva on one day."""
    id: str
    group_id: t.Optional[str] = None
    date: str                 # "YYYY-MM-DD"
    start_time: str           # "HH:MM"
    end_time: str             # "HH:MM"
    seva_id: str
    person_id: str
    status: ScheduleStatus = ScheduleStatus.SCHEDULED


def from_dataclass(model: type[BaseModel], obj: t.Any) -> BaseModel:
    """Convert a seva_store dataclass into its Pydantic counterpart."""
    return model(**asdict(obj))


# Request/Response Models for API endpoints
class CreatePersonRequest(BaseModel):
    """Request model for registering a volunteer."""
    full_name: str = Field(min_length=1)
    email: str = ""
    mobile: str = ""
    preferred_channel: NotificationChannel = NotificationChannel.WHATSAPP
    active: bool = True


class CreateSevaRequest(BaseModel):
    """Request model for creating a seva type."""
    name: str = Field(min_length=1)
    description: str = ""
    default_duration_minutes: int = Field(default=60, gt=0)
    default_start_time: t.Optional[str] = Field(default=None, pattern=r"^([01]\d|2[0-3]):[0-5]\d$")
    color: str = "bg-orange-100"


class ScheduleSevaRequest(BaseModel):
    """
    Request model for scheduling a seva.
    Times are optional and default to the seva's start time and duration.
    """
    seva_id: str
    person_id: str
    start_date: str
    end_date: t.Optional[str] = None
    start_time: t.Optional[str] = None
    end_time: t.Optional[str] = None
    recurring: bool = False
    weekdays: list[int] = Field(default_factory=lambda: list(range(7)))  # 0 = Sunday


class ScheduleSevaResponse(BaseModel):
    """Response model for a scheduling action."""
    entries: list[ScheduleEntry]
    group_id: t.Optional[str] = None
    truncated_days: int = 0


class UpdateStatusRequest(BaseModel):
    """Request model for changing an entry's status."""
    status: ScheduleStatus


class MonthViewResponse(BaseModel):
    """Response model for a month of the calendar."""
    year_month: str
    days_in_month: int
    leading_blank_cells: int
    days: dict[str, list[ScheduleEntry]]


class DailySummaryRequest(BaseModel):
    """Request model for drafting a daily summary header."""
    date: str


class DraftResponse(BaseModel):
    """Response model for drafted text."""
    status: str
    text: str

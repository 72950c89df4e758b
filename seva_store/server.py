# -*- coding: utf-8 -*-
import os
import typing as t
from datetime import date, datetime

from fastmcp import FastMCP

from reminders.drafter import draft_daily_summary, draft_reminder
from scheduler.calendar_view import entries_for_date, month_grid, month_view, upcoming
from scheduler.form import author_schedule
from seva_store.models import (
    UNKNOWN_LABEL,
    NotificationChannel,
    Person,
    ScheduleEntry,
    ScheduleStatus,
    Seva,
)
from seva_store.seed import seed_demo_data
from seva_store.store import SevaStore

mcp = FastMCP("SevaServer")

store = SevaStore()
if os.getenv("SEVA_SEED_DEMO") == "1":
    seed_demo_data(store)


@mcp.tool()
def register_volunteer(
        full_name: str,
        email: str = "",
        mobile: str = "",
        preferred_channel: NotificationChannel = NotificationChannel.WHATSAPP,
) -> Person:
    """Registers a new volunteer.

    :param full_name: The volunteer's full name.
    :param email: Email address (optional).
    :param mobile: Mobile number (optional).
    :param preferred_channel: EMAIL, WHATSAPP or BOTH.
    :return: The stored Person.
    """
    return store.add_person(
        full_name=full_name,
        email=email,
        mobile=mobile,
        preferred_channel=preferred_channel,
    )


@mcp.tool()
def remove_volunteer(person_id: str) -> str:
    """Removes a volunteer. Their scheduled sevas stay on the calendar."""
    store.remove_person(person_id)
    return f"Removed volunteer {person_id}"


@mcp.tool()
def list_volunteers() -> list[Person]:
    """Lists all volunteers."""
    return list(store.people)


@mcp.tool()
def create_seva(
        name: str,
        default_duration_minutes: int = 60,
        default_start_time: t.Optional[str] = None,
        description: str = "",
        color: str = "bg-orange-100",
) -> Seva:
    """Creates a seva type.

    :param name: Name of the seva, e.g. "Morning Aarti".
    :param default_duration_minutes: Default length in minutes (positive).
    :param default_start_time: Default start time, HH:MM (optional).
    :param description: Short description (optional).
    :param color: Presentation color tag (optional).
    :return: The stored Seva.
    """
    return store.add_seva(
        name=name,
        description=description,
        default_duration_minutes=default_duration_minutes,
        default_start_time=default_start_time,
        color=color,
    )


@mcp.tool()
def delete_seva(seva_id: str) -> str:
    """Deletes a seva type. Entries referencing it stay on the calendar."""
    store.remove_seva(seva_id)
    return f"Deleted seva {seva_id}"


@mcp.tool()
def list_sevas() -> list[Seva]:
    """Lists all seva types."""
    return list(store.sevas)


@mcp.tool()
def schedule_seva(
        seva_id: str,
        person_id: str,
        start_date: str,
        end_date: t.Optional[str] = None,
        start_time: t.Optional[str] = None,
        end_time: t.Optional[str] = None,
        recurring: bool = False,
        weekdays: t.Optional[list[int]] = None,
) -> list[ScheduleEntry]:
    """Schedules a volunteer for a seva on one day or on a weekly pattern.

    :param seva_id: The seva to schedule.
    :param person_id: The volunteer to assign.
    :param start_date: First (or only) day, YYYY-MM-DD.
    :param end_date: Last day for recurring schedules, YYYY-MM-DD.
    :param start_time: Start time HH:MM; defaults to the seva's default.
    :param end_time: End time HH:MM; defaults to start time plus the seva's duration.
    :param recurring: Whether to repeat over the date range.
    :param weekdays: Weekdays to repeat on, 0 = Sunday .. 6 = Saturday (default all).
    :return: The created schedule entries.
    """
    result = author_schedule(
        store, seva_id, person_id, start_date,
        end_date=end_date, start_time=start_time, end_time=end_time,
        recurring=recurring, weekdays=weekdays,
    )
    return result.entries


@mcp.tool()
def update_entry_status(entry_id: str, status: ScheduleStatus) -> str:
    """Marks a schedule entry as COMPLETED or CANCELLED."""
    store.set_entry_status(entry_id, status)
    return f"Entry {entry_id} is now {ScheduleStatus(status).value}"


@mcp.tool()
def list_schedule_for_date(day: str) -> list[ScheduleEntry]:
    """Lists the entries on one day, earliest first.

    :param day: The date, YYYY-MM-DD.
    """
    return entries_for_date(store.schedule, day)


def _person_name(target: SevaStore, person_id: str) -> str:
    person = target.get_person(person_id)
    return person.full_name if person else UNKNOWN_LABEL


def _seva_name(target: SevaStore, seva_id: str) -> str:
    seva = target.get_seva(seva_id)
    return seva.name if seva else UNKNOWN_LABEL


def format_month_calendar(target: SevaStore, year_month: str) -> str:
    """Formats one month of the schedule as a plain-text listing.

    :param target: The store to read from.
    :param year_month: The month, YYYY-MM.
    :return: Formatted listing of every day that has sevas.
    """
    grid = month_grid(year_month)
    title = datetime(grid.year, grid.month, 1).strftime("%B %Y")
    days = {day: entries for day, entries in month_view(target.schedule, year_month).items() if entries}

    if not days:
        return f"📅 No sevas scheduled in {title}."

    lines = []
    lines.append(f"📅 SEVA CALENDAR - {title.upper()}")
    lines.append("=" * 90)
    lines.append(f"{'Date':<14} {'Time':<13} {'Seva':<25} {'Volunteer':<25} {'Status':<10}")
    lines.append("-" * 90)

    total = 0
    for day, entries in days.items():
        label = datetime.strptime(day, "%Y-%m-%d").strftime("%a %d")
        for entry in entries:
            seva = _seva_name(target, entry.seva_id)[:24]
            person = _person_name(target, entry.person_id)[:24]
            lines.append(
                f"{label:<14} {entry.start_time + '-' + entry.end_time:<13} "
                f"{seva:<25} {person:<25} {entry.status.value:<10}"
            )
            label = ""
            total += 1

    lines.append("=" * 90)
    lines.append(f"Total: {total} seva(s) on {len(days)} day(s)")
    return "\n".join(lines)


def format_upcoming(target: SevaStore, today: t.Optional[date] = None) -> str:
    """Formats today's and tomorrow's sevas."""
    today = today or date.today()
    entries = upcoming(target.schedule, today)
    if not entries:
        return "🙏 No upcoming sevas for today or tomorrow."

    lines = []
    lines.append("🙏 UPCOMING SEVAS")
    lines.append("=" * 80)
    for entry in entries:
        when = "Today" if entry.date == today.isoformat() else "Tomorrow"
        lines.append(
            f"{when:<9} {entry.start_time} - {entry.end_time}  "
            f"{_seva_name(target, entry.seva_id):<25} {_person_name(target, entry.person_id)}"
        )
    lines.append("=" * 80)
    lines.append(f"Total: {len(entries)} seva(s)")
    return "\n".join(lines)


@mcp.tool()
def show_month_calendar(year_month: str) -> str:
    """Displays the seva calendar for one month.

    :param year_month: The month to show, YYYY-MM.
    :return: Formatted listing of the month's sevas.
    """
    return format_month_calendar(store, year_month)


@mcp.tool()
def show_upcoming_sevas() -> str:
    """Displays the sevas scheduled for today and tomorrow."""
    return format_upcoming(store)


@mcp.tool()
async def draft_entry_reminder(entry_id: str) -> str:
    """Drafts a reminder message for the volunteer of one schedule entry.

    :param entry_id: The schedule entry to remind about.
    :return: The drafted message, or a fallback message if drafting is unavailable.
    """
    entry = store.get_entry(entry_id)
    if entry is None:
        raise ValueError(f"Schedule entry {entry_id} not found")
    person = store.get_person(entry.person_id)
    seva = store.get_seva(entry.seva_id)
    if person is None or seva is None:
        raise ValueError(f"Schedule entry {entry_id} references a volunteer or seva that no longer exists")
    return await draft_reminder(person, seva, entry.date, entry.start_time)


@mcp.tool()
async def draft_summary_for_date(day: str) -> str:
    """Drafts an encouraging header for one day's schedule.

    :param day: The date, YYYY-MM-DD.
    """
    count = len(entries_for_date(store.schedule, day))
    return await draft_daily_summary(day, count)


if __name__ == "__main__":
    # Run as an MCP server over stdio
    mcp.run()

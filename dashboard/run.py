# -*- coding: utf-8 -*-
"""Terminal dashboard for the seva schedule.

Every command works on a store seeded with the demo data set for the life of
the process; nothing is saved between runs.
"""
import asyncio
import logging
import typing as t
from datetime import date, datetime

import click
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from reminders.drafter import draft_daily_summary_result, draft_reminder_result, DraftStatus
from scheduler.calendar_view import entries_for_date, is_today, month_grid, month_view, shift_month, upcoming
from scheduler.form import author_schedule
from scheduler.recurrence import ScheduleValidationError
from seva_store.models import UNKNOWN_LABEL, ScheduleEntry
from seva_store.seed import seed_demo_data
from seva_store.store import SevaStore

console = Console()

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
WEEKDAY_LETTERS = {"U": 0, "M": 1, "T": 2, "W": 3, "R": 4, "F": 5, "S": 6}


def first_name(store: SevaStore, person_id: str) -> str:
    person = store.get_person(person_id)
    return person.full_name.split(" ")[0] if person else UNKNOWN_LABEL


def full_name(store: SevaStore, person_id: str) -> str:
    person = store.get_person(person_id)
    return person.full_name if person else UNKNOWN_LABEL


def seva_name(store: SevaStore, seva_id: str) -> str:
    seva = store.get_seva(seva_id)
    return seva.name if seva else UNKNOWN_LABEL


def parse_weekdays(value: str) -> set[int]:
    """Turn letters like "MTWRF" into Sunday-based weekday numbers.

    U = Sunday, M, T, W, R = Thursday, F, S = Saturday.
    """
    days = set()
    for letter in value.upper():
        if letter not in WEEKDAY_LETTERS:
            raise click.BadParameter(f"Unknown weekday letter {letter!r}; use UMTWRFS")
        days.add(WEEKDAY_LETTERS[letter])
    return days


def create_month_table(store: SevaStore, year_month: str, today: date) -> Table:
    """Create a Sunday-first calendar grid for one month."""
    grid = month_grid(year_month)
    title = datetime(grid.year, grid.month, 1).strftime("%B %Y")
    table = Table(title=f"📅 {title}", show_header=True, header_style="bold magenta", show_lines=True)
    for header in WEEKDAY_HEADERS:
        table.add_column(header, width=14, vertical="top")

    cells = [""] * grid.leading_blank_cells
    for day, entries in month_view(store.schedule, year_month).items():
        number = int(day[-2:])
        label = f"[bold reverse]{number}[/bold reverse]" if is_today(day, today) else f"[bold]{number}[/bold]"
        lines = [label]
        for entry in entries:
            lines.append(f"[cyan]{entry.start_time}[/cyan] {first_name(store, entry.person_id)}")
        cells.append("\n".join(lines))

    while len(cells) % 7:
        cells.append("")
    for week in range(0, len(cells), 7):
        table.add_row(*cells[week:week + 7])
    return table


def create_entries_table(store: SevaStore, entries: list[ScheduleEntry], title: str, today: t.Optional[date] = None) -> Table:
    """Create a table listing schedule entries."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="yellow")
    table.add_column("Time", style="cyan")
    table.add_column("Seva", style="green")
    table.add_column("Volunteer", style="white")
    table.add_column("Status", style="blue")

    for entry in entries:
        when = entry.date
        if today is not None:
            when = "Today" if is_today(entry.date, today) else "Tomorrow"
        table.add_row(
            entry.id,
            when,
            f"{entry.start_time} - {entry.end_time}",
            seva_name(store, entry.seva_id),
            full_name(store, entry.person_id),
            entry.status.value,
        )
    return table


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--verbose", is_flag=True, help="Show log output.")
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """Seva schedule dashboard over the demo data set."""
    load_dotenv()
    logging.basicConfig(level=logging.INFO if verbose else logging.WARNING)
    ctx.obj = seed_demo_data(SevaStore())


@main.command()
@click.option("--month", "year_month", default=None, help="Month to show, YYYY-MM (default: this month).")
@click.option("--shift", type=int, default=0, help="Months to move from --month, e.g. -1 for the previous one.")
@click.pass_obj
def calendar(store: SevaStore, year_month: t.Optional[str], shift: int) -> None:
    """Show a month of the schedule."""
    today = date.today()
    year_month = year_month or today.strftime("%Y-%m")
    try:
        table = create_month_table(store, shift_month(year_month, shift), today)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--month")
    console.print(table)


@main.command(name="upcoming")
@click.option("--today", "today_str", default=None, help="Pretend today is this date, YYYY-MM-DD.")
@click.pass_obj
def upcoming_command(store: SevaStore, today_str: t.Optional[str]) -> None:
    """Show the sevas for today and tomorrow."""
    try:
        today = date.fromisoformat(today_str) if today_str else date.today()
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--today")
    entries = upcoming(store.schedule, today)
    if not entries:
        console.print("[yellow]No upcoming sevas.[/yellow]")
        return
    console.print(create_entries_table(store, entries, "🙏 Upcoming Sevas", today=today))


@main.command()
@click.option("--seva", "seva_id", required=True, help="Seva id, e.g. s1.")
@click.option("--person", "person_id", required=True, help="Volunteer id, e.g. p1.")
@click.option("--start-date", required=True, help="First (or only) day, YYYY-MM-DD.")
@click.option("--end-date", default=None, help="Last day of a recurring schedule, YYYY-MM-DD.")
@click.option("--start-time", default=None, help="Override the seva's start time, HH:MM.")
@click.option("--end-time", default=None, help="Override the derived end time, HH:MM.")
@click.option("--weekdays", default=None, help="Repeat on these days, e.g. MTWRF. Implies recurring.")
@click.pass_obj
def schedule(
    store: SevaStore,
    seva_id: str,
    person_id: str,
    start_date: str,
    end_date: t.Optional[str],
    start_time: t.Optional[str],
    end_time: t.Optional[str],
    weekdays: t.Optional[str],
) -> None:
    """Schedule a volunteer and show the entries that were created."""
    recurring = weekdays is not None or end_date is not None
    try:
        result = author_schedule(
            store, seva_id, person_id, start_date,
            end_date=end_date, start_time=start_time, end_time=end_time,
            recurring=recurring,
            weekdays=parse_weekdays(weekdays) if weekdays is not None else None,
        )
    except ScheduleValidationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)
    except ValueError as e:
        console.print(f"[red]Invalid input:[/red] {e}")
        raise SystemExit(1)

    console.print(create_entries_table(store, result.entries, f"✅ Scheduled {len(result.entries)} seva(s)"))
    if result.group_id:
        console.print(f"[dim]Series id:[/dim] {result.group_id}")
    if result.truncated:
        console.print(
            f"[yellow]Stopped after one year; {result.truncated_days} later day(s) were not scheduled.[/yellow]"
        )


@main.command()
@click.argument("entry_id")
@click.pass_obj
def remind(store: SevaStore, entry_id: str) -> None:
    """Draft a reminder for one schedule entry."""
    entry = store.get_entry(entry_id)
    if entry is None:
        console.print(f"[red]Error:[/red] No schedule entry {entry_id}")
        raise SystemExit(1)
    person = store.get_person(entry.person_id)
    seva = store.get_seva(entry.seva_id)
    if person is None or seva is None:
        console.print(f"[red]Error:[/red] Entry {entry_id} references a volunteer or seva that no longer exists")
        raise SystemExit(1)

    with console.status("Drafting reminder..."):
        result = asyncio.run(draft_reminder_result(person, seva, entry.date, entry.start_time))

    style = "green" if result.status == DraftStatus.GENERATED else "yellow"
    console.print(
        Panel(
            result.text,
            title=f"Reminder for {person.full_name} ({person.preferred_channel.value})",
            border_style=style,
        )
    )


@main.command()
@click.option("--date", "day", default=None, help="Day to summarise, YYYY-MM-DD (default: today).")
@click.pass_obj
def summary(store: SevaStore, day: t.Optional[str]) -> None:
    """Draft a summary header and list the day's sevas."""
    day = day or date.today().isoformat()
    entries = entries_for_date(store.schedule, day)
    with console.status("Drafting summary..."):
        result = asyncio.run(draft_daily_summary_result(day, len(entries)))

    console.print(Panel.fit(result.text or "(empty summary)", border_style="blue"))
    if entries:
        console.print(create_entries_table(store, entries, f"Sevas on {day}"))


if __name__ == "__main__":
    main()

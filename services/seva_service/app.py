"""
FastAPI service for seva scheduling.

This service exposes the in-memory seva store, the recurring scheduler, the
calendar views and reminder drafting as REST endpoints.
"""
from __future__ import annotations

import logging
import os
import typing as t
from contextlib import asynccontextmanager
from datetime import date

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Query
from openai import AsyncOpenAI

from reminders.drafter import draft_daily_summary_result, draft_reminder_result
from scheduler.calendar_view import entries_for_date, month_grid, month_view, upcoming
from scheduler.form import author_schedule
from seva_store.seed import seed_demo_data
from seva_store.store import SevaStore, StatusTransitionError
from services.shared.models import (
    CreatePersonRequest,
    CreateSevaRequest,
    DailySummaryRequest,
    DraftResponse,
    MonthViewResponse,
    Person,
    ScheduleEntry,
    ScheduleSevaRequest,
    ScheduleSevaResponse,
    Seva,
    UpdateStatusRequest,
    from_dataclass,
)

load_dotenv()

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# In-memory store for the lifetime of the process
store = SevaStore()

# Shared async OpenAI client, created on startup when a key is configured
openai_client: t.Optional[AsyncOpenAI] = None


def get_store() -> SevaStore:
    """Dependency returning the process-wide store."""
    return store


def get_openai_client() -> t.Optional[AsyncOpenAI]:
    """Dependency returning the shared drafting client, if any."""
    return openai_client


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed demo data on startup when SEVA_SEED_DEMO=1 and open the drafting client."""
    global openai_client

    if os.getenv("SEVA_SEED_DEMO") == "1":
        seed_demo_data(store)
        logger.info(f"🌱 Seeded demo data: {len(store.people)} volunteers, {len(store.sevas)} sevas")
    api_key = os.getenv("OPENAI_API_KEY")
    if api_key:
        openai_client = AsyncOpenAI(api_key=api_key)
    else:
        logger.warning("OPENAI_API_KEY is not set; reminder drafting will return fallback messages")

    yield

    if openai_client is not None:
        await openai_client.close()
        openai_client = None


app = FastAPI(
    title="Seva Service",
    description="REST API for temple volunteer scheduling",
    version="1.0.0",
    lifespan=lifespan,
)


def _entries_out(entries: t.Iterable) -> list[ScheduleEntry]:
    return [from_dataclass(ScheduleEntry, e) for e in entries]


@app.get("/health")
async def health_check():
    """Health check endpoint for container orchestration."""
    return {"status": "healthy", "service": "seva-service"}


# -----------------------------
# People
# -----------------------------

@app.get("/people", response_model=list[Person])
async def list_people(store: SevaStore = Depends(get_store)) -> list[Person]:
    return [from_dataclass(Person, p) for p in store.people]


@app.post("/people", response_model=Person)
async def create_person(request: CreatePersonRequest, store: SevaStore = Depends(get_store)) -> Person:
    """Register a volunteer."""
    person = store.add_person(**request.model_dump())
    return from_dataclass(Person, person)


@app.delete("/people/{person_id}")
async def delete_person(person_id: str, store: SevaStore = Depends(get_store)):
    """
    Remove a volunteer.

    Schedule entries assigned to them are left in place.
    """
    store.remove_person(person_id)
    return {"detail": "Deleted"}


# -----------------------------
# Sevas
# -----------------------------

@app.get("/sevas", response_model=list[Seva])
async def list_sevas(store: SevaStore = Depends(get_store)) -> list[Seva]:
    return [from_dataclass(Seva, s) for s in store.sevas]


@app.post("/sevas", response_model=Seva)
async def create_seva(request: CreateSevaRequest, store: SevaStore = Depends(get_store)) -> Seva:
    """Create a seva type."""
    seva = store.add_seva(**request.model_dump())
    return from_dataclass(Seva, seva)


@app.delete("/sevas/{seva_id}")
async def delete_seva(seva_id: str, store: SevaStore = Depends(get_store)):
    store.remove_seva(seva_id)
    return {"detail": "Deleted"}


# -----------------------------
# Schedule
# -----------------------------

@app.get("/schedule", response_model=list[ScheduleEntry])
async def list_schedule(
    day: t.Optional[str] = Query(None, alias="date", description="Only entries on this YYYY-MM-DD date"),
    store: SevaStore = Depends(get_store),
) -> list[ScheduleEntry]:
    if day:
        return _entries_out(entries_for_date(store.schedule, day))
    return _entries_out(store.schedule)


@app.post("/schedule", response_model=ScheduleSevaResponse)
async def schedule_seva(request: ScheduleSevaRequest, store: SevaStore = Depends(get_store)) -> ScheduleSevaResponse:
    """
    Schedule a volunteer on one day or on a weekly pattern.

    The whole batch is stored at once, or nothing is stored.
    """
    try:
        result = author_schedule(
            store,
            request.seva_id,
            request.person_id,
            request.start_date,
            end_date=request.end_date,
            start_time=request.start_time,
            end_time=request.end_time,
            recurring=request.recurring,
            weekdays=request.weekdays,
        )
    except ValueError as e:
        # ScheduleValidationError and malformed dates/times
        logger.info(f"Rejected schedule request: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    return ScheduleSevaResponse(
        entries=_entries_out(result.entries),
        group_id=result.group_id,
        truncated_days=result.truncated_days,
    )


@app.patch("/schedule/{entry_id}/status", response_model=ScheduleEntry)
async def update_status(
    entry_id: str,
    request: UpdateStatusRequest,
    store: SevaStore = Depends(get_store),
) -> ScheduleEntry:
    try:
        store.set_entry_status(entry_id, request.status)
    except StatusTransitionError as e:
        raise HTTPException(status_code=409, detail=str(e))

    entry = store.get_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Schedule entry not found")
    return from_dataclass(ScheduleEntry, entry)


# -----------------------------
# Calendar views
# -----------------------------

@app.get("/calendar/{year_month}", response_model=MonthViewResponse)
async def get_month(year_month: str, store: SevaStore = Depends(get_store)) -> MonthViewResponse:
    """Every day of a month with its entries, earliest first."""
    try:
        grid = month_grid(year_month)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    days = month_view(store.schedule, year_month)
    return MonthViewResponse(
        year_month=year_month,
        days_in_month=grid.days_in_month,
        leading_blank_cells=grid.leading_blank_cells,
        days={day: _entries_out(entries) for day, entries in days.items()},
    )


@app.get("/upcoming", response_model=list[ScheduleEntry])
async def get_upcoming(
    today: t.Optional[str] = Query(None, description="Override today's date, YYYY-MM-DD"),
    store: SevaStore = Depends(get_store),
) -> list[ScheduleEntry]:
    """Entries for today and tomorrow."""
    try:
        day = date.fromisoformat(today) if today else None
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format. Use YYYY-MM-DD.")
    return _entries_out(upcoming(store.schedule, day))


# -----------------------------
# Drafting
# -----------------------------

@app.post("/schedule/{entry_id}/reminder", response_model=DraftResponse)
async def draft_entry_reminder(
    entry_id: str,
    store: SevaStore = Depends(get_store),
    client: t.Optional[AsyncOpenAI] = Depends(get_openai_client),
) -> DraftResponse:
    """
    Draft a reminder for the volunteer of one entry.

    Drafting failures come back as fallback text, never as an error status.
    """
    entry = store.get_entry(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Schedule entry not found")

    person = store.get_person(entry.person_id)
    seva = store.get_seva(entry.seva_id)
    if person is None or seva is None:
        raise HTTPException(status_code=404, detail="Entry references a volunteer or seva that no longer exists")

    result = await draft_reminder_result(person, seva, entry.date, entry.start_time, client=client)
    return DraftResponse(status=result.status.value, text=result.text)


@app.post("/summary", response_model=DraftResponse)
async def draft_summary(
    request: DailySummaryRequest,
    store: SevaStore = Depends(get_store),
    client: t.Optional[AsyncOpenAI] = Depends(get_openai_client),
) -> DraftResponse:
    count = len(entries_for_date(store.schedule, request.date))
    result = await draft_daily_summary_result(request.date, count, client=client)
    return DraftResponse(status=result.status.value, text=result.text)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("SEVA_SERVICE_PORT", "8004")))

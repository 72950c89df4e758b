"""Reminder drafting through an OpenAI chat model.

Both drafting calls are best effort: a missing API key or any failure of the
call turns into a fixed fallback string instead of an exception. The
``*_result`` variants return a DraftResult so callers can tell a missing key
apart from a failed call.
"""
from __future__ import annotations

import json
import logging
import os
import typing as t
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum

from openai import AsyncOpenAI

from prompts import load_prompt
from seva_store.models import NotificationChannel, Person, Seva

logger = logging.getLogger(__name__)


REMINDER_SYSTEM_PROMPT = load_prompt("reminder_system_prompt")
SUMMARY_SYSTEM_PROMPT = load_prompt("daily_summary_system_prompt")

DEFAULT_MODEL = "gpt-5"

# Reminder fallbacks
MISSING_KEY_MESSAGE = "Error: API Key is missing. Cannot generate AI message."
REMINDER_ERROR_MESSAGE = "Error generating message. Please check your connection."
EMPTY_REMINDER_MESSAGE = "Could not generate message."

# Daily summary fallbacks; failures degrade to a plain sentence, not an error
SUMMARY_MISSING_KEY_MESSAGE = "API Key missing."
SUMMARY_FALLBACK_MESSAGE = "Here is the schedule for tomorrow."


class DraftStatus(Enum):
    GENERATED = "GENERATED"
    UNAVAILABLE = "UNAVAILABLE"  # no API key configured
    FAILED = "FAILED"            # the call itself went wrong


@dataclass
class DraftResult:
    """Outcome of one drafting call. ``text`` is always safe to display."""
    status: DraftStatus
    text: str
    error: str = ""


@asynccontextmanager
async def _client_scope(client: t.Optional[AsyncOpenAI]) -> t.AsyncIterator[t.Optional[AsyncOpenAI]]:
    """Yield the given client, or a one-off client from OPENAI_API_KEY that is closed afterwards.

    Yields None when no client is given and no key is configured.
    """
    if client is not None:
        yield client
        return
    api_key = os.getenv("OPENAI_API_KEY")
    if not api_key:
        yield None
        return
    async with AsyncOpenAI(api_key=api_key) as owned:
        yield owned


def _resolve_model(model: t.Optional[str]) -> str:
    return model or os.getenv("SEVA_REMINDER_MODEL", DEFAULT_MODEL)


def channel_hint(channel: NotificationChannel) -> str:
    if channel == NotificationChannel.WHATSAPP:
        return "WhatsApp (keep it concise, include emoji)"
    return "Email (formal but warm)"


async def _complete(client: AsyncOpenAI, model: str, system_prompt: str, payload: dict) -> str:
    completion = await client.chat.completions.create(
        model=model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": json.dumps(payload, indent=2)},
        ],
    )
    return completion.choices[0].message.content or ""


async def draft_reminder_result(
    person: Person,
    seva: Seva,
    date: str,
    time: str,
    client: t.Optional[AsyncOpenAI] = None,
    model: t.Optional[str] = None,
) -> DraftResult:
    """Draft a reminder for one volunteer's seva.

    :param person: The volunteer being reminded.
    :param seva: The seva they are scheduled for.
    :param date: Day of the seva, "YYYY-MM-DD".
    :param time: Start time, "HH:MM".
    :param client: Optional AsyncOpenAI client, left open. When omitted a one-off
        client is built from OPENAI_API_KEY and closed after the call.
    :param model: Optional model name; defaults to SEVA_REMINDER_MODEL or gpt-5.
    :return: A DraftResult whose text is the message or a fallback string.
    """
    payload = {
        "volunteer_name": person.full_name,
        "seva": seva.name,
        "date": date,
        "time": time,
        "channel": channel_hint(person.preferred_channel),
    }
    async with _client_scope(client) as active:
        if active is None:
            return DraftResult(status=DraftStatus.UNAVAILABLE, text=MISSING_KEY_MESSAGE)
        try:
            text = await _complete(active, _resolve_model(model), REMINDER_SYSTEM_PROMPT, payload)
        except Exception as e:
            logger.error(f"Reminder drafting failed for {person.full_name}: {e}")
            return DraftResult(status=DraftStatus.FAILED, text=REMINDER_ERROR_MESSAGE, error=str(e))

    return DraftResult(status=DraftStatus.GENERATED, text=text or EMPTY_REMINDER_MESSAGE)


async def draft_reminder(
    person: Person,
    seva: Seva,
    date: str,
    time: str,
    client: t.Optional[AsyncOpenAI] = None,
    model: t.Optional[str] = None,
) -> str:
    """Draft a reminder message; never raises."""
    result = await draft_reminder_result(person, seva, date, time, client=client, model=model)
    return result.text


async def draft_daily_summary_result(
    date: str,
    count: int,
    client: t.Optional[AsyncOpenAI] = None,
    model: t.Optional[str] = None,
) -> DraftResult:
    """Draft a short header for the day's schedule.

    :param date: The day being summarised, "YYYY-MM-DD".
    :param count: How many sevas are scheduled.
    :return: A DraftResult; failures fall back to a generic sentence.
    """
    payload = {"date": date, "scheduled_count": count}
    async with _client_scope(client) as active:
        if active is None:
            return DraftResult(status=DraftStatus.UNAVAILABLE, text=SUMMARY_MISSING_KEY_MESSAGE)
        try:
            text = await _complete(active, _resolve_model(model), SUMMARY_SYSTEM_PROMPT, payload)
        except Exception as e:
            logger.warning(f"Daily summary drafting failed for {date}: {e}")
            return DraftResult(status=DraftStatus.FAILED, text=SUMMARY_FALLBACK_MESSAGE, error=str(e))

    return DraftResult(status=DraftStatus.GENERATED, text=text)


async def draft_daily_summary(
    date: str,
    count: int,
    client: t.Optional[AsyncOpenAI] = None,
    model: t.Optional[str] = None,
) -> str:
    """Draft a daily summary header; never raises."""
    result = await draft_daily_summary_result(date, count, client=client, model=model)
    return result.text

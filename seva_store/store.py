# -*- coding: utf-8 -*-
import logging
import typing as t
import uuid
from dataclasses import replace

from .models import (
    TERMINAL_STATUSES,
    Person,
    ScheduleEntry,
    ScheduleStatus,
    Seva,
)

logger = logging.getLogger(__name__)


# In-memory storage for volunteers, sevas and the schedule
# Nothing is persisted; the store lives as long as the process


def new_id() -> str:
    """Return a short random identifier."""
    return uuid.uuid4().hex[:9]


class StatusTransitionError(ValueError):
    """Raised when a terminal schedule entry is moved to another status."""


class SevaStore:
    """Holds people, sevas and schedule entries as immutable snapshots.

    Every mutation builds a new tuple and swaps it in, so a reader always sees
    either the old or the new collection, never a half-applied change. No
    foreign-key checks are made: removing a person or seva leaves any entry
    that references it in place.
    """

    def __init__(self, id_factory: t.Callable[[], str] = new_id) -> None:
        self.id_factory = id_factory
        self._people: tuple[Person, ...] = ()
        self._sevas: tuple[Seva, ...] = ()
        self._schedule: tuple[ScheduleEntry, ...] = ()

    @property
    def people(self) -> tuple[Person, ...]:
        return self._people

    @property
    def sevas(self) -> tuple[Seva, ...]:
        return self._sevas

    @property
    def schedule(self) -> tuple[ScheduleEntry, ...]:
        return self._schedule

    def load(
        self,
        people: t.Iterable[Person] = (),
        sevas: t.Iterable[Seva] = (),
        schedule: t.Iterable[ScheduleEntry] = (),
    ) -> None:
        """Replace every collection with records that already carry ids."""
        self._people = tuple(people)
        self._sevas = tuple(sevas)
        self._schedule = tuple(schedule)

    # -----------------------------
    # People
    # -----------------------------

    def add_person(self, **data: t.Any) -> Person:
        """Registers a volunteer under a freshly generated id.

        :param data: Person fields other than ``id``.
        :return: The stored Person.
        """
        person = Person(id=self.id_factory(), **data)
        self._people = self._people + (person,)
        logger.info(f"Registered volunteer {person.full_name} ({person.id})")
        return person

    def remove_person(self, person_id: str) -> None:
        """Removes a volunteer. Unknown ids are ignored."""
        self._people = tuple(p for p in self._people if p.id != person_id)

    def get_person(self, person_id: str) -> t.Optional[Person]:
        return next((p for p in self._people if p.id == person_id), None)

    # -----------------------------
    # Sevas
    # -----------------------------

    def add_seva(self, **data: t.Any) -> Seva:
        """Creates a seva type under a freshly generated id.

        :param data: Seva fields other than ``id``.
        :return: The stored Seva.
        """
        seva = Seva(id=self.id_factory(), **data)
        self._sevas = self._sevas + (seva,)
        logger.info(f"Created seva {seva.name} ({seva.id})")
        return seva

    def remove_seva(self, seva_id: str) -> None:
        """Removes a seva type. Unknown ids are ignored."""
        self._sevas = tuple(s for s in self._sevas if s.id != seva_id)

    def get_seva(self, seva_id: str) -> t.Optional[Seva]:
        return next((s for s in self._sevas if s.id == seva_id), None)

    # -----------------------------
    # Schedule
    # -----------------------------

    def add_schedule_entries(self, entries: t.Iterable[ScheduleEntry]) -> None:
        """Appends a batch of entries in a single snapshot swap."""
        batch = tuple(entries)
        self._schedule = self._schedule + batch
        logger.info(f"Added {len(batch)} schedule entries")

    def get_entry(self, entry_id: str) -> t.Optional[ScheduleEntry]:
        return next((e for e in self._schedule if e.id == entry_id), None)

    def set_entry_status(self, entry_id: str, status: ScheduleStatus) -> None:
        """Replaces the status of one entry.

        Unknown ids are a no-op. Once an entry is COMPLETED or CANCELLED it
        can only be set to the same status again.

        :raises StatusTransitionError: If the entry is already terminal.
        """
        status = ScheduleStatus(status)
        current = self.get_entry(entry_id)
        if current is None:
            return
        if current.status in TERMINAL_STATUSES and status != current.status:
            raise StatusTransitionError(
                f"Entry {entry_id} is already {current.status.value}; cannot move to {status.value}"
            )
        self._schedule = tuple(
            replace(e, status=status) if e.id == entry_id else e
            for e in self._schedule
        )

    def dangling_entries(self) -> list[ScheduleEntry]:
        """Entries whose person or seva no longer exists."""
        person_ids = {p.id for p in self._people}
        seva_ids = {s.id for s in self._sevas}
        return [
            e for e in self._schedule
            if e.person_id not in person_ids or e.seva_id not in seva_ids
        ]

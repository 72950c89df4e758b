"""Shared fixtures: stores with predictable ids."""
import itertools
import typing as t

import pytest

from seva_store.models import NotificationChannel
from seva_store.store import SevaStore


def counter_ids(prefix: str = "id") -> t.Callable[[], str]:
    """Id factory yielding id1, id2, ... so tests can assert exact ids."""
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


@pytest.fixture
def store() -> SevaStore:
    """An empty store with deterministic ids."""
    return SevaStore(id_factory=counter_ids())


@pytest.fixture
def stocked_store(store: SevaStore) -> SevaStore:
    """A store with one volunteer and one seva starting at 06:00 for 60 minutes."""
    store.add_person(
        full_name="Rahul Sharma",
        email="rahul@example.com",
        mobile="9876543210",
        preferred_channel=NotificationChannel.WHATSAPP,
    )
    store.add_seva(
        name="Morning Aarti",
        description="First prayer of the day.",
        default_duration_minutes=60,
        default_start_time="06:00",
    )
    return store

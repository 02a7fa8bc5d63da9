"""Shared test fixtures and helpers."""

from datetime import date, time

import pendulum
import pytest

from barberslots.adapters.memory_store import InMemoryBookingStore
from barberslots.services.availability import AvailabilityService

TZ = "Europe/Berlin"

MONDAY = date(2024, 11, 25)
SATURDAY = date(2024, 11, 23)
SUNDAY = date(2024, 11, 24)


def fixed_clock(moment: str):
    """Return a clock that always reports ``moment`` in the shop timezone."""
    now = pendulum.parse(moment, tz=TZ)
    return lambda: now


def at(moment: str):
    """Shortcut for a shop-local datetime."""
    return pendulum.parse(moment, tz=TZ)


@pytest.fixture
def store():
    """Barber 'tom': Mon-Fri 09:00-17:00, closed Saturday, no row for Sunday."""
    store = InMemoryBookingStore()
    store.add_barber("tom", "Tom")
    store.add_service("cut", 30)
    store.add_service("full", 60)

    for weekday in range(5):
        store.set_opening_hours("tom", weekday, time(9, 0), time(17, 0))
    store.set_opening_hours("tom", 5, is_closed=True)

    return store


@pytest.fixture
def service(store):
    """Availability service whose clock sits well before the test dates."""
    return AvailabilityService(store, timezone=TZ, clock=fixed_clock("2024-11-20 08:00"))

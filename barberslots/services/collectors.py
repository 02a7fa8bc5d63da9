"""
Read-side collaborators that turn booking-store queries into domain snapshots.

The store is described by ``BookingStoreProtocol`` so the in-memory store,
the JSON store or a real database adapter can be plugged in without the
engine knowing which one it talks to.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Protocol

from ..domain.models import (
    BookingRecord,
    HolidayRange,
    LunchBreak,
    OpeningHours,
    OpeningWindow,
    TimeInterval,
)
from ..domain.obligations import build_obligations
from ..domain.opening_hours import window_for

logger = logging.getLogger(__name__)


class BookingStoreProtocol(Protocol):
    """
    Protocol describing the storage reads the engine needs.

    Every method raises ``NotFoundError`` for an unknown barber and
    ``UpstreamUnavailableError`` when the backing data cannot be read.
    """

    def get_opening_hours(self, barber_id: str, weekday: int) -> OpeningHours | None:
        """Return the opening hours row for a weekday (0=Monday), if any."""

    def get_confirmed_bookings(self, barber_id: str, on_date: date) -> List[BookingRecord]:
        """Return the confirmed bookings of a barber on a date."""

    def get_active_lunch_breaks(self, barber_id: str) -> List[LunchBreak]:
        """Return the barber's active daily lunch breaks."""

    def get_holiday_ranges(self, barber_id: str) -> List[HolidayRange]:
        """Return every holiday range configured for the barber."""


class OpeningHoursResolver:
    """Resolves the opening window of a barber on a calendar date."""

    def __init__(self, store: BookingStoreProtocol) -> None:
        self._store = store

    def resolve(self, barber_id: str, on_date: date) -> OpeningWindow:
        hours = self._store.get_opening_hours(barber_id, on_date.weekday())
        window = window_for(on_date, hours)

        if window.is_open:
            logger.debug(
                "Barber %s open %s-%s on %s",
                barber_id, window.open_time, window.close_time, on_date,
            )
        else:
            logger.debug("Barber %s closed on %s", barber_id, on_date)

        return window


class ObligationCollector:
    """Gathers every interval that blocks a barber's time on one date."""

    def __init__(self, store: BookingStoreProtocol, timezone: str) -> None:
        self._store = store
        self._timezone = timezone

    def collect(
        self,
        barber_id: str,
        on_date: date,
        window: OpeningWindow | None = None,
        exclude_booking_id: str | None = None,
    ) -> List[TimeInterval]:
        """
        Fetch bookings, lunch breaks and holidays and convert them to intervals.

        ``exclude_booking_id`` leaves one booking out, which lets a customer
        move an existing appointment without colliding with it.
        """
        bookings = self._store.get_confirmed_bookings(barber_id, on_date)
        lunch_breaks = self._store.get_active_lunch_breaks(barber_id)
        holidays = self._store.get_holiday_ranges(barber_id)

        obligations = build_obligations(
            barber_id=barber_id,
            on_date=on_date,
            bookings=bookings,
            lunch_breaks=lunch_breaks,
            holidays=holidays,
            timezone=self._timezone,
            window=window,
            exclude_booking_id=exclude_booking_id,
        )

        logger.debug(
            "Collected %d obligation(s) for barber %s on %s "
            "(%d booking(s), %d lunch break(s), %d holiday range(s))",
            len(obligations), barber_id, on_date,
            len(bookings), len(lunch_breaks), len(holidays),
        )

        return obligations

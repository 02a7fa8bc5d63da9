"""
Dictionary-backed booking store.
"""

from dataclasses import dataclass
from datetime import date, time
from typing import Dict, List

from ..domain.exceptions import InvalidArgumentError, NotFoundError
from ..domain.models import (
    CONFIRMED,
    BookingRecord,
    HolidayRange,
    LunchBreak,
    OpeningHours,
)


@dataclass
class StoredBooking:
    """A booking row as persisted, before its duration is resolved."""
    booking_id: str
    booking_date: date
    booking_time: time
    service_id: str | None = None
    duration_minutes: int | None = None  # snapshot taken when the booking was made
    status: str = CONFIRMED


class InMemoryBookingStore:
    """
    Booking store kept entirely in memory.

    Implements ``BookingStoreProtocol``. Each booking normally carries the
    service duration captured when it was made. Bookings without a snapshot
    fall back to the service's current duration, and
    ``live_service_durations=True`` uses the current duration for every
    booking, so later edits to a service move existing bookings too.
    """

    def __init__(self, live_service_durations: bool = False):
        self.live_service_durations = live_service_durations
        self._barbers: Dict[str, str] = {}
        self._services: Dict[str, int] = {}
        self._opening_hours: Dict[str, Dict[int, OpeningHours]] = {}
        self._bookings: Dict[str, List[StoredBooking]] = {}
        self._lunch_breaks: Dict[str, List[LunchBreak]] = {}
        self._holidays: Dict[str, List[HolidayRange]] = {}

    # Writes

    def add_barber(self, barber_id: str, name: str = "") -> None:
        self._barbers[barber_id] = name or barber_id
        self._opening_hours.setdefault(barber_id, {})
        self._bookings.setdefault(barber_id, [])
        self._lunch_breaks.setdefault(barber_id, [])
        self._holidays.setdefault(barber_id, [])

    def add_service(self, service_id: str, duration_minutes: int) -> None:
        if duration_minutes <= 0:
            raise InvalidArgumentError(
                f"Service {service_id} needs a positive duration, got {duration_minutes}"
            )
        self._services[service_id] = duration_minutes

    def set_opening_hours(
        self,
        barber_id: str,
        weekday: int,
        open_time: time | None = None,
        close_time: time | None = None,
        is_closed: bool = False,
    ) -> None:
        self._require_barber(barber_id)
        if weekday not in range(7):
            raise InvalidArgumentError(f"Weekday must be between 0 and 6, got {weekday}")
        self._opening_hours[barber_id][weekday] = OpeningHours(
            weekday=weekday,
            is_closed=is_closed,
            open_time=open_time,
            close_time=close_time,
        )

    def add_booking(
        self,
        barber_id: str,
        booking_id: str,
        booking_date: date,
        booking_time: time,
        service_id: str | None = None,
        duration_minutes: int | None = None,
        status: str = CONFIRMED,
    ) -> StoredBooking:
        self._require_barber(barber_id)
        if service_id is None and duration_minutes is None:
            raise InvalidArgumentError(
                f"Booking {booking_id} needs a service or a duration"
            )
        if duration_minutes is not None and duration_minutes <= 0:
            raise InvalidArgumentError(
                f"Booking {booking_id} needs a positive duration, got {duration_minutes}"
            )
        if service_id is not None:
            self._require_service(service_id)
            if duration_minutes is None and not self.live_service_durations:
                duration_minutes = self._services[service_id]

        booking = StoredBooking(
            booking_id=booking_id,
            booking_date=booking_date,
            booking_time=booking_time,
            service_id=service_id,
            duration_minutes=duration_minutes,
            status=status,
        )
        self._bookings[barber_id].append(booking)
        return booking

    def set_booking_status(self, barber_id: str, booking_id: str, status: str) -> None:
        for booking in self._bookings_of(barber_id):
            if booking.booking_id == booking_id:
                booking.status = status
                return
        raise NotFoundError(f"Unknown booking '{booking_id}' for barber '{barber_id}'")

    def add_lunch_break(
        self,
        barber_id: str,
        start_time: time,
        duration_minutes: int,
        is_active: bool = True,
    ) -> None:
        self._require_barber(barber_id)
        if duration_minutes <= 0:
            raise InvalidArgumentError(
                f"Lunch break at {start_time} needs a positive duration, got {duration_minutes}"
            )
        self._lunch_breaks[barber_id].append(
            LunchBreak(start_time=start_time, duration_minutes=duration_minutes, is_active=is_active)
        )

    def add_holiday(
        self,
        barber_id: str,
        start_date: date,
        end_date: date,
        title: str = "",
    ) -> None:
        self._require_barber(barber_id)
        if end_date < start_date:
            raise InvalidArgumentError(
                f"Holiday end {end_date} must not be before its start {start_date}"
            )
        self._holidays[barber_id].append(
            HolidayRange(start_date=start_date, end_date=end_date, title=title)
        )

    # BookingStoreProtocol

    def get_opening_hours(self, barber_id: str, weekday: int) -> OpeningHours | None:
        self._require_barber(barber_id)
        return self._opening_hours[barber_id].get(weekday)

    def get_confirmed_bookings(self, barber_id: str, on_date: date) -> List[BookingRecord]:
        return [
            BookingRecord(
                booking_id=booking.booking_id,
                booking_time=booking.booking_time,
                duration_minutes=self._duration_of(booking),
                status=booking.status,
            )
            for booking in self._bookings_of(barber_id)
            if booking.booking_date == on_date and booking.status == CONFIRMED
        ]

    def get_active_lunch_breaks(self, barber_id: str) -> List[LunchBreak]:
        self._require_barber(barber_id)
        return [lunch for lunch in self._lunch_breaks[barber_id] if lunch.is_active]

    def get_holiday_ranges(self, barber_id: str) -> List[HolidayRange]:
        self._require_barber(barber_id)
        return list(self._holidays[barber_id])

    # Helpers

    def barber_ids(self) -> List[str]:
        return list(self._barbers)

    def barber_name(self, barber_id: str) -> str:
        self._require_barber(barber_id)
        return self._barbers[barber_id]

    def _bookings_of(self, barber_id: str) -> List[StoredBooking]:
        self._require_barber(barber_id)
        return self._bookings[barber_id]

    def _duration_of(self, booking: StoredBooking) -> int:
        if booking.service_id is not None and (
            self.live_service_durations or booking.duration_minutes is None
        ):
            self._require_service(booking.service_id)
            return self._services[booking.service_id]
        return booking.duration_minutes

    def _require_barber(self, barber_id: str) -> None:
        if barber_id not in self._barbers:
            raise NotFoundError(f"Unknown barber '{barber_id}'")

    def _require_service(self, service_id: str) -> None:
        if service_id not in self._services:
            raise NotFoundError(f"Unknown service '{service_id}'")

"""
Booking store loaded from a JSON document.
"""

import json
import logging
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Dict

import pendulum

from ..domain.exceptions import AvailabilityError, UpstreamUnavailableError
from ..domain.models import CONFIRMED
from .memory_store import InMemoryBookingStore

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date:
    parsed = pendulum.parse(str(value), exact=True)
    if isinstance(parsed, datetime) or not isinstance(parsed, date):
        raise ValueError(f"Expected a calendar date, got {value!r}")
    return parsed


def _parse_time(value: str) -> time:
    # Accepts both "09:00" and "09:00:00"
    parsed = pendulum.parse(str(value), exact=True)
    if not isinstance(parsed, time):
        raise ValueError(f"Expected a time of day, got {value!r}")
    return parsed


class JsonBookingStore(InMemoryBookingStore):
    """
    Store that reads barbers, services, opening hours, bookings, lunch breaks
    and holidays from a JSON file.

    Expected layout (weekdays are 0=Monday .. 6=Sunday)::

        {
          "barbers": [{"id": "tom", "name": "Tom"}],
          "services": [{"id": "cut", "duration": 30}],
          "opening_hours": [{"barber_id": "tom", "day_of_week": 0,
                             "open_time": "09:00", "close_time": "17:00",
                             "is_closed": false}],
          "bookings": [{"id": "b1", "barber_id": "tom", "service_id": "cut",
                        "booking_date": "2024-11-25", "booking_time": "10:00",
                        "duration": 30, "status": "confirmed"}],
          "lunch_breaks": [{"barber_id": "tom", "start_time": "13:00",
                            "duration": 60, "is_active": true}],
          "holidays": [{"barber_id": "tom", "start_date": "2024-12-24",
                        "end_date": "2024-12-26", "title": "Christmas"}]
        }

    A malformed row makes the whole file unusable: skipping a booking would
    report its time as free.
    """

    def __init__(self, path: Path, live_service_durations: bool = False):
        super().__init__(live_service_durations=live_service_durations)
        self.path = Path(path)
        self._load(self._read())

    def _read(self) -> Dict[str, Any]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            raise UpstreamUnavailableError(
                f"Could not read booking data from {self.path}: {exc}"
            ) from exc

        if not isinstance(data, dict):
            raise UpstreamUnavailableError(
                f"Booking data in {self.path} must contain a mapping at the root level."
            )
        return data

    def _load(self, data: Dict[str, Any]) -> None:
        try:
            for barber in data.get("barbers", []):
                self.add_barber(str(barber["id"]), barber.get("name", ""))

            for service in data.get("services", []):
                self.add_service(str(service["id"]), int(service["duration"]))

            for row in data.get("opening_hours", []):
                is_closed = bool(row.get("is_closed", False))
                self.set_opening_hours(
                    str(row["barber_id"]),
                    int(row["day_of_week"]),
                    open_time=None if is_closed else _parse_time(row["open_time"]),
                    close_time=None if is_closed else _parse_time(row["close_time"]),
                    is_closed=is_closed,
                )

            for row in data.get("bookings", []):
                service_id = row.get("service_id")
                duration = row.get("duration")
                self.add_booking(
                    str(row["barber_id"]),
                    str(row["id"]),
                    _parse_date(row["booking_date"]),
                    _parse_time(row["booking_time"]),
                    service_id=None if service_id is None else str(service_id),
                    duration_minutes=None if duration is None else int(duration),
                    status=row.get("status", CONFIRMED),
                )

            for row in data.get("lunch_breaks", []):
                self.add_lunch_break(
                    str(row["barber_id"]),
                    _parse_time(row["start_time"]),
                    int(row["duration"]),
                    is_active=bool(row.get("is_active", True)),
                )

            for row in data.get("holidays", []):
                self.add_holiday(
                    str(row["barber_id"]),
                    _parse_date(row["start_date"]),
                    _parse_date(row["end_date"]),
                    title=row.get("title", ""),
                )
        except (KeyError, TypeError, ValueError, AvailabilityError) as exc:
            raise UpstreamUnavailableError(
                f"Invalid booking data in {self.path}: {exc}"
            ) from exc

        logger.info(
            "Loaded %d barber(s) and %d booking(s) from %s",
            len(self.barber_ids()),
            len(data.get("bookings", [])),
            self.path,
        )

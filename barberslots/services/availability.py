"""
Application service answering availability questions for the booking flow.

The service coordinates the opening hours resolver and obligation collector
(the only parts that touch the store) and delegates every slot decision to
the domain-level ``AvailabilityEvaluator``. It is synchronous and keeps no
state between calls, so request handlers may share one instance.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from typing import Callable, Iterator, List

import pendulum

from ..domain.evaluator import AvailabilityEvaluator
from ..domain.exceptions import InvalidArgumentError
from ..domain.models import (
    AvailabilityResult,
    CandidateSlot,
    OpeningWindow,
    ServiceRequirement,
    TimeInterval,
)
from ..domain.slot_generator import DEFAULT_STEP_MINUTES, SlotGenerator
from .collectors import BookingStoreProtocol, ObligationCollector, OpeningHoursResolver

logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD_DAYS = 30

Clock = Callable[[], datetime]


def as_requirement(service: ServiceRequirement | int) -> ServiceRequirement:
    """Accept either a requirement or a plain duration in minutes."""
    if isinstance(service, ServiceRequirement):
        return service
    return ServiceRequirement(duration_minutes=service)


def _check_date(value: date) -> date:
    if isinstance(value, datetime) or not isinstance(value, date):
        raise InvalidArgumentError(f"Expected a calendar date, got {value!r}")
    return value


def _check_time(value: time) -> time:
    if not isinstance(value, time):
        raise InvalidArgumentError(f"Expected a time of day, got {value!r}")
    return value


class AvailabilityService:
    """
    Computes free appointment times for a barber.

    Every public call reads the clock once, fetches a fresh snapshot from the
    store and evaluates it; nothing is cached between calls.
    """

    def __init__(
        self,
        store: BookingStoreProtocol,
        *,
        timezone: str = "Europe/Berlin",
        step_minutes: int = DEFAULT_STEP_MINUTES,
        lookahead_days: int = DEFAULT_LOOKAHEAD_DAYS,
        clock: Clock | None = None,
    ) -> None:
        self.timezone = timezone
        self.lookahead_days = lookahead_days
        self._resolver = OpeningHoursResolver(store)
        self._collector = ObligationCollector(store, timezone)
        self._generator = SlotGenerator(step_minutes)
        self._evaluator = AvailabilityEvaluator(timezone)
        self._clock = clock or (lambda: pendulum.now(self.timezone))

    # Snapshots

    def opening_window(self, barber_id: str, on_date: date) -> OpeningWindow:
        return self._resolver.resolve(barber_id, _check_date(on_date))

    def obligations(
        self,
        barber_id: str,
        on_date: date,
        window: OpeningWindow | None = None,
        exclude_booking_id: str | None = None,
    ) -> List[TimeInterval]:
        return self._collector.collect(
            barber_id,
            _check_date(on_date),
            window=window,
            exclude_booking_id=exclude_booking_id,
        )

    # Day aggregation

    def evaluate_day(
        self,
        barber_id: str,
        on_date: date,
        service: ServiceRequirement | int,
        exclude_booking_id: str | None = None,
    ) -> List[AvailabilityResult]:
        """Evaluate every generated slot of the day, bookable or not."""
        return list(
            self._iter_day(
                barber_id, on_date, service, self._clock(), exclude_booking_id
            )
        )

    def available_slots_for_day(
        self,
        barber_id: str,
        on_date: date,
        service: ServiceRequirement | int,
        exclude_booking_id: str | None = None,
    ) -> List[time]:
        """Return the bookable start times of the day in ascending order."""
        slots = [
            result.slot.time
            for result in self._iter_day(
                barber_id, on_date, service, self._clock(), exclude_booking_id
            )
            if result.bookable
        ]
        logger.debug(
            "Barber %s has %d free slot(s) on %s", barber_id, len(slots), on_date
        )
        return slots

    def has_any_availability(
        self,
        barber_id: str,
        on_date: date,
        service: ServiceRequirement | int,
        exclude_booking_id: str | None = None,
    ) -> bool:
        """Stop at the first bookable slot instead of listing the whole day."""
        return self._day_has_slot(
            barber_id, on_date, service, self._clock(), exclude_booking_id
        )

    def unavailable_days(
        self,
        barber_id: str,
        start_date: date,
        service: ServiceRequirement | int,
        days: int | None = None,
    ) -> List[date]:
        """
        Return the dates in ``[start_date, start_date + days)`` with no free time.

        Used to disable dates in a booking calendar. Each day is evaluated on
        its own; errors for any day propagate instead of marking it unavailable.
        """
        now = self._clock()
        unavailable = [
            day
            for day in self._date_range(start_date, days)
            if not self._day_has_slot(barber_id, day, service, now, None)
        ]
        logger.debug(
            "Barber %s: %d unavailable day(s) from %s", barber_id, len(unavailable), start_date
        )
        return unavailable

    def available_days(
        self,
        barber_id: str,
        start_date: date,
        service: ServiceRequirement | int,
        days: int | None = None,
    ) -> List[date]:
        """Return the dates in the range that have at least one free time."""
        now = self._clock()
        return [
            day
            for day in self._date_range(start_date, days)
            if self._day_has_slot(barber_id, day, service, now, None)
        ]

    # Booking-write surface

    def is_slot_bookable(
        self,
        barber_id: str,
        on_date: date,
        at_time: time,
        service_duration: ServiceRequirement | int,
        exclude_booking_id: str | None = None,
    ) -> AvailabilityResult:
        """
        Validate one caller-supplied start time, typically right before a write.

        A bookable result is not a commit guarantee: another request may write
        a conflicting booking in between, so the store must still reject
        overlapping rows on commit.
        """
        requirement = as_requirement(service_duration)
        slot = CandidateSlot(date=_check_date(on_date), time=_check_time(at_time))
        window = self.opening_window(barber_id, on_date)
        obligations = self.obligations(
            barber_id, on_date, window=window, exclude_booking_id=exclude_booking_id
        )

        result = self._evaluator.evaluate(
            slot, requirement, window, obligations, self._clock()
        )
        if result.bookable:
            logger.debug("Slot %s is bookable for barber %s", slot, barber_id)
        else:
            logger.debug(
                "Slot %s blocked for barber %s: %s%s",
                slot,
                barber_id,
                result.blocking_reason.value,
                f" ({result.blocking_interval})" if result.blocking_interval else "",
            )
        return result

    def get_available_slots(
        self,
        barber_id: str,
        on_date: date,
        service_duration: ServiceRequirement | int,
    ) -> List[time]:
        return self.available_slots_for_day(barber_id, on_date, service_duration)

    # Internals

    def _iter_day(
        self,
        barber_id: str,
        on_date: date,
        service: ServiceRequirement | int,
        now: datetime,
        exclude_booking_id: str | None,
    ) -> Iterator[AvailabilityResult]:
        requirement = as_requirement(service)
        window = self.opening_window(barber_id, on_date)
        obligations = self.obligations(
            barber_id, on_date, window=window, exclude_booking_id=exclude_booking_id
        )

        for start in self._generator.generate(window):
            slot = CandidateSlot(date=on_date, time=start)
            yield self._evaluator.evaluate(slot, requirement, window, obligations, now)

    def _day_has_slot(
        self,
        barber_id: str,
        on_date: date,
        service: ServiceRequirement | int,
        now: datetime,
        exclude_booking_id: str | None,
    ) -> bool:
        return any(
            result.bookable
            for result in self._iter_day(
                barber_id, on_date, service, now, exclude_booking_id
            )
        )

    def _date_range(self, start_date: date, days: int | None) -> Iterator[date]:
        start_date = _check_date(start_date)
        count = self.lookahead_days if days is None else days
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise InvalidArgumentError(f"Number of days must be zero or more, got {count!r}")

        for offset in range(count):
            yield start_date + timedelta(days=offset)

"""
Core business logic for deciding whether a single slot can be booked.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O). Slot listing,
calendar date-disabling and the pre-commit check all go through
``AvailabilityEvaluator.evaluate`` so they can never disagree.
"""

from datetime import datetime
from typing import Iterable

import pendulum
from pendulum import DateTime

from .exceptions import InvalidArgumentError
from .models import (
    AvailabilityResult,
    BlockingReason,
    CandidateSlot,
    OpeningWindow,
    ServiceRequirement,
    TimeInterval,
)


class AvailabilityEvaluator:
    """
    Checks one candidate slot against opening hours, the clock and obligations.

    Algorithm:
    1. Compute the occupied interval ``C = [start, start + duration)``
    2. Reject with OPENING_CLOSED if the window is closed, C leaves the
       window, or C touches a whole-day closure
    3. Reject with PAST_CUTOFF if C starts at or before "now"
    4. Reject with OVERLAP on the first obligation C overlaps (half-open)
    5. Otherwise the slot is bookable
    """

    def __init__(self, timezone: str = "Europe/Berlin"):
        self.timezone = timezone

    def evaluate(
        self,
        slot: CandidateSlot,
        service: ServiceRequirement,
        window: OpeningWindow,
        obligations: Iterable[TimeInterval],
        now: datetime,
    ) -> AvailabilityResult:
        """
        Evaluate a candidate slot.

        Args:
            slot: Date and start time being considered
            service: Duration the appointment would occupy
            window: Opening window for the slot's date
            obligations: Intervals already blocking the barber that day
            now: Current instant; naive values are read as shop-local time

        Returns:
            AvailabilityResult with the first blocking reason found, if any

        Raises:
            InvalidArgumentError: If the service is not a valid requirement or
                the slot is not on the window's date
        """
        if not isinstance(service, ServiceRequirement):
            raise InvalidArgumentError(
                f"Expected a ServiceRequirement, got {type(service).__name__}"
            )
        if slot.date != window.date:
            raise InvalidArgumentError(
                f"Slot date {slot.date} does not match opening window date {window.date}"
            )

        obligations = list(obligations)
        start = slot.start_in(self.timezone)
        end = start.add(minutes=service.duration_minutes)

        # Step 2: opening hours and whole-day closures
        if not window.is_open:
            return self._blocked(slot, BlockingReason.OPENING_CLOSED)

        if start < window.opens_at(self.timezone) or end > window.closes_at(self.timezone):
            return self._blocked(slot, BlockingReason.OPENING_CLOSED)

        for obligation in obligations:
            if obligation.is_whole_day and obligation.overlaps_range(start, end):
                return self._blocked(slot, BlockingReason.OPENING_CLOSED, obligation)

        # Step 3: past cutoff
        if start <= self._as_local(now):
            return self._blocked(slot, BlockingReason.PAST_CUTOFF)

        # Step 4: any single overlap disqualifies
        for obligation in obligations:
            if obligation.overlaps_range(start, end):
                return self._blocked(slot, BlockingReason.OVERLAP, obligation)

        return AvailabilityResult(slot=slot, bookable=True)

    def is_bookable(
        self,
        slot: CandidateSlot,
        service: ServiceRequirement,
        window: OpeningWindow,
        obligations: Iterable[TimeInterval],
        now: datetime,
    ) -> bool:
        return self.evaluate(slot, service, window, obligations, now).bookable

    def _as_local(self, moment: datetime) -> DateTime:
        return pendulum.instance(moment, tz=self.timezone)

    @staticmethod
    def _blocked(
        slot: CandidateSlot,
        reason: BlockingReason,
        interval: TimeInterval | None = None,
    ) -> AvailabilityResult:
        return AvailabilityResult(
            slot=slot,
            bookable=False,
            blocking_reason=reason,
            blocking_interval=interval,
        )

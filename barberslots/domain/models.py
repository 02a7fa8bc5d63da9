"""
Domain models for intervals, opening windows and availability results.
"""

from dataclasses import dataclass
from datetime import date, time
from enum import Enum

import pendulum
from pendulum import DateTime

from .exceptions import InvalidArgumentError

CONFIRMED = "confirmed"


def combine(on_date: date, at_time: time, timezone: str) -> DateTime:
    """Build a shop-local datetime from a calendar date and a time of day."""
    return pendulum.datetime(
        on_date.year,
        on_date.month,
        on_date.day,
        at_time.hour,
        at_time.minute,
        at_time.second,
        tz=timezone,
    )


def start_of_day(on_date: date, timezone: str) -> DateTime:
    """Return midnight of the given date in the shop timezone."""
    return pendulum.datetime(on_date.year, on_date.month, on_date.day, tz=timezone)


class IntervalKind(str, Enum):
    """What kind of obligation an interval represents."""
    BOOKING = "booking"
    LUNCH_BREAK = "lunch_break"
    HOLIDAY = "holiday"
    CLOSED_DAY = "closed_day"

    @property
    def is_whole_day(self) -> bool:
        return self in (IntervalKind.HOLIDAY, IntervalKind.CLOSED_DAY)


class BlockingReason(str, Enum):
    """Why a candidate slot cannot be booked."""
    OPENING_CLOSED = "opening_closed"
    OVERLAP = "overlap"
    PAST_CUTOFF = "past_cutoff"


@dataclass(frozen=True)
class TimeInterval:
    """
    An immutable, half-open time range ``[start, end)`` owned by a barber.

    Invariant: start must be before end. An interval ending at 14:00 does not
    block one starting at 14:00.
    """
    start: DateTime
    end: DateTime
    kind: IntervalKind
    resource_id: str

    def __post_init__(self):
        if self.start >= self.end:
            raise InvalidArgumentError(
                f"Start time {self.start} must be before end time {self.end}"
            )

    @property
    def is_whole_day(self) -> bool:
        return self.kind.is_whole_day

    def duration_minutes(self) -> int:
        """Return the duration in minutes."""
        return int((self.end - self.start).total_seconds() / 60)

    def overlaps_range(self, start: DateTime, end: DateTime) -> bool:
        """Check if ``[start, end)`` shares at least one instant with this interval."""
        return start < self.end and end > self.start

    def overlaps(self, other: "TimeInterval") -> bool:
        """Check if this interval overlaps with another."""
        return self.overlaps_range(other.start, other.end)

    def __str__(self) -> str:
        return (
            f"{self.kind.value} {self.start.format('DD.MM.YYYY HH:mm')}"
            f" - {self.end.format('HH:mm')}"
        )


@dataclass(frozen=True)
class OpeningWindow:
    """
    The open/closed window of one barber on one calendar date.

    Invariant: an open window has both times set and opens before it closes.
    """
    date: date
    is_open: bool
    open_time: time | None = None
    close_time: time | None = None

    def __post_init__(self):
        if not self.is_open:
            return
        if self.open_time is None or self.close_time is None:
            raise InvalidArgumentError(
                f"Open window on {self.date} needs both an opening and a closing time"
            )
        if self.open_time >= self.close_time:
            raise InvalidArgumentError(
                f"Opening time {self.open_time} must be before closing time {self.close_time}"
            )

    @classmethod
    def closed(cls, on_date: date) -> "OpeningWindow":
        return cls(date=on_date, is_open=False)

    def opens_at(self, timezone: str) -> DateTime:
        return combine(self.date, self.open_time, timezone)

    def closes_at(self, timezone: str) -> DateTime:
        return combine(self.date, self.close_time, timezone)


@dataclass(frozen=True)
class ServiceRequirement:
    """How long a service occupies the barber."""
    duration_minutes: int

    def __post_init__(self):
        # bool is an int subclass but never a meaningful duration
        if isinstance(self.duration_minutes, bool) or not isinstance(self.duration_minutes, int):
            raise InvalidArgumentError(
                f"Service duration must be an integer number of minutes, got {self.duration_minutes!r}"
            )
        if self.duration_minutes <= 0:
            raise InvalidArgumentError(
                f"Service duration must be greater than zero, got {self.duration_minutes}"
            )


@dataclass(frozen=True)
class CandidateSlot:
    """A possible appointment start on a given date."""
    date: date
    time: time

    def start_in(self, timezone: str) -> DateTime:
        return combine(self.date, self.time, timezone)

    def __str__(self) -> str:
        return f"{self.date.isoformat()} {self.time.strftime('%H:%M')}"


@dataclass(frozen=True)
class AvailabilityResult:
    """Outcome of evaluating one candidate slot."""
    slot: CandidateSlot
    bookable: bool
    blocking_reason: BlockingReason | None = None
    blocking_interval: TimeInterval | None = None

    def __bool__(self) -> bool:
        return self.bookable


# Records handed back by the booking store


@dataclass(frozen=True)
class OpeningHours:
    """Configured opening hours for one weekday (0=Monday, 6=Sunday)."""
    weekday: int
    is_closed: bool = False
    open_time: time | None = None
    close_time: time | None = None


@dataclass(frozen=True)
class BookingRecord:
    """A stored booking with the service duration captured when it was made."""
    booking_id: str
    booking_time: time
    duration_minutes: int
    status: str = CONFIRMED

    @property
    def is_confirmed(self) -> bool:
        return self.status == CONFIRMED


@dataclass(frozen=True)
class LunchBreak:
    """A daily lunch break."""
    start_time: time
    duration_minutes: int
    is_active: bool = True


@dataclass(frozen=True)
class HolidayRange:
    """A holiday covering ``start_date`` through ``end_date``, both inclusive."""
    start_date: date
    end_date: date
    title: str = ""

    def covers(self, on_date: date) -> bool:
        return self.start_date <= on_date <= self.end_date

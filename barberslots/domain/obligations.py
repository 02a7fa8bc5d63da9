"""
Convert stored bookings, lunch breaks and holidays into blocking intervals.

Everything here is pure: the records are fetched by the caller and passed in
as a snapshot for a single barber and date.
"""

from datetime import date
from typing import Iterable, List

from .models import (
    BookingRecord,
    HolidayRange,
    IntervalKind,
    LunchBreak,
    OpeningWindow,
    TimeInterval,
    combine,
    start_of_day,
)


def booking_intervals(
    barber_id: str,
    on_date: date,
    bookings: Iterable[BookingRecord],
    timezone: str,
    exclude_booking_id: str | None = None,
) -> List[TimeInterval]:
    """One interval per confirmed booking, sized by its duration snapshot."""
    intervals: List[TimeInterval] = []

    for booking in bookings:
        if not booking.is_confirmed:
            continue
        if exclude_booking_id is not None and booking.booking_id == exclude_booking_id:
            continue

        start = combine(on_date, booking.booking_time, timezone)
        intervals.append(
            TimeInterval(
                start=start,
                end=start.add(minutes=booking.duration_minutes),
                kind=IntervalKind.BOOKING,
                resource_id=barber_id,
            )
        )

    return intervals


def lunch_break_intervals(
    barber_id: str,
    on_date: date,
    lunch_breaks: Iterable[LunchBreak],
    timezone: str,
) -> List[TimeInterval]:
    """Lunch breaks repeat daily, so every active one lands on ``on_date``."""
    intervals: List[TimeInterval] = []

    for lunch_break in lunch_breaks:
        if not lunch_break.is_active:
            continue

        start = combine(on_date, lunch_break.start_time, timezone)
        intervals.append(
            TimeInterval(
                start=start,
                end=start.add(minutes=lunch_break.duration_minutes),
                kind=IntervalKind.LUNCH_BREAK,
                resource_id=barber_id,
            )
        )

    return intervals


def holiday_interval(
    barber_id: str,
    on_date: date,
    holidays: Iterable[HolidayRange],
    timezone: str,
    window: OpeningWindow | None = None,
) -> TimeInterval | None:
    """
    A single closed-day interval if any holiday covers ``on_date``.

    Holiday ranges are whole days, inclusive at both ends. The interval spans
    the opening window when the barber would otherwise be open, and the full
    calendar day when not.
    """
    if not any(holiday.covers(on_date) for holiday in holidays):
        return None

    if window is not None and window.is_open:
        start = window.opens_at(timezone)
        end = window.closes_at(timezone)
    else:
        start = start_of_day(on_date, timezone)
        end = start.add(days=1)

    return TimeInterval(
        start=start,
        end=end,
        kind=IntervalKind.CLOSED_DAY,
        resource_id=barber_id,
    )


def build_obligations(
    *,
    barber_id: str,
    on_date: date,
    bookings: Iterable[BookingRecord],
    lunch_breaks: Iterable[LunchBreak],
    holidays: Iterable[HolidayRange],
    timezone: str,
    window: OpeningWindow | None = None,
    exclude_booking_id: str | None = None,
) -> List[TimeInterval]:
    """Collect every interval that removes time from the barber on ``on_date``."""
    obligations = booking_intervals(
        barber_id, on_date, bookings, timezone, exclude_booking_id=exclude_booking_id
    )
    obligations.extend(lunch_break_intervals(barber_id, on_date, lunch_breaks, timezone))

    closed_day = holiday_interval(barber_id, on_date, holidays, timezone, window=window)
    if closed_day is not None:
        obligations.append(closed_day)

    return sorted(obligations, key=lambda interval: interval.start)

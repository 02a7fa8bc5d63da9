"""
Tests for the availability evaluator.
"""

from datetime import date, datetime, time

import pendulum
import pytest

from barberslots.domain.evaluator import AvailabilityEvaluator
from barberslots.domain.exceptions import InvalidArgumentError
from barberslots.domain.models import (
    BlockingReason,
    CandidateSlot,
    IntervalKind,
    OpeningWindow,
    ServiceRequirement,
    TimeInterval,
)

from .conftest import MONDAY, TZ, at

WINDOW = OpeningWindow(date=MONDAY, is_open=True, open_time=time(9, 0), close_time=time(17, 0))
HALF_HOUR = ServiceRequirement(30)
EARLY = at("2024-11-20 08:00")


def _slot(hour: int, minute: int = 0) -> CandidateSlot:
    return CandidateSlot(date=MONDAY, time=time(hour, minute))


def _block(start: str, end: str, kind: IntervalKind = IntervalKind.BOOKING) -> TimeInterval:
    return TimeInterval(
        start=at(f"2024-11-25 {start}"),
        end=at(f"2024-11-25 {end}"),
        kind=kind,
        resource_id="tom",
    )


@pytest.fixture
def evaluator():
    return AvailabilityEvaluator(timezone=TZ)


class TestOpeningHours:
    """Step 2: the opening window is the outer boundary."""

    def test_slot_at_opening_time_is_bookable(self, evaluator):
        result = evaluator.evaluate(_slot(9), HALF_HOUR, WINDOW, [], EARLY)

        assert result.bookable
        assert result.blocking_reason is None

    def test_slot_ending_exactly_at_close_is_bookable(self, evaluator):
        result = evaluator.evaluate(_slot(16, 30), HALF_HOUR, WINDOW, [], EARLY)

        assert result.bookable

    def test_slot_ending_after_close_is_never_bookable(self, evaluator):
        result = evaluator.evaluate(_slot(16, 30), ServiceRequirement(60), WINDOW, [], EARLY)

        assert not result.bookable
        assert result.blocking_reason == BlockingReason.OPENING_CLOSED

    def test_slot_before_opening(self, evaluator):
        result = evaluator.evaluate(_slot(8, 30), HALF_HOUR, WINDOW, [], EARLY)

        assert result.blocking_reason == BlockingReason.OPENING_CLOSED

    def test_closed_window(self, evaluator):
        result = evaluator.evaluate(_slot(10), HALF_HOUR, OpeningWindow.closed(MONDAY), [], EARLY)

        assert result.blocking_reason == BlockingReason.OPENING_CLOSED

    def test_closed_day_interval_reports_opening_closed(self, evaluator):
        closed = _block("09:00", "17:00", IntervalKind.CLOSED_DAY)

        result = evaluator.evaluate(_slot(10), HALF_HOUR, WINDOW, [closed], EARLY)

        assert result.blocking_reason == BlockingReason.OPENING_CLOSED
        assert result.blocking_interval == closed

    def test_closed_day_takes_precedence_over_past_cutoff(self, evaluator):
        closed = _block("09:00", "17:00", IntervalKind.CLOSED_DAY)

        result = evaluator.evaluate(_slot(10), HALF_HOUR, WINDOW, [closed], at("2024-11-25 15:00"))

        assert result.blocking_reason == BlockingReason.OPENING_CLOSED


class TestPastCutoff:
    """Step 3: slots that already started cannot be booked."""

    def test_started_slot_today(self, evaluator):
        """Today at 14:10, a 14:00 slot is in the past."""
        result = evaluator.evaluate(_slot(14), HALF_HOUR, WINDOW, [], at("2024-11-25 14:10"))

        assert not result.bookable
        assert result.blocking_reason == BlockingReason.PAST_CUTOFF

    def test_slot_starting_now_is_past(self, evaluator):
        result = evaluator.evaluate(_slot(14), HALF_HOUR, WINDOW, [], at("2024-11-25 14:00"))

        assert result.blocking_reason == BlockingReason.PAST_CUTOFF

    def test_later_slot_today_is_bookable(self, evaluator):
        result = evaluator.evaluate(_slot(14, 30), HALF_HOUR, WINDOW, [], at("2024-11-25 14:10"))

        assert result.bookable

    def test_slot_on_earlier_date_is_past(self, evaluator):
        result = evaluator.evaluate(_slot(16), HALF_HOUR, WINDOW, [], at("2024-11-26 08:00"))

        assert result.blocking_reason == BlockingReason.PAST_CUTOFF

    def test_naive_now_is_read_as_shop_local_time(self, evaluator):
        result = evaluator.evaluate(_slot(14), HALF_HOUR, WINDOW, [], datetime(2024, 11, 25, 14, 10))

        assert result.blocking_reason == BlockingReason.PAST_CUTOFF

    def test_now_in_another_timezone_is_compared_as_an_instant(self, evaluator):
        """13:05 UTC is 14:05 in Berlin, after the 14:00 start."""
        now = pendulum.datetime(2024, 11, 25, 13, 5, tz="UTC")

        result = evaluator.evaluate(_slot(14), HALF_HOUR, WINDOW, [], now)

        assert result.blocking_reason == BlockingReason.PAST_CUTOFF


class TestOverlap:
    """Step 4: half-open overlap against every obligation."""

    @pytest.mark.parametrize(
        "slot_time, expected",
        [
            (time(9, 30), True),    # ends exactly when the booking starts
            (time(10, 0), False),   # same start
            (time(10, 15), False),  # starts inside
            (time(9, 45), False),   # ends inside
            (time(10, 30), True),   # starts exactly when the booking ends
        ],
    )
    def test_half_open_boundaries(self, evaluator, slot_time, expected):
        booking = _block("10:00", "10:30")
        slot = CandidateSlot(date=MONDAY, time=slot_time)

        result = evaluator.evaluate(slot, HALF_HOUR, WINDOW, [booking], EARLY)

        assert result.bookable is expected

    def test_candidate_containing_obligation_overlaps(self, evaluator):
        result = evaluator.evaluate(
            _slot(12, 30), ServiceRequirement(120), WINDOW, [_block("13:00", "14:00")], EARLY
        )

        assert result.blocking_reason == BlockingReason.OVERLAP

    def test_reports_the_blocking_interval(self, evaluator):
        lunch = _block("13:00", "14:00", IntervalKind.LUNCH_BREAK)

        result = evaluator.evaluate(_slot(13, 30), HALF_HOUR, WINDOW, [_block("10:00", "10:30"), lunch], EARLY)

        assert result.blocking_reason == BlockingReason.OVERLAP
        assert result.blocking_interval == lunch

    def test_obligation_order_does_not_matter(self, evaluator):
        a = _block("10:00", "10:30")
        b = _block("10:15", "11:00")

        first = evaluator.evaluate(_slot(10, 30), HALF_HOUR, WINDOW, [a, b], EARLY)
        second = evaluator.evaluate(_slot(10, 30), HALF_HOUR, WINDOW, [b, a], EARLY)

        assert first.bookable == second.bookable is False

    def test_evaluation_is_idempotent(self, evaluator):
        obligations = [_block("10:00", "10:30"), _block("13:00", "14:00", IntervalKind.LUNCH_BREAK)]

        for hour in range(9, 17):
            slot = _slot(hour)
            first = evaluator.evaluate(slot, HALF_HOUR, WINDOW, obligations, EARLY)
            second = evaluator.evaluate(slot, HALF_HOUR, WINDOW, obligations, EARLY)
            assert first == second

    def test_accepts_a_generator_of_obligations(self, evaluator):
        obligations = (o for o in [_block("10:00", "10:30")])

        result = evaluator.evaluate(_slot(10), HALF_HOUR, WINDOW, obligations, EARLY)

        assert result.blocking_reason == BlockingReason.OVERLAP


class TestInvalidInput:
    """Malformed input is a caller bug, never 'not bookable'."""

    def test_plain_duration_is_rejected(self, evaluator):
        with pytest.raises(InvalidArgumentError):
            evaluator.evaluate(_slot(10), 30, WINDOW, [], EARLY)

    def test_zero_duration_is_rejected(self, evaluator):
        with pytest.raises(InvalidArgumentError):
            evaluator.evaluate(_slot(10), ServiceRequirement(0), WINDOW, [], EARLY)

    def test_slot_on_another_date_is_rejected(self, evaluator):
        slot = CandidateSlot(date=date(2024, 11, 26), time=time(10, 0))

        with pytest.raises(InvalidArgumentError, match="does not match"):
            evaluator.evaluate(slot, HALF_HOUR, WINDOW, [], EARLY)

"""
Generation of candidate appointment start times.
"""

from datetime import time
from typing import Iterator, List

from .exceptions import InvalidArgumentError
from .models import OpeningWindow

DEFAULT_STEP_MINUTES = 30


def _to_seconds(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def _from_seconds(seconds: int) -> time:
    minutes, second = divmod(seconds, 60)
    return time(hour=minutes // 60, minute=minutes % 60, second=second)


class SlotGenerator:
    """
    Produces candidate start times for an opening window at a fixed step.

    Slots start at the opening time and stop strictly before the closing
    time. Whether a service actually fits before closing is left to the
    evaluator, which has the service duration.
    """

    def __init__(self, step_minutes: int = DEFAULT_STEP_MINUTES):
        if isinstance(step_minutes, bool) or not isinstance(step_minutes, int) or step_minutes <= 0:
            raise InvalidArgumentError(
                f"Slot step must be a positive number of minutes, got {step_minutes!r}"
            )
        self.step_minutes = step_minutes

    def generate(self, window: OpeningWindow) -> Iterator[time]:
        """Yield start times in ascending order; nothing for a closed window."""
        if not window.is_open:
            return

        current = _to_seconds(window.open_time)
        close = _to_seconds(window.close_time)
        step = self.step_minutes * 60

        while current < close:
            yield _from_seconds(current)
            current += step

    def slots_for(self, window: OpeningWindow) -> List[time]:
        return list(self.generate(window))

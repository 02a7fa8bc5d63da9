"""
Domain layer - Pure business logic without external dependencies.
"""

from .evaluator import AvailabilityEvaluator
from .exceptions import (
    AvailabilityError,
    InvalidArgumentError,
    NotFoundError,
    UpstreamUnavailableError,
)
from .models import (
    AvailabilityResult,
    BlockingReason,
    BookingRecord,
    CandidateSlot,
    HolidayRange,
    IntervalKind,
    LunchBreak,
    OpeningHours,
    OpeningWindow,
    ServiceRequirement,
    TimeInterval,
)
from .slot_generator import SlotGenerator

__all__ = [
    "AvailabilityError",
    "AvailabilityEvaluator",
    "AvailabilityResult",
    "BlockingReason",
    "BookingRecord",
    "CandidateSlot",
    "HolidayRange",
    "IntervalKind",
    "InvalidArgumentError",
    "LunchBreak",
    "NotFoundError",
    "OpeningHours",
    "OpeningWindow",
    "ServiceRequirement",
    "SlotGenerator",
    "TimeInterval",
    "UpstreamUnavailableError",
]

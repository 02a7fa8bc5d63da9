"""
Service layer helpers that orchestrate the booking store and domain logic.
"""

from .availability import AvailabilityService, as_requirement
from .collectors import BookingStoreProtocol, ObligationCollector, OpeningHoursResolver

__all__ = [
    "AvailabilityService",
    "BookingStoreProtocol",
    "ObligationCollector",
    "OpeningHoursResolver",
    "as_requirement",
]

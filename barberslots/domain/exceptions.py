"""
Domain-specific exception hierarchy for the availability engine.
"""


class AvailabilityError(Exception):
    """Base class for all application-level errors."""


class NotFoundError(AvailabilityError, LookupError):
    """Raised when a barber or service does not exist."""


class InvalidArgumentError(AvailabilityError, ValueError):
    """Raised when a caller passes a malformed duration, date or time."""


class UpstreamUnavailableError(AvailabilityError):
    """Raised when the booking store cannot be read."""

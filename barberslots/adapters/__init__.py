"""
Adapters layer - Booking store implementations.
"""

from .json_store import JsonBookingStore
from .memory_store import InMemoryBookingStore, StoredBooking

__all__ = ["InMemoryBookingStore", "JsonBookingStore", "StoredBooking"]

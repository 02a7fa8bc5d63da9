"""
barberslots - appointment availability engine for barbershop bookings.
"""

__version__ = "0.1.0"

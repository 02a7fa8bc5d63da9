"""
Turn a weekday's configured opening hours into a dated opening window.
"""

from datetime import date

from .models import OpeningHours, OpeningWindow


def window_for(on_date: date, hours: OpeningHours | None) -> OpeningWindow:
    """
    Build the opening window for ``on_date``.

    A missing configuration row and a row marked closed both mean the barber
    does not work that day. An open row with missing or inverted times is
    rejected by ``OpeningWindow`` itself.
    """
    if hours is None or hours.is_closed:
        return OpeningWindow.closed(on_date)

    return OpeningWindow(
        date=on_date,
        is_open=True,
        open_time=hours.open_time,
        close_time=hours.close_time,
    )

#!/usr/bin/env python3
"""
Wall-Clock Time Helpers

Convert a wall-clock instant into the elapsed-minutes value the engine
takes as input. The value is the UTC time of day in minutes, so it wraps
to 0 every 1440 minutes.
"""

from datetime import datetime, timezone
from typing import Optional

MINUTES_PER_DAY = 1440.0


def elapsed_minutes_from_datetime(moment: datetime) -> float:
    """
    UTC time of day in minutes.

    Parameters
    ----------
    moment : datetime
        Instant to convert. Naive datetimes are taken to be UTC.

    Returns
    -------
    float
        hours * 60 + minutes + seconds / 60, in [0, 1440)
    """
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    seconds = moment.second + moment.microsecond / 1e6
    return moment.hour * 60 + moment.minute + seconds / 60.0


def utc_now_minutes(now: Optional[datetime] = None) -> float:
    """Elapsed minutes for the current wall-clock time."""
    if now is None:
        now = datetime.now(timezone.utc)
    return elapsed_minutes_from_datetime(now)

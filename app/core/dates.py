"""
Business date helpers.

Services accept a calendar date, a naive datetime or an aware datetime
for the moment money moved. Ledger ordering compares aware datetimes
only, so every such input is normalized here before it is stored.

Usage:
    from core.dates import to_aware_datetime

    to_aware_datetime(date(2024, 4, 2))            # 2024-04-02 00:00 local time
    to_aware_datetime(datetime(2024, 4, 2, 10))    # 2024-04-02 10:00 local time
    to_aware_datetime(None)                        # timezone.now()
"""

from __future__ import annotations

import datetime as dt

from django.utils import timezone


def to_aware_datetime(value: dt.date | dt.datetime | None) -> dt.datetime:
    """
    Normalize a business date to an aware datetime.

    Args:
        value: A date (taken as local midnight), a naive datetime (taken
            as local time), an aware datetime, or None for now

    Returns:
        An aware datetime in the current time zone's terms
    """
    if value is None:
        return timezone.now()
    if not isinstance(value, dt.datetime):
        value = dt.datetime.combine(value, dt.time.min)
    if timezone.is_naive(value):
        return timezone.make_aware(value)
    return value

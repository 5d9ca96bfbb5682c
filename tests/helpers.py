"""Shared helpers for django-activewindow tests."""
from datetime import datetime, timedelta, timezone as dt_timezone


EPOCH = datetime(1970, 1, 1, tzinfo=dt_timezone.utc)


def day(n):
    """Midnight UTC, n days after the epoch (fractions allowed)."""
    return EPOCH + timedelta(days=n)


def millis(n):
    """A timedelta of n milliseconds."""
    return timedelta(milliseconds=n)

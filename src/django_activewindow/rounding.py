"""Timestamp normalization to the precision a storage backend keeps.

Backends without sub-second storage return a value that differs from the
one that was written. Every timestamp entering a comparison is passed
through round_timestamp() so in-memory answers match what the database
would report.
"""
from datetime import date, datetime, time, timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


class Precision(models.TextChoices):
    NATIVE = "native", "Native"
    MILLISECOND = "millisecond", "Millisecond"
    SECOND = "second", "Whole second"


# Size of one unit, in microseconds
_UNITS = {
    Precision.MILLISECOND: 1_000,
    Precision.SECOND: 1_000_000,
}

# Backends known to keep microseconds in DateTimeField columns
_SUB_SECOND_VENDORS = frozenset({"postgresql", "mysql", "sqlite", "oracle"})


def as_timestamp(value):
    """
    Coerce a date or datetime into a datetime comparable with stored values.

    Plain dates become midnight. With USE_TZ on, naive values are made aware
    in the current time zone, which is what Django does when it saves them.
    """
    if value is None:
        return None
    if not isinstance(value, datetime) and isinstance(value, date):
        value = datetime.combine(value, time.min)
    if settings.USE_TZ and timezone.is_naive(value):
        value = timezone.make_aware(value, timezone.get_current_timezone())
    return value


def round_timestamp(value, precision=Precision.NATIVE):
    """
    Round a timestamp half-up to the given precision.

    Args:
        value: A datetime or date
        precision: A Precision (or its string value)

    Returns:
        The normalized datetime; unchanged for native precision
    """
    value = as_timestamp(value)
    unit = _UNITS.get(Precision(precision))
    if value is None or unit is None:
        return value

    remainder = value.microsecond % unit
    rounded = value - timedelta(microseconds=remainder)
    if remainder * 2 >= unit:
        rounded += timedelta(microseconds=unit)
    return rounded


def precision_for_vendor(vendor: str) -> Precision:
    """
    Return the precision to declare for a database vendor (connection.vendor).

    Django stores microseconds on all of its bundled backends, so those keep
    native precision. Third-party backends are assumed to store whole seconds.
    """
    if vendor in _SUB_SECOND_VENDORS:
        return Precision.NATIVE
    return Precision.SECOND

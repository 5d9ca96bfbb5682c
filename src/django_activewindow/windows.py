"""The half-open [start, finish) interval during which a record is active."""
from dataclasses import dataclass
from datetime import datetime

from django.utils import timezone

from .rounding import Precision, round_timestamp


@dataclass(frozen=True)
class ActiveWindow:
    """
    A record's active period, derived from its field values on demand.

    Rules:
    - start is inclusive, finish is exclusive
    - finish of None means "active until further notice"
    - start == finish is an empty window, active at no instant
    - Bounds are already rounded to `precision`; query times are rounded
      the same way before comparing

    Usage:
        window = ActiveWindow.build(start=entered_at, finish=left_at)
        window.is_active_at(some_time)
        window.overlaps(period_start, period_end)
    """

    start: datetime
    finish: datetime | None = None
    precision: Precision = Precision.NATIVE

    @classmethod
    def build(cls, start=None, finish=None, precision=Precision.NATIVE) -> "ActiveWindow":
        """
        Build a window from raw field values.

        An unset start means the record starts now, which covers records
        whose start is filled in by the database on insert.
        """
        if start is None:
            start = timezone.now()
        return cls(
            start=round_timestamp(start, precision),
            finish=round_timestamp(finish, precision),
            precision=Precision(precision),
        )

    @property
    def is_empty(self) -> bool:
        return self.finish is not None and self.start == self.finish

    @property
    def is_open_ended(self) -> bool:
        return self.finish is None

    def _normalize(self, value):
        return round_timestamp(value, self.precision)

    def is_active_at(self, at=None) -> bool:
        """Return True if the window covers `at` (defaults to now)."""
        if at is None:
            at = timezone.now()
        at = self._normalize(at)
        return self.start <= at and (self.finish is None or self.finish > at)

    def overlaps(self, query_start=None, query_end=None, ignore_empty: bool = False) -> bool:
        """
        Return True if the window intersects the half-open range [query_start, query_end).

        A missing query_start means "since the beginning of time" and a
        missing query_end means "until the end of time". When query_start
        equals query_end the range is treated as a point in time.

        The empty-window check comes first: with ignore_empty set, an
        empty window matches no range, not even an unbounded one.
        """
        query_start = self._normalize(query_start)
        query_end = self._normalize(query_end)

        if ignore_empty and self.is_empty:
            return False
        if query_start is None and query_end is None:
            return True
        if query_start == query_end:
            return self.is_active_at(query_start)
        if query_start is None:
            return self.start < query_end
        if query_end is None:
            return self.finish is None or self.finish > query_start
        if self.finish is None:
            return query_end > self.start
        return self.start < query_end and self.finish > query_start

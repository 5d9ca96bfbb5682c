"""QuerySet helpers for active window queries."""
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from .exceptions import ConfigurationError
from .rounding import round_timestamp


class ActiveWindowQuerySet(models.QuerySet):
    """
    QuerySet for models using ActiveWindowMixin.

    Query pattern: start <= ts AND (finish IS NULL OR finish > ts)

    Field names come from the model's ACTIVE_WINDOW configuration. Rows with
    a NULL start never match; in memory such a record starts "now", which
    the database cannot know.
    """

    def _window_config(self):
        config = self.model.ACTIVE_WINDOW
        missing = config.missing_fields
        if missing:
            raise ConfigurationError(self.model, missing)
        return config

    def _round(self, value, config):
        return round_timestamp(value, config.resolved_precision)

    def _finishes_after(self, config, timestamp) -> Q:
        return Q(**{f"{config.finish_field}__isnull": True}) | Q(
            **{f"{config.finish_field}__gt": timestamp}
        )

    def active(self, at=None):
        """
        Return records active at the given timestamp.

        Args:
            at: The datetime to query; defaults to now

        Returns:
            QuerySet filtered to records whose window covers `at`
        """
        config = self._window_config()
        at = self._round(timezone.now() if at is None else at, config)
        return self.filter(**{f"{config.start_field}__lte": at}).filter(
            self._finishes_after(config, at)
        )

    def active_in_interval(self, interval_start=None, interval_end=None):
        """
        Return records active at some instant of [interval_start, interval_end).

        Mirrors ActiveWindow.overlaps(): a missing bound is unbounded, equal
        bounds are a point in time, and with ignore_empty configured
        zero-length records never match.
        """
        config = self._window_config()
        start = self._round(interval_start, config)
        end = self._round(interval_end, config)

        queryset = self.all()
        if config.ignore_empty:
            queryset = queryset.exclude(**{config.finish_field: F(config.start_field)})

        if start is None and end is None:
            return queryset
        if start == end:
            return queryset.active(start)
        if start is None:
            return queryset.filter(**{f"{config.start_field}__lt": end})
        if end is None:
            return queryset.filter(self._finishes_after(config, start))
        return queryset.filter(**{f"{config.start_field}__lt": end}).filter(
            self._finishes_after(config, start)
        )

    def in_scope(self, parent):
        """Return records belonging to `parent`."""
        config = self.model.ACTIVE_WINDOW
        if not config.parent_field:
            raise ConfigurationError(self.model, ["parent_field"])
        return self.filter(**{config.parent_field: parent})

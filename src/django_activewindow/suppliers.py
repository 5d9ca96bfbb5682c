"""Candidate suppliers: where sibling rows for a collision check come from.

A supplier answers one question: which (id, start, finish) rows share this
parent scope? The validation pipeline does not care whether the answer comes
from a live query, a cache, or a list built in memory.
"""

import logging

from django.core.cache import caches

from .conf import get_setting

logger = logging.getLogger(__name__)


# Default cache lifetime for sibling rows, in seconds
DEFAULT_CACHE_TIMEOUT = 300


class CandidateSupplier:
    """
    Base class for candidate suppliers.

    Subclasses implement siblings_for(). invalidate() is called after a
    record in the scope is written or deleted.
    """

    def siblings_for(self, parent_key, excluding=None) -> list[tuple]:
        """
        Return (id, start, finish) rows for every record in the scope.

        Args:
            parent_key: Key of the owning parent
            excluding: Id of a record to leave out (the one being validated)
        """
        raise NotImplementedError

    def invalidate(self, parent_key) -> None:
        pass


class StaticSupplier(CandidateSupplier):
    """Supplies a fixed, already-scoped set of rows."""

    def __init__(self, rows):
        self.rows = [tuple(row) for row in rows]

    def siblings_for(self, parent_key, excluding=None) -> list[tuple]:
        if excluding is None:
            return list(self.rows)
        return [row for row in self.rows if row[0] != excluding]


class QuerySetSupplier(CandidateSupplier):
    """
    Loads sibling rows with a live query against the model's default manager.

    Usage:
        supplier = QuerySetSupplier(President)
        rows = supplier.siblings_for(country.pk, excluding=president.pk)
    """

    def __init__(self, model, config=None, using=None):
        self.model = model
        self.config = config or model.ACTIVE_WINDOW
        self.using = using

    def get_queryset(self):
        queryset = self.model._default_manager.all()
        if self.using:
            queryset = queryset.using(self.using)
        return queryset

    def siblings_for(self, parent_key, excluding=None) -> list[tuple]:
        config = self.config
        queryset = self.get_queryset().filter(**{config.parent_field: parent_key})
        if excluding is not None:
            queryset = queryset.exclude(pk=excluding)
        return list(
            queryset.order_by("pk").values_list("pk", config.start_field, config.finish_field)
        )


class CachedSupplier(CandidateSupplier):
    """
    Serves sibling rows from Django's cache framework, falling back to another supplier.

    The full row set for a scope is cached; `excluding` is applied after the
    read so one entry serves every record in the scope. Writes made through
    ActiveWindowMixin call invalidate(); bulk updates and raw SQL do not, so
    the timeout bounds how stale a bypassed entry can get.

    Usage:
        class President(ActiveWindowMixin, models.Model):
            ...

            @classmethod
            def get_candidate_supplier(cls, using=None):
                return CachedSupplier(
                    QuerySetSupplier(cls, using=using),
                    key_prefix="presidents",
                )
    """

    def __init__(self, inner: CandidateSupplier, key_prefix: str, timeout=None, alias=None):
        self.inner = inner
        self.key_prefix = key_prefix
        self.timeout = timeout if timeout is not None else get_setting(
            "CACHE_TIMEOUT", DEFAULT_CACHE_TIMEOUT
        )
        self.alias = alias or get_setting("CACHE_ALIAS", "default")

    @property
    def cache(self):
        return caches[self.alias]

    def cache_key(self, parent_key) -> str:
        return f"activewindow:{self.key_prefix}:{parent_key}"

    def siblings_for(self, parent_key, excluding=None) -> list[tuple]:
        key = self.cache_key(parent_key)
        rows = self.cache.get(key)
        if rows is None:
            logger.debug("Sibling cache miss for %s", key)
            rows = self.inner.siblings_for(parent_key)
            self.cache.set(key, rows, self.timeout)
        else:
            logger.debug("Sibling cache hit for %s", key)

        if excluding is None:
            return list(rows)
        return [row for row in rows if row[0] != excluding]

    def invalidate(self, parent_key) -> None:
        key = self.cache_key(parent_key)
        logger.debug("Invalidating sibling cache %s", key)
        self.cache.delete(key)
        self.inner.invalidate(parent_key)

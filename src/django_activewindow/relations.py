"""Parent-side access to the children active at a given time."""
from functools import partial


class ActiveRelation:
    """
    Descriptor exposing a parent's active child (or children).

    Usage:
        class Country(models.Model):
            active_president = ActiveRelation("presidents", single=True)
            active_senators = ActiveRelation("senators")

        country.active_president()            # active now, or None
        country.active_senators(some_time)     # list of active senators

    Children are loaded through the reverse manager, so a
    prefetch_related("presidents") cache is reused. Pass `fetch` to name a
    parent method that returns the children instead, e.g. one reading from
    an identity cache.
    """

    def __init__(self, related_name: str, single: bool = False, fetch: str = None):
        self.related_name = related_name
        self.single = single
        self.fetch = fetch
        self.name = None

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return partial(self.resolve, instance)

    def children(self, instance) -> list:
        if self.fetch:
            return list(getattr(instance, self.fetch)())
        return list(getattr(instance, self.related_name).all())

    def resolve(self, instance, at=None):
        """Return the child active at `at`, or all such children when not single."""
        active = [child for child in self.children(instance) if child.is_active(at)]
        if self.single:
            return active[0] if active else None
        return active

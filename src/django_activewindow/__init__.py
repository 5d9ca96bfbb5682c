"""Django Active Window - Temporal validity and uniquely-active invariants for Django models."""

__version__ = "0.1.0"

__all__ = [
    # Core
    "Precision",
    "round_timestamp",
    "ActiveWindow",
    "detect_collisions",
    "validate_record",
    "ScopeConfiguration",
    # Suppliers
    "CandidateSupplier",
    "StaticSupplier",
    "QuerySetSupplier",
    "CachedSupplier",
    # Models
    "ActiveWindowMixin",
    "ActiveWindowQuerySet",
    "ActiveRelation",
    # Exceptions
    "ActiveWindowError",
    "ValidationFailure",
    "ConfigurationError",
    "OrderingViolation",
    "ConflictViolation",
]


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name in ("Precision", "round_timestamp"):
        from django_activewindow import rounding
        return getattr(rounding, name)
    if name == "ActiveWindow":
        from django_activewindow import windows
        return getattr(windows, name)
    if name == "detect_collisions":
        from django_activewindow import collisions
        return getattr(collisions, name)
    if name == "validate_record":
        from django_activewindow import pipeline
        return getattr(pipeline, name)
    if name == "ScopeConfiguration":
        from django_activewindow import conf
        return getattr(conf, name)
    if name in ("CandidateSupplier", "StaticSupplier", "QuerySetSupplier", "CachedSupplier"):
        from django_activewindow import suppliers
        return getattr(suppliers, name)
    if name == "ActiveWindowMixin":
        from django_activewindow import mixins
        return getattr(mixins, name)
    if name == "ActiveWindowQuerySet":
        from django_activewindow import querysets
        return getattr(querysets, name)
    if name == "ActiveRelation":
        from django_activewindow import relations
        return getattr(relations, name)
    if name in (
        "ActiveWindowError",
        "ValidationFailure",
        "ConfigurationError",
        "OrderingViolation",
        "ConflictViolation",
    ):
        from django_activewindow import exceptions
        return getattr(exceptions, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

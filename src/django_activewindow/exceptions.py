"""Custom exceptions for django-activewindow."""

from django.core.exceptions import ImproperlyConfigured


class ActiveWindowError(Exception):
    """Base exception for active window errors."""
    pass


class ValidationFailure(ActiveWindowError):
    """A write was rejected before reaching the database."""
    pass


class ConfigurationError(ValidationFailure, ImproperlyConfigured):
    """Raised when uniqueness is enforced but the window fields are not declared."""

    def __init__(self, model, missing: list[str], reason: str = None):
        self.model = model
        self.missing = missing
        name = getattr(model, "__name__", type(model).__name__)
        self.reason = reason or (
            f"{name} enforces a uniquely active window but does not declare "
            + ", ".join(missing)
        )
        super().__init__(self.reason)


class OrderingViolation(ValidationFailure):
    """Raised when a record finishes before it starts."""

    def __init__(self, finish_field: str, start_field: str):
        self.finish_field = finish_field
        self.start_field = start_field
        self.message = (
            f"{_humanize(finish_field).capitalize()} must be after {_humanize(start_field)}"
        )
        super().__init__(self.message)


class ConflictViolation(ValidationFailure):
    """Raised when a record would be active at the same time as a sibling."""

    def __init__(self, record, conflicting_ids: list):
        self.record = record
        self.conflicting_ids = list(conflicting_ids)
        lines = "\n".join(f"  - {pk!r}" for pk in self.conflicting_ids)
        message = (
            f"Attempted to commit record {record!r} but its active window "
            f"conflicts with the following records:\n{lines}"
        )
        super().__init__(message)


def _humanize(field_name: str) -> str:
    return field_name.replace("_", " ").strip()

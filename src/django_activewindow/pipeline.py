"""Validation pipeline run before a record with an active window is written.

Two checks, in a fixed order, on every create and every update:

1. Ordering: a set finish may not precede the start.
2. Collisions: when the configuration enforces uniqueness, no sibling in
   the same parent scope may be active at an instant this record is.

Nothing here writes, locks or logs. A failure is raised as a
ValidationFailure subclass and the caller decides what to do with it.
"""
from django.core.exceptions import FieldDoesNotExist
from django.utils import timezone

from .collisions import detect_collisions
from .conf import ScopeConfiguration
from .exceptions import ConfigurationError, ConflictViolation, OrderingViolation
from .rounding import as_timestamp
from .suppliers import CandidateSupplier, StaticSupplier
from .windows import ActiveWindow


def _field_value(record, field_name):
    if not field_name:
        return None
    return getattr(record, field_name, None)


def record_id(record):
    """Identity used to skip a record's own stored state."""
    pk = getattr(record, "pk", None)
    if pk is None:
        pk = getattr(record, "id", None)
    return pk


def resolve_parent_key(record, config: ScopeConfiguration):
    """
    Return the key of the record's parent, or None if it has none yet.

    For model instances the foreign key column (e.g. country_id) is read,
    so an unassigned or unsaved parent resolves to None without a query.
    """
    if not config.parent_field:
        return None

    attribute = config.parent_field
    meta = getattr(record, "_meta", None)
    if meta is not None:
        try:
            attribute = meta.get_field(config.parent_field).attname
        except FieldDoesNotExist:
            raise ConfigurationError(
                type(record),
                ["parent_field"],
                f"{type(record).__name__} has no field '{config.parent_field}'",
            )

    parent = getattr(record, attribute, None)
    if parent is not None and hasattr(parent, "_meta"):
        return parent.pk
    return parent


def build_window(record, config: ScopeConfiguration) -> ActiveWindow:
    """Build the record's window from its current field values."""
    return ActiveWindow.build(
        start=_field_value(record, config.start_field),
        finish=_field_value(record, config.finish_field),
        precision=config.resolved_precision,
    )


def check_ordering(record, config: ScopeConfiguration) -> None:
    """
    Ensure the record does not finish before it starts.

    Raw values are compared, without rounding. A finish equal to the start
    is allowed. An unset start counts as now.

    Raises:
        OrderingViolation: If finish < start
    """
    if not config.start_field or not config.finish_field:
        return

    finish = as_timestamp(_field_value(record, config.finish_field))
    if finish is None:
        return

    start = as_timestamp(_field_value(record, config.start_field))
    if start is None:
        start = timezone.now()

    if finish < start:
        raise OrderingViolation(config.finish_field, config.start_field)


def check_collisions(record, config: ScopeConfiguration, supplier: CandidateSupplier) -> None:
    """
    Ensure no sibling would be active at the same time as the record.

    Skipped when uniqueness is not enforced, and when the record has no
    parent yet (nothing to collide with).

    Raises:
        ConfigurationError: If uniqueness is enforced without start/finish fields
        ConflictViolation: If one or more siblings overlap the record
    """
    if not config.unique:
        return

    missing = config.missing_fields
    if missing:
        raise ConfigurationError(type(record), missing)

    parent_key = resolve_parent_key(record, config)
    if parent_key is None:
        return

    self_id = record_id(record)
    precision = config.resolved_precision
    siblings = [
        (sibling_id, ActiveWindow.build(start, finish, precision))
        for sibling_id, start, finish in supplier.siblings_for(parent_key, excluding=self_id)
    ]

    conflicts = detect_collisions(
        build_window(record, config),
        siblings,
        self_id=self_id,
        ignore_empty=config.ignore_empty,
    )
    if conflicts:
        raise ConflictViolation(record, conflicts)


def validate_record(record, config: ScopeConfiguration, siblings) -> None:
    """
    Run the ordering check, then the collision check.

    Args:
        record: Object exposing the configured start/finish/parent attributes
        config: The record type's ScopeConfiguration
        siblings: A CandidateSupplier, or a sequence of (id, start, finish)
            rows already scoped to the record's parent

    Raises:
        OrderingViolation, ConfigurationError, ConflictViolation
    """
    if not isinstance(siblings, CandidateSupplier):
        siblings = StaticSupplier(siblings)

    check_ordering(record, config)
    check_collisions(record, config, siblings)

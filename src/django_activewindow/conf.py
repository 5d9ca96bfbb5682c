"""Configuration helpers for django-activewindow."""

from dataclasses import dataclass, field

from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, connections

from .rounding import Precision, precision_for_vendor


def get_setting(name: str, default=None):
    """Get a setting with ACTIVEWINDOW_ prefix."""
    return getattr(settings, f"ACTIVEWINDOW_{name}", default)


def default_precision() -> Precision:
    """
    Project-wide timestamp precision.

    ACTIVEWINDOW_TIMESTAMP_PRECISION wins when set; otherwise it is derived
    from the default database's vendor.
    """
    configured = get_setting("TIMESTAMP_PRECISION")
    if configured:
        return Precision(configured)
    return precision_for_vendor(connections[DEFAULT_DB_ALIAS].vendor)


def _default_ignore_empty() -> bool:
    return bool(get_setting("IGNORE_EMPTY", False))


@dataclass(frozen=True)
class ScopeConfiguration:
    """
    How a model's records are considered active.

    Declared once per model as the ACTIVE_WINDOW class attribute:

        class President(ActiveWindowMixin, models.Model):
            country = models.ForeignKey(Country, on_delete=models.CASCADE)
            entered_office_at = models.DateTimeField(null=True, blank=True)
            left_office_at = models.DateTimeField(null=True, blank=True)

            ACTIVE_WINDOW = ScopeConfiguration(
                start_field="entered_office_at",
                finish_field="left_office_at",
                parent_field="country",
                unique=True,
            )

    Attributes:
        start_field: Field holding the inclusive start
        finish_field: Field holding the exclusive finish (nullable)
        parent_field: Foreign key (or attribute) naming the owning scope
        unique: At most one record per scope may be active at any instant
        ignore_empty: Zero-length windows never count as active
        precision: Rounding applied before comparing; None uses the
            project default
    """

    start_field: str | None = None
    finish_field: str | None = None
    parent_field: str | None = None
    unique: bool = False
    ignore_empty: bool = field(default_factory=_default_ignore_empty)
    precision: Precision | None = None

    def __post_init__(self):
        if self.precision is not None:
            object.__setattr__(self, "precision", Precision(self.precision))

    @property
    def resolved_precision(self) -> Precision:
        return self.precision or default_precision()

    @property
    def missing_fields(self) -> list[str]:
        """Names of the window fields that have not been declared."""
        missing = []
        if not self.start_field:
            missing.append("start_field")
        if not self.finish_field:
            missing.append("finish_field")
        return missing

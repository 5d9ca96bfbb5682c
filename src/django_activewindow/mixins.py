"""Model mixin enforcing active window invariants on save."""
import logging

from django.core.exceptions import NON_FIELD_ERRORS, ValidationError
from django.db import models

from .conf import ScopeConfiguration
from .exceptions import ConfigurationError, ConflictViolation, OrderingViolation
from .pipeline import build_window, resolve_parent_key, validate_record
from .rounding import Precision, round_timestamp
from .suppliers import CandidateSupplier, QuerySetSupplier
from .windows import ActiveWindow

logger = logging.getLogger(__name__)


class ActiveWindowMixin(models.Model):
    """
    Abstract mixin for records that are active during [start, finish).

    Declare which fields hold the window with ACTIVE_WINDOW. Every save()
    runs the validation pipeline first:
    - finish may not precede start (equal is fine)
    - with unique=True, no other record under the same parent may be
      active at an overlapping instant

    Usage:
        class President(ActiveWindowMixin, models.Model):
            country = models.ForeignKey(Country, on_delete=models.CASCADE,
                                        related_name="presidents")
            entered_office_at = models.DateTimeField(null=True, blank=True)
            left_office_at = models.DateTimeField(null=True, blank=True)

            ACTIVE_WINDOW = ScopeConfiguration(
                start_field="entered_office_at",
                finish_field="left_office_at",
                parent_field="country",
                unique=True,
            )

            objects = ActiveWindowQuerySet.as_manager()

    Concurrent writers are not serialized here; wrap the save in a
    transaction that locks the parent row if two writers can race.
    """

    ACTIVE_WINDOW: ScopeConfiguration = ScopeConfiguration()

    class Meta:
        abstract = True

    def get_active_window(self) -> ActiveWindow:
        """Window built from the record's current field values."""
        config = self.ACTIVE_WINDOW
        if not config.start_field:
            raise ConfigurationError(type(self), ["start_field"])
        return build_window(self, config)

    def is_active(self, at=None) -> bool:
        """Return True if the record is active at `at` (defaults to now)."""
        return self.get_active_window().is_active_at(at)

    def is_active_in_interval(self, interval_start=None, interval_end=None) -> bool:
        """Return True if the record is active at some instant of [interval_start, interval_end)."""
        return self.get_active_window().overlaps(
            interval_start,
            interval_end,
            ignore_empty=self.ACTIVE_WINDOW.ignore_empty,
        )

    @classmethod
    def get_candidate_supplier(cls, using=None) -> CandidateSupplier:
        """Supplier of sibling rows. Override to serve them from a cache."""
        return QuerySetSupplier(cls, using=using)

    def validate_active_window(self, using=None):
        """
        Run the ordering and collision checks without saving.

        Raises:
            OrderingViolation: If the record finishes before it starts
            ConflictViolation: If a sibling would be active at the same time
            ConfigurationError: If uniqueness is enforced without window fields
        """
        config = self.ACTIVE_WINDOW
        validate_record(self, config, self.get_candidate_supplier(using=using))
        if config.unique and resolve_parent_key(self, config) is None:
            logger.debug(
                "Collision check skipped for %s: no %s assigned",
                type(self).__name__,
                config.parent_field,
            )

    def clean(self):
        """Report window failures as ValidationErrors for forms and full_clean()."""
        super().clean()
        try:
            self.validate_active_window()
        except OrderingViolation as e:
            raise ValidationError({e.finish_field: e.message})
        except ConflictViolation as e:
            raise ValidationError({NON_FIELD_ERRORS: str(e)})

    def save(self, *args, using=None, **kwargs):
        try:
            self.validate_active_window(using=using)
        except ConflictViolation as e:
            logger.info(
                "Rejected save of %s %s: active window conflicts with %s",
                type(self).__name__,
                self.pk,
                e.conflicting_ids,
            )
            raise

        self._store_rounded_bounds()
        super().save(*args, using=using, **kwargs)
        self._invalidate_candidates(using)

    def delete(self, *args, using=None, **kwargs):
        result = super().delete(*args, using=using, **kwargs)
        self._invalidate_candidates(using)
        return result

    def _store_rounded_bounds(self):
        # Stored bounds must equal the rounded ones the collision check saw.
        config = self.ACTIVE_WINDOW
        precision = config.resolved_precision
        if precision == Precision.NATIVE:
            return
        for field in (config.start_field, config.finish_field):
            value = getattr(self, field) if field else None
            if value is not None:
                setattr(self, field, round_timestamp(value, precision))

    def _invalidate_candidates(self, using=None):
        config = self.ACTIVE_WINDOW
        if not config.parent_field:
            return
        parent_key = resolve_parent_key(self, config)
        if parent_key is not None:
            self.get_candidate_supplier(using=using).invalidate(parent_key)

"""Assertions for checking a project's models are wired to django-activewindow.

Meant for use in the consuming project's own test suite:

    from django_activewindow.testing import assert_considered_active

    def test_president_window():
        assert_considered_active(President, "entered_office_at", "left_office_at")
"""
from .mixins import ActiveWindowMixin
from .relations import ActiveRelation


def _model_class(model_or_instance):
    if isinstance(model_or_instance, type):
        return model_or_instance
    return type(model_or_instance)


def assert_uses_active_window(model_or_instance):
    """Assert the model inherits ActiveWindowMixin."""
    model = _model_class(model_or_instance)
    assert issubclass(model, ActiveWindowMixin), (
        f"{model.__name__} does not inherit ActiveWindowMixin"
    )


def assert_considered_active(model_or_instance, start_field: str, finish_field: str):
    """Assert the model's window runs from `start_field` until `finish_field`."""
    assert_uses_active_window(model_or_instance)
    config = _model_class(model_or_instance).ACTIVE_WINDOW
    assert (config.start_field, config.finish_field) == (start_field, finish_field), (
        f"Expected window {start_field} -> {finish_field}, "
        f"got {config.start_field} -> {config.finish_field}"
    )


def assert_has_active(parent, name: str, single: bool = None):
    """
    Assert the parent exposes `name` as an ActiveRelation.

    Args:
        parent: Parent model or instance
        name: Attribute name, e.g. "active_president"
        single: If given, also check whether the relation returns one child
    """
    model = _model_class(parent)
    relation = getattr(model, name, None)
    assert isinstance(relation, ActiveRelation), (
        f"{model.__name__}.{name} is not an ActiveRelation"
    )
    if single is not None:
        assert relation.single is single, (
            f"{model.__name__}.{name} has single={relation.single}, expected {single}"
        )

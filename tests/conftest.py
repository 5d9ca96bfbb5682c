"""Pytest configuration for django-activewindow tests."""
from dataclasses import replace

import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def clear_cache():
    """Start every test with an empty cache."""
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def configure(monkeypatch):
    """Swap fields of a model's ACTIVE_WINDOW for the duration of a test."""

    def _configure(model, **changes):
        monkeypatch.setattr(model, "ACTIVE_WINDOW", replace(model.ACTIVE_WINDOW, **changes))

    return _configure


@pytest.fixture
def country(db):
    from tests.models import Country

    return Country.objects.create(name="Freedonia")

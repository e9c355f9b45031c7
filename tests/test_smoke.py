"""Minimal smoke tests for the project scaffolding."""

from __future__ import annotations

import pytest


@pytest.mark.unit
def test_transform_entry_point_imports() -> None:
    """Import the transform pipeline and verify the public entry point exists."""

    from chartspec import transform

    assert callable(transform)


@pytest.mark.integration
def test_django_project_loads() -> None:
    """Import and initialize Django to verify settings are valid."""

    import django
    from django.conf import settings

    django.setup()
    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS

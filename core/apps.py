"""App configuration for the core Django app."""

from __future__ import annotations

from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Configuration for the `core` app (host surfaces around `chartspec`)."""

    name = "core"
    verbose_name = "Chart transform"

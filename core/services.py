"""Service-layer functions for the core app.

Services in `core` coordinate Django concerns (settings, localization) with
the pure `chartspec` transform pipeline.
"""

from __future__ import annotations

from dataclasses import fields, replace

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from chartspec.dto import DataSource, ViewModel
from chartspec.engine import transform
from chartspec.settings import DEFAULT_CHART_OPTIONS, ChartOptionDefaults, ChartSettings
from core.localization import translate


def chart_option_defaults() -> ChartOptionDefaults:
    """Return the option default table, applying `settings.CHART_OPTION_DEFAULTS`.

    Returns:
        ChartOptionDefaults with any configured overrides applied.

    Raises:
        ImproperlyConfigured: When the overrides name unknown option fields.
    """

    overrides = dict(getattr(settings, "CHART_OPTION_DEFAULTS", None) or {})
    known = {field.name for field in fields(ChartOptionDefaults)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ImproperlyConfigured(f"CHART_OPTION_DEFAULTS contains unknown option fields: {unknown}.")
    for name, value in overrides.items():
        if not _valid_default(name, value):
            raise ImproperlyConfigured(f"CHART_OPTION_DEFAULTS[{name!r}] has an invalid value: {value!r}.")
    return replace(DEFAULT_CHART_OPTIONS, **overrides)


_INT_DEFAULTS = frozenset({"x_tick_count", "y_tick_count", "legend_position", "inner_padding"})


def _valid_default(name: str, value: object) -> bool:
    """Return True when `value` has the type the default table expects for `name`."""

    if name == "time_format":
        return value is None or isinstance(value, str)
    if name == "show_line":
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if name in _INT_DEFAULTS:
        return isinstance(value, int)
    return isinstance(value, (int, float))


def run_transform(source: DataSource, chart_settings: ChartSettings) -> ViewModel:
    """Run the chart transform with the configured defaults and Django translations."""

    return transform(source, chart_settings, defaults=chart_option_defaults(), translate=translate)

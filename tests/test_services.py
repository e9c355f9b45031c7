"""Tests for the configured option default table."""

from __future__ import annotations

import pytest
from django.core.exceptions import ImproperlyConfigured

from chartspec.settings import DEFAULT_CHART_OPTIONS
from core.services import chart_option_defaults

pytestmark = pytest.mark.integration


def test_chart_option_defaults_without_overrides(settings) -> None:
    """No overrides returns the built-in table."""

    settings.CHART_OPTION_DEFAULTS = {}
    assert chart_option_defaults() == DEFAULT_CHART_OPTIONS


def test_chart_option_defaults_applies_valid_overrides(settings) -> None:
    """Well-typed overrides replace individual defaults."""

    settings.CHART_OPTION_DEFAULTS = {"inner_padding": 0, "dot_size": 2.5, "show_line": True, "time_format": "%b"}

    defaults = chart_option_defaults()

    assert defaults.inner_padding == 0
    assert defaults.dot_size == 2.5
    assert defaults.show_line is True
    assert defaults.time_format == "%b"
    assert defaults.y_tick_count == DEFAULT_CHART_OPTIONS.y_tick_count


def test_chart_option_defaults_allows_null_time_format(settings) -> None:
    """`time_format` is the one option whose default may be null."""

    settings.CHART_OPTION_DEFAULTS = {"time_format": None}
    assert chart_option_defaults().time_format is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"inner_padding": None},
        {"inner_padding": "50"},
        {"y_tick_count": 2.5},
        {"legend_position": True},
        {"dot_size": None},
        {"show_line": "yes"},
        {"time_format": 5},
        {"bar_width": 3},
    ],
)
def test_chart_option_defaults_rejects_bad_overrides(settings, overrides: dict[str, object]) -> None:
    """Unknown fields and mistyped values are configuration errors."""

    settings.CHART_OPTION_DEFAULTS = overrides

    with pytest.raises(ImproperlyConfigured):
        chart_option_defaults()

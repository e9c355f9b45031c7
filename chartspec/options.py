"""Option resolution: merge user option overrides with the default table.

Each chart type exposes an explicit allow-list of options; fields outside
that list never appear in the resolved options record.
"""

from __future__ import annotations

import logging
from typing import Final, TypeVar

from .dto import ChartOptions
from .enums import ChartType
from .settings import OPTION_RANGES, ChartOptionDefaults, ChartOptionSettings, OptionRange

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Settings field name -> chart.xkcd options key.
OPTION_KEYS: Final[dict[str, str]] = {
    "x_tick_count": "xTickCount",
    "y_tick_count": "yTickCount",
    "legend_position": "legendPosition",
    "show_line": "showLine",
    "time_format": "timeFormat",
    "dot_size": "dotSize",
    "inner_padding": "innerRadius",
}

_OPTION_FIELDS: Final[dict[ChartType, tuple[str, ...]]] = {
    ChartType.Bar: ("y_tick_count",),
    ChartType.Pie: ("legend_position", "inner_padding"),
    ChartType.Line: ("y_tick_count", "legend_position"),
    ChartType.XY: ("x_tick_count", "y_tick_count", "legend_position", "show_line", "dot_size", "time_format"),
}


def option_fields_for(chart_type: ChartType, *, category_is_date: bool = False) -> tuple[str, ...]:
    """Return the option settings fields exposed for `chart_type`.

    Args:
        chart_type: Selected chart type.
        category_is_date: Whether the category column is date-typed (enables `time_format` for XY).

    Returns:
        Settings field names in display order.
    """

    fields = _OPTION_FIELDS[chart_type]
    if not category_is_date:
        fields = tuple(name for name in fields if name != "time_format")
    return fields


def advertised_ranges(chart_type: ChartType, *, category_is_date: bool = False) -> dict[str, OptionRange]:
    """Return valid numeric ranges for the options shown for `chart_type`."""

    return {
        name: OPTION_RANGES[name]
        for name in option_fields_for(chart_type, category_is_date=category_is_date)
        if name in OPTION_RANGES
    }


def fallback(value: T | None, default: T) -> T:
    """Return `value` unless it is unset.

    Zero is an explicit user choice and is kept; any other falsy value
    (None, empty string, False) falls back to `default`.
    """

    if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 0:
        return value
    return value or default


def resolve_options(
    chart_type: ChartType,
    user: ChartOptionSettings,
    *,
    defaults: ChartOptionDefaults,
    category_is_date: bool = False,
) -> ChartOptions:
    """Produce the fully-populated options record for `chart_type`.

    Args:
        chart_type: Selected chart type.
        user: User option overrides (None means unset).
        defaults: Immutable default table.
        category_is_date: Whether the category column is date-typed.

    Returns:
        ChartOptions containing only the keys allowed for the chart type.
    """

    options: ChartOptions = {}
    for name in option_fields_for(chart_type, category_is_date=category_is_date):
        value = fallback(getattr(user, name), getattr(defaults, name))
        option_range = OPTION_RANGES.get(name)
        if option_range is not None and value is not None and not option_range.contains(value):
            logger.debug(
                "Option %s=%r is outside %d-%d; passing it through.",
                name,
                value,
                option_range.min,
                option_range.max,
            )
        if name == "inner_padding":
            value = value / 100
        if value is None:
            continue
        options[OPTION_KEYS[name]] = value  # type: ignore[literal-required]

    logger.debug("Resolved %s options: %s", chart_type, options)
    return options

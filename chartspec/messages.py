"""Error codes and default display text for validation messages.

Message text may contain paired `[ul]`/`[li]` markers; converting them to
presentation markup is the display layer's job.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Callable, Final

Translator = Callable[[str], str]


class ErrorCode(StrEnum):
    """Stable message keys emitted by the pipeline."""

    missing_source = "missing_source"
    shape_mismatch_bar = "shape_mismatch_bar"
    shape_mismatch_pie = "shape_mismatch_pie"
    shape_mismatch_line = "shape_mismatch_line"
    shape_mismatch_xy = "shape_mismatch_xy"
    unknown_chart_type = "unknown_chart_type"
    unmapped_variant = "unmapped_variant"


DEFAULT_MESSAGES: Final[dict[str, str]] = {
    ErrorCode.missing_source: "No data has been supplied. Add fields to the visual to get started.",
    ErrorCode.shape_mismatch_bar: (
        "Bar charts require:[ul][li]exactly one Category[/li][li]exactly one Measure[/li][li]no Series[/li][/ul]"
    ),
    ErrorCode.shape_mismatch_pie: (
        "Pie charts require:[ul][li]exactly one Category[/li][li]exactly one Measure[/li][li]no Series[/li][/ul]"
    ),
    ErrorCode.shape_mismatch_line: (
        "Line charts require one of:"
        "[ul][li]one Category and one Measure[/li]"
        "[li]one Category, one Series and one Measure[/li]"
        "[li]one Category and two or more Measures (no Series)[/li][/ul]"
    ),
    ErrorCode.shape_mismatch_xy: (
        "XY charts require a numeric or date Category and one of:"
        "[ul][li]one or more Measures (no Series)[/li]"
        "[li]one Series and one Measure[/li]"
        "[li]one numeric, non-aggregated field in Measures (no Series)[/li][/ul]"
    ),
    ErrorCode.unknown_chart_type: "The selected chart type is not supported.",
    ErrorCode.unmapped_variant: "This combination of XY fields cannot be plotted yet.",
}


def default_translate(key: str) -> str:
    """Return the default English text for `key` (the key itself when unknown)."""

    return DEFAULT_MESSAGES.get(key, key)

"""Settings objects supplied by the host for one transform call.

`CoreParameterSettings` and `ChartOptionSettings` hold what the user set in
the property pane; unset values are None. `ChartOptionDefaults` is the
immutable default table passed explicitly into option resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final


@dataclass(frozen=True, slots=True)
class CoreParameterSettings:
    """Core chart parameters.

    Args:
        chart_type: Selected chart type name (Bar/Pie/Line/XY).
        show_title: Whether the title should be rendered.
        title_text: Title text shown when `show_title` is set.
        x_label: Optional x-axis label override.
        y_label: Optional y-axis label override.
    """

    chart_type: str = "Bar"
    show_title: bool = False
    title_text: str | None = None
    x_label: str | None = None
    y_label: str | None = None


@dataclass(frozen=True, slots=True)
class ChartOptionSettings:
    """User-set chart option overrides; None means unset.

    Args:
        x_tick_count: Number of x-axis ticks (XY).
        y_tick_count: Number of y-axis ticks (Bar/Line/XY).
        legend_position: Legend placement code (Pie/Line/XY).
        show_line: Whether XY points are joined by lines.
        time_format: Tick format for date-typed XY categories.
        dot_size: XY dot size.
        inner_padding: Pie inner radius as a 0-100 percentage.
    """

    x_tick_count: int | None = None
    y_tick_count: int | None = None
    legend_position: int | None = None
    show_line: bool | None = None
    time_format: str | None = None
    dot_size: float | None = None
    inner_padding: int | None = None


@dataclass(frozen=True, slots=True)
class ChartOptionDefaults:
    """Default option values used when the user leaves an option unset."""

    x_tick_count: int = 3
    y_tick_count: int = 3
    legend_position: int = 1
    show_line: bool = False
    time_format: str | None = None
    dot_size: float = 1
    inner_padding: int = 50


DEFAULT_CHART_OPTIONS: Final[ChartOptionDefaults] = ChartOptionDefaults()


@dataclass(frozen=True, slots=True)
class ChartSettings:
    """The resolved settings object for one transform call."""

    core: CoreParameterSettings = field(default_factory=CoreParameterSettings)
    options: ChartOptionSettings = field(default_factory=ChartOptionSettings)


@dataclass(frozen=True, slots=True)
class OptionRange:
    """Inclusive numeric range advertised to the editing surface."""

    min: int
    max: int

    def contains(self, value: float) -> bool:
        """Return True when `value` lies inside the range."""

        return self.min <= value <= self.max


OPTION_RANGES: Final[dict[str, OptionRange]] = {
    "x_tick_count": OptionRange(min=0, max=10),
    "y_tick_count": OptionRange(min=0, max=10),
    "inner_padding": OptionRange(min=0, max=100),
    "dot_size": OptionRange(min=1, max=10),
}

"""Final merge of title, axis labels, options and data into a chart spec."""

from __future__ import annotations

from .dto import ChartData, ChartOptions, ChartSpec
from .enums import CARTESIAN_CHART_TYPES, ChartType
from .roles import RoleHandles
from .settings import CoreParameterSettings


def build_spec(
    chart_type: ChartType,
    core: CoreParameterSettings,
    roles: RoleHandles,
    *,
    options: ChartOptions,
    data: ChartData,
) -> ChartSpec:
    """Assemble the renderer-ready spec.

    Args:
        chart_type: Selected chart type.
        core: Core parameter settings (title and axis overrides).
        roles: Resolved role handles, used for default axis labels.
        options: Resolved options record.
        data: Assembled data block.

    Returns:
        ChartSpec with title and axis labels only where they apply.
    """

    spec: ChartSpec = {}
    if core.show_title and core.title_text:
        spec["title"] = core.title_text
    if chart_type in CARTESIAN_CHART_TYPES:
        spec["xLabel"] = core.x_label or (roles.category.display_name if roles.category else "")
        spec["yLabel"] = core.y_label or (roles.first_measure.display_name if roles.first_measure else "")
    spec["options"] = options
    spec["data"] = data
    return spec

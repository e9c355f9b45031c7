"""Closed enumerations shared across the chart transform pipeline."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class ChartType(StrEnum):
    """Chart types supported by the renderer."""

    Bar = "Bar"
    Pie = "Pie"
    Line = "Line"
    XY = "XY"


CARTESIAN_CHART_TYPES: frozenset[ChartType] = frozenset({ChartType.Bar, ChartType.Line, ChartType.XY})


class DataRole(StrEnum):
    """Semantic roles a column can be tagged with by the data source."""

    category = "category"
    measure = "measure"
    series = "series"


class XYMappingType(StrEnum):
    """How the axes and groupings of an XY chart were inferred."""

    CatMeasures = "CatMeasures"
    CatMeasureSeries = "CatMeasureSeries"
    CatMeasureCat = "CatMeasureCat"


class LegendPosition(IntEnum):
    """Legend placement codes understood by chart.xkcd."""

    up_left = 1
    up_right = 2
    down_left = 3
    down_right = 4

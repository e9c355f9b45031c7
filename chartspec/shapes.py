"""Structural validation of resolved roles against the selected chart type.

Each chart type owns one validator function registered in
`SHAPE_VALIDATORS`. Validators are pure: they return a `ShapeResult`
instead of accumulating messages, and the first failing check is the only
one reported.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Final

from .dto import DataSource
from .enums import ChartType, XYMappingType
from .messages import ErrorCode
from .roles import RoleHandles

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShapeResult:
    """Outcome of shape validation.

    Args:
        ok: True when the data shape is legal for the chart type.
        xy_mapping: Resolved XY mapping variant (XY charts only).
        error_code: Message key describing the failure when `ok` is False.
    """

    ok: bool
    xy_mapping: XYMappingType | None = None
    error_code: ErrorCode | None = None

    @classmethod
    def passed(cls, xy_mapping: XYMappingType | None = None) -> "ShapeResult":
        return cls(ok=True, xy_mapping=xy_mapping)

    @classmethod
    def failed(cls, error_code: ErrorCode) -> "ShapeResult":
        return cls(ok=False, error_code=error_code)


ShapeValidator = Callable[[RoleHandles, DataSource], ShapeResult]


def validate_shape(chart_type: ChartType, roles: RoleHandles, source: DataSource) -> ShapeResult:
    """Decide whether the data shape is legal for `chart_type`.

    Args:
        chart_type: Selected chart type.
        roles: Resolved role handles.
        source: Data source supplied by the host.

    Returns:
        ShapeResult describing the pass (with XY mapping) or the failure code.
    """

    if not source.columns or source.table is None:
        logger.debug("Shape check failed: data source has no metadata or table section.")
        return ShapeResult.failed(ErrorCode.missing_source)

    result = SHAPE_VALIDATORS[chart_type](roles, source)
    logger.debug(
        "Shape check for %s: ok=%s mapping=%s error=%s",
        chart_type,
        result.ok,
        result.xy_mapping,
        result.error_code,
    )
    return result


def _single_category_single_measure(roles: RoleHandles) -> bool:
    return roles.category is not None and roles.measure_count == 1 and roles.series is None


def _validate_bar(roles: RoleHandles, source: DataSource) -> ShapeResult:
    if _single_category_single_measure(roles):
        return ShapeResult.passed()
    return ShapeResult.failed(ErrorCode.shape_mismatch_bar)


def _validate_pie(roles: RoleHandles, source: DataSource) -> ShapeResult:
    if _single_category_single_measure(roles):
        return ShapeResult.passed()
    return ShapeResult.failed(ErrorCode.shape_mismatch_pie)


def _validate_line(roles: RoleHandles, source: DataSource) -> ShapeResult:
    """Accept one measure (with or without series) or several measures without series."""

    if roles.category is None:
        return ShapeResult.failed(ErrorCode.shape_mismatch_line)
    if roles.measure_count == 1 or (roles.series is None and roles.measure_count > 1):
        return ShapeResult.passed()
    return ShapeResult.failed(ErrorCode.shape_mismatch_line)


def _validate_xy(roles: RoleHandles, source: DataSource) -> ShapeResult:
    """Classify the XY mapping variant, in priority order.

    1. CatMeasures: no series, one or more true measures.
    2. CatMeasureSeries: series plus exactly one true measure.
    3. CatMeasureCat: no series, one numeric non-aggregated field in the measure role.
    """

    category = roles.category
    if category is None or not category.is_numeric_or_date:
        return ShapeResult.failed(ErrorCode.shape_mismatch_xy)

    measures = roles.measures
    if roles.series is None and measures and all(measure.is_measure for measure in measures):
        return ShapeResult.passed(XYMappingType.CatMeasures)
    if roles.series is not None and len(measures) == 1 and measures[0].is_measure:
        return ShapeResult.passed(XYMappingType.CatMeasureSeries)
    if roles.series is None and len(measures) == 1 and not measures[0].is_measure and measures[0].is_numeric:
        return ShapeResult.passed(XYMappingType.CatMeasureCat)
    return ShapeResult.failed(ErrorCode.shape_mismatch_xy)


SHAPE_VALIDATORS: Final[dict[ChartType, ShapeValidator]] = {
    ChartType.Bar: _validate_bar,
    ChartType.Pie: _validate_pie,
    ChartType.Line: _validate_line,
    ChartType.XY: _validate_xy,
}

_missing = set(ChartType) - set(SHAPE_VALIDATORS)
if _missing:
    raise RuntimeError(f"Missing shape validators for chart types: {sorted(_missing)}.")

"""Dataset assembly: walk the tabular source and build the spec `data` block.

Both source shapes (flat categorical arrays and the hierarchical matrix) are
read through `rows()` / `series_labels()`, so assemblers only deal with
category rows and value vectors aligned by index.
"""

from __future__ import annotations

import logging
import math
import re
from datetime import date
from decimal import Decimal
from typing import Callable, Final, Iterable, TypeVar

from .dto import ChartData, ChartDataset, SourceRow, TabularSource, XYPoint
from .enums import ChartType, XYMappingType
from .messages import ErrorCode
from .roles import RoleHandles

logger = logging.getLogger(__name__)

T = TypeVar("T")


_NUMBER_RE = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")
_GROUPED_NUMBER_RE = re.compile(r"^[+-]?\d{1,3}(,\d{3})+(\.\d+)?$")


def coerce_number(value: object) -> int | float | None:
    """Coerce a raw cell value into a number, or None when not representable.

    Booleans, NaN/infinite values and non-numeric strings are treated as null.
    Strings may use `,` only as a thousands separator ("1,200"); anything
    else with a comma ("1,5", "1,2,3") is not a number.
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, Decimal):
        if not value.is_finite():
            return None
        number = float(value)
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if _GROUPED_NUMBER_RE.match(text):
            text = text.replace(",", "")
        elif not _NUMBER_RE.match(text):
            return None
        number = float(text)
    else:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def coerce_x(value: object) -> int | float | date | None:
    """Coerce an XY category value; dates and datetimes are kept as-is."""

    if isinstance(value, date):
        return value
    return coerce_number(value)


def drop_nulls(values: Iterable[T | None]) -> list[T]:
    """Remove null entries, preserving order (idempotent)."""

    return [value for value in values if value is not None]


def category_label(value: object) -> str:
    """Render a category or series value as a label string."""

    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


DatasetAssembler = Callable[[RoleHandles, TabularSource, XYMappingType | None], ChartData]


def assemble_data(
    chart_type: ChartType,
    roles: RoleHandles,
    table: TabularSource,
    xy_mapping: XYMappingType | None = None,
) -> ChartData:
    """Build the `data` block for a validated chart.

    Args:
        chart_type: Selected chart type.
        roles: Resolved role handles (already validated).
        table: Tabular source to read.
        xy_mapping: Resolved XY mapping variant (XY charts only).

    Returns:
        ChartData with labels (where the chart type uses them) and datasets.
    """

    data = DATASET_ASSEMBLERS[chart_type](roles, table, xy_mapping)
    logger.debug(
        "Assembled %s data: %d labels, %d datasets",
        chart_type,
        len(data.get("labels", [])),
        len(data.get("datasets", [])),
    )
    return data


def _labelled_columns(roles: RoleHandles, table: TabularSource) -> list[tuple[int, str]]:
    """Return (value index, dataset label) pairs, one per series column or per measure."""

    series_labels = table.series_labels() if roles.series is not None else ()
    if series_labels:
        return [(idx, category_label(value)) for idx, value in enumerate(series_labels)]
    return [(idx, measure.display_name) for idx, measure in enumerate(roles.measures)]


def _assemble_categorical(roles: RoleHandles, table: TabularSource, xy_mapping: XYMappingType | None) -> ChartData:
    """Bar/Pie: one unfiltered dataset index-aligned to the labels."""

    rows = table.rows()
    return {
        "labels": [category_label(row.category) for row in rows],
        "datasets": [{"data": [coerce_number(row.value_at(0)) for row in rows]}],
    }


def _assemble_line(roles: RoleHandles, table: TabularSource, xy_mapping: XYMappingType | None) -> ChartData:
    """Line: one dataset per series column (or per measure), each null-filtered independently."""

    rows = table.rows()
    datasets: list[ChartDataset] = [
        {"label": label, "data": drop_nulls(coerce_number(row.value_at(idx)) for row in rows)}
        for idx, label in _labelled_columns(roles, table)
    ]
    return {"labels": [category_label(row.category) for row in rows], "datasets": datasets}


def _xy_points(rows: Iterable[SourceRow], index: int) -> list[XYPoint]:
    points: list[XYPoint] = []
    for row in rows:
        x = coerce_x(row.category)
        y = coerce_number(row.value_at(index))
        if x is None or y is None:
            continue
        points.append({"x": x, "y": y})
    return points


def _assemble_xy(roles: RoleHandles, table: TabularSource, xy_mapping: XYMappingType | None) -> ChartData:
    """XY: `{x, y}` pairs per measure (CatMeasures) or per series (CatMeasureSeries)."""

    if xy_mapping == XYMappingType.CatMeasureCat:
        # TODO: group by category x measure once the de-duplication rules are agreed.
        logger.warning("XY mapping %s is not assembled (%s).", xy_mapping, ErrorCode.unmapped_variant)
        return {"datasets": []}

    rows = table.rows()
    return {
        "datasets": [
            {"label": label, "data": _xy_points(rows, idx)} for idx, label in _labelled_columns(roles, table)
        ]
    }


DATASET_ASSEMBLERS: Final[dict[ChartType, DatasetAssembler]] = {
    ChartType.Bar: _assemble_categorical,
    ChartType.Pie: _assemble_categorical,
    ChartType.Line: _assemble_line,
    ChartType.XY: _assemble_xy,
}

_missing = set(ChartType) - set(DATASET_ASSEMBLERS)
if _missing:
    raise RuntimeError(f"Missing dataset assemblers for chart types: {sorted(_missing)}.")

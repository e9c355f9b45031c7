"""JSON payload encoding/decoding for the chart transform surfaces.

The host posts column metadata, one tabular block (`categorical` or
`matrix`) and the chart settings as JSON. These helpers turn that payload
into `chartspec` DTOs and turn a ViewModel back into a JSON-serializable
dictionary.
"""

from __future__ import annotations

from typing import Any, cast

from django.utils.dateparse import parse_date, parse_datetime

from chartspec.dto import (
    CategoricalSource,
    ColumnHandle,
    DataSource,
    MatrixNode,
    MatrixSource,
    TabularSource,
    ValueColumn,
    ViewModel,
)
from chartspec.enums import DataRole
from chartspec.roles import resolve_role
from chartspec.settings import ChartOptionSettings, ChartSettings, CoreParameterSettings


class PayloadError(ValueError):
    """Raised when a transform payload is structurally invalid."""


def decode_data_source(payload: object) -> DataSource:
    """Decode the `source` section of a transform payload.

    Args:
        payload: Mapping with `columns` and at most one of `categorical` / `matrix`.

    Returns:
        DataSource; `table` is None when neither tabular block is present.

    Raises:
        PayloadError: When the payload is not a mapping, a column is malformed,
            or both tabular blocks are supplied.
    """

    raw = _as_mapping(payload, "source")
    columns = tuple(_decode_column(item, idx) for idx, item in enumerate(_as_list(raw.get("columns"), "columns")))

    categorical_raw = raw.get("categorical")
    matrix_raw = raw.get("matrix")
    if categorical_raw is not None and matrix_raw is not None:
        raise PayloadError("source must contain either 'categorical' or 'matrix', not both.")

    category = resolve_role(columns, DataRole.category)
    parse_dates = bool(category and category.is_date_time)

    table: TabularSource | None = None
    if categorical_raw is not None:
        table = _decode_categorical(_as_mapping(categorical_raw, "categorical"), parse_dates=parse_dates)
    elif matrix_raw is not None:
        table = _decode_matrix(_as_mapping(matrix_raw, "matrix"), parse_dates=parse_dates)
    return DataSource(columns=columns, table=table)


def decode_chart_settings(payload: object) -> ChartSettings:
    """Decode the `settings` section of a transform payload.

    Missing or empty fields are treated as unset.

    Raises:
        PayloadError: When the payload or one of its sections is not a mapping.
    """

    raw = _as_mapping(payload or {}, "settings")
    core_raw = _as_mapping(raw.get("core") or {}, "settings.core")
    options_raw = _as_mapping(raw.get("options") or {}, "settings.options")

    core = CoreParameterSettings(
        chart_type=str(core_raw.get("chart_type") or "Bar"),
        show_title=_parse_bool(core_raw.get("show_title")),
        title_text=_parse_str(core_raw.get("title_text")),
        x_label=_parse_str(core_raw.get("x_label")),
        y_label=_parse_str(core_raw.get("y_label")),
    )
    options = ChartOptionSettings(
        x_tick_count=_parse_int(options_raw.get("x_tick_count")),
        y_tick_count=_parse_int(options_raw.get("y_tick_count")),
        legend_position=_parse_int(options_raw.get("legend_position")),
        show_line=_parse_optional_bool(options_raw.get("show_line")),
        time_format=_parse_str(options_raw.get("time_format")),
        dot_size=_parse_float(options_raw.get("dot_size")),
        inner_padding=_parse_int(options_raw.get("inner_padding")),
    )
    return ChartSettings(core=core, options=options)


def encode_view_model(view_model: ViewModel) -> dict[str, Any]:
    """Encode a ViewModel into a JSON-serializable dictionary.

    Dates inside XY points are left as `date`/`datetime` objects; serialize
    with `DjangoJSONEncoder` (the JsonResponse default).
    """

    return {
        "spec": view_model.spec,
        "test_result": {
            "result": view_model.test_result.result,
            "messages": list(view_model.test_result.messages),
        },
        "xy_mapping": str(view_model.xy_mapping) if view_model.xy_mapping is not None else None,
    }


def _decode_column(item: object, idx: int) -> ColumnHandle:
    raw = _as_mapping(item, f"columns[{idx}]")
    display_name = _parse_str(raw.get("display_name"))
    if display_name is None:
        raise PayloadError(f"columns[{idx}].display_name is required.")
    roles = raw.get("roles") or ()
    if isinstance(roles, dict):
        roles = [name for name, enabled in roles.items() if enabled]
    return ColumnHandle(
        display_name=display_name,
        roles=frozenset(str(role) for role in _as_list(roles, f"columns[{idx}].roles")),
        is_numeric=_parse_bool(raw.get("is_numeric")),
        is_date_time=_parse_bool(raw.get("is_date_time")),
        is_measure=_parse_bool(raw.get("is_measure")),
    )


def _decode_categorical(raw: dict[str, Any], *, parse_dates: bool) -> CategoricalSource:
    categories = tuple(_as_list(raw.get("categories"), "categorical.categories"))
    if parse_dates:
        categories = tuple(_parse_temporal(value) for value in categories)
    values = []
    for idx, item in enumerate(_as_list(raw.get("values"), "categorical.values")):
        column = _as_mapping(item, f"categorical.values[{idx}]")
        values.append(
            ValueColumn(
                values=tuple(_as_list(column.get("values"), f"categorical.values[{idx}].values")),
                group=column.get("group"),
            )
        )
    return CategoricalSource(categories=categories, values=tuple(values))


def _decode_matrix(raw: dict[str, Any], *, parse_dates: bool) -> MatrixSource:
    rows_raw = raw.get("rows")
    if rows_raw is None:
        raise PayloadError("matrix.rows is required.")
    columns_raw = raw.get("columns")
    return MatrixSource(
        row_tree=_decode_node(rows_raw, "matrix.rows", parse_dates=parse_dates),
        column_tree=(
            _decode_node(columns_raw, "matrix.columns", parse_dates=False) if columns_raw is not None else None
        ),
    )


def _decode_node(item: object, path: str, *, parse_dates: bool) -> MatrixNode:
    raw = _as_mapping(item, path)
    value = raw.get("value")
    return MatrixNode(
        value=_parse_temporal(value) if parse_dates else value,
        values=tuple(_as_list(raw.get("values"), f"{path}.values")),
        children=tuple(
            _decode_node(child, f"{path}.children[{idx}]", parse_dates=parse_dates)
            for idx, child in enumerate(_as_list(raw.get("children"), f"{path}.children"))
        ),
    )


def _as_mapping(value: object, path: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise PayloadError(f"{path} must be an object.")
    return cast(dict[str, Any], value)


def _as_list(value: object, path: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise PayloadError(f"{path} must be a list.")
    return list(value)


def _parse_temporal(value: object) -> object:
    """Parse ISO date/datetime strings; other values are returned unchanged.

    Bare dates stay `date` objects so they serialize without a time part.
    """

    if not isinstance(value, str):
        return value
    try:
        parsed = parse_date(value) or parse_datetime(value)
    except ValueError:
        return value
    return parsed if parsed is not None else value


def _parse_str(value: object) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


def _parse_int(value: object) -> int | None:
    """Best-effort int parsing; `0` is kept as an explicit value."""

    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(str(value))
    except ValueError:
        return None


def _parse_float(value: object) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return float(str(value))
    except ValueError:
        return None


def _parse_bool(value: object) -> bool:
    """Best-effort bool parsing for payload flags."""

    if isinstance(value, bool):
        return value
    if value is None:
        return False
    normalized = str(value).strip().casefold()
    return normalized in {"1", "true", "yes", "on"}


def _parse_optional_bool(value: object) -> bool | None:
    if value is None or value == "":
        return None
    return _parse_bool(value)

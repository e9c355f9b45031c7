"""Transform pipeline entry point.

`transform` consumes one immutable snapshot of the data source and settings
and returns a fresh ViewModel. Data and shape problems are returned as
values (`test_result.result=False` plus one message); nothing is raised
across this boundary for them.
"""

from __future__ import annotations

import logging

from .datasets import assemble_data
from .dto import DataSource, TestResult, ViewModel
from .enums import ChartType
from .messages import ErrorCode, Translator, default_translate
from .options import resolve_options
from .roles import resolve_roles
from .settings import DEFAULT_CHART_OPTIONS, ChartOptionDefaults, ChartSettings
from .shapes import validate_shape
from .spec_builder import build_spec

logger = logging.getLogger(__name__)


def parse_chart_type(value: str | ChartType) -> ChartType | None:
    """Return the ChartType for `value`, or None when it is not supported."""

    try:
        return ChartType(value)
    except ValueError:
        return None


def transform(
    source: DataSource,
    settings: ChartSettings,
    *,
    defaults: ChartOptionDefaults = DEFAULT_CHART_OPTIONS,
    translate: Translator = default_translate,
) -> ViewModel:
    """Validate `source` for the selected chart type and build its spec.

    Args:
        source: Column metadata plus tabular data for this update.
        settings: Chart type, title/axis parameters and option overrides.
        defaults: Default option table used for unset options.
        translate: Maps a message key to a display string.

    Returns:
        ViewModel with the spec and validation result. On failure the spec is
        the empty placeholder and `test_result.messages` holds one message.
    """

    chart_type = parse_chart_type(settings.core.chart_type)
    if chart_type is None:
        logger.debug("Unsupported chart type: %r", settings.core.chart_type)
        return _rejected(ErrorCode.unknown_chart_type, translate)

    roles = resolve_roles(source.columns)
    logger.debug(
        "Resolved roles: category=%s series=%s measures=%d",
        roles.category.display_name if roles.category else None,
        roles.series.display_name if roles.series else None,
        roles.measure_count,
    )

    shape = validate_shape(chart_type, roles, source)
    if not shape.ok or source.table is None:
        return _rejected(shape.error_code or ErrorCode.missing_source, translate)

    category_is_date = bool(roles.category and roles.category.is_date_time)
    options = resolve_options(
        chart_type,
        settings.options,
        defaults=defaults,
        category_is_date=category_is_date,
    )
    data = assemble_data(chart_type, roles, source.table, shape.xy_mapping)
    spec = build_spec(chart_type, settings.core, roles, options=options, data=data)

    return ViewModel(spec=spec, test_result=TestResult(result=True), xy_mapping=shape.xy_mapping)


def _rejected(error_code: ErrorCode, translate: Translator) -> ViewModel:
    """Return a failed ViewModel carrying the translated message for `error_code`."""

    logger.debug("Transform rejected: %s", error_code)
    return ViewModel(test_result=TestResult(result=False, messages=(translate(str(error_code)),)))

"""End-to-end tests for the transform pipeline."""

from __future__ import annotations

from decimal import Decimal

import pytest

from chartspec import transform
from chartspec.dto import CategoricalSource, ColumnHandle, DataSource, MatrixNode, MatrixSource, ValueColumn
from chartspec.enums import XYMappingType
from chartspec.messages import DEFAULT_MESSAGES, ErrorCode
from chartspec.settings import ChartOptionDefaults, ChartOptionSettings, ChartSettings, CoreParameterSettings

pytestmark = pytest.mark.unit

MONTH = ColumnHandle(display_name="Month", roles=frozenset({"category"}))
X = ColumnHandle(display_name="Distance", roles=frozenset({"category"}), is_numeric=True)
REGION = ColumnHandle(display_name="Region", roles=frozenset({"series"}))
SALES = ColumnHandle(display_name="Sales", roles=frozenset({"measure"}), is_numeric=True, is_measure=True)
PROFIT = ColumnHandle(display_name="Profit", roles=frozenset({"measure"}), is_numeric=True, is_measure=True)
UNITS = ColumnHandle(display_name="Units", roles=frozenset({"measure"}), is_numeric=True, is_measure=True)
AGE = ColumnHandle(display_name="Age", roles=frozenset({"measure"}), is_numeric=True)


def _settings(chart_type: str, **core: object) -> ChartSettings:
    return ChartSettings(core=CoreParameterSettings(chart_type=chart_type, **core))


def test_bar_chart_spec() -> None:
    """A Bar source produces labels, an unfiltered dataset, axis labels and options."""

    source = DataSource(
        columns=(MONTH, SALES),
        table=CategoricalSource(categories=("A", "B", "C"), values=(ValueColumn(values=(10, 20, None)),)),
    )

    view_model = transform(source, _settings("Bar", show_title=True, title_text="Monthly sales"))

    assert view_model.test_result.result is True
    assert view_model.test_result.messages == ()
    assert view_model.spec == {
        "title": "Monthly sales",
        "xLabel": "Month",
        "yLabel": "Sales",
        "options": {"yTickCount": 3},
        "data": {"labels": ["A", "B", "C"], "datasets": [{"data": [10, 20, None]}]},
    }


def test_title_requires_show_title_and_text() -> None:
    """The title is omitted when hidden or empty."""

    source = DataSource(
        columns=(MONTH, SALES),
        table=CategoricalSource(categories=("A",), values=(ValueColumn(values=(1,)),)),
    )

    hidden = transform(source, _settings("Bar", show_title=False, title_text="Ignored"))
    empty = transform(source, _settings("Bar", show_title=True, title_text=""))

    assert "title" not in hidden.spec
    assert "title" not in empty.spec


def test_axis_label_overrides_win() -> None:
    """User axis labels replace the field-name defaults."""

    source = DataSource(
        columns=(MONTH, SALES),
        table=CategoricalSource(categories=("A",), values=(ValueColumn(values=(1,)),)),
    )

    view_model = transform(source, _settings("Line", x_label="When", y_label="How much"))
    assert (view_model.spec["xLabel"], view_model.spec["yLabel"]) == ("When", "How much")


def test_pie_with_two_measures_fails_with_one_message() -> None:
    """A shape mismatch returns the placeholder spec and a single message."""

    source = DataSource(
        columns=(MONTH, SALES, PROFIT),
        table=CategoricalSource(
            categories=("A", "B"),
            values=(ValueColumn(values=(1, 2)), ValueColumn(values=(3, 4))),
        ),
    )

    view_model = transform(source, _settings("Pie"))

    assert view_model.test_result.result is False
    assert view_model.test_result.messages == (DEFAULT_MESSAGES[ErrorCode.shape_mismatch_pie],)
    assert view_model.spec == {"data": {"datasets": []}}


def test_pie_spec_has_no_axis_labels() -> None:
    """Pie specs never carry axis labels."""

    source = DataSource(
        columns=(MONTH, SALES),
        table=CategoricalSource(categories=("A", "B"), values=(ValueColumn(values=(1, 2)),)),
    )

    view_model = transform(source, _settings("Pie", x_label="ignored"))

    assert view_model.test_result.result is True
    assert "xLabel" not in view_model.spec and "yLabel" not in view_model.spec
    assert view_model.spec["options"] == {"legendPosition": 1, "innerRadius": 0.5}


def test_missing_table_is_rejected() -> None:
    """Metadata without a table section is a missing source."""

    view_model = transform(DataSource(columns=(MONTH, SALES)), _settings("Bar"))

    assert view_model.test_result.result is False
    assert view_model.test_result.messages == (DEFAULT_MESSAGES[ErrorCode.missing_source],)


def test_unknown_chart_type_is_rejected() -> None:
    """An unsupported chart type name is reported, not raised."""

    source = DataSource(
        columns=(MONTH, SALES),
        table=CategoricalSource(categories=("A",), values=(ValueColumn(values=(1,)),)),
    )

    view_model = transform(source, _settings("Donut"))

    assert view_model.test_result.result is False
    assert view_model.test_result.messages == (DEFAULT_MESSAGES[ErrorCode.unknown_chart_type],)


def test_custom_translator_is_used_for_messages() -> None:
    """Failure messages go through the supplied translator."""

    view_model = transform(DataSource(), _settings("Bar"), translate=lambda key: f"<{key}>")
    assert view_model.test_result.messages == ("<missing_source>",)


def test_line_series_nulls_drop_per_series() -> None:
    """A null in "West" is dropped from West only; labels keep every row."""

    source = DataSource(
        columns=(MONTH, REGION, SALES),
        table=MatrixSource(
            row_tree=MatrixNode(
                children=(
                    MatrixNode(value="Jan", values=(5, 1)),
                    MatrixNode(value="Feb", values=(6, None)),
                    MatrixNode(value="Mar", values=(7, 3)),
                )
            ),
            column_tree=MatrixNode(children=(MatrixNode(value="East"), MatrixNode(value="West"))),
        ),
    )

    view_model = transform(source, _settings("Line"))
    data = view_model.spec["data"]

    assert view_model.test_result.result is True
    assert data["labels"] == ["Jan", "Feb", "Mar"]
    assert data["datasets"] == [
        {"label": "East", "data": [5, 6, 7]},
        {"label": "West", "data": [1, 3]},
    ]
    assert view_model.spec["options"] == {"yTickCount": 3, "legendPosition": 1}


def test_line_with_three_measures() -> None:
    """Three measures without series yield three datasets labelled by field name."""

    source = DataSource(
        columns=(MONTH, SALES, PROFIT, UNITS),
        table=CategoricalSource(
            categories=("Jan", "Feb"),
            values=(ValueColumn(values=(1, 2)), ValueColumn(values=(3, 4)), ValueColumn(values=(5, 6))),
        ),
    )

    view_model = transform(source, _settings("Line"))

    assert [dataset["label"] for dataset in view_model.spec["data"]["datasets"]] == ["Sales", "Profit", "Units"]
    assert view_model.spec["yLabel"] == "Sales"


def test_xy_cat_measures_filters_nulls() -> None:
    """XY CatMeasures builds one filtered `{x, y}` dataset per measure."""

    source = DataSource(
        columns=(X, SALES, PROFIT),
        table=CategoricalSource(
            categories=(1, 2, 3),
            values=(ValueColumn(values=(10, None, 30)), ValueColumn(values=(None, 5, 6))),
        ),
    )

    view_model = transform(source, _settings("XY"))
    datasets = view_model.spec["data"]["datasets"]

    assert view_model.xy_mapping == XYMappingType.CatMeasures
    assert len(datasets) == 2
    assert datasets[0] == {"label": "Sales", "data": [{"x": 1, "y": 10}, {"x": 3, "y": 30}]}
    assert datasets[1] == {"label": "Profit", "data": [{"x": 2, "y": 5}, {"x": 3, "y": 6}]}
    assert all(point["y"] is not None for dataset in datasets for point in dataset["data"])
    assert "labels" not in view_model.spec["data"]


def test_xy_cat_measure_series_dataset_per_series_value() -> None:
    """XY CatMeasureSeries yields one dataset per distinct series value."""

    series_values = ("North", "South", "East")
    source = DataSource(
        columns=(X, REGION, SALES),
        table=MatrixSource(
            row_tree=MatrixNode(
                children=(MatrixNode(value=1, values=(1, 2, 3)), MatrixNode(value=2, values=(4, 5, None)))
            ),
            column_tree=MatrixNode(children=tuple(MatrixNode(value=value) for value in series_values)),
        ),
    )

    view_model = transform(source, _settings("XY"))
    datasets = view_model.spec["data"]["datasets"]

    assert view_model.xy_mapping == XYMappingType.CatMeasureSeries
    assert [dataset["label"] for dataset in datasets] == list(series_values)
    assert datasets[2]["data"] == [{"x": 1, "y": 3}]


def test_xy_cat_measure_cat_succeeds_with_empty_datasets() -> None:
    """CatMeasureCat passes validation but is not plotted."""

    source = DataSource(
        columns=(X, AGE),
        table=CategoricalSource(categories=(1, 2), values=(ValueColumn(values=(30, 40)),)),
    )

    view_model = transform(source, _settings("XY"))

    assert view_model.test_result.result is True
    assert view_model.xy_mapping == XYMappingType.CatMeasureCat
    assert view_model.spec["data"] == {"datasets": []}


def test_xy_options_use_defaults_and_overrides() -> None:
    """Options come from user values where set and from the default table otherwise."""

    source = DataSource(
        columns=(X, SALES),
        table=CategoricalSource(categories=(1,), values=(ValueColumn(values=(2,)),)),
    )
    settings = ChartSettings(
        core=CoreParameterSettings(chart_type="XY"),
        options=ChartOptionSettings(x_tick_count=0, show_line=True),
    )

    view_model = transform(source, settings, defaults=ChartOptionDefaults(dot_size=4))

    assert view_model.spec["options"] == {
        "xTickCount": 0,
        "yTickCount": 3,
        "legendPosition": 1,
        "showLine": True,
        "dotSize": 4,
    }


def test_unrepresentable_cells_are_nulls_not_errors() -> None:
    """Signalling NaN decimals and comma lists are dropped without raising."""

    source = DataSource(
        columns=(MONTH, SALES),
        table=CategoricalSource(
            categories=("Jan", "Feb", "Mar"),
            values=(ValueColumn(values=(Decimal("sNaN"), "1,2,3", Decimal("2.5"))),),
        ),
    )

    view_model = transform(source, _settings("Line"))

    assert view_model.test_result.result is True
    assert view_model.spec["data"]["datasets"] == [{"label": "Sales", "data": [2.5]}]


def test_transform_is_repeatable() -> None:
    """The same inputs produce equal view models on every call."""

    source = DataSource(
        columns=(MONTH, SALES),
        table=CategoricalSource(categories=("A", "B"), values=(ValueColumn(values=(1, None)),)),
    )
    settings = _settings("Line")

    first = transform(source, settings)
    second = transform(source, settings)

    assert first == second
    assert first.spec["data"]["datasets"][0]["data"] == [1]

"""DTO types consumed and produced by the chart transform pipeline.

Inputs describe the host's tabular data (column metadata plus either a flat
categorical block or a hierarchical matrix). Outputs are the renderer-facing
chart.xkcd spec and the ViewModel wrapping it. DTOs intentionally avoid any
Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, TypedDict

from .enums import DataRole, XYMappingType


@dataclass(frozen=True, slots=True)
class ColumnHandle:
    """Metadata for a single column supplied by the data source.

    Attributes:
        display_name: Human-friendly column name (used for axis and dataset labels).
        roles: Role names the column is bound to (see `DataRole`).
        is_numeric: Whether the column's declared type is numeric.
        is_date_time: Whether the column's declared type is a date/datetime.
        is_measure: Whether the column is an aggregated measure rather than a grouping field.
    """

    display_name: str
    roles: frozenset[str] = frozenset()
    is_numeric: bool = False
    is_date_time: bool = False
    is_measure: bool = False

    def has_role(self, role: DataRole | str) -> bool:
        """Return True when the column is bound to `role`."""

        return str(role) in self.roles

    @property
    def is_numeric_or_date(self) -> bool:
        """Return True when the column can act as a continuous XY axis."""

        return self.is_numeric or self.is_date_time


@dataclass(frozen=True, slots=True)
class SourceRow:
    """A single category row with its value vector.

    Attributes:
        category: Raw category value for the row.
        values: Values aligned by index to the source's value columns.
    """

    category: object
    values: tuple[object, ...]

    def value_at(self, index: int) -> object:
        """Return the value at `index`, or None when the vector is too short."""

        if 0 <= index < len(self.values):
            return self.values[index]
        return None


@dataclass(frozen=True, slots=True)
class ValueColumn:
    """A flat array of values for one measure (optionally one series group).

    Attributes:
        values: Values aligned by index to `CategoricalSource.categories`.
        group: Series value when the categorical values are grouped by series.
    """

    values: tuple[object, ...]
    group: object = None


@dataclass(frozen=True, slots=True)
class CategoricalSource:
    """Flat categorical tabular source (parallel arrays)."""

    categories: tuple[object, ...]
    values: tuple[ValueColumn, ...] = ()

    def rows(self) -> tuple[SourceRow, ...]:
        """Return one SourceRow per category value, in source order."""

        return tuple(
            SourceRow(
                category=category,
                values=tuple(column.values[idx] if idx < len(column.values) else None for column in self.values),
            )
            for idx, category in enumerate(self.categories)
        )

    def series_labels(self) -> tuple[object, ...]:
        """Return series values per value column, or () when values are not grouped."""

        if not self.values or any(column.group is None for column in self.values):
            return ()
        return tuple(column.group for column in self.values)


@dataclass(frozen=True, slots=True)
class MatrixNode:
    """A node of a matrix row or column tree.

    Attributes:
        value: Grouping value for the node (None for the root).
        values: Per-column values carried by row leaves.
        children: Nested child nodes.
    """

    value: object = None
    values: tuple[object, ...] = ()
    children: tuple["MatrixNode", ...] = ()

    def leaves(self) -> Iterator["MatrixNode"]:
        """Yield leaf nodes depth-first, left to right."""

        for child in self.children:
            if child.children:
                yield from child.leaves()
            else:
                yield child


@dataclass(frozen=True, slots=True)
class MatrixSource:
    """Hierarchical matrix tabular source.

    Attributes:
        row_tree: Row tree root; each leaf is one category row.
        column_tree: Optional column tree root; leaves are series values aligned to row value vectors.
    """

    row_tree: MatrixNode
    column_tree: MatrixNode | None = None

    def rows(self) -> tuple[SourceRow, ...]:
        """Return one SourceRow per row-tree leaf."""

        return tuple(SourceRow(category=leaf.value, values=tuple(leaf.values)) for leaf in self.row_tree.leaves())

    def series_labels(self) -> tuple[object, ...]:
        """Return series values from the column tree leaves, or () without a column tree."""

        if self.column_tree is None:
            return ()
        return tuple(leaf.value for leaf in self.column_tree.leaves())


TabularSource = CategoricalSource | MatrixSource


@dataclass(frozen=True, slots=True)
class DataSource:
    """Everything the data-source collaborator supplies for one update.

    Attributes:
        columns: Column metadata list.
        table: Either the flat categorical block or the hierarchical matrix (None when missing).
    """

    columns: tuple[ColumnHandle, ...] = ()
    table: TabularSource | None = None


class XYPoint(TypedDict):
    """A single XY chart point."""

    x: float | date
    y: float


class ChartDataset(TypedDict, total=False):
    """A chart.xkcd dataset payload."""

    label: str
    data: list[float | None] | list[XYPoint]


class ChartData(TypedDict, total=False):
    """The `data` block of a chart.xkcd spec (labels + datasets)."""

    labels: list[str]
    datasets: list[ChartDataset]


class ChartOptions(TypedDict, total=False):
    """The `options` block of a chart.xkcd spec."""

    xTickCount: int
    yTickCount: int
    legendPosition: int
    showLine: bool
    timeFormat: str | None
    dotSize: float
    innerRadius: float


class ChartSpec(TypedDict, total=False):
    """A complete chart.xkcd spec handed to the renderer."""

    title: str
    xLabel: str
    yLabel: str
    options: ChartOptions
    data: ChartData


def empty_spec() -> ChartSpec:
    """Return the placeholder spec used until validation passes."""

    return {"data": {"datasets": []}}


@dataclass(frozen=True, slots=True)
class TestResult:
    """Outcome of validating a data source for the selected chart type.

    Attributes:
        result: True when the data shape is valid for the chart type.
        messages: Display messages for each failed check.
    """

    __test__ = False

    result: bool
    messages: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ViewModel:
    """The sole return value of the transform pipeline.

    Attributes:
        spec: Renderer-ready spec (placeholder when validation failed).
        test_result: Validation outcome and messages.
        xy_mapping: Resolved XY mapping variant, when the chart type is XY.
    """

    spec: ChartSpec = field(default_factory=empty_spec)
    test_result: TestResult = TestResult(result=False)
    xy_mapping: XYMappingType | None = None

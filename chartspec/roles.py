"""Role resolution over the data source's column metadata."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from .dto import ColumnHandle
from .enums import DataRole


@dataclass(frozen=True, slots=True)
class RoleHandles:
    """Columns resolved for each data role.

    Args:
        category: The single category column, or None when absent or ambiguous.
        series: The single series column, or None when absent or ambiguous.
        measures: Every measure-bearing column, in metadata order.
    """

    category: ColumnHandle | None
    series: ColumnHandle | None
    measures: tuple[ColumnHandle, ...]

    @property
    def measure_count(self) -> int:
        """Number of resolved measure columns."""

        return len(self.measures)

    @property
    def first_measure(self) -> ColumnHandle | None:
        """The first measure column, if any."""

        return self.measures[0] if self.measures else None


def resolve_role(columns: Iterable[ColumnHandle], role: DataRole | str) -> ColumnHandle | None:
    """Return the single column bound to `role`.

    Zero matches and several matches both return None; callers cannot tell
    "absent" from "ambiguous" without checking cardinality themselves.

    Args:
        columns: Column metadata to inspect.
        role: Role name being searched for.

    Returns:
        The matching column when exactly one exists, otherwise None.
    """

    matches = [column for column in columns if column.has_role(role)]
    return matches[0] if len(matches) == 1 else None


def resolve_measures(columns: Iterable[ColumnHandle]) -> tuple[ColumnHandle, ...]:
    """Return every measure column that is not also the category grouping field."""

    return tuple(
        column
        for column in columns
        if column.has_role(DataRole.measure) and not column.has_role(DataRole.category)
    )


def resolve_roles(columns: Iterable[ColumnHandle]) -> RoleHandles:
    """Resolve category, series and measure handles in one pass."""

    columns = tuple(columns)
    return RoleHandles(
        category=resolve_role(columns, DataRole.category),
        series=resolve_role(columns, DataRole.series),
        measures=resolve_measures(columns),
    )

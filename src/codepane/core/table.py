"""Result tables: immutable snapshots of one query result."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

from codepane.errors import TableShapeError

_EMPTY: Mapping[str, Any] = MappingProxyType({})


class FieldType(str, Enum):
    """Column value types reported by data backends."""

    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    TIME = "time"
    OTHER = "other"

    @classmethod
    def parse(cls, value: Any) -> FieldType | None:
        """Map a backend type name to a ``FieldType``; unknown names map to OTHER."""
        if value is None or isinstance(value, FieldType):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


def _is_indexable(values: Any) -> bool:
    if isinstance(values, str | bytes | bytearray | Mapping):
        return False
    return hasattr(values, "__len__") and hasattr(values, "__getitem__")


def _freeze(mapping: Mapping[str, Any] | None) -> Mapping[str, Any]:
    if not mapping:
        return _EMPTY
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class Column:
    """A named column and its values.

    ``values`` only needs indexable access and a length, so lazy sequences
    are kept as given rather than copied.
    """

    name: str
    values: Sequence[Any]
    type: FieldType | None = None
    labels: Mapping[str, str] = field(default_factory=dict)
    config: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TableShapeError(
                f"Column name must be a string, got {type(self.name).__name__}"
            )
        if not _is_indexable(self.values):
            raise TableShapeError(
                f"Column {self.name!r} values must be a sequence, "
                f"got {type(self.values).__name__}",
                hint="Wrap scalar values in a list: Column(name, [value]).",
            )
        object.__setattr__(self, "type", FieldType.parse(self.type))
        object.__setattr__(self, "labels", _freeze(self.labels))
        object.__setattr__(self, "config", _freeze(self.config))

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, slots=True)
class ResultTable:
    """One rectangular query result with ordered columns and metadata.

    Every column holds the same number of values and column names are unique.
    Tables that break either rule are rejected with ``TableShapeError``.
    """

    columns: tuple[Column, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)
    name: str | None = None
    ref_id: str | None = None

    def __post_init__(self) -> None:
        columns = tuple(self.columns)
        for col in columns:
            if not isinstance(col, Column):
                raise TableShapeError(
                    f"Table columns must be Column instances, got {type(col).__name__}"
                )

        seen: set[str] = set()
        for col in columns:
            if col.name in seen:
                raise TableShapeError(
                    f"Duplicate column name {col.name!r} in table {self.label}",
                    hint="Column names must be unique within a table.",
                )
            seen.add(col.name)

        lengths = {len(col) for col in columns}
        if len(lengths) > 1:
            detail = ", ".join(f"{col.name}={len(col)}" for col in columns)
            raise TableShapeError(
                f"Table {self.label} is not rectangular ({detail})",
                hint="All columns in a table must have the same number of values.",
            )

        object.__setattr__(self, "columns", columns)
        object.__setattr__(self, "metadata", _freeze(self.metadata))

    @classmethod
    def from_columns(
        cls,
        columns: Mapping[str, Sequence[Any]],
        *,
        metadata: Mapping[str, Any] | None = None,
        name: str | None = None,
        ref_id: str | None = None,
    ) -> ResultTable:
        """Build a table from an ordered ``{column name: values}`` mapping.

        Example:
            ResultTable.from_columns(
                {"msg": ["print('hi')"]},
                metadata={"isCode": True, "language": "python"},
            )
        """
        return cls(
            columns=tuple(
                Column(col_name, values) for col_name, values in columns.items()
            ),
            metadata=metadata or {},
            name=name,
            ref_id=ref_id,
        )

    @property
    def label(self) -> str:
        """Short display label used in log and error messages."""
        return repr(self.name or self.ref_id or "<unnamed>")

    @property
    def row_count(self) -> int:
        return len(self.columns[0]) if self.columns else 0

    def column(self, name: str) -> Column | None:
        for col in self.columns:
            if col.name == name:
                return col
        return None

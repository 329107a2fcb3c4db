"""Build result tables from backend data-frame payloads.

Two shapes are accepted:

- field-oriented: ``{"name", "refId", "meta", "fields": [{"name", "type",
  "labels", "config", "values"}, ...]}``
- columnar wire JSON: ``{"schema": {"name", "refId", "meta", "fields":
  [...]}, "data": {"values": [[...], ...]}}``, where ``data.values[i]``
  holds the values of ``schema.fields[i]``.

Table metadata is the frame's ``meta`` with ``meta.custom`` merged on top,
so a backend may put the code flag and language hint in either place.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
from typing import Any

from codepane.core.table import Column, ResultTable
from codepane.errors import TableShapeError


def load_frames(text: str | bytes) -> list[ResultTable]:
    """Parse JSON holding one frame or a list of frames."""
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TableShapeError(
            f"Frame payload is not valid JSON: {e}",
        ) from e

    if isinstance(payload, Mapping):
        return [table_from_frame(payload)]
    if isinstance(payload, list):
        return tables_from_frames(payload)
    raise TableShapeError(
        f"Frame payload must be an object or a list, got {type(payload).__name__}"
    )


def tables_from_frames(frames: Iterable[Mapping[str, Any]]) -> list[ResultTable]:
    return [table_from_frame(frame) for frame in frames]


def table_from_frame(frame: Mapping[str, Any]) -> ResultTable:
    """Convert one data frame to a ``ResultTable``.

    Raises:
        TableShapeError: If the frame is malformed or not rectangular.
    """
    if not isinstance(frame, Mapping):
        raise TableShapeError(
            f"Frame must be an object, got {type(frame).__name__}"
        )

    if "schema" in frame:
        schema = _mapping(frame.get("schema"), "schema")
        data = _mapping(frame.get("data"), "data")
        fields = _field_list(schema)
        columns_values = data.get("values", [[] for _ in fields])
        if not isinstance(columns_values, list) or len(columns_values) != len(fields):
            raise TableShapeError(
                "Frame data.values must hold one array per schema field "
                f"({len(fields)} expected)",
            )
        header = schema
        columns = tuple(
            _column(field, values)
            for field, values in zip(fields, columns_values, strict=True)
        )
    else:
        header = frame
        columns = tuple(
            _column(field, field.get("values", [])) for field in _field_list(frame)
        )

    return ResultTable(
        columns=columns,
        metadata=_metadata(header.get("meta")),
        name=_optional_str(header.get("name")),
        ref_id=_optional_str(header.get("refId")),
    )


def _field_list(container: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    fields = container.get("fields", [])
    if not isinstance(fields, list):
        raise TableShapeError(
            f"Frame fields must be a list, got {type(fields).__name__}"
        )
    for i, field in enumerate(fields):
        if not isinstance(field, Mapping):
            raise TableShapeError(
                f"Frame field {i} must be an object, got {type(field).__name__}"
            )
    return fields


def _column(field: Mapping[str, Any], values: Any) -> Column:
    if values is None:
        values = []
    if not isinstance(values, list):
        raise TableShapeError(
            f"Values of field {field.get('name')!r} must be a list, "
            f"got {type(values).__name__}"
        )
    return Column(
        name=_name(field.get("name")),
        values=tuple(values),
        type=field.get("type"),
        labels=_mapping(field.get("labels"), "labels"),
        config=_mapping(field.get("config"), "config"),
    )


def _metadata(meta: Any) -> dict[str, Any]:
    meta = _mapping(meta, "meta")
    merged = {k: v for k, v in meta.items() if k != "custom"}
    merged.update(_mapping(meta.get("custom"), "meta.custom"))
    return merged


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise TableShapeError(
            f"Frame {what} must be an object, got {type(value).__name__}"
        )
    return value


def _name(value: Any) -> str:
    return "" if value is None else str(value)


def _optional_str(value: Any) -> str | None:
    return None if value is None else str(value)
"""Loading result tables from data-frame payloads."""

from __future__ import annotations

import json

import pytest

from codepane.core.table import FieldType
from codepane.errors import TableShapeError
from codepane.frames import load_frames, table_from_frame, tables_from_frames
from codepane.pipeline.handoff import Ready, prepare

pytestmark = pytest.mark.unit

FIELD_FRAME = {
    "name": "query",
    "refId": "A",
    "meta": {"custom": {"isCode": True, "language": "logql"}},
    "fields": [
        {"name": "line", "type": "string", "values": ['{app="api"} |= "error"']},
        {
            "name": "value",
            "type": "number",
            "labels": {"job": "api"},
            "config": {"displayNameFromDS": "errors"},
            "values": [3],
        },
    ],
}

WIRE_FRAME = {
    "schema": {
        "name": "code",
        "refId": "B",
        "meta": {"isCode": True},
        "fields": [
            {"name": "body", "type": "string"},
            {"name": "n", "type": "number"},
        ],
    },
    "data": {"values": [["SELECT 1"], [1]]},
}


def test_field_oriented_frame() -> None:
    table = table_from_frame(FIELD_FRAME)

    assert table.name == "query"
    assert table.ref_id == "A"
    assert [c.name for c in table.columns] == ["line", "value"]
    assert table.columns[0].type is FieldType.STRING
    assert dict(table.columns[1].labels) == {"job": "api"}
    assert table.columns[1].config["displayNameFromDS"] == "errors"
    assert dict(table.metadata) == {"isCode": True, "language": "logql"}


def test_wire_frame() -> None:
    table = table_from_frame(WIRE_FRAME)

    assert table.ref_id == "B"
    assert table.columns[0].values == ("SELECT 1",)
    assert table.columns[1].values == (1,)
    assert table.metadata["isCode"] is True


def test_custom_meta_overrides_top_level_meta() -> None:
    frame = {"meta": {"language": "text", "custom": {"language": "sql"}}, "fields": []}

    assert table_from_frame(frame).metadata["language"] == "sql"


def test_wire_frame_without_values_is_empty() -> None:
    frame = {"schema": {"fields": [{"name": "body"}]}}

    table = table_from_frame(frame)

    assert table.row_count == 0


def test_load_frames_accepts_object_or_list() -> None:
    assert len(load_frames(json.dumps(FIELD_FRAME))) == 1
    tables = load_frames(json.dumps([FIELD_FRAME, WIRE_FRAME]))
    assert [t.ref_id for t in tables] == ["A", "B"]


def test_loaded_frames_feed_prepare() -> None:
    state = prepare(tables_from_frames([{"fields": []}, WIRE_FRAME, FIELD_FRAME]))

    assert isinstance(state, Ready)
    assert state.code.text == "SELECT 1"
    assert state.code.source_table_index == 1


@pytest.mark.parametrize(
    ("payload", "match"),
    [
        ("{not json", "not valid JSON"),
        ("42", "object or a list"),
        (b'[{"fields": [{"name": "\xff", "values": ["x"]}]}]', "not valid JSON"),
        ('{"fields": {}}', "fields must be a list"),
        ('{"fields": [1]}', "field 0 must be an object"),
        ('{"fields": [{"name": "a", "values": "x"}]}', "must be a list"),
        ('{"meta": [], "fields": []}', "meta must be an object"),
        (
            '{"schema": {"fields": [{"name": "a"}]}, "data": {"values": []}}',
            "one array per schema field",
        ),
        (
            '{"fields": [{"name": "a", "values": [1]}, {"name": "b", "values": []}]}',
            "not rectangular",
        ),
    ],
)
def test_malformed_payloads_raise_shape_errors(
    payload: str | bytes, match: str
) -> None:
    with pytest.raises(TableShapeError, match=match):
        load_frames(payload)


def test_null_field_name_becomes_empty_string() -> None:
    table = table_from_frame({"fields": [{"name": None, "values": ["x"]}]})

    assert table.columns[0].name == ""

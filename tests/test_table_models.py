"""Tests for table definition models and column rendering."""

import pytest
from pydantic import ValidationError

from tablesmith.models.enums import DataType
from tablesmith.models.table import SQL_TYPE_NAMES, ColumnSpec, TableSpec


@pytest.mark.parametrize(
    "data_type, sql_type",
    [
        (DataType.TEXT, "TEXT"),
        (DataType.INTEGER, "INTEGER"),
        (DataType.FLOAT, "REAL"),
        (DataType.BOOLEAN, "BOOLEAN"),
        (DataType.TIMESTAMP, "TIMESTAMP"),
    ],
)
def test_minimal_column_renders_name_and_type_only(data_type, sql_type):
    column = ColumnSpec(name="value", data_type=data_type)
    assert column.to_sql() == f"value {sql_type}"


def test_type_mapping_covers_every_data_type():
    assert set(SQL_TYPE_NAMES) == set(DataType)
    assert len(set(SQL_TYPE_NAMES.values())) == len(DataType)


def test_all_clauses_render_in_fixed_order():
    # Flags given in an order different from the rendered clause order
    column = ColumnSpec.model_validate(
        {
            "default": "0",
            "not_null": True,
            "unique": True,
            "auto_increment": True,
            "primary_key": True,
            "type": "integer",
            "name": "n",
        }
    )
    assert column.to_sql() == "n INTEGER PRIMARY KEY AUTOINCREMENT UNIQUE NOT NULL DEFAULT 0"


def test_default_is_inserted_verbatim():
    column = ColumnSpec(name="status", data_type=DataType.TEXT, default="'pending'")
    assert column.to_sql() == "status TEXT DEFAULT 'pending'"


def test_present_default_always_renders_clause():
    column = ColumnSpec(name="status", data_type=DataType.TEXT, default="")
    assert column.to_sql().startswith("status TEXT DEFAULT")


def test_quote_function_applies_to_name():
    column = ColumnSpec(name="order", data_type=DataType.TEXT, not_null=True)
    assert column.to_sql(quote=lambda name: f'"{name}"') == '"order" TEXT NOT NULL'


def test_flags_default_to_false():
    column = ColumnSpec.model_validate({"name": "age", "type": "integer"})
    assert column.primary_key is False
    assert column.auto_increment is False
    assert column.unique is False
    assert column.not_null is False
    assert column.default is None


def test_column_accepts_data_type_key():
    column = ColumnSpec.model_validate({"name": "age", "data_type": "integer"})
    assert column.data_type == DataType.INTEGER


def test_column_serializes_type_key():
    column = ColumnSpec(name="age", data_type=DataType.INTEGER, not_null=True)
    dumped = column.model_dump(mode="json", by_alias=True, exclude_none=True)
    assert dumped == {
        "name": "age",
        "type": "integer",
        "primary_key": False,
        "auto_increment": False,
        "unique": False,
        "not_null": True,
    }


def test_column_rejects_unknown_type():
    with pytest.raises(ValidationError):
        ColumnSpec.model_validate({"name": "blob", "type": "blob"})


def test_column_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        ColumnSpec.model_validate({"name": "age", "type": "integer", "indexed": True})


def test_table_accepts_table_name_key_and_keeps_order():
    table = TableSpec.model_validate(
        {
            "table_name": "people",
            "columns": [
                {"name": "b", "type": "text"},
                {"name": "a", "type": "float"},
                {"name": "c", "type": "boolean"},
            ],
        }
    )
    assert table.name == "people"
    assert table.column_names() == ["b", "a", "c"]


def test_table_columns_default_to_empty():
    assert TableSpec(name="empty").columns == []


def test_table_is_immutable():
    table = TableSpec(name="people")
    with pytest.raises(ValidationError):
        table.name = "other"

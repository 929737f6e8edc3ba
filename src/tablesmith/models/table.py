"""Pydantic models for table definitions and their DDL rendering."""

from collections.abc import Callable

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from tablesmith.models.enums import DataType

SQL_TYPE_NAMES: dict[DataType, str] = {
    DataType.TEXT: "TEXT",
    DataType.INTEGER: "INTEGER",
    DataType.FLOAT: "REAL",
    DataType.BOOLEAN: "BOOLEAN",
    DataType.TIMESTAMP: "TIMESTAMP",
}

_unmapped = set(DataType) - SQL_TYPE_NAMES.keys()
if _unmapped:
    raise RuntimeError(f"DataType members without an SQL type name: {sorted(_unmapped)}")


class ColumnSpec(BaseModel):
    """One column of a table definition."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    data_type: DataType = Field(
        ...,
        validation_alias=AliasChoices("type", "data_type"),
        serialization_alias="type",
    )
    primary_key: bool = False
    auto_increment: bool = False
    unique: bool = False
    not_null: bool = False
    default: str | None = None

    @property
    def sql_type(self) -> str:
        return SQL_TYPE_NAMES[self.data_type]

    def to_sql(self, quote: Callable[[str], str] | None = None) -> str:
        """Render the column-definition fragment used inside CREATE TABLE.

        Clauses are always emitted in the order PRIMARY KEY, AUTOINCREMENT,
        UNIQUE, NOT NULL, DEFAULT. The default is inserted verbatim.

        Args:
            quote: Optional identifier-quoting function applied to the name.
        """
        parts = [quote(self.name) if quote else self.name, self.sql_type]
        if self.primary_key:
            parts.append("PRIMARY KEY")
        if self.auto_increment:
            parts.append("AUTOINCREMENT")
        if self.unique:
            parts.append("UNIQUE")
        if self.not_null:
            parts.append("NOT NULL")
        if self.default is not None:
            parts.append(f"DEFAULT {self.default}")
        return " ".join(parts)


class TableSpec(BaseModel):
    """A table name and its ordered columns."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., validation_alias=AliasChoices("name", "table_name"))
    columns: list[ColumnSpec] = Field(default_factory=list)

    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]

"""Strategies that keep the ``updated_at`` system column current.

SQLite has no "ON UPDATE" column semantics, so the default strategy installs
an AFTER UPDATE trigger per table. Engines that do support the clause get it
appended to the column definition instead and no trigger is created.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from sqlalchemy.engine import Dialect

from tablesmith.models.table import ColumnSpec

CURRENT_TIMESTAMP = "CURRENT_TIMESTAMP"

Quote = Callable[[str], str]


def trigger_name(table: str) -> str:
    """Deterministic name of the update trigger owned by ``table``."""
    return f"update_{table}_updated_at"


class TimestampMaintenance(ABC):
    """Base strategy for maintaining the update timestamp column."""

    def __init__(self, column: str = "updated_at", key: str = "id"):
        self.column = column
        self.key = key

    @property
    def cascades_on_drop(self) -> bool:
        """Whether dropping the table also removes objects this strategy created."""
        return True

    def render_column(self, column: ColumnSpec, quote: Quote) -> str:
        return column.to_sql(quote)

    @abstractmethod
    def create_statements(self, table: str, columns: Sequence[ColumnSpec], quote: Quote) -> list[str]:
        """Statements to run after CREATE TABLE, in the same unit of work."""
        ...

    def drop_statements(self, table: str, quote: Quote) -> list[str]:
        """Statements to run before DROP TABLE."""
        return []


class TriggerMaintenance(TimestampMaintenance):
    """Refresh the timestamp with an AFTER UPDATE trigger.

    The trigger watches every column except the maintained one
    (``AFTER UPDATE OF ...``), so its own UPDATE never fires it again
    regardless of the engine's recursive-trigger setting.
    """

    def __init__(self, cascades_on_drop: bool = True, **kwargs):
        super().__init__(**kwargs)
        self._cascades_on_drop = cascades_on_drop

    @property
    def cascades_on_drop(self) -> bool:
        return self._cascades_on_drop

    def create_statements(self, table: str, columns: Sequence[ColumnSpec], quote: Quote) -> list[str]:
        watched = ", ".join(quote(c.name) for c in columns if c.name != self.column)
        qtable = quote(table)
        qkey = quote(self.key)
        return [
            f"CREATE TRIGGER {quote(trigger_name(table))} "
            f"AFTER UPDATE OF {watched} ON {qtable} FOR EACH ROW "
            f"BEGIN UPDATE {qtable} SET {quote(self.column)} = {CURRENT_TIMESTAMP} "
            f"WHERE {qkey} = NEW.{qkey}; END"
        ]

    def drop_statements(self, table: str, quote: Quote) -> list[str]:
        if self.cascades_on_drop:
            return []
        return [f"DROP TRIGGER IF EXISTS {quote(trigger_name(table))}"]


class NativeOnUpdateMaintenance(TimestampMaintenance):
    """Use the engine's ``ON UPDATE CURRENT_TIMESTAMP`` column clause."""

    def render_column(self, column: ColumnSpec, quote: Quote) -> str:
        sql = column.to_sql(quote)
        if column.name == self.column:
            sql += f" ON UPDATE {CURRENT_TIMESTAMP}"
        return sql

    def create_statements(self, table: str, columns: Sequence[ColumnSpec], quote: Quote) -> list[str]:
        return []


_NATIVE_ON_UPDATE_DIALECTS = {"mysql", "mariadb"}


def select_maintenance(dialect: Dialect) -> TimestampMaintenance:
    """Pick the maintenance strategy for an engine dialect."""
    if dialect.name in _NATIVE_ON_UPDATE_DIALECTS:
        return NativeOnUpdateMaintenance()
    if dialect.name == "sqlite":
        return TriggerMaintenance(cascades_on_drop=True)
    return TriggerMaintenance(cascades_on_drop=False)

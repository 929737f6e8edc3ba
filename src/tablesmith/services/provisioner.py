"""Table provisioning: DDL synthesis and transactional execution.

The provisioner turns a ``TableSpec`` into ordered DDL (CREATE TABLE plus
whatever the timestamp maintenance strategy needs) and runs it on a pooled
connection. It holds no mutable state besides the engine's pool, so a single
instance is shared by all requests.

Failures are raised as classified ``TablesmithError`` subclasses carrying the
engine's native message; nothing is logged or retried here.
"""

from collections.abc import AsyncIterator, Sequence
from contextlib import asynccontextmanager
from typing import NamedTuple

from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine

from tablesmith.errors.exceptions import (
    CompensationError,
    DuplicateColumnError,
    ExecutionError,
    ReservedColumnError,
    ResourceAcquisitionError,
    TableExistsError,
    TableNotFoundError,
    ValidationError,
)
from tablesmith.models.enums import DataType
from tablesmith.models.table import ColumnSpec, TableSpec
from tablesmith.services.identifiers import quoter_for, validate_identifier
from tablesmith.services.maintenance import (
    CURRENT_TIMESTAMP,
    TimestampMaintenance,
    select_maintenance,
)


class SystemColumns(NamedTuple):
    """Columns injected into every table, in their canonical positions."""

    id: ColumnSpec
    created_at: ColumnSpec
    updated_at: ColumnSpec


def default_system_columns() -> SystemColumns:
    return SystemColumns(
        id=ColumnSpec(
            name="id",
            data_type=DataType.INTEGER,
            primary_key=True,
            auto_increment=True,
            unique=True,
            not_null=True,
        ),
        created_at=ColumnSpec(
            name="created_at",
            data_type=DataType.TIMESTAMP,
            not_null=True,
            default=CURRENT_TIMESTAMP,
        ),
        updated_at=ColumnSpec(
            name="updated_at",
            data_type=DataType.TIMESTAMP,
            not_null=True,
            default=CURRENT_TIMESTAMP,
        ),
    )


def _engine_message(exc: DBAPIError) -> str:
    return str(exc.orig) if exc.orig is not None else str(exc)


def classify_execution_error(exc: DBAPIError, statement: str | None = None) -> ExecutionError:
    """Map a driver error to the matching ``ExecutionError`` subclass."""
    message = _engine_message(exc)
    lowered = message.lower()
    if statement and statement.startswith("CREATE TABLE") and "already exists" in lowered:
        return TableExistsError(message, statement)
    if "no such table" in lowered:
        return TableNotFoundError(message, statement)
    return ExecutionError(message, statement)


class TableProvisioner:
    """Create and drop tables from declarative definitions.

    Args:
        engine: Async engine whose pool supplies connections.
        transactional_ddl: Run all statements of a create in one transaction.
            When False each statement commits on its own and a failed create
            is undone with a compensating DROP TABLE.
        system_columns: Override the injected ``id``/``created_at``/``updated_at``.
        maintenance: Override the strategy chosen from the engine dialect.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        *,
        transactional_ddl: bool = True,
        system_columns: SystemColumns | None = None,
        maintenance: TimestampMaintenance | None = None,
    ):
        self._engine = engine
        self._transactional_ddl = transactional_ddl
        self._quote = quoter_for(engine.dialect)
        self.system_columns = system_columns or default_system_columns()
        self.maintenance = maintenance or select_maintenance(engine.dialect)
        self._reserved = {column.name.lower() for column in self.system_columns}

    # ------------------------------------------------------------------
    # Synthesis
    # ------------------------------------------------------------------

    def full_columns(self, spec: TableSpec) -> list[ColumnSpec]:
        """Injected and user columns in canonical order."""
        system = self.system_columns
        return [system.id, *spec.columns, system.created_at, system.updated_at]

    def validate(self, spec: TableSpec) -> None:
        validate_identifier(spec.name, "table")
        seen: set[str] = set()
        for column in spec.columns:
            validate_identifier(column.name, "column")
            folded = column.name.lower()
            if folded in self._reserved:
                raise ReservedColumnError(column.name, [c.name for c in self.system_columns])
            if folded in seen:
                raise DuplicateColumnError(column.name)
            seen.add(folded)
            if column.default is not None and not column.default.strip():
                raise ValidationError(
                    f"Column '{column.name}' has an empty default expression",
                    details={"column": column.name},
                )

    def statements_for(self, spec: TableSpec) -> list[str]:
        """Validate ``spec`` and return its DDL, CREATE TABLE first."""
        self.validate(spec)
        columns = self.full_columns(spec)
        column_list = ", ".join(
            self.maintenance.render_column(column, self._quote) for column in columns
        )
        create = f"CREATE TABLE {self._quote(spec.name)} ({column_list})"
        return [create, *self.maintenance.create_statements(spec.name, columns, self._quote)]

    def drop_statements_for(self, name: str) -> list[str]:
        validate_identifier(name, "table")
        return [
            *self.maintenance.drop_statements(name, self._quote),
            f"DROP TABLE {self._quote(name)}",
        ]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_table(self, spec: TableSpec) -> TableSpec:
        """Create the table described by ``spec``.

        Returns:
            A new ``TableSpec`` listing ``id``, the requested columns in
            order, then ``created_at`` and ``updated_at``.

        Raises:
            ValidationError: Illegal, reserved or duplicate names, or a blank default.
            ResourceAcquisitionError: No connection could be taken from the pool.
            ExecutionError: The engine rejected a statement; nothing was kept.
            CompensationError: Non-transactional mode only, when the cleanup
                DROP TABLE failed and the table was left behind.
        """
        statements = self.statements_for(spec)
        if self._transactional_ddl:
            await self._execute_atomically(statements)
        else:
            await self._execute_with_compensation(spec.name, statements)
        return TableSpec(name=spec.name, columns=self.full_columns(spec))

    async def drop_table(self, name: str) -> None:
        """Drop ``name`` and, where the engine does not cascade, its trigger, in one transaction."""
        await self._execute_atomically(self.drop_statements_for(name))

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[AsyncConnection]:
        try:
            conn = await self._engine.connect()
        except SQLAlchemyError as exc:
            raise ResourceAcquisitionError(str(exc)) from exc
        try:
            yield conn
        finally:
            await conn.close()

    async def _execute(self, conn: AsyncConnection, statement: str) -> None:
        try:
            await conn.exec_driver_sql(statement)
        except DBAPIError as exc:
            raise classify_execution_error(exc, statement) from exc

    async def _execute_atomically(self, statements: Sequence[str]) -> None:
        async with self._connection() as conn:
            try:
                async with conn.begin():
                    for statement in statements:
                        await self._execute(conn, statement)
            except DBAPIError as exc:
                # BEGIN or COMMIT itself failed
                raise classify_execution_error(exc) from exc

    async def _execute_committed(self, conn: AsyncConnection, statement: str) -> None:
        try:
            async with conn.begin():
                await self._execute(conn, statement)
        except DBAPIError as exc:
            raise classify_execution_error(exc, statement) from exc

    async def _execute_with_compensation(self, table: str, statements: Sequence[str]) -> None:
        create, *auxiliary = statements
        async with self._connection() as conn:
            await self._execute_committed(conn, create)
            try:
                for statement in auxiliary:
                    await self._execute_committed(conn, statement)
            except ExecutionError as exc:
                try:
                    await self._execute_committed(conn, f"DROP TABLE {self._quote(table)}")
                except ExecutionError as cleanup_exc:
                    raise CompensationError(table, exc, cleanup_exc.engine_message) from exc
                raise

"""Custom exception classes for Tablesmith."""

from tablesmith.models.enums import ErrorCode


class TablesmithError(Exception):
    """Base exception for Tablesmith."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(TablesmithError):
    """Table definition rejected before any SQL was executed."""

    def __init__(self, message: str, details=None, code: str = ErrorCode.VALIDATION_ERROR):
        super().__init__(code, message, details, status_code=400)


class InvalidIdentifierError(ValidationError):
    def __init__(self, kind: str, identifier: str, reason: str):
        super().__init__(
            f"Invalid {kind} name '{identifier}': {reason}",
            details={"kind": kind, "identifier": identifier},
            code=ErrorCode.INVALID_IDENTIFIER,
        )


class ReservedColumnError(ValidationError):
    """A user column collides with an injected system column."""

    def __init__(self, column: str, reserved: list[str]):
        super().__init__(
            f"Column name '{column}' is reserved (system columns: {', '.join(reserved)})",
            details={"column": column, "reserved": reserved},
            code=ErrorCode.RESERVED_COLUMN,
        )


class DuplicateColumnError(ValidationError):
    def __init__(self, column: str):
        super().__init__(
            f"Column '{column}' is defined more than once",
            details={"column": column},
            code=ErrorCode.DUPLICATE_COLUMN,
        )


class ExecutionError(TablesmithError):
    """The database engine rejected a statement."""

    def __init__(self, engine_message: str, statement: str | None = None, code: str = ErrorCode.EXECUTION_ERROR):
        self.engine_message = engine_message
        self.statement = statement
        details = {"engine_message": engine_message}
        if statement:
            details["statement"] = statement
        super().__init__(code, f"Execution error: {engine_message}", details, status_code=500)


class TableExistsError(ExecutionError):
    def __init__(self, engine_message: str, statement: str | None = None):
        super().__init__(engine_message, statement, code=ErrorCode.TABLE_EXISTS)


class TableNotFoundError(ExecutionError):
    def __init__(self, engine_message: str, statement: str | None = None):
        super().__init__(engine_message, statement, code=ErrorCode.TABLE_NOT_FOUND)


class ResourceAcquisitionError(TablesmithError):
    """The connection pool could not supply a connection."""

    def __init__(self, pool_message: str):
        super().__init__(
            ErrorCode.POOL_ERROR,
            f"Pool error: {pool_message}",
            {"pool_message": pool_message},
            status_code=500,
        )


class CompensationError(TablesmithError):
    """Cleanup after a partially applied create failed; the table was left behind."""

    def __init__(self, table: str, original: TablesmithError, cleanup_message: str):
        self.original = original
        super().__init__(
            ErrorCode.COMPENSATION_FAILED,
            f"Compensation failed for table '{table}': {cleanup_message} "
            f"(after {original.message})",
            {
                "table": table,
                "original_code": original.code,
                "original_message": original.message,
                "cleanup_message": cleanup_message,
            },
            status_code=500,
        )

"""String enums used by table definitions."""

from enum import StrEnum


class DataType(StrEnum):
    """Column data types accepted in a table definition."""

    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"


class ErrorCode(StrEnum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_IDENTIFIER = "INVALID_IDENTIFIER"
    RESERVED_COLUMN = "RESERVED_COLUMN"
    DUPLICATE_COLUMN = "DUPLICATE_COLUMN"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    TABLE_EXISTS = "TABLE_EXISTS"
    TABLE_NOT_FOUND = "TABLE_NOT_FOUND"
    POOL_ERROR = "POOL_ERROR"
    COMPENSATION_FAILED = "COMPENSATION_FAILED"

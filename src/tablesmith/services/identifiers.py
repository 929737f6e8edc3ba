"""Identifier validation and quoting for table, column and trigger names."""

import re
from collections.abc import Callable

from sqlalchemy.engine import Dialect

from tablesmith.errors.exceptions import InvalidIdentifierError

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
MAX_IDENTIFIER_LENGTH = 64
ENGINE_RESERVED_PREFIX = "sqlite_"


def validate_identifier(name: str, kind: str = "table") -> str:
    """Return ``name`` unchanged if it is a legal identifier, raise otherwise.

    Args:
        name: The identifier to check.
        kind: What the identifier names ("table", "column"), used in the error.

    Raises:
        InvalidIdentifierError: If the name is empty, too long, contains
            characters outside ``[A-Za-z0-9_]``, starts with a digit, or uses
            the engine-reserved ``sqlite_`` prefix.
    """
    if not name:
        raise InvalidIdentifierError(kind, name, "must not be empty")
    if len(name) > MAX_IDENTIFIER_LENGTH:
        raise InvalidIdentifierError(
            kind, name, f"must be at most {MAX_IDENTIFIER_LENGTH} characters"
        )
    if not IDENTIFIER_PATTERN.match(name):
        raise InvalidIdentifierError(
            kind, name,
            "may only contain letters, digits and underscores, and must not start with a digit",
        )
    if name.lower().startswith(ENGINE_RESERVED_PREFIX):
        raise InvalidIdentifierError(
            kind, name, f"names starting with '{ENGINE_RESERVED_PREFIX}' are reserved by the engine"
        )
    return name


def quoter_for(dialect: Dialect) -> Callable[[str], str]:
    """Return the dialect's identifier quoting function.

    Lowercase non-reserved names pass through bare; reserved words and
    mixed-case names come back double-quoted.
    """
    return dialect.identifier_preparer.quote

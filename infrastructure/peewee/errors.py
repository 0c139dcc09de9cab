"""
Clasificación de errores de base de datos.

Los drivers envuelven el mensaje útil varias capas por debajo, así que solo
se mira el texto de la causa más profunda, nunca el tipo de la excepción
de nivel superior.
"""

import logging

from core.domain.errors import (
    DatabaseInitializationError,
    DatabaseOperationError,
    FaultKind,
)

logger = logging.getLogger(__name__)

# El orden importa: bloqueo antes que conexión.
_LOCKED_PATTERNS = ("database is locked", "sqlite_busy", "database locked")
_CONNECTION_PATTERNS = (
    "connection refused",
    "could not open",
    "unable to open database file",
    "no suitable driver",
    "connection is closed",
    "connection failed",
)


def root_cause(exc: BaseException) -> BaseException:
    """Recorre la cadena __cause__ / __context__ hasta la excepción más interna."""
    seen: set[int] = set()
    current = exc
    while id(current) not in seen:
        seen.add(id(current))
        nxt = current.__cause__
        if nxt is None and not current.__suppress_context__:
            nxt = current.__context__
        if nxt is None:
            break
        current = nxt
    return current


def classify(exc: BaseException, default_kind: FaultKind) -> FaultKind:
    message = str(root_cause(exc)).lower()
    if any(pattern in message for pattern in _LOCKED_PATTERNS):
        return FaultKind.LOCKED
    if any(pattern in message for pattern in _CONNECTION_PATTERNS):
        return FaultKind.CONNECTION_FAILED
    return default_kind


def wrap_operation(
    default_kind: FaultKind, operation: str, exc: BaseException
) -> DatabaseOperationError:
    kind = classify(exc, default_kind)
    logger.error(f"❌ {operation} falló [{kind.value}]: {root_cause(exc)}")
    return DatabaseOperationError(kind, operation, cause=exc)


def schema_invalid(
    database_path: str, message: str, cause: BaseException | None = None
) -> DatabaseInitializationError:
    return DatabaseInitializationError(
        FaultKind.SCHEMA_INVALID,
        database_path,
        message,
        operation="schemaInit",
        cause=cause,
    )


def migration_failed(
    database_path: str, message: str, cause: BaseException | None = None
) -> DatabaseInitializationError:
    return DatabaseInitializationError(
        FaultKind.MIGRATION_FAILED,
        database_path,
        message,
        operation="schemaMigration",
        cause=cause,
    )

"""
Taxonomía de fallos de la capa de datos.

Los errores de entrada se rechazan antes de tocar la base de datos
(InvalidTaskError). Todo lo demás viene del driver y se clasifica en un
DatabaseFault que conserva la operación y la causa original.
"""

from enum import Enum


class FaultKind(str, Enum):
    CONNECTION_FAILED = "DB_CONNECTION_FAILED"
    LOCKED = "DB_LOCKED"
    SCHEMA_INVALID = "DB_SCHEMA_INVALID"
    MIGRATION_FAILED = "DB_MIGRATION_FAILED"
    FILE_NOT_FOUND = "DB_FILE_NOT_FOUND"
    PERMISSION_DENIED = "DB_PERMISSION_DENIED"
    TASK_CREATE_FAILED = "TASK_CREATE_FAILED"
    TASK_QUERY_FAILED = "TASK_QUERY_FAILED"
    TASK_UPDATE_FAILED = "TASK_UPDATE_FAILED"
    TASK_DELETE_FAILED = "TASK_DELETE_FAILED"


class InvalidTaskError(ValueError):
    """Entrada inválida (p. ej. `text` vacío)."""


class DatabaseFault(Exception):
    def __init__(
        self,
        kind: FaultKind,
        operation: str,
        cause: BaseException | None = None,
        message: str | None = None,
    ) -> None:
        if message is None:
            message = str(cause) if cause is not None else kind.value
        super().__init__(message)
        self.kind = kind
        self.operation = operation
        self.cause = cause

    @property
    def error_code(self) -> str:
        return self.kind.value


class DatabaseOperationError(DatabaseFault):
    """Fallo de una operación CRUD ya clasificado."""


class DatabaseInitializationError(DatabaseFault):
    """Fallo al abrir, crear o migrar el esquema."""

    def __init__(
        self,
        kind: FaultKind,
        database_path: str,
        message: str,
        operation: str = "schemaInit",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(kind, operation, cause=cause, message=message)
        self.database_path = database_path

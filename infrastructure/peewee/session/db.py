import logging
import os
from dataclasses import dataclass
from pathlib import Path

from peewee import Database, SqliteDatabase
from playhouse.db_url import connect

from core.domain.errors import DatabaseInitializationError, FaultKind

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///database.sqlite3"
_CANDIDATE_FILES = (
    Path("database.sqlite3"),
    Path("../database.sqlite3"),
    Path("../../database.sqlite3"),
    Path("../../../database.sqlite3"),
)


@dataclass(frozen=True, slots=True)
class DatabaseHandle:
    """
    Conexión ya resuelta que se entrega al repositorio.

    `embedded` indica si el backend es SQLite (fichero local); se calcula una
    sola vez aquí y decide si los fallos de esquema son fatales o se degradan.
    """

    database: Database
    embedded: bool
    location: str


def _check_sqlite_file(db_path: Path) -> None:
    if db_path.exists():
        if not (os.access(db_path, os.R_OK) and os.access(db_path, os.W_OK)):
            raise DatabaseInitializationError(
                FaultKind.PERMISSION_DENIED,
                str(db_path),
                "SQLite database file is not readable/writable",
            )
        return

    parent = db_path.parent
    if not parent.exists():
        raise DatabaseInitializationError(
            FaultKind.FILE_NOT_FOUND,
            str(db_path),
            "Parent directory does not exist for database file",
        )
    if not os.access(parent, os.W_OK):
        raise DatabaseInitializationError(
            FaultKind.PERMISSION_DENIED,
            str(db_path),
            "Cannot create database file (parent directory not writable)",
        )


def _sqlite_handle(db_path: Path) -> DatabaseHandle:
    _check_sqlite_file(db_path)
    return DatabaseHandle(
        database=SqliteDatabase(str(db_path)),
        embedded=True,
        location=str(db_path),
    )


def _handle_for(database: Database) -> DatabaseHandle:
    return DatabaseHandle(
        database=database,
        embedded=isinstance(database, SqliteDatabase),
        location=str(database.database),
    )


def open_database(url: str | None = None, path: str | None = None) -> DatabaseHandle:
    """
    Abre la base de datos según la configuración.

    Prioridad: DATABASE_PATH, DATABASE_URL, un `database.sqlite3` existente
    en el directorio actual o hasta tres niveles por encima, y por último un
    fichero SQLite local por defecto.
    """
    path = path if path is not None else os.getenv("DATABASE_PATH")
    url = url if url is not None else os.getenv("DATABASE_URL")

    if path and path.strip():
        db_path = Path(path).expanduser().resolve()
        logger.info(f"Usando SQLite en DATABASE_PATH={db_path}")
        return _sqlite_handle(db_path)

    if url:
        logger.info(f"Usando DATABASE_URL ({url.split(':', 1)[0]})")
        return _handle_for(connect(url))

    for candidate in _CANDIDATE_FILES:
        db_path = candidate.resolve()
        if db_path.exists():
            logger.info(f"Usando base de datos encontrada en {db_path}")
            return _sqlite_handle(db_path)

    logger.info(f"Sin configuración de BDD, usando {DEFAULT_DATABASE_URL}")
    return _handle_for(connect(DEFAULT_DATABASE_URL))


_handle: DatabaseHandle | None = None


def get_database_handle() -> DatabaseHandle:
    """Obtiene el handle de la base de datos (Singleton)."""
    global _handle
    if _handle is None:
        _handle = open_database()
    return _handle

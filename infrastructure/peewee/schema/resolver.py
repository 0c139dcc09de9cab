"""
Resolución adaptativa del esquema de la tabla `tasks`.

La tabla puede haber sido creada por otro backend, con columnas de auditoría
en camelCase, snake_case o sin ellas. El resolver:

1. Crea la tabla si no existe.
2. Inspecciona las columnas reales.
3. Detecta `createdAt`/`created_at` y `updatedAt`/`updated_at`.
4. Añade (migración aditiva) las que falten y rellena las filas existentes
   con la fecha actual.

Con SQLite (backend embebido) cualquier fallo es fatal. Con otros backends
se degrada: se omite la columna o se asume camelCase sin verificar.
"""

import logging
import threading

from peewee import Database, PeeweeException, Table, TextField
from playhouse.migrate import SchemaMigrator, migrate

from core.domain.models.schema import SchemaDescriptor
from infrastructure.peewee.errors import migration_failed, schema_invalid
from infrastructure.peewee.model.models import TABLE_NAME, TaskModel
from infrastructure.peewee.query.task_queries import CURRENT_TIMESTAMP

logger = logging.getLogger(__name__)

_AUDIT_VARIANTS = {
    "created": ("createdAt", "created_at"),
    "updated": ("updatedAt", "updated_at"),
}


class SchemaResolver:
    """
    Resuelve el SchemaDescriptor una sola vez por instancia (thread-safe).

    Args:
        database: Base de datos peewee ya configurada.
        embedded: True si es SQLite (modo estricto).
        location: Ruta o nombre de la BDD (solo para los errores).
    """

    def __init__(self, database: Database, embedded: bool, location: str = "unknown") -> None:
        self._db = database
        self._embedded = embedded
        self._location = location
        self._descriptor: SchemaDescriptor | None = None
        self._lock = threading.Lock()

    def resolve(self) -> SchemaDescriptor:
        descriptor = self._descriptor
        if descriptor is not None:
            return descriptor

        with self._lock:
            if self._descriptor is None:
                self._descriptor = self._load()
            return self._descriptor

    def _load(self) -> SchemaDescriptor:
        self._ensure_table()

        try:
            columns = [column.name for column in self._db.get_columns(TABLE_NAME)]
        except Exception as e:
            if self._embedded:
                logger.error(f"❌ No se pudo leer el esquema de {self._location}: {e}")
                raise schema_invalid(
                    self._location, "Failed to read SQLite schema information", cause=e
                ) from e
            logger.warning(
                f"⚠️ Introspección no soportada ({e}); se asume createdAt/updatedAt"
            )
            return SchemaDescriptor(created_column="createdAt", updated_column="updatedAt")

        found = {name.lower(): name for name in columns}
        resolved: dict[str, str | None] = {}
        for role, variants in _AUDIT_VARIANTS.items():
            column = next(
                (found[v.lower()] for v in variants if v.lower() in found), None
            )
            if column is None:
                column = self._add_column(variants[0])
            resolved[role] = column

        descriptor = SchemaDescriptor(
            created_column=resolved["created"],
            updated_column=resolved["updated"],
        )
        logger.info(
            f"✓ Esquema resuelto: created={descriptor.created_column}, "
            f"updated={descriptor.updated_column}"
        )
        return descriptor

    def _ensure_table(self) -> None:
        try:
            with self._db.bind_ctx([TaskModel]):
                self._db.create_tables([TaskModel], safe=True)
        except PeeweeException as e:
            if self._embedded:
                logger.error(f"❌ No se pudo crear la tabla {TABLE_NAME}: {e}")
                raise schema_invalid(
                    self._location, "Failed to initialize SQLite schema", cause=e
                ) from e
            raise

    def _add_column(self, name: str) -> str | None:
        # SQLite rechaza DEFAULT CURRENT_TIMESTAMP en ADD COLUMN si la tabla
        # tiene filas: se añade nullable y se rellena después.
        table = Table(TABLE_NAME, (name,)).bind(self._db)
        try:
            migrator = SchemaMigrator.from_database(self._db)
            with self._db.atomic():
                migrate(migrator.add_column(TABLE_NAME, name, TextField(null=True)))
                table.update({getattr(table, name): CURRENT_TIMESTAMP}).execute()
        except (PeeweeException, ValueError) as e:
            if self._embedded:
                logger.error(f"❌ Migración fallida al añadir {name}: {e}")
                raise migration_failed(
                    self._location, f"Failed to add {name} column", cause=e
                ) from e
            logger.warning(f"⚠️ No se pudo añadir {name} ({e}); se omite la columna")
            return None

        logger.info(f"✓ Columna {name} añadida a {TABLE_NAME}")
        return name

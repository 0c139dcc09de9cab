"""
Consultas sobre la tabla `tasks` construidas con el query builder de peewee.

Nunca se referencia una columna de auditoría ausente: las columnas de
creación/actualización solo aparecen si el SchemaDescriptor las conoce, y
las lecturas proyectan únicamente `id, text, day, reminder`.
"""

import math

from peewee import SQL, Database, Table, fn

from core.domain.models.schema import SchemaDescriptor
from core.domain.models.task import Task
from infrastructure.peewee.model.models import TABLE_NAME

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_BASE_COLUMNS = ("id", "text", "day", "reminder")
CURRENT_TIMESTAMP = SQL("CURRENT_TIMESTAMP")


def normalize_pagination(page: int | None, limit: int | None) -> tuple[int, int]:
    page = page if page is not None and page >= 1 else DEFAULT_PAGE
    limit = limit if limit is not None and limit >= 1 else DEFAULT_LIMIT
    return page, limit


def normalize_search(search: str | None) -> str | None:
    if search is None:
        return None
    search = search.strip()
    return search or None


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit)


def row_to_task(row: tuple) -> Task:
    task_id, text, day, reminder = row
    return Task(id=task_id, text=text, day=day, reminder=bool(reminder))


class TaskQueries:
    """
    Construye (sin ejecutar) las consultas de tareas para un esquema dado.

    Args:
        schema:   Columnas de auditoría resueltas.
        database: Base de datos a la que se enlaza la tabla.
    """

    def __init__(self, schema: SchemaDescriptor, database: Database | None = None) -> None:
        self._schema = schema
        audit = tuple(
            c for c in (schema.created_column, schema.updated_column) if c is not None
        )
        self.table = Table(TABLE_NAME, _BASE_COLUMNS + audit).bind(database)

    def _column(self, name: str):
        return getattr(self.table, name)

    def _projection(self):
        return self.table.select(*(self._column(c) for c in _BASE_COLUMNS)).tuples()

    def _filtered(self, query, search: str | None):
        search = normalize_search(search)
        if search is None:
            return query
        return query.where(self.table.text.contains(search))

    def insert(self, task: Task):
        values = {
            self.table.id: task.id,
            self.table.text: task.text,
            self.table.day: task.day,
            self.table.reminder: 1 if task.reminder else 0,
        }
        for column in (self._schema.created_column, self._schema.updated_column):
            if column is not None:
                values[self._column(column)] = CURRENT_TIMESTAMP
        return self.table.insert(values)

    def count_query(self, search: str | None = None):
        return self._filtered(self.table.select(fn.COUNT(self.table.id)), search)

    def select_page(
        self, page: int | None = None, limit: int | None = None, search: str | None = None
    ):
        page, limit = normalize_pagination(page, limit)
        order = self._column(self._schema.order_column)
        return (
            self._filtered(self._projection(), search)
            .order_by(order.desc())
            .paginate(page, limit)
        )

    def select_one(self, task_id: str):
        return self._projection().where(self.table.id == task_id)

    def update(self, task_id: str, task: Task):
        values = {
            self.table.text: task.text,
            self.table.day: task.day,
            self.table.reminder: 1 if task.reminder else 0,
        }
        if self._schema.updated_column is not None:
            values[self._column(self._schema.updated_column)] = CURRENT_TIMESTAMP
        return self.table.update(values).where(self.table.id == task_id)

    def delete(self, task_id: str):
        return self.table.delete().where(self.table.id == task_id)

    def delete_by_text(self, text: str):
        return self.table.delete().where(self.table.text == text)

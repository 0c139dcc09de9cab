import logging
from dataclasses import replace
from uuid import uuid4

from peewee import PeeweeException

from core.domain.errors import FaultKind, InvalidTaskError
from core.domain.models.task import Task, TaskPage
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.errors import wrap_operation
from infrastructure.peewee.query.task_queries import (
    TaskQueries,
    normalize_pagination,
    row_to_task,
    total_pages,
)
from infrastructure.peewee.schema.resolver import SchemaResolver
from infrastructure.peewee.session.db import DatabaseHandle, get_database_handle

logger = logging.getLogger(__name__)


class PeeweeTaskRepository(TaskRepository):
    """
    Repositorio de tareas sobre el query builder de peewee.

    El esquema se resuelve de forma perezosa en la primera operación y se
    reutiliza durante toda la vida de la instancia. Todo error del driver se
    clasifica (ver `infrastructure.peewee.errors`) antes de propagarse; no se
    reintenta nada aquí.
    """

    def __init__(self, handle: DatabaseHandle | None = None) -> None:
        self._handle = handle or get_database_handle()
        self._db = self._handle.database
        self._resolver = SchemaResolver(
            self._db,
            embedded=self._handle.embedded,
            location=self._handle.location,
        )

    @property
    def resolver(self) -> SchemaResolver:
        return self._resolver

    def _queries(self) -> TaskQueries:
        return TaskQueries(self._resolver.resolve(), self._db)

    def create(self, task: Task) -> Task:
        if task is None:
            raise InvalidTaskError("Task must not be null")
        if task.text is None or not task.text.strip():
            raise InvalidTaskError("Task text must not be empty")

        if not task.id:
            task = replace(task, id=str(uuid4()))

        query = self._queries().insert(task)
        try:
            query.execute()
        except PeeweeException as e:
            raise wrap_operation(FaultKind.TASK_CREATE_FAILED, "create", e) from e

        logger.debug(f"✓ Tarea {task.id} creada")
        return task

    def list(
        self,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
    ) -> TaskPage:
        page, limit = normalize_pagination(page, limit)
        queries = self._queries()

        try:
            total = queries.count_query(search).scalar()
            rows = list(queries.select_page(page, limit, search))
        except PeeweeException as e:
            raise wrap_operation(FaultKind.TASK_QUERY_FAILED, "findAll", e) from e

        return TaskPage(
            items=[row_to_task(row) for row in rows],
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages(total, limit),
        )

    def get(self, task_id: str) -> Task | None:
        query = self._queries().select_one(task_id)
        try:
            row = query.first()
        except PeeweeException as e:
            raise wrap_operation(FaultKind.TASK_QUERY_FAILED, "findOne", e) from e
        return row_to_task(row) if row is not None else None

    def update(self, task_id: str, task: Task) -> Task | None:
        query = self._queries().update(task_id, task)
        try:
            updated = query.execute()
        except PeeweeException as e:
            raise wrap_operation(FaultKind.TASK_UPDATE_FAILED, "update", e) from e

        if updated <= 0:
            return None
        return self.get(task_id)

    def remove(self, task_id: str) -> bool:
        query = self._queries().delete(task_id)
        try:
            affected = query.execute()
        except PeeweeException as e:
            raise wrap_operation(FaultKind.TASK_DELETE_FAILED, "remove", e) from e
        return affected > 0

    def remove_by_text(self, text: str) -> int:
        query = self._queries().delete_by_text(text)
        try:
            affected = query.execute()
        except PeeweeException as e:
            raise wrap_operation(FaultKind.TASK_DELETE_FAILED, "removeByName", e) from e
        return max(affected, 0)

from core.application.create_task import CreateTaskUseCase
from core.application.delete_task import DeleteTasksByTextUseCase, DeleteTaskUseCase
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksUseCase
from core.application.update_task import UpdateTaskUseCase
from core.domain.ports.task_repository import TaskRepository
from infrastructure.peewee.repository.task_repository import PeeweeTaskRepository

_repository: TaskRepository | None = None


def get_task_repository() -> TaskRepository:
    # Una sola instancia por proceso: el esquema se resuelve una vez.
    global _repository
    if _repository is None:
        _repository = PeeweeTaskRepository()
    return _repository


def get_create_task_use_case() -> CreateTaskUseCase:
    return CreateTaskUseCase(repository=get_task_repository())


def get_update_task_use_case() -> UpdateTaskUseCase:
    return UpdateTaskUseCase(repository=get_task_repository())


def get_delete_task_use_case() -> DeleteTaskUseCase:
    return DeleteTaskUseCase(repository=get_task_repository())


def get_delete_tasks_by_text_use_case() -> DeleteTasksByTextUseCase:
    return DeleteTasksByTextUseCase(repository=get_task_repository())


def get_list_tasks_use_case() -> ListTasksUseCase:
    return ListTasksUseCase(repository=get_task_repository())


def get_get_task_use_case() -> GetTaskUseCase:
    return GetTaskUseCase(repository=get_task_repository())

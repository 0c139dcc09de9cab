from dataclasses import dataclass

from core.domain.models.task import TaskPage
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class ListTasksCommand:
    page: int | None = None
    limit: int | None = None
    search: str | None = None


class ListTasksUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: ListTasksCommand | None = None) -> TaskPage:
        cmd = cmd or ListTasksCommand()
        return self._repository.list(page=cmd.page, limit=cmd.limit, search=cmd.search)

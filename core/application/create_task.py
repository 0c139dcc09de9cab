from dataclasses import dataclass

from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class CreateTaskCommand:
    text: str
    day: str | None = None
    reminder: bool = False
    id: str | None = None


class CreateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: CreateTaskCommand) -> Task:
        task = Task(
            id=cmd.id,
            text=cmd.text,
            day=cmd.day,
            reminder=cmd.reminder,
        )
        # El repositorio valida `text` y genera el id si falta.
        return self._repository.create(task)

from dataclasses import dataclass

from core.domain.errors import InvalidTaskError
from core.domain.models.task import Task
from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class UpdateTaskCommand:
    text: str
    day: str | None = None
    reminder: bool = False


class UpdateTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, task_id: str, cmd: UpdateTaskCommand) -> Task | None:
        """
        Actualiza una tarea existente.

        Devuelve None si no existe ninguna tarea con ese id.
        """
        if cmd.text is None or not cmd.text.strip():
            raise InvalidTaskError("Task text must not be empty")

        task = Task(id=task_id, text=cmd.text, day=cmd.day, reminder=cmd.reminder)
        return self._repository.update(task_id, task)

from dataclasses import dataclass

from core.domain.ports.task_repository import TaskRepository


@dataclass(slots=True)
class DeleteTaskCommand:
    id: str


@dataclass(slots=True)
class DeleteTasksByTextCommand:
    text: str


class DeleteTaskUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: DeleteTaskCommand) -> bool:
        return self._repository.remove(cmd.id)


class DeleteTasksByTextUseCase:
    def __init__(self, repository: TaskRepository) -> None:
        self._repository = repository

    def execute(self, cmd: DeleteTasksByTextCommand) -> int:
        return self._repository.remove_by_text(cmd.text)

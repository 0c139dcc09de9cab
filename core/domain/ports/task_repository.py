from abc import ABC, abstractmethod

from core.domain.models.task import Task, TaskPage


class TaskRepository(ABC):
    @abstractmethod
    def create(self, task: Task) -> Task:
        raise NotImplementedError

    @abstractmethod
    def list(
        self,
        page: int | None = None,
        limit: int | None = None,
        search: str | None = None,
    ) -> TaskPage:
        raise NotImplementedError

    @abstractmethod
    def get(self, task_id: str) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def update(self, task_id: str, task: Task) -> Task | None:
        raise NotImplementedError

    @abstractmethod
    def remove(self, task_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def remove_by_text(self, text: str) -> int:
        raise NotImplementedError

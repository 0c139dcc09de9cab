from dataclasses import dataclass, field


@dataclass(slots=True)
class Task:
    id: str | None
    text: str
    day: str | None = None
    reminder: bool = False


@dataclass(slots=True)
class TaskPage:
    items: list[Task] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = 0

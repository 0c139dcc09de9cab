from fastapi import APIRouter, Depends, HTTPException, Query, status

from backend_fastapi.api.deps import (
    create_task_use_case,
    delete_task_use_case,
    delete_tasks_by_text_use_case,
    get_task_use_case,
    list_tasks_use_case,
    update_task_use_case,
)
from core.application.create_task import CreateTaskCommand, CreateTaskUseCase
from core.application.delete_task import (
    DeleteTaskCommand,
    DeleteTasksByTextCommand,
    DeleteTasksByTextUseCase,
    DeleteTaskUseCase,
)
from core.application.get_task import GetTaskUseCase
from core.application.list_tasks import ListTasksCommand, ListTasksUseCase
from core.application.update_task import UpdateTaskCommand, UpdateTaskUseCase
from core.domain.models.task import Task, TaskPage

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get(
    "",
    response_model=TaskPage,
    summary="Listar tareas paginadas",
)
def list_tasks(
    page: int | None = None,
    limit: int | None = None,
    search: str | None = None,
    use_case: ListTasksUseCase = Depends(list_tasks_use_case),
) -> TaskPage:
    """
    Obtiene una página de tareas.

    - **page**: Página (desde 1, por defecto 1).
    - **limit**: Tamaño de página (por defecto 10).
    - **search**: Filtro opcional por texto (sin distinguir mayúsculas).
    """
    return use_case.execute(ListTasksCommand(page=page, limit=limit, search=search))


@router.get(
    "/{task_id}",
    response_model=Task,
    summary="Obtener una tarea",
)
def get_task(
    task_id: str,
    use_case: GetTaskUseCase = Depends(get_task_use_case),
) -> Task:
    task = use_case.execute(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@router.post(
    "/create",
    response_model=Task,
    summary="Crear una nueva tarea",
)
def create_task(
    cmd: CreateTaskCommand,
    use_case: CreateTaskUseCase = Depends(create_task_use_case),
) -> Task:
    """
    Crea una nueva tarea. Si no se envía `id` se genera uno.
    """
    return use_case.execute(cmd)


@router.put(
    "/{task_id}",
    response_model=Task,
    summary="Editar una tarea existente",
)
def update_task(
    task_id: str,
    cmd: UpdateTaskCommand,
    use_case: UpdateTaskUseCase = Depends(update_task_use_case),
) -> Task:
    task = use_case.execute(task_id, cmd)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return task


@router.delete(
    "/{task_id}",
    summary="Eliminar una tarea",
)
def delete_task(
    task_id: str,
    use_case: DeleteTaskUseCase = Depends(delete_task_use_case),
) -> dict[str, int]:
    removed = use_case.execute(DeleteTaskCommand(id=task_id))
    return {"affected": 1 if removed else 0}


@router.delete(
    "",
    status_code=status.HTTP_200_OK,
    summary="Eliminar tareas por texto",
)
def delete_tasks_by_text(
    text: str = Query(..., min_length=1),
    use_case: DeleteTasksByTextUseCase = Depends(delete_tasks_by_text_use_case),
) -> dict[str, int]:
    return {"affected": use_case.execute(DeleteTasksByTextCommand(text=text))}

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..models import TaskEntity
from ..repositories import Repository, TaskClosedError, get_repository
from ..schemas import TaskCreate, TaskOut

router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
)


def _get_repo(repo: Repository = Depends(get_repository)) -> Repository:
    """
    Dependency wrapper for repository to keep signatures clean.
    """
    return repo


def _to_out(entity: TaskEntity) -> TaskOut:
    return TaskOut(
        id=entity["id"],
        title=entity["title"],
        description=entity["description"],
        deadline=entity["deadline"],
        status=entity["status"].to_wire(),
    )


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Tasks",
    description=(
        "Return the full current set of tasks in creation order. Ongoing tasks whose "
        "deadline has elapsed are reported with status 'failure'."
    ),
    responses={200: {"description": "List retrieved successfully"}},
)
def list_tasks(repo: Repository = Depends(_get_repo)) -> List[TaskOut]:
    """
    List every task as a plain JSON array.
    """
    return [_to_out(t) for t in repo.list()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description="Create a new ongoing task and return the created resource.",
    responses={
        201: {"description": "Task created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_task(payload: TaskCreate, repo: Repository = Depends(_get_repo)) -> TaskOut:
    """
    Create a new task.
    """
    return _to_out(repo.create(payload))


# PUBLIC_INTERFACE
@router.post(
    "/{task_id}/complete",
    response_model=TaskOut,
    summary="Complete Task",
    description="Mark an ongoing task as completed on time. Completing a completed task is a no-op.",
    responses={
        200: {"description": "Task completed"},
        404: {"description": "Task not found"},
        409: {"description": "Task already failed its deadline"},
    },
)
def complete_task(task_id: str, repo: Repository = Depends(_get_repo)) -> TaskOut:
    """
    Transition a task to 'success'.
    """
    try:
        updated = repo.complete(task_id)
    except TaskClosedError:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Task is already closed")
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return _to_out(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}/delete",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Task",
    description="Delete a task by ID.",
    responses={
        204: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
def delete_task(task_id: str, repo: Repository = Depends(_get_repo)) -> Response:
    """
    Delete a task. Returns 204 on success, 404 if not found.
    """
    ok = repo.delete(task_id)
    if not ok:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from taskkeeper.errors import AppError, InternalError
from taskkeeper.schemas.task import TaskCreate, TaskOut, TaskStats, TaskStatusLiteral, TaskUpdate
from taskkeeper.services.records import TaskRecord, UserRecord
from taskkeeper.services.stores import TaskStore
from taskkeeper.utils.auth import get_current_user, get_task_store
from taskkeeper.utils.ownership import TaskId, get_owned_task, load_owned_task

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[TaskOut])
async def list_tasks(
    status_filter: Optional[TaskStatusLiteral] = Query(None, alias="status"),
    current_user: UserRecord = Depends(get_current_user),
    tasks: TaskStore = Depends(get_task_store),
):
    try:
        return await tasks.list_by_user(current_user.id, status=status_filter)
    except AppError:
        raise
    except Exception:
        logger.exception("Error in list_tasks")
        raise InternalError("Failed to retrieve tasks")


@router.get("/stats", response_model=TaskStats)
async def task_stats(
    current_user: UserRecord = Depends(get_current_user),
    tasks: TaskStore = Depends(get_task_store),
):
    try:
        user_tasks = await tasks.list_by_user(current_user.id)
    except Exception:
        logger.exception("Error in task_stats")
        raise InternalError("Failed to retrieve tasks")

    completed = sum(task.status == "completed" for task in user_tasks)
    return {
        "total": len(user_tasks),
        "pending": len(user_tasks) - completed,
        "completed": completed,
    }


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
async def create_task(
    task: TaskCreate,
    current_user: UserRecord = Depends(get_current_user),
    tasks: TaskStore = Depends(get_task_store),
):
    try:
        # Owner always comes from the session, never from the body
        db_task = await tasks.create(
            user_id=current_user.id,
            title=task.title,
            description=task.description,
            status=task.status,
        )
        logger.info(f"Task {db_task.id} created by user {current_user.id}")
        return db_task
    except AppError:
        raise
    except Exception:
        logger.exception("Error in create_task")
        raise InternalError("Failed to create task")


@router.get("/{task_id}", response_model=TaskOut)
async def read_task(task: TaskRecord = Depends(get_owned_task)):
    return task


@router.put("/{task_id}", response_model=TaskOut)
async def update_task(
    task_id: TaskId,
    task_update: TaskUpdate,
    current_user: UserRecord = Depends(get_current_user),
    tasks: TaskStore = Depends(get_task_store),
):
    try:
        # Body validation has already run by the time the store is touched
        task = await load_owned_task(tasks, task_id, current_user)

        # Apply updates (only fields provided in request)
        update_data = task_update.model_dump(exclude_unset=True)
        updated = await tasks.update(task.id, update_data)
        logger.info(f"Task {task.id} updated by user {task.user_id}: {sorted(update_data)}")
        return updated
    except AppError:
        raise
    except Exception:
        logger.exception("Error in update_task")
        raise InternalError("Failed to update task")


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(
    task: TaskRecord = Depends(get_owned_task),
    tasks: TaskStore = Depends(get_task_store),
):
    try:
        await tasks.delete(task.id)
        logger.info(f"Task {task.id} deleted by user {task.user_id}")
    except AppError:
        raise
    except Exception:
        logger.exception("Error in delete_task")
        raise InternalError("Failed to delete task")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

# taskkeeper/utils/ownership.py
from typing import Annotated

from fastapi import Depends, Path

from taskkeeper.errors import AuthorizationError, NotFoundError
from taskkeeper.services.records import TaskRecord, UserRecord
from taskkeeper.services.stores import TaskStore
from taskkeeper.utils.auth import get_current_user, get_task_store

# Ids are 64-bit integers in every backend
MAX_TASK_ID = 2**63 - 1

TaskId = Annotated[int, Path(ge=1, le=MAX_TASK_ID)]


def check_ownership(task: TaskRecord, user: UserRecord) -> TaskRecord:
    if task.user_id != user.id:
        raise AuthorizationError("You do not have access to this task")
    return task


async def load_owned_task(tasks: TaskStore, task_id: int, user: UserRecord) -> TaskRecord:
    """Load the task and make sure ``user`` owns it.

    A missing task is a 404 and someone else's task is a 403, so the two
    cases stay distinguishable to the client.
    """
    task = await tasks.get_by_id(task_id)
    if task is None:
        raise NotFoundError("Task not found")
    return check_ownership(task, user)


async def get_owned_task(
    task_id: TaskId,
    current_user: UserRecord = Depends(get_current_user),
    tasks: TaskStore = Depends(get_task_store),
) -> TaskRecord:
    """Authenticate, then authorize; for routes without a request body"""
    return await load_owned_task(tasks, task_id, current_user)

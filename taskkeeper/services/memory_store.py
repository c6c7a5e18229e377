# taskkeeper/services/memory_store.py
import itertools
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from taskkeeper.errors import ConflictError, NotFoundError
from taskkeeper.models.task import TaskStatus
from taskkeeper.services.records import TaskRecord, UserRecord
from taskkeeper.services.stores import TaskStore, UserStore, clean_task_fields


class MemoryUserStore(UserStore):
    def __init__(self):
        self._users: Dict[int, UserRecord] = {}
        self._ids_by_email: Dict[str, int] = {}
        self._next_id = itertools.count(1)
        self._lock = threading.Lock()

    async def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        with self._lock:
            # Exact, case-sensitive match
            if email in self._ids_by_email:
                raise ConflictError("Email already registered")
            user = UserRecord(id=next(self._next_id), name=name, email=email, password_hash=password_hash)
            self._users[user.id] = user
            self._ids_by_email[email] = user.id
            return user

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        user_id = self._ids_by_email.get(email)
        return self._users.get(user_id) if user_id is not None else None

    async def get_user_by_id(self, user_id: int) -> Optional[UserRecord]:
        return self._users.get(user_id)


class MemoryTaskStore(TaskStore):
    def __init__(self):
        self._tasks: Dict[int, TaskRecord] = {}
        self._next_id = itertools.count(1)
        self._lock = threading.Lock()

    async def create(
        self,
        user_id: int,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> TaskRecord:
        with self._lock:
            task = TaskRecord(
                id=next(self._next_id),
                title=title,
                description=description,
                status=status or TaskStatus.PENDING.value,
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
            )
            self._tasks[task.id] = task
            return task

    async def get_by_id(self, task_id: int) -> Optional[TaskRecord]:
        return self._tasks.get(task_id)

    async def list_by_user(self, user_id: int, status: Optional[str] = None) -> List[TaskRecord]:
        return [
            task for task in list(self._tasks.values())
            if task.user_id == user_id and (status is None or task.status == status)
        ]

    async def update(self, task_id: int, fields: Dict[str, Any]) -> TaskRecord:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                raise NotFoundError("Task not found")
            task = replace(task, **clean_task_fields(fields))
            self._tasks[task_id] = task
            return task

    async def delete(self, task_id: int) -> None:
        with self._lock:
            self._tasks.pop(task_id, None)

# taskkeeper/services/stores.py
"""
Storage interfaces for users and tasks.

Handlers only ever talk to these abstract classes; ``build_stores`` decides at
startup whether they are backed by process memory or by a SQL database.
Every method is a coroutine so a backend is free to wait on I/O.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from taskkeeper.services.records import TaskRecord, UserRecord

logger = logging.getLogger(__name__)

# Task fields an update may touch; id, user_id and created_at never change
UPDATABLE_TASK_FIELDS = ("title", "description", "status")


class UserStore(ABC):
    """Credential store"""

    @abstractmethod
    async def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        """Raises ConflictError when the email is already registered"""

    @abstractmethod
    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        ...

    @abstractmethod
    async def get_user_by_id(self, user_id: int) -> Optional[UserRecord]:
        ...


class TaskStore(ABC):
    """Task records keyed by id. Ownership is not checked here."""

    @abstractmethod
    async def create(
        self,
        user_id: int,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> TaskRecord:
        ...

    @abstractmethod
    async def get_by_id(self, task_id: int) -> Optional[TaskRecord]:
        ...

    @abstractmethod
    async def list_by_user(self, user_id: int, status: Optional[str] = None) -> List[TaskRecord]:
        ...

    @abstractmethod
    async def update(self, task_id: int, fields: Dict[str, Any]) -> TaskRecord:
        """Merge ``fields`` into the task. Raises NotFoundError if it is gone."""

    @abstractmethod
    async def delete(self, task_id: int) -> None:
        """Remove the task; deleting a missing id is a no-op"""


@dataclass
class Stores:
    users: UserStore
    tasks: TaskStore
    close: Callable[[], None] = lambda: None


def clean_task_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if key in UPDATABLE_TASK_FIELDS}


def build_stores(settings) -> Stores:
    """Pick the storage backend for the given settings"""
    if settings.uses_database:
        from taskkeeper.database import create_schema, make_engine, make_session_factory
        from taskkeeper.services.sql_store import SqlTaskStore, SqlUserStore

        engine = make_engine(settings.database_url, settings.db_sslmode)
        create_schema(engine)
        session_factory = make_session_factory(engine)
        logger.info(f"Using SQL storage ({engine.url.get_backend_name()})")
        return Stores(
            users=SqlUserStore(session_factory),
            tasks=SqlTaskStore(session_factory),
            close=engine.dispose,
        )

    from taskkeeper.services.memory_store import MemoryTaskStore, MemoryUserStore

    logger.info("Using in-memory storage; data is lost on restart")
    return Stores(users=MemoryUserStore(), tasks=MemoryTaskStore())

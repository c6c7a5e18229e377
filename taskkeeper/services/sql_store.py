# taskkeeper/services/sql_store.py
"""
SQLAlchemy-backed stores.

The ORM calls are blocking, so each operation runs in Starlette's threadpool
with its own short-lived session.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from starlette.concurrency import run_in_threadpool

from taskkeeper.errors import ConflictError, NotFoundError
from taskkeeper.models import task as task_model
from taskkeeper.models import user as user_model
from taskkeeper.services.records import TaskRecord, UserRecord
from taskkeeper.services.stores import TaskStore, UserStore, clean_task_fields

logger = logging.getLogger(__name__)


def _user_record(user: user_model.User) -> UserRecord:
    return UserRecord(id=user.id, name=user.name, email=user.email, password_hash=user.hashed_password)


def _task_record(task: task_model.Task) -> TaskRecord:
    created_at = task.created_at
    if created_at is not None and created_at.tzinfo is None:
        # SQLite hands timestamps back without a zone
        created_at = created_at.replace(tzinfo=timezone.utc)
    return TaskRecord(
        id=task.id,
        title=task.title,
        description=task.description,
        status=task.status,
        user_id=task.user_id,
        created_at=created_at,
    )


class SqlUserStore(UserStore):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        db: Session = self.session_factory()
        try:
            if db.query(user_model.User).filter(user_model.User.email == email).first():
                raise ConflictError("Email already registered")
            user = user_model.User(name=name, email=email, hashed_password=password_hash)
            db.add(user)
            db.commit()
            db.refresh(user)
            return _user_record(user)
        except IntegrityError:
            # Lost a race with another registration for the same email
            db.rollback()
            logger.info("Concurrent registration rejected by the unique email constraint")
            raise ConflictError("Email already registered")
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _get_by(self, column, value) -> Optional[UserRecord]:
        db: Session = self.session_factory()
        try:
            user = db.query(user_model.User).filter(column == value).first()
            return _user_record(user) if user else None
        finally:
            db.close()

    async def create_user(self, name: str, email: str, password_hash: str) -> UserRecord:
        return await run_in_threadpool(self._create_user, name, email, password_hash)

    async def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return await run_in_threadpool(self._get_by, user_model.User.email, email)

    async def get_user_by_id(self, user_id: int) -> Optional[UserRecord]:
        return await run_in_threadpool(self._get_by, user_model.User.id, user_id)


class SqlTaskStore(TaskStore):
    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def _create(self, user_id: int, title: str, description: Optional[str], status: Optional[str]) -> TaskRecord:
        db: Session = self.session_factory()
        try:
            task = task_model.Task(
                title=title,
                description=description,
                status=status or task_model.TaskStatus.PENDING.value,
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
            )
            db.add(task)
            db.commit()
            db.refresh(task)
            return _task_record(task)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _get_by_id(self, task_id: int) -> Optional[TaskRecord]:
        db: Session = self.session_factory()
        try:
            task = db.get(task_model.Task, task_id)
            return _task_record(task) if task else None
        finally:
            db.close()

    def _list_by_user(self, user_id: int, status: Optional[str]) -> List[TaskRecord]:
        db: Session = self.session_factory()
        try:
            query = db.query(task_model.Task).filter(task_model.Task.user_id == user_id)
            if status is not None:
                query = query.filter(task_model.Task.status == status)
            return [_task_record(task) for task in query.all()]
        finally:
            db.close()

    def _update(self, task_id: int, fields: Dict[str, Any]) -> TaskRecord:
        db: Session = self.session_factory()
        try:
            task = db.get(task_model.Task, task_id)
            if task is None:
                raise NotFoundError("Task not found")
            for key, value in clean_task_fields(fields).items():
                setattr(task, key, value)
            db.commit()
            db.refresh(task)
            return _task_record(task)
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _delete(self, task_id: int):
        db: Session = self.session_factory()
        try:
            db.query(task_model.Task).filter(task_model.Task.id == task_id).delete()
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    async def create(
        self,
        user_id: int,
        title: str,
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> TaskRecord:
        return await run_in_threadpool(self._create, user_id, title, description, status)

    async def get_by_id(self, task_id: int) -> Optional[TaskRecord]:
        return await run_in_threadpool(self._get_by_id, task_id)

    async def list_by_user(self, user_id: int, status: Optional[str] = None) -> List[TaskRecord]:
        return await run_in_threadpool(self._list_by_user, user_id, status)

    async def update(self, task_id: int, fields: Dict[str, Any]) -> TaskRecord:
        return await run_in_threadpool(self._update, task_id, fields)

    async def delete(self, task_id: int) -> None:
        await run_in_threadpool(self._delete, task_id)

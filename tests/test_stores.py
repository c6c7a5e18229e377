"""Tests for the user and task stores, run against both backends."""

import asyncio
from datetime import datetime

import pytest

from taskkeeper.database import create_schema, make_engine, make_session_factory
from taskkeeper.errors import ConflictError, NotFoundError
from taskkeeper.services.memory_store import MemoryTaskStore, MemoryUserStore
from taskkeeper.services.sql_store import SqlTaskStore, SqlUserStore
from taskkeeper.services.stores import Stores


@pytest.mark.asyncio
async def test_create_user_assigns_increasing_ids(stores):
    ann = await stores.users.create_user("Ann", "ann@x.com", "hash-a")
    ben = await stores.users.create_user("Ben", "ben@x.com", "hash-b")

    assert ann.id >= 1
    assert ben.id > ann.id
    assert (await stores.users.get_user_by_email("ben@x.com")).id == ben.id
    assert (await stores.users.get_user_by_id(ann.id)).name == "Ann"


@pytest.mark.asyncio
async def test_duplicate_email_conflicts_and_keeps_original(stores):
    ann = await stores.users.create_user("Ann", "ann@x.com", "hash-a")

    with pytest.raises(ConflictError):
        await stores.users.create_user("Impostor", "ann@x.com", "hash-z")

    kept = await stores.users.get_user_by_email("ann@x.com")
    assert kept.id == ann.id
    assert kept.name == "Ann"
    assert kept.password_hash == "hash-a"


@pytest.mark.asyncio
async def test_email_lookup_is_case_sensitive(stores):
    await stores.users.create_user("Ann", "Ann@x.com", "hash-a")

    assert await stores.users.get_user_by_email("ann@x.com") is None
    assert await stores.users.get_user_by_id(999) is None


@pytest.mark.asyncio
async def test_create_task_defaults(stores):
    user = await stores.users.create_user("Ann", "ann@x.com", "hash")
    task = await stores.tasks.create(user_id=user.id, title="Buy milk")

    fetched = await stores.tasks.get_by_id(task.id)
    assert fetched.title == "Buy milk"
    assert fetched.status == "pending"
    assert fetched.description is None
    assert fetched.user_id == user.id
    assert isinstance(fetched.created_at, datetime)
    assert fetched.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_task_ids_are_distinct_and_increasing(stores):
    user = await stores.users.create_user("Ann", "ann@x.com", "hash")
    first = await stores.tasks.create(user_id=user.id, title="One")
    second = await stores.tasks.create(user_id=user.id, title="One")

    assert second.id > first.id


@pytest.mark.asyncio
async def test_task_ids_not_reused_after_delete(stores):
    user = await stores.users.create_user("Ann", "ann@x.com", "hash")
    first = await stores.tasks.create(user_id=user.id, title="One")
    await stores.tasks.delete(first.id)
    second = await stores.tasks.create(user_id=user.id, title="Two")

    assert second.id > first.id


@pytest.mark.asyncio
async def test_list_by_user_only_returns_own_tasks(stores):
    ann = await stores.users.create_user("Ann", "ann@x.com", "hash")
    ben = await stores.users.create_user("Ben", "ben@x.com", "hash")
    await stores.tasks.create(user_id=ann.id, title="A1")
    await stores.tasks.create(user_id=ann.id, title="A2", status="completed")
    await stores.tasks.create(user_id=ben.id, title="B1")

    anns = await stores.tasks.list_by_user(ann.id)
    assert sorted(t.title for t in anns) == ["A1", "A2"]

    done = await stores.tasks.list_by_user(ann.id, status="completed")
    assert [t.title for t in done] == ["A2"]

    assert await stores.tasks.list_by_user(12345) == []


@pytest.mark.asyncio
async def test_update_merges_fields(stores):
    user = await stores.users.create_user("Ann", "ann@x.com", "hash")
    task = await stores.tasks.create(user_id=user.id, title="Draft", description="first pass")

    updated = await stores.tasks.update(task.id, {"status": "completed"})

    assert updated.status == "completed"
    assert updated.title == "Draft"
    assert updated.description == "first pass"
    assert updated.created_at == task.created_at


@pytest.mark.asyncio
async def test_update_ignores_identity_fields(stores):
    user = await stores.users.create_user("Ann", "ann@x.com", "hash")
    task = await stores.tasks.create(user_id=user.id, title="Mine")

    updated = await stores.tasks.update(task.id, {"user_id": user.id + 1, "id": 99, "title": "Still mine"})

    assert updated.id == task.id
    assert updated.user_id == user.id
    assert updated.title == "Still mine"


@pytest.mark.asyncio
async def test_update_missing_task_raises(stores):
    with pytest.raises(NotFoundError):
        await stores.tasks.update(404, {"title": "nope"})


@pytest.mark.asyncio
async def test_delete_is_idempotent(stores):
    user = await stores.users.create_user("Ann", "ann@x.com", "hash")
    task = await stores.tasks.create(user_id=user.id, title="Temporary")

    await stores.tasks.delete(task.id)
    await stores.tasks.delete(task.id)

    assert await stores.tasks.get_by_id(task.id) is None


@pytest.fixture(params=["memory", "sql_file"])
def threaded_stores(request, tmp_path):
    """Stores whose SQL variant uses real pooled connections, one per thread"""
    if request.param == "memory":
        yield Stores(users=MemoryUserStore(), tasks=MemoryTaskStore())
        return
    engine = make_engine(f"sqlite:///{tmp_path / 'tasks.db'}")
    create_schema(engine)
    factory = make_session_factory(engine)
    yield Stores(users=SqlUserStore(factory), tasks=SqlTaskStore(factory))
    engine.dispose()


@pytest.mark.asyncio
async def test_concurrent_creates_get_distinct_ids(threaded_stores):
    user = await threaded_stores.users.create_user("Ann", "ann@x.com", "hash")

    created = await asyncio.gather(
        *(threaded_stores.tasks.create(user_id=user.id, title=f"Task {n}") for n in range(20))
    )

    ids = [task.id for task in created]
    assert len(set(ids)) == len(ids)
    assert len(await threaded_stores.tasks.list_by_user(user.id)) == 20

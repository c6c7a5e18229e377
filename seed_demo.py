"""
Demo data for the Task Keeper application
Registers a few users and gives each of them some tasks
"""

import asyncio
import logging
import os

from dotenv import load_dotenv

from taskkeeper.config.settings import Settings, configure_logging
from taskkeeper.errors import ConflictError
from taskkeeper.schemas.user import UserCreate
from taskkeeper.services.auth_service import AuthService
from taskkeeper.services.stores import Stores, build_stores

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {"name": "Ann", "email": "ann@example.com", "password": "password123"},
    {"name": "Ben", "email": "ben@example.com", "password": "password123"},
]

DEMO_TASKS = {
    "ann@example.com": [
        {"title": "Write report", "description": "Quarterly summary for the team"},
        {"title": "Buy milk"},
        {"title": "Book dentist", "status": "completed"},
    ],
    "ben@example.com": [
        {"title": "Renew passport", "description": "Photos are in the desk drawer"},
        {"title": "Fix bike light", "status": "completed"},
    ],
}


async def seed(stores: Stores) -> dict:
    """Create demo users and tasks, skipping users that already exist"""
    auth = AuthService(stores.users)
    created = {"users": 0, "tasks": 0}

    for data in DEMO_USERS:
        try:
            user = await auth.register(UserCreate(**data))
        except ConflictError:
            logger.info(f"{data['email']} already exists, skipping")
            continue
        created["users"] += 1

        for task in DEMO_TASKS.get(user.email, []):
            await stores.tasks.create(user_id=user.id, **task)
            created["tasks"] += 1

    return created


def main():
    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    settings = Settings.from_env()
    if not settings.uses_database:
        logger.warning("DATABASE_URL is not set; seeding an in-memory store that vanishes on exit")

    stores = build_stores(settings)
    try:
        created = asyncio.run(seed(stores))
    finally:
        stores.close()
    logger.info(f"Seeded {created['users']} users and {created['tasks']} tasks")


if __name__ == "__main__":
    main()

# taskkeeper/services/auth_service.py
import logging
from typing import Optional

from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from taskkeeper.errors import InvalidCredentialsError
from taskkeeper.schemas.user import UserCreate, UserLogin
from taskkeeper.services.records import UserRecord
from taskkeeper.services.stores import UserStore
from taskkeeper.utils.security import dummy_verify, hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_login_email(email: str) -> Optional[str]:
    """Normalize the address the same way registration does, or None if it does not parse"""
    try:
        return validate_email(email)[1]
    except PydanticCustomError:
        return None


class AuthService:
    def __init__(self, users: UserStore):
        self.users = users

    async def register(self, data: UserCreate) -> UserRecord:
        """Create a user; ConflictError propagates if the email is taken"""
        user = await self.users.create_user(
            name=data.name,
            email=data.email,
            password_hash=hash_password(data.password),
        )
        logger.info(f"Registered user {user.id}")
        return user

    async def authenticate(self, data: UserLogin) -> UserRecord:
        email = normalize_login_email(data.email)
        user = await self.users.get_user_by_email(email) if email else None
        if user is None:
            dummy_verify()
            logger.info("Login failed for unknown email")
            raise InvalidCredentialsError()
        if not verify_password(data.password, user.password_hash):
            logger.info(f"Login failed for user {user.id}")
            raise InvalidCredentialsError()
        logger.info(f"User {user.id} logged in")
        return user

# taskkeeper/utils/auth.py
"""
Session handling for requests.

Each request is resolved on its own: the signed cookie gives an opaque token,
the server-side SessionStore maps it to a user id, and the UserStore gives the
user. Any missing link means the request is unauthenticated.
"""

from typing import Optional

from fastapi import Depends, Request, Response

from taskkeeper.config.settings import Settings
from taskkeeper.errors import AuthenticationError
from taskkeeper.services.records import UserRecord
from taskkeeper.services.session_store import SessionStore
from taskkeeper.services.stores import TaskStore, UserStore
from taskkeeper.utils.security import sign_session_token, unsign_session_token


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_user_store(request: Request) -> UserStore:
    return request.app.state.stores.users


def get_task_store(request: Request) -> TaskStore:
    return request.app.state.stores.tasks


def get_session_store(request: Request) -> SessionStore:
    return request.app.state.sessions


def get_session_token(request: Request, settings: Settings = Depends(get_settings)) -> Optional[str]:
    cookie = request.cookies.get(settings.session_cookie_name)
    if not cookie:
        return None
    return unsign_session_token(cookie, settings.secret_key, settings.session_algorithm)


async def get_current_user(
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
    users: UserStore = Depends(get_user_store),
) -> UserRecord:
    if token is None:
        raise AuthenticationError()

    user_id = sessions.resolve(token)
    if user_id is None:
        raise AuthenticationError("Session expired or invalid")

    user = await users.get_user_by_id(user_id)
    if user is None:
        sessions.destroy(token)
        raise AuthenticationError()
    return user


def start_session(response: Response, settings: Settings, sessions: SessionStore, user_id: int) -> str:
    token = sessions.create(user_id)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=sign_session_token(token, settings.secret_key, settings.session_algorithm),
        max_age=settings.session_ttl_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return token


def end_session(response: Response, settings: Settings, sessions: SessionStore, token: Optional[str]) -> bool:
    destroyed = sessions.destroy(token) if token else False
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return destroyed

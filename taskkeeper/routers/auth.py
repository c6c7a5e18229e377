import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from taskkeeper.config.settings import Settings
from taskkeeper.errors import AppError, InternalError
from taskkeeper.schemas.user import UserCreate, UserLogin, UserOut
from taskkeeper.services.auth_service import AuthService
from taskkeeper.services.records import UserRecord
from taskkeeper.services.session_store import SessionStore
from taskkeeper.services.stores import UserStore
from taskkeeper.utils.auth import (
    end_session,
    get_current_user,
    get_session_store,
    get_session_token,
    get_settings,
    get_user_store,
    start_session,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_auth_service(users: UserStore = Depends(get_user_store)) -> AuthService:
    return AuthService(users)


@router.post("/register", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def register(
    user: UserCreate,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    try:
        new_user = await auth.register(user)
        start_session(response, settings, sessions, new_user.id)
        return new_user
    except AppError:
        raise
    except Exception:
        logger.exception("Error in register")
        raise InternalError()


@router.post("/login", response_model=UserOut)
async def login(
    user: UserLogin,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    try:
        db_user = await auth.authenticate(user)
        start_session(response, settings, sessions, db_user.id)
        return db_user
    except AppError:
        raise
    except Exception:
        logger.exception("Error in login")
        raise InternalError()


@router.post("/logout")
def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    sessions: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
):
    if end_session(response, settings, sessions, token):
        logger.info("Session ended")
    return {"detail": "Logged out"}


@router.get("/user", response_model=UserOut)
def read_current_user(current_user: UserRecord = Depends(get_current_user)):
    return current_user

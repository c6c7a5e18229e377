# taskkeeper/utils/security.py
import json
import secrets
from typing import Optional

from jose import JWSError, jws
from passlib.context import CryptContext

# scrypt is memory-hard; the stored string carries its own salt and parameters
pwd_context = CryptContext(schemes=["scrypt"], deprecated="auto", scrypt__rounds=14)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def dummy_verify():
    """Burn the same time a real verify would when the email is unknown"""
    pwd_context.dummy_verify()


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def sign_session_token(token: str, secret_key: str, algorithm: str = "HS256") -> str:
    return jws.sign({"sid": token}, secret_key, algorithm=algorithm)


def unsign_session_token(value: str, secret_key: str, algorithm: str = "HS256") -> Optional[str]:
    """Return the session token inside a signed cookie, or None if it was tampered with"""
    try:
        payload = json.loads(jws.verify(value, secret_key, algorithms=[algorithm]))
    except (JWSError, ValueError):
        return None
    sid = payload.get("sid") if isinstance(payload, dict) else None
    return sid if isinstance(sid, str) else None

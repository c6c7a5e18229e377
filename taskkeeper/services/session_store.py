# taskkeeper/services/session_store.py
import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from taskkeeper.utils.security import new_session_token

logger = logging.getLogger(__name__)


@dataclass
class SessionRecord:
    user_id: int
    created_at: datetime
    expires_at: datetime


class SessionStore:
    """Server-side sessions: opaque token -> user id, with sliding expiry"""

    def __init__(self, ttl_minutes: int = 24 * 60, clock=None):
        self.ttl = timedelta(minutes=ttl_minutes)
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._sessions: Dict[str, SessionRecord] = {}
        self._lock = threading.Lock()

    def create(self, user_id: int) -> str:
        now = self._clock()
        token = new_session_token()
        with self._lock:
            self._sessions[token] = SessionRecord(user_id=user_id, created_at=now, expires_at=now + self.ttl)
        return token

    def resolve(self, token: str) -> Optional[int]:
        """Return the user id bound to ``token`` and push its expiry forward"""
        now = self._clock()
        with self._lock:
            record = self._sessions.get(token)
            if record is None:
                return None
            if record.expires_at <= now:
                del self._sessions[token]
                return None
            record.expires_at = now + self.ttl
            return record.user_id

    def destroy(self, token: str) -> bool:
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        with self._lock:
            expired = [token for token, record in self._sessions.items() if record.expires_at <= now]
            for token in expired:
                del self._sessions[token]
        if expired:
            logger.info(f"Purged {len(expired)} expired sessions")
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)

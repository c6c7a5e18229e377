# taskkeeper/services/records.py
"""Plain records handed out by the stores, whichever backend is active."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class TaskRecord:
    id: int
    title: str
    description: Optional[str]
    status: str
    user_id: int
    created_at: datetime

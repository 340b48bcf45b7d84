"""
Shared API dependencies.

Reusable FastAPI dependencies for owner resolution and habit storage.
"""

from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlmodel import Session

from habit_tracker.core.config import settings
from habit_tracker.db.repositories.habit import HabitRepository, InMemoryHabitRepository, SqlHabitRepository
from habit_tracker.db.session import get_db

# Store behind the "memory" storage backend, shared by all requests.
memory_repository = InMemoryHabitRepository()


def get_current_owner_id(x_user_id: Optional[str] = Header(None, alias="X-User-Id")) -> int:
    """Resolve the caller's user id.

    The id is taken from the ``X-User-Id`` header set by the
    authenticating gateway in front of this service.
    """
    raw = (x_user_id or "").strip()
    if not (raw.isascii() and raw.isdigit()) or int(raw) < 1:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing or invalid user identity")
    return int(raw)


def get_habit_repository(db: Session = Depends(get_db)) -> HabitRepository:
    """Return the habit store selected by ``STORAGE_BACKEND``.

    Sessions connect lazily, so the memory backend never touches the database.
    """
    if settings.STORAGE_BACKEND == "memory":
        return memory_repository
    return SqlHabitRepository(db)

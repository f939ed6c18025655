"""
Shared FastAPI dependencies: storage selection and the session identity gate
"""
from functools import lru_cache
from typing import Iterator

from fastapi import Depends, HTTPException, Request, status

from greengrocer.config import settings
from greengrocer.database import SessionLocal
from greengrocer.models import User
from greengrocer.repositories import Repository, MemoryRepository, SQLRepository

SESSION_USER_KEY = "user_id"


@lru_cache(maxsize=None)
def get_memory_repository() -> MemoryRepository:
    """Process-wide in-memory store, used when STORAGE_BACKEND=memory"""
    return MemoryRepository(seed_categories=settings.SEED_DEFAULT_CATEGORIES)


def get_repository() -> Iterator[Repository]:
    """Dependency yielding the configured repository for one request"""
    if settings.STORAGE_BACKEND == "memory":
        yield get_memory_repository()
        return
    
    db = SessionLocal()
    try:
        yield SQLRepository(db)
    finally:
        db.close()


def get_current_user(request: Request, repository: Repository = Depends(get_repository)) -> User:
    """
    Dependency to get the user bound to the request's session.
    
    Raises 401 when the session carries no user or the user no longer exists.
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    
    user = repository.get_user(user_id)
    if user is None:
        request.session.clear()
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency allowing only admins; 403 for everyone else"""
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user

"""
Dependencies for FastAPI endpoints
"""
from typing import Callable, Generator

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from org_hierarchy.core.security import decode_token
from org_hierarchy.db.session import SessionLocal


security = HTTPBearer()


def get_db() -> Generator:
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> Callable[[], Session]:
    """
    Dependency for endpoints that open their own sessions

    The hierarchy loader opens one session per concurrent fetch.
    """
    return SessionLocal


async def get_current_actor(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> str:
    """
    Actor id (JWT subject) of the caller, recorded on audit entries

    Sessions are issued by the authentication service; only the subject is
    read here.
    """
    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        payload = {}

    actor_id = payload.get("sub")
    if not actor_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return str(actor_id)

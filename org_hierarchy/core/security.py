"""
Actor token helpers

Tokens are issued by the external authentication service; this module only
needs to read the actor id from them. create_access_token exists for local
tooling and tests.
"""
import logging
from datetime import datetime, timedelta
from typing import Dict, Optional
from jose import JWTError, jwt
from org_hierarchy.core.config import settings

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_MINUTES = 120


def create_access_token(data: Dict, expires_minutes: Optional[int] = None) -> str:
    """Create a JWT access token"""
    to_encode = data.copy()

    if expires_minutes is None:
        expires_minutes = DEFAULT_TOKEN_MINUTES

    expire = datetime.utcnow() + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def decode_token(token: str) -> Dict:
    """Decode and verify a JWT token"""
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        logger.debug("Rejected actor token")
        raise ValueError("Invalid token")

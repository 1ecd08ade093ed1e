"""Auth Guard — resolves the authenticated caller from a bearer JWT.

Invariants:
    - Token issuance lives elsewhere; this module only verifies signature and expiry
    - `sub` claim carries the numeric user id
    - A valid token for a user that no longer exists is rejected (401, not 404)
    - Never trust a user id from the request body or query string

Design Decisions:
    - HTTPBearer(auto_error=False) so a missing header goes through AuthenticationError
      and gets the same envelope as every other failure
    - PyJWT for decode: ExpiredSignatureError / InvalidTokenError map 1:1 to messages
"""

import logging
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.errors import AuthenticationError
from app.infrastructure.database import get_db
from app.models.user import User

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def decode_access_token(token: str) -> int:
    """Verify token and return the user id from its `sub` claim."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid token")

    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Token has no valid subject")


def create_access_token(user_id: int, minutes: int = 60) -> str:
    """Sign a token for `user_id`. Used by tests and local tooling."""
    settings = get_settings()
    exp = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    return jwt.encode(
        {"sub": str(user_id), "exp": exp},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """FastAPI dependency — every project route declares it."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Missing bearer token")

    user_id = decode_access_token(credentials.credentials)
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning("Token subject not found", extra={"user_id": user_id})
        raise AuthenticationError("Unknown user")
    return user

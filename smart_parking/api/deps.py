"""Shared FastAPI dependencies."""

import random
from typing import AsyncGenerator, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from smart_parking.db.session import get_db
from smart_parking.exceptions import AuthenticationError, AuthorizationError
from smart_parking.security import CurrentUser, decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


async def get_db_session(
    db: AsyncSession = Depends(get_db),
) -> AsyncGenerator[AsyncSession, None]:
    """Database session for request handlers."""
    yield db


def get_rng() -> random.Random:
    """Random source used by the simulation endpoint."""
    return random.Random()


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """Resolve the caller from the bearer token."""
    if credentials is None:
        raise AuthenticationError("Not authorized, no token")
    return decode_access_token(credentials.credentials)


async def require_admin(
    current_user: CurrentUser = Depends(get_current_user),
) -> CurrentUser:
    """Allow only callers with the admin role."""
    if not current_user.is_admin:
        raise AuthorizationError(
            f"User role '{current_user.role.value}' is not authorized to access this route"
        )
    return current_user

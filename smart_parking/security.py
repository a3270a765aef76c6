"""Bearer token issuing and verification."""

import enum
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from smart_parking.config import settings
from smart_parking.exceptions import AuthenticationError


class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved from a request token."""

    id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def create_access_token(
    user_id: str,
    role: Role = Role.USER,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Issue a signed token carrying the user id and role."""
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "role": Role(role).value,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> CurrentUser:
    """Verify a token and return the identity it carries."""
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Not authorized, token failed")

    try:
        role = Role(payload.get("role", Role.USER.value))
    except ValueError:
        raise AuthenticationError("Not authorized, unknown role")

    return CurrentUser(id=payload["sub"], role=role)

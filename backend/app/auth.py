"""
Authentication for the Smart Task Manager API.

Passwords are stored as bcrypt hashes. Successful registration or login
issues an HS256 JWT whose ``sub`` claim is the user id; every protected
route resolves the caller from that token via ``get_current_user``.
"""

import uuid
from datetime import timedelta

import bcrypt
import jwt
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.config import get_settings
from app.database import get_session
from app.exceptions import AuthenticationError
from app.logging_config import get_logger
from app.models import User
from app.schemas.user import MAX_PASSWORD_BYTES
from app.time_utils import utcnow

logger = get_logger(__name__)

# auto_error=False so a missing header is reported in our own error shape
security = HTTPBearer(auto_error=False)


# =============================================================================
# Password hashing
# =============================================================================

def _hash_password(password: str, rounds: int) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def _check_password(password: str, password_hash: str) -> bool:
    encoded = password.encode("utf-8")
    # Registration rejects these, so no stored hash can match
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))


async def hash_password(password: str) -> str:
    """Hash a password off the event loop (bcrypt is deliberately slow)."""
    return await run_in_threadpool(_hash_password, password, get_settings().bcrypt_rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(_check_password, password, password_hash)


# =============================================================================
# Tokens
# =============================================================================

def create_access_token(user_id: uuid.UUID, expires_in: timedelta | None = None) -> str:
    """Issue a signed bearer token for a user."""
    settings = get_settings()
    issued_at = utcnow()
    if expires_in is None:
        expires_in = timedelta(seconds=settings.jwt_expires_in_seconds)

    payload = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> uuid.UUID:
    """
    Verify a token's signature and expiry and return the user id it carries.

    Raises:
        AuthenticationError (403): If the token is invalid, expired or malformed.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
        return uuid.UUID(payload["sub"])
    except jwt.ExpiredSignatureError:
        logger.warning("Expired access token")
        raise AuthenticationError("Invalid or expired token", status.HTTP_403_FORBIDDEN)
    except (jwt.InvalidTokenError, ValueError):
        logger.warning("Invalid access token")
        raise AuthenticationError("Invalid or expired token", status.HTTP_403_FORBIDDEN)


# =============================================================================
# FastAPI dependency
# =============================================================================

async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    session: AsyncSession = Depends(get_session),
) -> User:
    """
    Resolve the calling user from the Authorization header.

    Raises:
        AuthenticationError: 401 if no bearer credential is presented,
            403 if the token fails validation or its user no longer exists.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")

    user_id = decode_access_token(credentials.credentials)

    user = await session.get(User, user_id)
    if user is None:
        logger.warning(f"Token subject {user_id} does not match any user")
        raise AuthenticationError("Invalid or expired token", status.HTTP_403_FORBIDDEN)

    logger.debug(f"Authenticated user: {user.id}")
    return user

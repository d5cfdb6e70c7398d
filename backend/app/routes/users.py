"""
User routes: registration, login and the caller's profile.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from app.auth import create_access_token, get_current_user, hash_password, verify_password
from app.database import get_session
from app.exceptions import ConflictError, InvalidCredentialsError
from app.logging_config import get_logger
from app.models import User
from app.schemas import AuthResponse, UserLogin, UserRead, UserRegister, UserResponse

logger = get_logger(__name__)

router = APIRouter()


async def _find_by_email(session: AsyncSession, email: str) -> User | None:
    result = await session.execute(select(User).where(User.email == email))
    return result.scalars().first()


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_in: UserRegister,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Register a new user and return a bearer token."""
    if await _find_by_email(session, user_in.email):
        logger.info(f"Registration rejected, email already registered: {user_in.email}")
        raise ConflictError("User already exists")

    user = User(
        name=user_in.name,
        email=user_in.email,
        password_hash=await hash_password(user_in.password),
    )
    session.add(user)
    try:
        await session.flush()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        await session.rollback()
        logger.info(f"Registration rejected, email registered concurrently: {user_in.email}")
        raise ConflictError("User already exists")

    logger.info(f"Registered user: id={user.id} email={user.email}")

    return AuthResponse(
        message="User registered successfully",
        user=UserRead.model_validate(user),
        token=create_access_token(user.id),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    session: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Exchange email and password for a bearer token."""
    user = await _find_by_email(session, credentials.email)
    if user is None or not await verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login for {credentials.email}")
        raise InvalidCredentialsError()

    logger.info(f"User logged in: id={user.id}")

    return AuthResponse(
        message="Login successful",
        user=UserRead.model_validate(user),
        token=create_access_token(user.id),
    )


@router.get("/me", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse(user=UserRead.model_validate(current_user))

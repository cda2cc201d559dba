"""Account endpoints: signup and login."""

import structlog
from fastapi import APIRouter, BackgroundTasks, Depends, status

from newgen.core.notifier import Mailer, send_welcome_email
from newgen.core.passwords import PasswordHasher
from newgen.db.database import DuplicateEntryError, StoreError
from newgen.db.users_repository import get_user_by_email, get_users_by_name, insert_user
from newgen.web.dependencies import get_mailer, get_password_hasher
from newgen.web.errors import (
    ConflictError,
    InternalError,
    InvalidInputError,
    UnauthorizedError,
)
from newgen.web.schemas import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    SignupRequest,
    UserSummary,
)

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def signup(
    request: SignupRequest,
    background_tasks: BackgroundTasks,
    hasher: PasswordHasher = Depends(get_password_hasher),
    mailer: Mailer | None = Depends(get_mailer),
) -> MessageResponse:
    """Register a user and queue the welcome email."""
    if not (request.name and request.email and request.password):
        raise InvalidInputError("Missing required fields")

    try:
        existing = get_user_by_email(request.email)
    except StoreError as e:
        logger.error("signup.lookup_failed", error=str(e))
        raise InternalError("Database error") from e

    if existing is not None:
        raise ConflictError("Email already registered")

    try:
        user_id = insert_user(request.name, request.email, hasher.hash(request.password))
    except DuplicateEntryError as e:
        # Lost a race with a concurrent signup for the same email
        raise ConflictError("Email already registered") from e
    except StoreError as e:
        logger.error("signup.insert_failed", error=str(e))
        raise InternalError("Signup failed") from e

    background_tasks.add_task(send_welcome_email, mailer, request.email, request.name)

    logger.info("signup.completed", user_id=user_id)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> LoginResponse:
    """Check name + password and return the user summary."""
    if not (request.username and request.password):
        raise InvalidInputError("Missing username or password")

    try:
        candidates = get_users_by_name(request.username)
    except StoreError as e:
        logger.error("login.lookup_failed", error=str(e))
        raise InternalError("Login failed") from e

    for user in candidates:
        if hasher.verify(request.password, user.password):
            return LoginResponse(
                message="Login successful",
                user=UserSummary(**user.summary()),
            )

    logger.info("login.failed", candidates=len(candidates))
    raise UnauthorizedError("Invalid credentials")

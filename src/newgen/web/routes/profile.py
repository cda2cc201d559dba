"""Profile aggregation endpoint.

GET /profile/{user_id} merges three reads of the same user id:
the user row, their test results and their saved careers. The user
lookup runs first; if it fails nothing else is queried.
"""

import structlog
from fastapi import APIRouter

from newgen.db.careers_repository import get_saved_careers
from newgen.db.database import StoreError
from newgen.db.test_results_repository import get_test_results
from newgen.db.users_repository import get_user_by_id
from newgen.web.errors import InternalError, NotFoundError
from newgen.web.schemas import ProfileResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["profile"])


@router.get("/profile/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: str) -> ProfileResponse:
    """Get a user with their test results and saved careers."""
    # Non-numeric ids can never match a row
    try:
        numeric_id = int(user_id)
    except ValueError:
        raise NotFoundError("User not found")

    try:
        user = get_user_by_id(numeric_id)
    except StoreError as e:
        logger.error("profile.user_lookup_failed", user_id=numeric_id, error=str(e))
        raise NotFoundError("User not found") from e

    if user is None:
        logger.debug("profile.not_found", user_id=numeric_id)
        raise NotFoundError("User not found")

    try:
        tests = get_test_results(numeric_id)
    except StoreError as e:
        logger.error("profile.tests_failed", user_id=numeric_id, error=str(e))
        raise InternalError("Error fetching test results") from e

    try:
        careers = get_saved_careers(numeric_id)
    except StoreError as e:
        logger.error("profile.careers_failed", user_id=numeric_id, error=str(e))
        raise InternalError("Error fetching saved careers") from e

    return ProfileResponse(user=user.summary(), tests=tests, careers=careers)

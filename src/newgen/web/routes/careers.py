"""Saved career endpoints."""

import structlog
from fastapi import APIRouter, Response, status

from newgen.db.careers_repository import (
    get_distinct_career_names,
    insert_saved_career,
    saved_career_exists,
)
from newgen.db.database import DuplicateEntryError, StoreError
from newgen.web.errors import InternalError, InvalidInputError
from newgen.web.schemas import CareerNamesResponse, SaveCourseRequest, SaveCourseResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["careers"])

ALREADY_SAVED = SaveCourseResponse(success=False, message="Already saved")


@router.post(
    "/saveCourse",
    response_model=SaveCourseResponse,
    status_code=status.HTTP_201_CREATED,
)
def save_course(request: SaveCourseRequest, response: Response) -> SaveCourseResponse:
    """Bookmark a career for a user.

    A repeated save answers 200 with success=false, not an error status.
    """
    if not (request.userId and request.careerName):
        raise InvalidInputError("Missing fields", success=False)

    try:
        exists = saved_career_exists(request.userId, request.careerName)
    except StoreError as e:
        logger.error("careers.check_failed", error=str(e))
        raise InternalError("DB error", success=False) from e

    if exists:
        response.status_code = status.HTTP_200_OK
        return ALREADY_SAVED

    try:
        insert_saved_career(request.userId, request.careerName)
    except DuplicateEntryError:
        response.status_code = status.HTTP_200_OK
        return ALREADY_SAVED
    except StoreError as e:
        logger.error("careers.insert_failed", error=str(e))
        raise InternalError("Insert failed", success=False) from e

    return SaveCourseResponse(success=True, message="Course saved")


@router.get("/allSavedCareers", response_model=CareerNamesResponse)
def all_saved_careers() -> CareerNamesResponse:
    """List every distinct career name saved by any user."""
    try:
        names = get_distinct_career_names()
    except StoreError as e:
        logger.error("careers.list_failed", error=str(e))
        raise InternalError("DB error") from e

    return CareerNamesResponse(careers=names)

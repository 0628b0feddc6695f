from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import ServiceError
from core.helper import parse_uuid
from core.log import logger
from core.responses import (
    BadRequest,
    InternalServerError,
    NoContent,
    Ok,
    common_response,
    handle_authorization_status,
    handle_service_error,
)
from core.security import STAFF_ROLES, check_permissions, get_current_user
from models import get_db_sync
from models.User import User
from schemas.auth import AuthorizationStatusEnum
from schemas.common import (
    BadRequestResponse,
    ConflictResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NoContentResponse,
    NotFoundResponse,
    UnauthorizedResponse,
)
from schemas.hours import HoursResponseItem, UpdateHoursRequest, hours_from_model
from services import volunteer_hours as hoursService

router = APIRouter(prefix="/staff/hours", tags=["Staff Hours"])


@router.put(
    "/{id}",
    responses={
        "200": {"model": HoursResponseItem},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def update_hours(
    id: str,
    request: UpdateHoursRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    hour_id = parse_uuid(id)
    if hour_id is None:
        return common_response(BadRequest(message="Invalid hours id"))
    try:
        entry = hoursService.update_hours(
            db=db,
            hour_id=hour_id,
            verify=request.verify,
            hours=request.hours,
            notes=request.notes,
            verified_by=current_user.id,
        )
        return common_response(Ok(data=hours_from_model(entry).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating hours {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/{id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def delete_hours(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    hour_id = parse_uuid(id)
    if hour_id is None:
        return common_response(BadRequest(message="Invalid hours id"))
    try:
        hoursService.delete_hours(db=db, hour_id=hour_id)
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error deleting hours {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))

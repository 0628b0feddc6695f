from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import ServiceError
from core.helper import normalize_pagination, parse_uuid, total_pages
from core.log import logger
from core.responses import (
    BadRequest,
    Created,
    InternalServerError,
    Ok,
    common_response,
    handle_authorization_status,
    handle_service_error,
)
from core.security import ADMIN_ONLY, check_permissions, get_current_user
from models import get_db_sync
from models.User import User
from schemas.auth import AuthorizationStatusEnum
from schemas.common import (
    BadRequestResponse,
    ConflictResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NotFoundResponse,
    UnauthorizedResponse,
    ValidationErrorResponse,
)
from schemas.staff import (
    CreateStaffRequest,
    CreateStaffResponse,
    StaffQuery,
    StaffResponse,
    StaffResponseItem,
    UpdateStaffRequest,
    staff_from_model,
)
from services import people as peopleService

router = APIRouter(prefix="/staff/staff", tags=["Staff Management"])

AUTH_RESPONSES = {
    "401": {"model": UnauthorizedResponse},
    "403": {"model": ForbiddenResponse},
    "500": {"model": InternalServerErrorResponse},
}


@router.get("/", responses={"200": {"model": StaffResponse}, **AUTH_RESPONSES})
async def list_staff(
    query: StaffQuery = Depends(),
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, ADMIN_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    page, limit = normalize_pagination(query.page, query.limit)
    try:
        rows, total = peopleService.list_staff_members(
            db=db,
            page=page,
            limit=limit,
            search=query.search,
            is_active=query.is_active,
            email_verified=query.email_verified,
            role=query.role,
        )
        return common_response(
            Ok(
                data=StaffResponse(
                    page=page,
                    page_size=limit,
                    count=total,
                    page_count=total_pages(total, limit),
                    results=[staff_from_model(*row) for row in rows],
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing staff: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/",
    status_code=201,
    responses={
        "201": {"model": CreateStaffResponse},
        "400": {"model": BadRequestResponse},
        "409": {"model": ConflictResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def create_staff(
    request: CreateStaffRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, ADMIN_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        result = await peopleService.create_staff_member(
            db=db,
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            phone=request.phone,
            is_active=request.is_active,
            is_admin=request.is_admin,
        )
        return common_response(
            Created(
                data=CreateStaffResponse(
                    staff=staff_from_model(result.account),
                    email_sent=result.email_sent,
                    email_error=result.email_error,
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error creating staff member: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/{id}",
    responses={
        "200": {"model": StaffResponseItem},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_staff(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, ADMIN_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    staff_id = parse_uuid(id)
    if staff_id is None:
        return common_response(BadRequest(message="Invalid staff id"))
    try:
        staff = peopleService.get_staff_member(db=db, staff_id=staff_id)
        return common_response(Ok(data=staff_from_model(staff).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching staff member {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.put(
    "/{id}",
    responses={
        "200": {"model": StaffResponseItem},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def update_staff(
    id: str,
    request: UpdateStaffRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, ADMIN_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    staff_id = parse_uuid(id)
    if staff_id is None:
        return common_response(BadRequest(message="Invalid staff id"))
    try:
        staff = peopleService.update_staff_member(
            db=db,
            staff_id=staff_id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            phone=request.phone,
            is_active=request.is_active,
            notification_preference=request.notification_preference,
        )
        return common_response(Ok(data=staff_from_model(staff).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating staff member {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/{id}",
    responses={
        "200": {"model": StaffResponseItem},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def deactivate_staff(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, ADMIN_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    staff_id = parse_uuid(id)
    if staff_id is None:
        return common_response(BadRequest(message="Invalid staff id"))
    if staff_id == getattr(current_user.staff, "id", None):
        return common_response(BadRequest(message="You cannot deactivate yourself"))
    try:
        staff = peopleService.deactivate_staff_member(db=db, staff_id=staff_id)
        return common_response(Ok(data=staff_from_model(staff).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error deactivating staff member {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))

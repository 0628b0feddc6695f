from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import ServiceError
from core.helper import normalize_pagination, parse_uuid, total_pages
from core.log import logger
from core.responses import (
    BadRequest,
    Created,
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
from schemas.catalog import (
    AssignInterestRequest,
    AssignSkillRequest,
    AssignmentResponse,
    VolunteerInterestResponse,
    VolunteerSkillResponse,
    volunteer_interest_from_row,
    volunteer_skill_from_row,
)
from schemas.common import (
    BadRequestResponse,
    ConflictResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NoContentResponse,
    NotFoundResponse,
    UnauthorizedResponse,
    ValidationErrorResponse,
)
from schemas.hours import (
    HoursQuery,
    HoursResponse,
    HoursResponseItem,
    LogHoursRequest,
    hours_from_model,
)
from schemas.volunteer import (
    CreateVolunteerRequest,
    CreateVolunteerResponse,
    ResendCredentialsResponse,
    UpdateVolunteerRequest,
    VolunteerDetailResponse,
    VolunteerQuery,
    VolunteerResponse,
    volunteer_detail_from_profile,
    volunteer_from_model,
)
from services import assignments as assignmentService
from services import people as peopleService
from services import volunteer_hours as hoursService

router = APIRouter(prefix="/staff/volunteers", tags=["Staff Volunteers"])

AUTH_RESPONSES = {
    "401": {"model": UnauthorizedResponse},
    "403": {"model": ForbiddenResponse},
    "500": {"model": InternalServerErrorResponse},
}


@router.get("/", responses={"200": {"model": VolunteerResponse}, **AUTH_RESPONSES})
async def list_volunteers(
    query: VolunteerQuery = Depends(),
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    page, limit = normalize_pagination(query.page, query.limit)
    try:
        rows, total = peopleService.list_volunteers(
            db=db,
            page=page,
            limit=limit,
            search=query.search,
            volunteer_type=query.volunteer_type,
            is_alumni=query.is_alumni,
            email_verified=query.email_verified,
            is_active=query.is_active,
        )
        return common_response(
            Ok(
                data=VolunteerResponse(
                    page=page,
                    page_size=limit,
                    count=total,
                    page_count=total_pages(total, limit),
                    results=[
                        volunteer_from_model(volunteer, user, total_hours)
                        for volunteer, user, total_hours in rows
                    ],
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing volunteers: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/",
    status_code=201,
    responses={
        "201": {"model": CreateVolunteerResponse},
        "400": {"model": BadRequestResponse},
        "409": {"model": ConflictResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def create_volunteer(
    request: CreateVolunteerRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        result = await peopleService.create_volunteer(
            db=db,
            email=request.email,
            first_name=request.first_name,
            last_name=request.last_name,
            phone=request.phone,
            bio=request.bio,
            profile_picture=request.profile_picture,
            is_active=request.is_active,
            volunteer_type=request.volunteer_type,
            is_alumni=request.is_alumni,
            background_check_status=request.background_check_status,
            media_release=request.media_release,
            availability=request.availability,
            notification_preference=request.notification_preference,
        )
        return common_response(
            Created(
                data=CreateVolunteerResponse(
                    volunteer=volunteer_from_model(result.account),
                    email_sent=result.email_sent,
                    email_error=result.email_error,
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error creating volunteer: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/{id}",
    responses={
        "200": {"model": VolunteerDetailResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_volunteer(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    if volunteer_id is None:
        return common_response(BadRequest(message="Invalid volunteer id"))
    try:
        profile = peopleService.get_volunteer_profile(db=db, volunteer_id=volunteer_id)
        return common_response(
            Ok(data=volunteer_detail_from_profile(profile).model_dump())
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching volunteer {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.put(
    "/{id}",
    responses={
        "200": {"model": VolunteerDetailResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def update_volunteer(
    id: str,
    request: UpdateVolunteerRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    if volunteer_id is None:
        return common_response(BadRequest(message="Invalid volunteer id"))
    try:
        peopleService.update_volunteer_by_staff(
            db=db,
            volunteer_id=volunteer_id,
            user_values=request.user_values(),
            volunteer_values=request.volunteer_values(),
        )
        profile = peopleService.get_volunteer_profile(db=db, volunteer_id=volunteer_id)
        return common_response(
            Ok(data=volunteer_detail_from_profile(profile).model_dump())
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating volunteer {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/{id}/resend-credentials",
    responses={
        "200": {"model": ResendCredentialsResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def resend_credentials(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    if volunteer_id is None:
        return common_response(BadRequest(message="Invalid volunteer id"))
    try:
        email_error = await peopleService.resend_credentials(
            db=db, volunteer_id=volunteer_id
        )
        return common_response(
            Ok(
                data=ResendCredentialsResponse(
                    message="Credentials reset"
                    if email_error
                    else "Credentials reset and emailed",
                    email_sent=email_error is None,
                    email_error=email_error,
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error resending credentials to volunteer {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/{id}/hours",
    responses={
        "200": {"model": HoursResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def list_volunteer_hours(
    id: str,
    query: HoursQuery = Depends(),
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    if volunteer_id is None:
        return common_response(BadRequest(message="Invalid volunteer id"))
    try:
        rows, total_hours = hoursService.list_volunteer_hours(
            db=db,
            volunteer_id=volunteer_id,
            start_date=query.start_date,
            end_date=query.end_date,
            verified=query.verified,
        )
        return common_response(
            Ok(
                data=HoursResponse(
                    total_hours=total_hours,
                    results=[hours_from_model(*row) for row in rows],
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error listing hours of volunteer {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/{id}/hours",
    status_code=201,
    responses={
        "201": {"model": HoursResponseItem},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def log_volunteer_hours(
    id: str,
    request: LogHoursRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    opportunity_id = parse_uuid(request.opportunity_id)
    if volunteer_id is None or opportunity_id is None:
        return common_response(BadRequest(message="Invalid volunteer or opportunity id"))
    try:
        entry = hoursService.log_hours(
            db=db,
            volunteer_id=volunteer_id,
            opportunity_id=opportunity_id,
            date=request.date,
            hours=request.hours,
            notes=request.notes,
        )
        return common_response(Created(data=hours_from_model(entry).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error logging hours for volunteer {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/{id}/skills",
    responses={
        "200": {"model": VolunteerSkillResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def list_volunteer_skills(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    if volunteer_id is None:
        return common_response(BadRequest(message="Invalid volunteer id"))
    try:
        rows = assignmentService.list_volunteer_skills(db=db, volunteer_id=volunteer_id)
        return common_response(
            Ok(
                data=VolunteerSkillResponse(
                    results=[volunteer_skill_from_row(*row) for row in rows]
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error listing skills of volunteer {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/{id}/skills",
    responses={
        "200": {"model": AssignmentResponse},
        "201": {"model": AssignmentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def assign_volunteer_skill(
    id: str,
    request: AssignSkillRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    skill_id = parse_uuid(request.skill_id)
    if volunteer_id is None or skill_id is None:
        return common_response(BadRequest(message="Invalid volunteer or skill id"))
    try:
        outcome = assignmentService.assign_skill(
            db=db,
            volunteer_id=volunteer_id,
            skill_id=skill_id,
            level=request.proficiency_level,
        )
        if outcome == assignmentService.ASSIGNMENT_CREATED:
            return common_response(Created(data={"message": "Skill assigned"}))
        return common_response(Ok(data={"message": "Skill level updated"}))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error assigning skill to volunteer {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/{id}/skills/{skill_id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def remove_volunteer_skill(
    id: str,
    skill_id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    skill_uuid = parse_uuid(skill_id)
    if volunteer_id is None or skill_uuid is None:
        return common_response(BadRequest(message="Invalid volunteer or skill id"))
    try:
        assignmentService.remove_skill(
            db=db, volunteer_id=volunteer_id, skill_id=skill_uuid
        )
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error removing skill from volunteer {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/{id}/interests",
    responses={
        "200": {"model": VolunteerInterestResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def list_volunteer_interests(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    if volunteer_id is None:
        return common_response(BadRequest(message="Invalid volunteer id"))
    try:
        rows = assignmentService.list_volunteer_interests(
            db=db, volunteer_id=volunteer_id
        )
        return common_response(
            Ok(
                data=VolunteerInterestResponse(
                    results=[volunteer_interest_from_row(*row) for row in rows]
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error listing interests of volunteer {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/{id}/interests",
    status_code=201,
    responses={
        "201": {"model": AssignmentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def assign_volunteer_interest(
    id: str,
    request: AssignInterestRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    interest_id = parse_uuid(request.interest_id)
    if volunteer_id is None or interest_id is None:
        return common_response(BadRequest(message="Invalid volunteer or interest id"))
    try:
        assignmentService.assign_interest(
            db=db, volunteer_id=volunteer_id, interest_id=interest_id
        )
        return common_response(Created(data={"message": "Interest assigned"}))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error assigning interest to volunteer {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/{id}/interests/{interest_id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def remove_volunteer_interest(
    id: str,
    interest_id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    volunteer_id = parse_uuid(id)
    interest_uuid = parse_uuid(interest_id)
    if volunteer_id is None or interest_uuid is None:
        return common_response(BadRequest(message="Invalid volunteer or interest id"))
    try:
        assignmentService.remove_interest(
            db=db, volunteer_id=volunteer_id, interest_id=interest_uuid
        )
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error removing interest from volunteer {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))

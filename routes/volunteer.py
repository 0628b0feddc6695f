from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import ServiceError
from core.helper import parse_uuid
from core.log import logger
from core.responses import (
    BadRequest,
    Created,
    InternalServerError,
    NotFound,
    Ok,
    common_response,
    handle_authorization_status,
    handle_service_error,
)
from core.security import VOLUNTEER_ONLY, check_permissions, get_current_user
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
from schemas.dashboard import VolunteerDashboard
from schemas.onboarding import OnboardingStatus
from schemas.opportunity import (
    AttendeesResponse,
    MyRsvpResponse,
    OpportunityQuery,
    OpportunityResponse,
    OpportunityResponseItem,
    RsvpResponse,
    my_rsvp_from_row,
    opportunity_item_from_spots,
    rsvp_from_model,
)
from schemas.volunteer import (
    UpdateProfileRequest,
    VolunteerDetailResponse,
    volunteer_detail_from_profile,
)
from services import dashboard as dashboardService
from services import onboarding as onboardingService
from services import opportunities as opportunityService
from services import people as peopleService
from services import rsvp as rsvpService

router = APIRouter(prefix="/volunteer", tags=["Volunteer"])

AUTH_RESPONSES = {
    "401": {"model": UnauthorizedResponse},
    "403": {"model": ForbiddenResponse},
    "500": {"model": InternalServerErrorResponse},
}


@router.get(
    "/opportunities/",
    responses={"200": {"model": OpportunityResponse}, **AUTH_RESPONSES},
)
async def list_opportunities(
    query: OpportunityQuery = Depends(),
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        data, total = opportunityService.list_open_opportunities(
            db=db, limit=query.limit, offset=query.offset, search=query.search
        )
        return common_response(
            Ok(
                data=OpportunityResponse(
                    limit=query.limit,
                    offset=query.offset,
                    count=total,
                    results=[opportunity_item_from_spots(item) for item in data],
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing opportunities: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/opportunities/{id}",
    responses={
        "200": {"model": OpportunityResponseItem},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_opportunity(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    opportunity_id = parse_uuid(id)
    if opportunity_id is None:
        return common_response(BadRequest(message="Invalid opportunity id"))
    try:
        item = opportunityService.get_open_opportunity(db=db, id=opportunity_id)
        return common_response(Ok(data=opportunity_item_from_spots(item).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching opportunity {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/opportunities/{id}/attendees",
    responses={
        "200": {"model": AttendeesResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_opportunity_attendees(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    opportunity_id = parse_uuid(id)
    if opportunity_id is None:
        return common_response(BadRequest(message="Invalid opportunity id"))
    try:
        names = rsvpService.get_opportunity_attendees(db=db, opportunity_id=opportunity_id)
        return common_response(
            Ok(data=AttendeesResponse(count=len(names), results=names).model_dump())
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching attendees of {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/opportunities/{id}/rsvp",
    status_code=201,
    responses={
        "201": {"model": RsvpResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def create_rsvp(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    opportunity_id = parse_uuid(id)
    if opportunity_id is None:
        return common_response(BadRequest(message="Invalid opportunity id"))
    try:
        rsvp = rsvpService.create_rsvp(
            db=db, user_id=current_user.id, opportunity_id=opportunity_id
        )
        return common_response(Created(data=rsvp_from_model(rsvp).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error creating RSVP for {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/opportunities/{id}/rsvp",
    responses={
        "200": {"model": RsvpResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def cancel_rsvp(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    opportunity_id = parse_uuid(id)
    if opportunity_id is None:
        return common_response(BadRequest(message="Invalid opportunity id"))
    try:
        rsvpService.cancel_rsvp(
            db=db, user_id=current_user.id, opportunity_id=opportunity_id
        )
        return common_response(Ok(data={"message": "RSVP canceled"}))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error canceling RSVP for {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/rsvps/",
    responses={
        "200": {"model": MyRsvpResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def list_my_rsvps(
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        rows = rsvpService.get_volunteer_rsvps(db=db, user_id=current_user.id)
        return common_response(
            Ok(
                data=MyRsvpResponse(
                    results=[my_rsvp_from_row(*row) for row in rows]
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error listing RSVPs: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/onboarding/status/",
    responses={
        "200": {"model": OnboardingStatus},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_onboarding_status(
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        volunteer = peopleService.get_volunteer_for_user(db=db, user_id=current_user.id)
        status = onboardingService.get_onboarding_status(
            db=db, volunteer_id=volunteer.id
        )
        if status is None:
            return common_response(NotFound(message="Volunteer profile not found"))
        return common_response(Ok(data=status.model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching onboarding status: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/profile/",
    responses={
        "200": {"model": VolunteerDetailResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_profile(
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        volunteer = peopleService.get_volunteer_for_user(db=db, user_id=current_user.id)
        profile = peopleService.get_volunteer_profile(db=db, volunteer_id=volunteer.id)
        return common_response(
            Ok(data=volunteer_detail_from_profile(profile).model_dump())
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching volunteer profile: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.put(
    "/profile/",
    responses={
        "200": {"model": VolunteerDetailResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        volunteer = peopleService.get_volunteer_for_user(db=db, user_id=current_user.id)
        peopleService.update_volunteer_profile(
            db=db,
            volunteer_id=volunteer.id,
            phone=request.phone,
            bio=request.bio,
            availability=request.availability,
            notification_preference=request.notification_preference,
        )
        profile = peopleService.get_volunteer_profile(db=db, volunteer_id=volunteer.id)
        return common_response(
            Ok(data=volunteer_detail_from_profile(profile).model_dump())
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating volunteer profile: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/dashboard/",
    responses={
        "200": {"model": VolunteerDashboard},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_dashboard(
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, VOLUNTEER_ONLY)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        volunteer = peopleService.get_volunteer_for_user(db=db, user_id=current_user.id)
        dashboard = dashboardService.get_volunteer_dashboard(
            db=db, volunteer_id=volunteer.id
        )
        return common_response(Ok(data=dashboard.model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching volunteer dashboard: {e}")
        return common_response(InternalServerError(error=str(e)))

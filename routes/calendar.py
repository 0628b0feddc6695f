from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import ServiceError
from core.helper import format_datetime, parse_uuid
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
from schemas.calendar_event import (
    CalendarEventListResponse,
    CalendarEventQuery,
    CalendarEventResponse,
    CreateCalendarEventRequest,
    CreateCalendarEventResponse,
    EventRsvpResponse,
    EventRsvpResponseItem,
    UpdateCalendarEventRequest,
    UpdateRsvpStatusRequest,
    calendar_event_from_model,
)
from schemas.catalog import AssignmentResponse
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
from schemas.opportunity import RsvpResponse, rsvp_from_model
from services import assignments as assignmentService
from services import calendar_events as calendarService
from services import rsvp as rsvpService

router = APIRouter(prefix="/staff/calendar", tags=["Staff Calendar"])

AUTH_RESPONSES = {
    "401": {"model": UnauthorizedResponse},
    "403": {"model": ForbiddenResponse},
    "500": {"model": InternalServerErrorResponse},
}


@router.get(
    "/events/",
    responses={"200": {"model": CalendarEventListResponse}, **AUTH_RESPONSES},
)
async def list_events(
    query: CalendarEventQuery = Depends(),
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        events = calendarService.list_calendar_events(
            db=db, start=query.start, end=query.end
        )
        return common_response(
            Ok(
                data=CalendarEventListResponse(
                    results=[calendar_event_from_model(event) for event in events]
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing calendar events: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/events/",
    status_code=201,
    responses={
        "201": {"model": CreateCalendarEventResponse},
        "400": {"model": BadRequestResponse},
        "409": {"model": ConflictResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def create_event(
    request: CreateCalendarEventRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        events = calendarService.create_calendar_event(
            db=db,
            title=request.title,
            description=request.description,
            location=request.location,
            start_date=request.start_date,
            end_date=request.end_date,
            max_volunteers=request.max_volunteers,
            status=request.status,
            created_by_id=current_user.id,
            is_recurring=request.is_recurring,
            recurrence_pattern=request.recurrence_pattern,
        )
        return common_response(
            Created(
                data=CreateCalendarEventResponse(
                    count=len(events),
                    results=[calendar_event_from_model(event) for event in events],
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error creating calendar event: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.put(
    "/events/{id}",
    responses={
        "200": {"model": CalendarEventResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def update_event(
    id: str,
    request: UpdateCalendarEventRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    if event_id is None:
        return common_response(BadRequest(message="Invalid event id"))
    try:
        event = calendarService.update_calendar_event(
            db=db, id=event_id, values=request.model_dump(exclude_unset=True)
        )
        return common_response(Ok(data=calendar_event_from_model(event).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating calendar event {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/events/{id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def delete_event(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    if event_id is None:
        return common_response(BadRequest(message="Invalid event id"))
    try:
        calendarService.delete_calendar_event(db=db, id=event_id)
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error deleting calendar event {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/events/{id}/rsvps",
    responses={
        "200": {"model": EventRsvpResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def list_event_rsvps(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    if event_id is None:
        return common_response(BadRequest(message="Invalid event id"))
    try:
        rows = rsvpService.get_event_rsvps(db=db, event_id=event_id)
        return common_response(
            Ok(
                data=EventRsvpResponse(
                    results=[
                        EventRsvpResponseItem(
                            volunteer_id=str(rsvp.volunteer_id),
                            first_name=user.first_name,
                            last_name=user.last_name,
                            email=user.email,
                            status=rsvp.status,
                            rsvp_at=format_datetime(rsvp.rsvp_at),
                            notes=rsvp.notes,
                        )
                        for rsvp, user in rows
                    ]
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error listing RSVPs of event {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.put(
    "/events/{id}/rsvps/{volunteer_id}",
    responses={
        "200": {"model": RsvpResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def update_event_rsvp(
    id: str,
    volunteer_id: str,
    request: UpdateRsvpStatusRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    volunteer_uuid = parse_uuid(volunteer_id)
    if event_id is None or volunteer_uuid is None:
        return common_response(BadRequest(message="Invalid event or volunteer id"))
    try:
        rsvp = rsvpService.update_rsvp_status(
            db=db,
            event_id=event_id,
            volunteer_id=volunteer_uuid,
            status=request.status,
            notes=request.notes,
        )
        return common_response(Ok(data=rsvp_from_model(rsvp).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating RSVP of event {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/events/{id}/skills/{skill_id}",
    responses={
        "200": {"model": AssignmentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def add_event_skill(
    id: str,
    skill_id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    skill_uuid = parse_uuid(skill_id)
    if event_id is None or skill_uuid is None:
        return common_response(BadRequest(message="Invalid event or skill id"))
    try:
        assignmentService.add_event_skill(db=db, event_id=event_id, skill_id=skill_uuid)
        return common_response(Ok(data={"message": "Skill added to event"}))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error adding skill to event {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/events/{id}/skills/{skill_id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def remove_event_skill(
    id: str,
    skill_id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    skill_uuid = parse_uuid(skill_id)
    if event_id is None or skill_uuid is None:
        return common_response(BadRequest(message="Invalid event or skill id"))
    try:
        assignmentService.remove_event_skill(
            db=db, event_id=event_id, skill_id=skill_uuid
        )
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error removing skill from event {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/events/{id}/interests/{interest_id}",
    responses={
        "200": {"model": AssignmentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def add_event_interest(
    id: str,
    interest_id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    interest_uuid = parse_uuid(interest_id)
    if event_id is None or interest_uuid is None:
        return common_response(BadRequest(message="Invalid event or interest id"))
    try:
        assignmentService.add_event_interest(
            db=db, event_id=event_id, interest_id=interest_uuid
        )
        return common_response(Ok(data={"message": "Interest added to event"}))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error adding interest to event {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/events/{id}/interests/{interest_id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def remove_event_interest(
    id: str,
    interest_id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    event_id = parse_uuid(id)
    interest_uuid = parse_uuid(interest_id)
    if event_id is None or interest_uuid is None:
        return common_response(BadRequest(message="Invalid event or interest id"))
    try:
        assignmentService.remove_event_interest(
            db=db, event_id=event_id, interest_id=interest_uuid
        )
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error removing interest from event {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))

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
from core.security import STAFF_ROLES, check_permissions, get_current_user
from models import get_db_sync
from models.User import User
from schemas.auth import AuthorizationStatusEnum
from schemas.common import (
    BadRequestResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NotFoundResponse,
    PaginationQuery,
    UnauthorizedResponse,
    ValidationErrorResponse,
)
from schemas.communication import (
    CommunicationResponse,
    CommunicationResponseItem,
    CreateCommunicationRequest,
    CreateCommunicationResponse,
    communication_from_model,
)
from services import communications as communicationService

router = APIRouter(prefix="/staff/communications", tags=["Staff Communications"])

AUTH_RESPONSES = {
    "401": {"model": UnauthorizedResponse},
    "403": {"model": ForbiddenResponse},
    "500": {"model": InternalServerErrorResponse},
}


@router.get("/", responses={"200": {"model": CommunicationResponse}, **AUTH_RESPONSES})
async def list_communications(
    query: PaginationQuery = Depends(),
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    page, limit = normalize_pagination(query.page, query.limit)
    try:
        rows, total = communicationService.list_communications(
            db=db, page=page, limit=limit, search=query.search
        )
        return common_response(
            Ok(
                data=CommunicationResponse(
                    page=page,
                    page_size=limit,
                    count=total,
                    page_count=total_pages(total, limit),
                    results=[communication_from_model(*row) for row in rows],
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing communications: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/",
    status_code=201,
    responses={
        "201": {"model": CreateCommunicationResponse},
        "400": {"model": BadRequestResponse},
        "422": {"model": ValidationErrorResponse},
        **AUTH_RESPONSES,
    },
)
async def create_communication(
    request: CreateCommunicationRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        result = await communicationService.create_communication(
            db=db,
            sender=current_user,
            subject=request.subject,
            body=request.body,
            recipient_type=request.recipient_type,
        )
        return common_response(
            Created(
                data=CreateCommunicationResponse(
                    communication=communication_from_model(
                        result.communication, result.sender
                    ),
                    email_sent=result.email_sent,
                    email_error=result.email_error,
                ).model_dump()
            )
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error sending communication: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/{id}",
    responses={
        "200": {"model": CommunicationResponseItem},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_communication(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    communication_id = parse_uuid(id)
    if communication_id is None:
        return common_response(BadRequest(message="Invalid communication id"))
    try:
        communication, sender = communicationService.get_communication(
            db=db, id=communication_id
        )
        return common_response(
            Ok(data=communication_from_model(communication, sender).model_dump())
        )
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching communication {id}: {e}")
        return common_response(InternalServerError(error=str(e)))

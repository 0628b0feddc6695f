from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.exceptions import ServiceError
from core.helper import parse_uuid
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
    InterestListResponse,
    InterestRequest,
    InterestResponse,
    SkillListResponse,
    SkillRequest,
    SkillResponse,
    UpdateInterestRequest,
    UpdateSkillRequest,
    interest_from_model,
    skill_from_model,
)
from schemas.common import (
    BadRequestResponse,
    ConflictResponse,
    ForbiddenResponse,
    InternalServerErrorResponse,
    NoContentResponse,
    NotFoundResponse,
    UnauthorizedResponse,
)
from services import catalog as catalogService

router = APIRouter(prefix="/staff", tags=["Staff Catalog"])

AUTH_RESPONSES = {
    "401": {"model": UnauthorizedResponse},
    "403": {"model": ForbiddenResponse},
    "500": {"model": InternalServerErrorResponse},
}


@router.get("/skills/", responses={"200": {"model": SkillListResponse}, **AUTH_RESPONSES})
async def list_skills(
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        skills = catalogService.list_skills(db=db)
        return common_response(
            Ok(
                data=SkillListResponse(
                    results=[skill_from_model(skill) for skill in skills]
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing skills: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/skills/",
    status_code=201,
    responses={
        "201": {"model": SkillResponse},
        "400": {"model": BadRequestResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def create_skill(
    request: SkillRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        skill = catalogService.create_skill(
            db=db,
            name=request.name,
            description=request.description,
            category=request.category,
        )
        return common_response(Created(data=skill_from_model(skill).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error creating skill: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/skills/{id}",
    responses={
        "200": {"model": SkillResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_skill(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    skill_id = parse_uuid(id)
    if skill_id is None:
        return common_response(BadRequest(message="Invalid skill id"))
    try:
        skill = catalogService.get_skill(db=db, id=skill_id)
        return common_response(Ok(data=skill_from_model(skill).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching skill {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.put(
    "/skills/{id}",
    responses={
        "200": {"model": SkillResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def update_skill(
    id: str,
    request: UpdateSkillRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    skill_id = parse_uuid(id)
    if skill_id is None:
        return common_response(BadRequest(message="Invalid skill id"))
    try:
        skill = catalogService.update_skill(
            db=db,
            id=skill_id,
            name=request.name,
            description=request.description,
            category=request.category,
        )
        return common_response(Ok(data=skill_from_model(skill).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating skill {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/skills/{id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def delete_skill(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    skill_id = parse_uuid(id)
    if skill_id is None:
        return common_response(BadRequest(message="Invalid skill id"))
    try:
        catalogService.delete_skill(db=db, id=skill_id)
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error deleting skill {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/interests/", responses={"200": {"model": InterestListResponse}, **AUTH_RESPONSES}
)
async def list_interests(
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        interests = catalogService.list_interests(db=db)
        return common_response(
            Ok(
                data=InterestListResponse(
                    results=[interest_from_model(interest) for interest in interests]
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing interests: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.post(
    "/interests/",
    status_code=201,
    responses={
        "201": {"model": InterestResponse},
        "400": {"model": BadRequestResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def create_interest(
    request: InterestRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        interest = catalogService.create_interest(
            db=db, name=request.name, description=request.description
        )
        return common_response(Created(data=interest_from_model(interest).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error creating interest: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.get(
    "/interests/{id}",
    responses={
        "200": {"model": InterestResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        **AUTH_RESPONSES,
    },
)
async def get_interest(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    interest_id = parse_uuid(id)
    if interest_id is None:
        return common_response(BadRequest(message="Invalid interest id"))
    try:
        interest = catalogService.get_interest(db=db, id=interest_id)
        return common_response(Ok(data=interest_from_model(interest).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error fetching interest {id}: {e}")
        return common_response(InternalServerError(error=str(e)))


@router.put(
    "/interests/{id}",
    responses={
        "200": {"model": InterestResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def update_interest(
    id: str,
    request: UpdateInterestRequest,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    interest_id = parse_uuid(id)
    if interest_id is None:
        return common_response(BadRequest(message="Invalid interest id"))
    try:
        interest = catalogService.update_interest(
            db=db, id=interest_id, name=request.name, description=request.description
        )
        return common_response(Ok(data=interest_from_model(interest).model_dump()))
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error updating interest {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))


@router.delete(
    "/interests/{id}",
    responses={
        "204": {"model": NoContentResponse},
        "400": {"model": BadRequestResponse},
        "404": {"model": NotFoundResponse},
        "409": {"model": ConflictResponse},
        **AUTH_RESPONSES,
    },
)
async def delete_interest(
    id: str,
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    interest_id = parse_uuid(id)
    if interest_id is None:
        return common_response(BadRequest(message="Invalid interest id"))
    try:
        catalogService.delete_interest(db=db, id=interest_id)
        return common_response(NoContent())
    except ServiceError as e:
        return handle_service_error(e)
    except Exception as e:
        logger.error(f"Error deleting interest {id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))

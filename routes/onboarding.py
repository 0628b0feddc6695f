from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.helper import normalize_pagination, total_pages
from core.log import logger
from core.responses import (
    InternalServerError,
    Ok,
    common_response,
    handle_authorization_status,
)
from core.security import STAFF_ROLES, check_permissions, get_current_user
from models import get_db_sync
from models.User import User
from schemas.auth import AuthorizationStatusEnum
from schemas.common import (
    ForbiddenResponse,
    InternalServerErrorResponse,
    PaginationQuery,
    UnauthorizedResponse,
)
from schemas.onboarding import OnboardingResponse
from services import onboarding as onboardingService

router = APIRouter(prefix="/staff/onboarding", tags=["Staff Onboarding"])


@router.get(
    "/",
    responses={
        "200": {"model": OnboardingResponse},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def list_onboarding(
    query: PaginationQuery = Depends(),
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    page, limit = normalize_pagination(query.page, query.limit)
    try:
        data, total = onboardingService.list_volunteer_onboarding(
            db=db, page=page, limit=limit, search=query.search
        )
        return common_response(
            Ok(
                data=OnboardingResponse(
                    page=page,
                    page_size=limit,
                    count=total,
                    page_count=total_pages(total, limit),
                    results=data,
                ).model_dump()
            )
        )
    except Exception as e:
        logger.error(f"Error listing volunteer onboarding: {e}")
        return common_response(InternalServerError(error=str(e)))

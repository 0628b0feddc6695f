from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

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
    UnauthorizedResponse,
)
from schemas.dashboard import StaffDashboardStats
from services import dashboard as dashboardService

router = APIRouter(prefix="/staff/dashboard", tags=["Staff Dashboard"])


@router.get(
    "/stats/",
    responses={
        "200": {"model": StaffDashboardStats},
        "401": {"model": UnauthorizedResponse},
        "403": {"model": ForbiddenResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def get_stats(
    db: Session = Depends(get_db_sync),
    current_user: User | None = Depends(get_current_user),
):
    auth_status = check_permissions(current_user, STAFF_ROLES)
    if auth_status != AuthorizationStatusEnum.PASSED:
        return handle_authorization_status(auth_status)
    try:
        stats = dashboardService.get_staff_dashboard_stats(db=db)
        return common_response(Ok(data=stats.model_dump()))
    except Exception as e:
        logger.error(f"Error fetching dashboard stats: {e}")
        return common_response(InternalServerError(error=str(e)))

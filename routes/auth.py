from datetime import timedelta
from fastapi import APIRouter, Depends, Request
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from core.email import send_reset_password_email
from core.helper import as_utc, utc_now
from core.log import logger
from core.rate_limiter.decorator import rate_limit
from core.rate_limiter.factory import rate_limiter
from core.responses import (
    InternalServerError,
    common_response,
    Ok,
    BadRequest,
    Unauthorized,
)
from core.security import (
    generate_hash_password,
    generate_token_from_user,
    get_user_from_token,
    get_user_role,
    invalidate_token,
    invalidate_user_tokens,
    validated_password,
    oauth2_scheme,
)
from models import get_db_sync
from schemas.common import (
    BadRequestResponse,
    InternalServerErrorResponse,
    TooManyRequestsResponse,
    UnauthorizedResponse,
)
from schemas.auth import (
    ForgotPasswordRequest,
    ForgotPasswordSuccessResponse,
    LoginEmailRequest,
    LoginSuccessResponse,
    LogoutSuccessResponse,
    MeResponse,
    ResetPasswordRequest,
    ResetPasswordSuccessResponse,
)
from repository import user as userRepo
from repository import reset_password as resetPasswordRepo
from settings import (
    FORGOT_PASSWORD_RATE_LIMIT,
    FORGOT_PASSWORD_RATE_WINDOW,
    FRONTEND_BASE_URL,
    PASSWORD_RESET_EXPIRE_MINUTES,
)

router = APIRouter(prefix="/auth", tags=["Auth"])

FORGOT_PASSWORD_MESSAGE = (
    "If an account exists for that email, a password reset link has been sent"
)


@router.post("/token/")
async def swagger_form_token(
    form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db_sync)
):
    user = userRepo.get_user_by_email(db=db, email=form_data.username)
    if user is None:
        return common_response(BadRequest(message="Invalid Credentials"))

    if not user.is_active:
        return common_response(BadRequest(message="Invalid Credentials"))

    is_valid = validated_password(user.password, form_data.password)
    if not is_valid:
        return common_response(BadRequest(message="Invalid Credentials"))

    (token, refresh_token) = await generate_token_from_user(db=db, user=user)

    return {"access_token": token, "token_type": "bearer"}


@router.get(
    "/me/",
    responses={
        "200": {"model": MeResponse},
        "401": {"model": UnauthorizedResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def me(db: Session = Depends(get_db_sync), token: str = Depends(oauth2_scheme)):
    user = get_user_from_token(db=db, token=token)
    if user is None:
        return common_response(Unauthorized(message="Invalid Credentials"))

    return common_response(
        Ok(
            data=MeResponse(
                id=str(user.id),
                email=user.email,
                first_name=user.first_name,
                last_name=user.last_name,
                role=get_user_role(user),
            ).model_dump(mode="json")
        )
    )


@router.post(
    "/logout/",
    responses={
        "200": {"model": LogoutSuccessResponse},
        "401": {"model": UnauthorizedResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def logout(
    db: Session = Depends(get_db_sync), token: str = Depends(oauth2_scheme)
):
    user = get_user_from_token(db=db, token=token)
    if user is None:
        return common_response(Unauthorized(message="Invalid Credentials"))

    invalidate_token(db=db, token=token)
    return common_response(Ok(data={"message": "logout successfully"}))


@router.post(
    "/email/signin/",
    responses={
        "200": {"model": LoginSuccessResponse},
        "400": {"model": BadRequestResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def email_signin(request: LoginEmailRequest, db: Session = Depends(get_db_sync)):
    user = userRepo.get_user_by_email(db=db, email=request.email)
    if user is None:
        return common_response(BadRequest(message="Invalid Credentials"))

    if user.password is None:
        return common_response(BadRequest(message="Invalid Credentials"))

    if not user.is_active:
        return common_response(BadRequest(message="Invalid Credentials"))

    is_valid = validated_password(user.password, request.password)
    if not is_valid:
        return common_response(BadRequest(message="Invalid Credentials"))

    (token, refresh_token) = await generate_token_from_user(db=db, user=user)
    return common_response(
        Ok(
            data=LoginSuccessResponse(
                id=str(user.id),
                email=user.email,
                role=get_user_role(user),
                is_active=user.is_active,
                token=token,
                refresh_token=refresh_token,
            ).model_dump(mode="json")
        )
    )


@router.post(
    "/email/forgot-password/",
    responses={
        "200": {"model": ForgotPasswordSuccessResponse},
        "429": {"model": TooManyRequestsResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
@rate_limit(
    backend=rate_limiter,
    limit=FORGOT_PASSWORD_RATE_LIMIT,
    window=FORGOT_PASSWORD_RATE_WINDOW,
)
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    db: Session = Depends(get_db_sync),
):
    # same answer whether or not the email is registered
    user = userRepo.get_user_by_email(db=db, email=payload.email)
    if user is None or not user.is_active:
        return common_response(Ok(data={"message": FORGOT_PASSWORD_MESSAGE}))

    try:
        token = resetPasswordRepo.generate_token()
        expired_at = utc_now() + timedelta(minutes=PASSWORD_RESET_EXPIRE_MINUTES)
        resetPasswordRepo.upsert_reset_password(
            db=db, user=user, token=token, expired_at=expired_at
        )
    except Exception as e:
        logger.error(f"Failed to create reset token for {user.id}: {e}")
        db.rollback()
        return common_response(InternalServerError(error=str(e)))

    reset_link = f"{FRONTEND_BASE_URL}/auth/reset-password?token={token}"
    try:
        await send_reset_password_email(recipient=user.email, reset_link=reset_link)
    except Exception as e:
        logger.error(f"Failed to send reset password email to {user.email}: {e}")
    return common_response(Ok(data={"message": FORGOT_PASSWORD_MESSAGE}))


@router.post(
    "/email/reset-password/",
    responses={
        "200": {"model": ResetPasswordSuccessResponse},
        "400": {"model": BadRequestResponse},
        "500": {"model": InternalServerErrorResponse},
    },
)
async def reset_password(
    request: ResetPasswordRequest, db: Session = Depends(get_db_sync)
):
    reset_password = resetPasswordRepo.consume_reset_password(
        db=db, token=request.token
    )
    if reset_password is None:
        db.rollback()
        return common_response(BadRequest(message="Invalid or expired token"))

    if as_utc(reset_password.expired_at) <= utc_now():
        db.commit()
        return common_response(BadRequest(message="Invalid or expired token"))

    user = userRepo.get_user_by_id(db=db, id=reset_password.user_id)
    if user is None or not user.is_active:
        db.commit()
        return common_response(BadRequest(message="Invalid or expired token"))

    userRepo.set_user_password(
        db=db,
        user=user,
        password=generate_hash_password(request.new_password),
        is_commit=False,
    )
    invalidate_user_tokens(db=db, user=user, is_commit=False)
    db.commit()
    logger.info(f"Password reset for user {user.id}")
    return common_response(Ok(data={"message": "Password has been reset"}))

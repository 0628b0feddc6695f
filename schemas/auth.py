from enum import Enum
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthorizationStatusEnum(str, Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    PASSED = "passed"


class Role(str, Enum):
    VOLUNTEER = "volunteer"
    STAFF = "staff"
    ADMIN = "admin"


class LoginEmailRequest(BaseModel):
    email: str
    password: str


class LoginSuccessResponse(BaseModel):
    id: str
    email: str
    role: Optional[Role] = None
    is_active: bool
    token: str
    refresh_token: str


class MeResponse(BaseModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[Role] = None


class LogoutSuccessResponse(BaseModel):
    message: str


class ForgotPasswordRequest(BaseModel):
    email: EmailStr


class ForgotPasswordSuccessResponse(BaseModel):
    message: str


class ResetPasswordRequest(BaseModel):
    token: str = Field(min_length=1)
    new_password: str = Field(min_length=8)


class ResetPasswordSuccessResponse(BaseModel):
    message: str

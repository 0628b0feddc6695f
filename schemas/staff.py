from typing import List, Literal, Optional
from fastapi import Query
from pydantic import BaseModel, EmailStr, Field

from core.helper import format_datetime
from models.Staff import Staff


class StaffQuery(BaseModel):
    page: Optional[int] = Query(None, ge=1, description="Page Number")
    limit: Optional[int] = Query(None, ge=1, description="Page Size")
    search: Optional[str] = Query(None, description="Search by name or email")
    is_active: Optional[bool] = Query(None)
    email_verified: Optional[bool] = Query(None)
    role: Optional[Literal["staff", "admin"]] = Query(None)


class StaffResponseItem(BaseModel):
    id: str
    user_id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    is_active: bool
    is_email_verified: bool
    role: str
    notification_preference: str
    created_at: Optional[str] = None


class StaffResponse(BaseModel):
    page: int
    page_size: int
    count: int
    page_count: int
    results: List[StaffResponseItem]


class CreateStaffRequest(BaseModel):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = None
    is_active: bool = True
    is_admin: bool = False


class CreateStaffResponse(BaseModel):
    staff: StaffResponseItem
    email_sent: bool
    email_error: Optional[str] = None


class UpdateStaffRequest(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    is_active: Optional[bool] = None
    notification_preference: Optional[str] = None


def staff_from_model(staff: Staff, user=None, admin=None) -> StaffResponseItem:
    user = user if user is not None else staff.user
    if admin is None:
        admin = staff.admin
    return StaffResponseItem(
        id=str(staff.id),
        user_id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone,
        is_active=user.is_active,
        is_email_verified=user.is_email_verified,
        role="admin" if admin is not None else "staff",
        notification_preference=staff.notification_preference,
        created_at=format_datetime(user.created_at),
    )

from typing import List, Optional
from fastapi import Query
from pydantic import BaseModel, EmailStr, Field

from core.helper import format_datetime
from models.User import User
from models.Volunteer import (
    BACKGROUND_CHECK_NOT_REQUIRED,
    NOTIFICATION_EMAIL,
    Volunteer,
)
from schemas.catalog import (
    VolunteerInterestResponseItem,
    VolunteerSkillResponseItem,
    volunteer_interest_from_row,
    volunteer_skill_from_row,
)
from schemas.hours import HoursResponseItem, hours_from_model
from schemas.opportunity import MyRsvpResponseItem, my_rsvp_from_row
from validators.availability import Availability


class VolunteerQuery(BaseModel):
    page: Optional[int] = Query(None, ge=1, description="Page Number")
    limit: Optional[int] = Query(None, ge=1, description="Page Size")
    search: Optional[str] = Query(None, description="Search by name or email")
    volunteer_type: Optional[str] = Query(None, description="e.g. mentor, driver")
    is_alumni: Optional[bool] = Query(None)
    email_verified: Optional[bool] = Query(None)
    is_active: Optional[bool] = Query(None)


class UserInVolunteerResponse(BaseModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    is_active: bool
    is_email_verified: bool


class VolunteerResponseItem(BaseModel):
    id: str
    user: UserInVolunteerResponse
    volunteer_type: Optional[str] = None
    is_alumni: bool
    background_check_status: str
    media_release: bool
    availability: Optional[dict] = None
    notification_preference: str
    total_hours: float = 0
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class VolunteerResponse(BaseModel):
    page: int
    page_size: int
    count: int
    page_count: int
    results: List[VolunteerResponseItem]


class VolunteerDetailResponse(VolunteerResponseItem):
    skills: List[VolunteerSkillResponseItem] = []
    interests: List[VolunteerInterestResponseItem] = []
    recent_rsvps: List[MyRsvpResponseItem] = []
    hours_breakdown: List[HoursResponseItem] = []


class CreateVolunteerRequest(BaseModel):
    email: EmailStr
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    is_active: bool = True
    volunteer_type: Optional[str] = None
    is_alumni: bool = False
    background_check_status: str = BACKGROUND_CHECK_NOT_REQUIRED
    media_release: bool = False
    availability: Optional[Availability] = None
    notification_preference: str = NOTIFICATION_EMAIL


class CreateVolunteerResponse(BaseModel):
    volunteer: VolunteerResponseItem
    email_sent: bool
    email_error: Optional[str] = None


class UpdateVolunteerRequest(BaseModel):
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    phone: Optional[str] = None
    bio: Optional[str] = None
    profile_picture: Optional[str] = None
    is_active: Optional[bool] = None
    volunteer_type: Optional[str] = None
    is_alumni: Optional[bool] = None
    background_check_status: Optional[str] = None
    media_release: Optional[bool] = None
    availability: Optional[Availability] = None
    notification_preference: Optional[str] = None

    def user_values(self) -> dict:
        return self.model_dump(
            include={
                "email",
                "first_name",
                "last_name",
                "phone",
                "bio",
                "profile_picture",
                "is_active",
            },
            exclude_none=True,
        )

    def volunteer_values(self) -> dict:
        values = self.model_dump(
            include={
                "volunteer_type",
                "is_alumni",
                "background_check_status",
                "media_release",
                "notification_preference",
            },
            exclude_none=True,
        )
        if self.availability is not None:
            values["availability"] = self.availability
        return values


class UpdateProfileRequest(BaseModel):
    phone: Optional[str] = Field(None, max_length=50)
    bio: Optional[str] = None
    availability: Optional[Availability] = None
    notification_preference: Optional[str] = None


class ResendCredentialsResponse(BaseModel):
    message: str
    email_sent: bool
    email_error: Optional[str] = None


def user_in_volunteer_from_model(user: User) -> UserInVolunteerResponse:
    return UserInVolunteerResponse(
        id=str(user.id),
        email=user.email,
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone,
        bio=user.bio,
        profile_picture=user.profile_picture,
        is_active=user.is_active,
        is_email_verified=user.is_email_verified,
    )


def volunteer_from_model(
    volunteer: Volunteer, user: Optional[User] = None, total_hours: float = 0
) -> VolunteerResponseItem:
    user = user if user is not None else volunteer.user
    return VolunteerResponseItem(
        id=str(volunteer.id),
        user=user_in_volunteer_from_model(user),
        volunteer_type=volunteer.volunteer_type,
        is_alumni=volunteer.is_alumni,
        background_check_status=volunteer.background_check_status,
        media_release=volunteer.media_release,
        availability=volunteer.availability,
        notification_preference=volunteer.notification_preference,
        total_hours=float(total_hours or 0),
        created_at=format_datetime(volunteer.created_at),
        updated_at=format_datetime(volunteer.updated_at),
    )


def volunteer_detail_from_profile(profile) -> VolunteerDetailResponse:
    base = volunteer_from_model(profile.volunteer, total_hours=profile.total_hours)
    return VolunteerDetailResponse(
        **base.model_dump(),
        skills=[volunteer_skill_from_row(*row) for row in profile.skills],
        interests=[volunteer_interest_from_row(*row) for row in profile.interests],
        recent_rsvps=[my_rsvp_from_row(*row) for row in profile.recent_rsvps],
        hours_breakdown=[hours_from_model(*row) for row in profile.hours_breakdown],
    )

"""Volunteer and staff accounts managed by staff/admins."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.email import send_welcome_email
from core.exceptions import ConflictError, InvalidInputError, NotFoundError
from core.helper import generate_password
from core.log import logger
from core.security import generate_hash_password, invalidate_user_tokens
from models.Staff import Staff
from models.Volunteer import (
    BACKGROUND_CHECK_APPROVED,
    BACKGROUND_CHECK_NOT_REQUIRED,
    BACKGROUND_CHECK_STATUSES,
    NOTIFICATION_EMAIL,
    NOTIFICATION_PREFERENCES,
    Volunteer,
)
from repository.hours import get_hours_by_volunteer
from repository.interest import get_volunteer_interests
from repository.rsvp import get_recent_rsvps_by_volunteer
from repository.skill import get_volunteer_skills
from repository.staff import (
    create_staff,
    get_all_staff,
    get_staff_by_id,
    update_staff_data,
)
from repository.user import (
    create_user,
    get_user_by_email,
    set_user_password,
    update_user,
)
from repository.volunteer import (
    create_volunteer as insert_volunteer,
    get_all_volunteers,
    get_volunteer_by_id,
    get_volunteer_by_user_id,
    update_volunteer,
)
from schemas.auth import Role
from validators.availability import AvailabilityValidationError, validate_availability

EMAIL_EXISTS = "A user with this email already exists"
RECENT_RSVPS_LIMIT = 5
HOURS_BREAKDOWN_LIMIT = 10


@dataclass
class AccountCreated:
    """A new account and what happened to its welcome email"""

    account: Any
    email_sent: bool = False
    email_error: Optional[str] = None


@dataclass
class VolunteerProfile:
    volunteer: Volunteer
    total_hours: float
    skills: list = field(default_factory=list)
    interests: list = field(default_factory=list)
    recent_rsvps: list = field(default_factory=list)
    hours_breakdown: list = field(default_factory=list)


def check_choice(value: Optional[str], choices: tuple, label: str) -> None:
    if value is not None and value not in choices:
        raise InvalidInputError(f"Invalid {label}: {value}")


def clean_availability(availability: Any) -> Optional[dict]:
    try:
        return validate_availability(availability)
    except AvailabilityValidationError as e:
        raise InvalidInputError(f"Invalid availability: {e}")


def ensure_email_available(
    db: Session, email: str, user_id: Optional[uuid.UUID] = None
) -> None:
    existing = get_user_by_email(db=db, email=email)
    if existing is not None and existing.id != user_id:
        raise ConflictError(EMAIL_EXISTS)


async def deliver_welcome_email(
    email: str, name: str, password: str, role: Role
) -> Optional[str]:
    """Send credentials, a failure is logged and returned, never raised"""
    try:
        await send_welcome_email(
            recipient=email, name=name, password=password, role=role.value
        )
    except Exception as e:
        logger.error(f"Failed to send welcome email to {email}: {e}")
        return str(e)
    return None


async def create_volunteer(
    db: Session,
    email: str,
    first_name: str,
    last_name: str,
    phone: Optional[str] = None,
    bio: Optional[str] = None,
    profile_picture: Optional[str] = None,
    is_active: bool = True,
    volunteer_type: Optional[str] = None,
    is_alumni: bool = False,
    background_check_status: str = BACKGROUND_CHECK_NOT_REQUIRED,
    media_release: bool = False,
    availability: Any = None,
    notification_preference: str = NOTIFICATION_EMAIL,
) -> AccountCreated:
    """
    Create the user and volunteer rows with a generated password.

    Credentials are emailed only when the background check is approved or
    not required. A failed email doesn't undo the account.
    """
    check_choice(
        background_check_status, BACKGROUND_CHECK_STATUSES, "background check status"
    )
    check_choice(
        notification_preference, NOTIFICATION_PREFERENCES, "notification preference"
    )
    availability = clean_availability(availability)
    ensure_email_available(db=db, email=email)

    password = generate_password(12)
    try:
        user = create_user(
            db=db,
            email=email,
            password=generate_hash_password(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            bio=bio,
            is_active=is_active,
            is_email_verified=False,
            is_commit=False,
        )
        user.profile_picture = profile_picture
        volunteer = insert_volunteer(
            db=db,
            user=user,
            volunteer_type=volunteer_type,
            is_alumni=is_alumni,
            background_check_status=background_check_status,
            media_release=media_release,
            availability=availability,
            notification_preference=notification_preference,
            is_commit=False,
        )
        db.commit()
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(EMAIL_EXISTS)
    logger.info(f"Volunteer {volunteer.id} created for {user.email}")

    result = AccountCreated(account=volunteer)
    if background_check_status in (
        BACKGROUND_CHECK_APPROVED,
        BACKGROUND_CHECK_NOT_REQUIRED,
    ):
        result.email_error = await deliver_welcome_email(
            email=user.email, name=first_name, password=password, role=Role.VOLUNTEER
        )
        result.email_sent = result.email_error is None
    return result


def list_volunteers(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    volunteer_type: Optional[str] = None,
    is_alumni: Optional[bool] = None,
    email_verified: Optional[bool] = None,
    is_active: Optional[bool] = None,
):
    return get_all_volunteers(
        db=db,
        page=page,
        limit=limit,
        search=search.strip() if search else None,
        volunteer_type=volunteer_type,
        is_alumni=is_alumni,
        email_verified=email_verified,
        is_active=is_active,
    )


def get_volunteer(db: Session, volunteer_id: uuid.UUID) -> Volunteer:
    volunteer = get_volunteer_by_id(db=db, id=volunteer_id)
    if volunteer is None:
        raise NotFoundError("Volunteer not found")
    return volunteer


def get_volunteer_for_user(db: Session, user_id: uuid.UUID) -> Volunteer:
    volunteer = get_volunteer_by_user_id(db=db, user_id=user_id)
    if volunteer is None:
        raise NotFoundError("Volunteer profile not found")
    return volunteer


def get_volunteer_profile(db: Session, volunteer_id: uuid.UUID) -> VolunteerProfile:
    volunteer = get_volunteer(db=db, volunteer_id=volunteer_id)
    hours_rows, total_hours = get_hours_by_volunteer(db=db, volunteer_id=volunteer.id)
    # latest entries first
    hours_breakdown = list(reversed(hours_rows))[:HOURS_BREAKDOWN_LIMIT]
    return VolunteerProfile(
        volunteer=volunteer,
        total_hours=total_hours,
        skills=list(get_volunteer_skills(db=db, volunteer_id=volunteer.id)),
        interests=list(get_volunteer_interests(db=db, volunteer_id=volunteer.id)),
        recent_rsvps=list(
            get_recent_rsvps_by_volunteer(
                db=db, volunteer_id=volunteer.id, limit=RECENT_RSVPS_LIMIT
            )
        ),
        hours_breakdown=hours_breakdown,
    )


def update_volunteer_profile(
    db: Session,
    volunteer_id: uuid.UUID,
    phone: Optional[str] = None,
    bio: Optional[str] = None,
    availability: Any = None,
    notification_preference: Optional[str] = None,
) -> Volunteer:
    """Self-service fields only, both rows change in one commit"""
    check_choice(
        notification_preference, NOTIFICATION_PREFERENCES, "notification preference"
    )
    availability = clean_availability(availability)
    volunteer = get_volunteer(db=db, volunteer_id=volunteer_id)
    update_user(
        db=db,
        user=volunteer.user,
        values={"phone": phone, "bio": bio},
        is_commit=False,
    )
    update_volunteer(
        db=db,
        volunteer=volunteer,
        values={
            "availability": availability,
            "notification_preference": notification_preference,
        },
        is_commit=False,
    )
    db.commit()
    return volunteer


def update_volunteer_by_staff(
    db: Session, volunteer_id: uuid.UUID, user_values: dict, volunteer_values: dict
) -> Volunteer:
    volunteer = get_volunteer(db=db, volunteer_id=volunteer_id)
    check_choice(
        volunteer_values.get("background_check_status"),
        BACKGROUND_CHECK_STATUSES,
        "background check status",
    )
    check_choice(
        volunteer_values.get("notification_preference"),
        NOTIFICATION_PREFERENCES,
        "notification preference",
    )
    if "availability" in volunteer_values:
        volunteer_values["availability"] = clean_availability(
            volunteer_values["availability"]
        )
    if user_values.get("email"):
        ensure_email_available(
            db=db, email=user_values["email"], user_id=volunteer.user_id
        )
    try:
        update_user(db=db, user=volunteer.user, values=user_values, is_commit=False)
        update_volunteer(
            db=db, volunteer=volunteer, values=volunteer_values, is_commit=False
        )
        db.commit()
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(EMAIL_EXISTS)
    return volunteer


async def resend_credentials(db: Session, volunteer_id: uuid.UUID) -> Optional[str]:
    """
    Issue a fresh password and email it, existing sessions are revoked.
    Returns the email error, None when it was sent.
    """
    volunteer = get_volunteer(db=db, volunteer_id=volunteer_id)
    user = volunteer.user
    password = generate_password(12)
    set_user_password(
        db=db, user=user, password=generate_hash_password(password), is_commit=False
    )
    invalidate_user_tokens(db=db, user=user, is_commit=False)
    db.commit()
    return await deliver_welcome_email(
        email=user.email,
        name=user.first_name or user.email,
        password=password,
        role=Role.VOLUNTEER,
    )


async def create_staff_member(
    db: Session,
    email: str,
    first_name: str,
    last_name: str,
    phone: Optional[str] = None,
    is_active: bool = True,
    is_admin: bool = False,
) -> AccountCreated:
    ensure_email_available(db=db, email=email)
    password = generate_password(12)
    try:
        user = create_user(
            db=db,
            email=email,
            password=generate_hash_password(password),
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            is_active=is_active,
            is_commit=False,
        )
        staff = create_staff(db=db, user=user, is_admin=is_admin, is_commit=False)
        db.commit()
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(EMAIL_EXISTS)
    logger.info(f"Staff {staff.id} created for {user.email}")

    result = AccountCreated(account=staff)
    result.email_error = await deliver_welcome_email(
        email=user.email,
        name=first_name,
        password=password,
        role=Role.ADMIN if is_admin else Role.STAFF,
    )
    result.email_sent = result.email_error is None
    return result


def list_staff_members(
    db: Session,
    page: int,
    limit: int,
    search: Optional[str] = None,
    is_active: Optional[bool] = None,
    email_verified: Optional[bool] = None,
    role: Optional[str] = None,
):
    return get_all_staff(
        db=db,
        page=page,
        limit=limit,
        search=search.strip() if search else None,
        is_active=is_active,
        email_verified=email_verified,
        role=role,
    )


def get_staff_member(db: Session, staff_id: uuid.UUID) -> Staff:
    staff = get_staff_by_id(db=db, id=staff_id)
    if staff is None:
        raise NotFoundError("Staff member not found")
    return staff


def update_staff_member(
    db: Session,
    staff_id: uuid.UUID,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    is_active: Optional[bool] = None,
    notification_preference: Optional[str] = None,
) -> Staff:
    check_choice(
        notification_preference, NOTIFICATION_PREFERENCES, "notification preference"
    )
    staff = get_staff_member(db=db, staff_id=staff_id)
    if email:
        ensure_email_available(db=db, email=email, user_id=staff.user_id)
    try:
        update_user(
            db=db,
            user=staff.user,
            values={
                "first_name": first_name,
                "last_name": last_name,
                "email": email,
                "phone": phone,
                "is_active": is_active,
            },
            is_commit=False,
        )
        update_staff_data(
            db=db,
            staff=staff,
            values={"notification_preference": notification_preference},
            is_commit=False,
        )
        db.commit()
    except IntegrityError as e:
        logger.error(f"Integrity constraint violation: {e}")
        db.rollback()
        raise ConflictError(EMAIL_EXISTS)
    return staff


def deactivate_staff_member(db: Session, staff_id: uuid.UUID) -> Staff:
    """Soft delete, the rows stay and the user can no longer sign in"""
    staff = get_staff_member(db=db, staff_id=staff_id)
    update_user(db=db, user=staff.user, values={"is_active": False}, is_commit=False)
    invalidate_user_tokens(db=db, user=staff.user, is_commit=False)
    db.commit()
    logger.info(f"Staff {staff_id} deactivated")
    return staff

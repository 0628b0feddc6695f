import uuid
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.orm import Session

from core.email import send_bulk_email
from core.exceptions import InvalidInputError, NotFoundError
from core.log import logger
from core.security import get_user_role
from models.BulkCommunicationLog import (
    COMMUNICATION_FAILED,
    COMMUNICATION_SENT,
    RECIPIENT_BOTH,
    RECIPIENT_STAFF,
    RECIPIENT_TYPES,
    RECIPIENT_VOLUNTEERS,
    BulkCommunicationLog,
)
from models.User import User
from repository.communication import (
    get_all_communications,
    get_communication_by_id,
    insert_communication,
)
from repository.staff import get_active_staff_emails
from repository.volunteer import get_active_volunteer_emails
from schemas.auth import Role


@dataclass
class CommunicationSent:
    communication: BulkCommunicationLog
    sender: User
    recipient_count: int
    email_sent: bool
    email_error: Optional[str] = None


def list_communications(
    db: Session, page: int, limit: int, search: Optional[str] = None
):
    return get_all_communications(db=db, page=page, limit=limit, search=search)


def get_communication(db: Session, id: uuid.UUID):
    row = get_communication_by_id(db=db, id=id)
    if row is None:
        raise NotFoundError("Communication not found")
    return row


def get_recipient_emails(db: Session, recipient_type: str) -> list[str]:
    """Active recipients, an address shared by both groups appears once"""
    emails = []
    if recipient_type in (RECIPIENT_VOLUNTEERS, RECIPIENT_BOTH):
        emails.extend(get_active_volunteer_emails(db=db))
    if recipient_type in (RECIPIENT_STAFF, RECIPIENT_BOTH):
        emails.extend(get_active_staff_emails(db=db))
    return list(dict.fromkeys(emails))


async def create_communication(
    db: Session, sender: User, subject: str, body: str, recipient_type: str
) -> CommunicationSent:
    """
    Log a bulk message and email it to the chosen group.

    Staff may only write to volunteers, admins to anyone. Delivery problems
    are logged and reported on the result, the log row is kept either way.
    """
    if recipient_type not in RECIPIENT_TYPES:
        raise InvalidInputError(f"Invalid recipient type: {recipient_type}")
    if not subject or not subject.strip() or not body or not body.strip():
        raise InvalidInputError("Subject and body are required")
    if get_user_role(sender) != Role.ADMIN and recipient_type != RECIPIENT_VOLUNTEERS:
        raise InvalidInputError("Staff can only send communications to volunteers")

    recipients = get_recipient_emails(db=db, recipient_type=recipient_type)
    email_error = None
    if recipients:
        try:
            await send_bulk_email(recipients=recipients, subject=subject, body=body)
        except Exception as e:
            logger.error(f"Failed to send bulk email '{subject}': {e}")
            email_error = str(e)

    communication = insert_communication(
        db=db,
        sender_id=sender.id,
        subject=subject,
        body=body,
        recipient_type=recipient_type,
        status=COMMUNICATION_FAILED if email_error else COMMUNICATION_SENT,
        recipient_count=len(recipients),
    )
    logger.info(
        f"Communication {communication.id} sent to {len(recipients)} {recipient_type}"
    )
    return CommunicationSent(
        communication=communication,
        sender=sender,
        recipient_count=len(recipients),
        email_sent=bool(recipients) and email_error is None,
        email_error=email_error,
    )

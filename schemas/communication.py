from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from core.helper import format_datetime
from models.BulkCommunicationLog import BulkCommunicationLog


class CreateCommunicationRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    recipient_type: Literal["volunteers", "staff", "both"] = "volunteers"


class SenderInCommunicationResponse(BaseModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class CommunicationResponseItem(BaseModel):
    id: str
    subject: str
    body: str
    recipient_type: str
    recipient_count: int
    status: str
    sent_at: Optional[str] = None
    sender: Optional[SenderInCommunicationResponse] = None


class CommunicationResponse(BaseModel):
    page: int
    page_size: int
    count: int
    page_count: int
    results: List[CommunicationResponseItem]


class CreateCommunicationResponse(BaseModel):
    communication: CommunicationResponseItem
    email_sent: bool
    email_error: Optional[str] = None


def communication_from_model(
    communication: BulkCommunicationLog, sender=None
) -> CommunicationResponseItem:
    return CommunicationResponseItem(
        id=str(communication.id),
        subject=communication.subject,
        body=communication.body,
        recipient_type=communication.recipient_type,
        recipient_count=communication.recipient_count or 0,
        status=communication.status,
        sent_at=format_datetime(communication.sent_at),
        sender=SenderInCommunicationResponse(
            id=str(sender.id),
            email=sender.email,
            first_name=sender.first_name,
            last_name=sender.last_name,
        )
        if sender is not None
        else None,
    )

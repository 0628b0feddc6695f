from enum import Enum
from typing import Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Routes translate these into HTTP responses with
    `core.responses.handle_service_error`.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(ServiceError):
    pass


class ConflictError(ServiceError):
    pass


class InvalidInputError(ServiceError):
    pass


class RsvpErrorCode(str, Enum):
    VOLUNTEER_NOT_FOUND = "VOLUNTEER_NOT_FOUND"
    OPPORTUNITY_NOT_FOUND = "OPPORTUNITY_NOT_FOUND"
    OPPORTUNITY_NOT_OPEN = "OPPORTUNITY_NOT_OPEN"
    OPPORTUNITY_IN_PAST = "OPPORTUNITY_IN_PAST"
    ALREADY_RSVPD = "ALREADY_RSVPD"
    OPPORTUNITY_FULL = "OPPORTUNITY_FULL"
    RSVP_NOT_FOUND = "RSVP_NOT_FOUND"


RSVP_ERROR_MESSAGES = {
    RsvpErrorCode.VOLUNTEER_NOT_FOUND: "Volunteer profile not found",
    RsvpErrorCode.OPPORTUNITY_NOT_FOUND: "Opportunity not found",
    RsvpErrorCode.OPPORTUNITY_NOT_OPEN: "Opportunity is not open for RSVPs",
    RsvpErrorCode.OPPORTUNITY_IN_PAST: "Cannot RSVP to a past opportunity",
    RsvpErrorCode.ALREADY_RSVPD: "You have already RSVP'd to this opportunity",
    RsvpErrorCode.OPPORTUNITY_FULL: "This opportunity is full",
    RsvpErrorCode.RSVP_NOT_FOUND: "RSVP not found",
}


class RsvpError(ServiceError):
    def __init__(self, code: RsvpErrorCode, message: Optional[str] = None) -> None:
        super().__init__(message or RSVP_ERROR_MESSAGES[code])
        self.code = code

    @property
    def is_not_found(self) -> bool:
        return self.code in (
            RsvpErrorCode.VOLUNTEER_NOT_FOUND,
            RsvpErrorCode.OPPORTUNITY_NOT_FOUND,
            RsvpErrorCode.RSVP_NOT_FOUND,
        )

    @property
    def is_conflict(self) -> bool:
        return self.code in (
            RsvpErrorCode.ALREADY_RSVPD,
            RsvpErrorCode.OPPORTUNITY_FULL,
        )

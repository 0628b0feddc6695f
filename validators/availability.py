from enum import Enum
from typing import Any, Optional

from pydantic import RootModel, ValidationError, field_validator


class AvailabilityValidationError(Exception):
    pass


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


class TimeSlot(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class Availability(RootModel[dict[Weekday, list[TimeSlot]]]):
    """Weekly availability, e.g. {"monday": ["morning", "evening"]}"""

    @field_validator("root")
    @classmethod
    def dedupe_slots(cls, value: dict) -> dict:
        return {
            day: sorted(set(slots), key=list(TimeSlot).index)
            for day, slots in value.items()
        }

    def to_json(self) -> dict[str, list[str]]:
        return self.model_dump(mode="json")


def validate_availability(value: Any) -> Optional[dict[str, list[str]]]:
    """
    Check a raw availability value and return its stored form

    Raises:
        AvailabilityValidationError: unknown day, unknown slot or wrong shape
    """
    if value is None:
        return None
    if isinstance(value, Availability):
        return value.to_json()
    try:
        return Availability.model_validate(value).to_json()
    except ValidationError as e:
        raise AvailabilityValidationError(
            "; ".join(error["msg"] for error in e.errors())
        ) from e


def is_availability_set(value: Any) -> bool:
    """Set means not null and not the empty object, slot content is ignored"""
    if value is None:
        return False
    if isinstance(value, Availability):
        value = value.root
    if isinstance(value, dict):
        return len(value) > 0
    return value != "{}"

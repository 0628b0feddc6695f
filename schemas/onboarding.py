from typing import List, Optional

from pydantic import BaseModel


class OnboardingChecklist(BaseModel):
    profile_filled: bool
    availability_set: bool
    skills_added: bool
    interests_added: bool
    media_release_signed: bool


class OnboardingStatus(OnboardingChecklist):
    completion_percentage: int
    onboarding_complete: bool


class VolunteerOnboardingSummary(BaseModel):
    volunteer_id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    completion_percentage: int
    onboarding_complete: bool
    checklist: OnboardingChecklist


class OnboardingResponse(BaseModel):
    page: int
    page_size: int
    count: int
    page_count: int
    results: List[VolunteerOnboardingSummary]

from typing import List, Optional

from pydantic import BaseModel, Field

from core.helper import format_datetime
from models.Interest import Interest
from models.Skill import Skill
from models.VolunteerSkill import PROFICIENCY_BEGINNER


class SkillRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)


class UpdateSkillRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)


class SkillResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[str] = None


class SkillListResponse(BaseModel):
    results: List[SkillResponse]


class InterestRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None


class UpdateInterestRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None


class InterestResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[str] = None


class InterestListResponse(BaseModel):
    results: List[InterestResponse]


class AssignSkillRequest(BaseModel):
    skill_id: str
    proficiency_level: str = PROFICIENCY_BEGINNER


class AssignInterestRequest(BaseModel):
    interest_id: str


class VolunteerSkillResponseItem(BaseModel):
    skill_id: str
    name: str
    category: Optional[str] = None
    proficiency_level: str


class VolunteerSkillResponse(BaseModel):
    results: List[VolunteerSkillResponseItem]


class VolunteerInterestResponseItem(BaseModel):
    interest_id: str
    name: str


class VolunteerInterestResponse(BaseModel):
    results: List[VolunteerInterestResponseItem]


class AssignmentResponse(BaseModel):
    message: str


def skill_from_model(skill: Skill) -> SkillResponse:
    return SkillResponse(
        id=str(skill.id),
        name=skill.name,
        description=skill.description,
        category=skill.category,
        created_at=format_datetime(skill.created_at),
    )


def interest_from_model(interest: Interest) -> InterestResponse:
    return InterestResponse(
        id=str(interest.id),
        name=interest.name,
        description=interest.description,
        created_at=format_datetime(interest.created_at),
    )


def volunteer_skill_from_row(volunteer_skill, skill: Skill) -> VolunteerSkillResponseItem:
    return VolunteerSkillResponseItem(
        skill_id=str(skill.id),
        name=skill.name,
        category=skill.category,
        proficiency_level=volunteer_skill.proficiency_level,
    )


def volunteer_interest_from_row(_, interest: Interest) -> VolunteerInterestResponseItem:
    return VolunteerInterestResponseItem(interest_id=str(interest.id), name=interest.name)

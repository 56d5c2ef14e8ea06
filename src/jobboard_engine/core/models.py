"""Core data models for the job board engine."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from jobboard_engine.core.normalize import clean_terms, first_int, parse_salary_range


class JobStatus(str, Enum):
    """Lifecycle status of a job post."""
    PENDING = "PENDING"
    ACTIVE = "ACTIVE"
    ON_HOLD = "ON_HOLD"
    FULFILLED = "FULFILLED"


class Role(str, Enum):
    """Roles allowed to act on job posts."""
    ADMIN = "admin"
    EMPLOYER = "employer"


class JobAction(str, Enum):
    """Actions that can be requested against a job post."""
    CREATE = "create"
    EDIT = "edit"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"
    HOLD = "hold"
    FULFILL = "fulfill"
    REJECT = "reject"
    DELETE = "delete"
    CLONE = "clone"


class ProfileStatus(str, Enum):
    """Verification state of a candidate profile."""
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


_DISPLAY_STATUS = {
    JobStatus.PENDING: "pending",
    JobStatus.ACTIVE: "active",
    JobStatus.ON_HOLD: "onHold",
    JobStatus.FULFILLED: "fulfilled",
}


def display_status(status: Optional[JobStatus], deleted: bool = False) -> str:
    """View label for a post: deleted wins, unknown statuses read as pending."""
    if deleted:
        return "deleted"
    return _DISPLAY_STATUS.get(status, "pending")


class ExperienceEntry(BaseModel):
    """One line of a candidate's work history."""
    model_config = ConfigDict(frozen=True)

    company: str = Field("", description="Company name")
    position: str = Field("", description="Position held")
    duration: Union[str, int] = Field("", description="Duration, free text or years")

    @computed_field
    @property
    def duration_years(self) -> int:
        return first_int(self.duration)


class QualificationEntry(BaseModel):
    """One academic qualification."""
    model_config = ConfigDict(frozen=True)

    degree: str = Field("", description="Degree name as entered")


class JobPostDescriptor(BaseModel):
    """Snapshot of a job post as handed over by the entity store."""
    model_config = ConfigDict(frozen=True)

    id: Union[int, str] = Field(..., description="Job post identifier")
    title: str = Field("", description="Job title")
    employer_id: Optional[Union[int, str]] = Field(None, description="Owning employer")
    job_code: Optional[str] = Field(None, description="Human readable job code")
    status: JobStatus = Field(JobStatus.PENDING, description="Lifecycle status")
    deleted: bool = Field(False, description="Soft delete flag")
    skills: frozenset[str] = Field(default_factory=frozenset, description="Required skills")
    experience_required: str = Field("", description="Experience requirement, free text")
    salary_range: str = Field("", description="Salary range in lakhs, e.g. '12-18'")
    location: str = Field("", description="Job location")
    min_qualification: str = Field("", description="Minimum qualification")
    applications_count: int = Field(0, ge=0, description="Applications received")
    created_at: Optional[datetime] = Field(None, description="Creation time")

    @field_validator("skills", mode="before")
    @classmethod
    def _clean_skills(cls, value: Any) -> frozenset[str]:
        return clean_terms(value)

    @computed_field
    @property
    def on_hold(self) -> bool:
        return self.status == JobStatus.ON_HOLD

    @computed_field
    @property
    def display_status(self) -> str:
        return display_status(self.status, self.deleted)

    @property
    def required_years(self) -> int:
        return first_int(self.experience_required)

    @property
    def salary_bounds(self) -> Optional[Tuple[int, int]]:
        return parse_salary_range(self.salary_range)


class CandidateDescriptor(BaseModel):
    """Snapshot of a candidate profile as handed over by the entity store."""
    model_config = ConfigDict(frozen=True)

    id: Union[int, str] = Field(..., description="Candidate identifier")
    name: str = Field("", description="Candidate name")
    skills: frozenset[str] = Field(default_factory=frozenset, description="Candidate skills")
    experience: Tuple[ExperienceEntry, ...] = Field(default_factory=tuple, description="Work history")
    expected_salary: int = Field(0, ge=0, description="Expected annual salary, 0 if unspecified")
    address: str = Field("", description="Candidate address")
    qualifications: Tuple[QualificationEntry, ...] = Field(default_factory=tuple, description="Qualifications")
    profile_status: ProfileStatus = Field(ProfileStatus.PENDING, description="Verification state")
    deleted: bool = Field(False, description="Soft delete flag")

    @field_validator("skills", mode="before")
    @classmethod
    def _clean_skills(cls, value: Any) -> frozenset[str]:
        return clean_terms(value)

    @field_validator("expected_salary", mode="before")
    @classmethod
    def _default_salary(cls, value: Any) -> Any:
        return 0 if value is None else value

    @property
    def total_years(self) -> int:
        return sum(entry.duration_years for entry in self.experience)

    @property
    def is_verified(self) -> bool:
        return self.profile_status == ProfileStatus.VERIFIED


class MatchFactors(BaseModel):
    """The five sub-factor scores behind a match."""
    model_config = ConfigDict(frozen=True)

    skills_score: int = Field(..., ge=0, le=100)
    experience_score: int = Field(..., ge=0, le=100)
    salary_score: int = Field(..., ge=0, le=100)
    location_score: int = Field(..., ge=0, le=100)
    qualification_score: int = Field(..., ge=0, le=100)


class MatchResult(BaseModel):
    """Overall compatibility score with its breakdown."""
    model_config = ConfigDict(frozen=True)

    score: int = Field(..., ge=0, le=100, description="Weighted compatibility score")
    factors: MatchFactors = Field(..., description="Sub-factor scores")


class RankedCandidate(BaseModel):
    """A candidate paired with its match against one job."""
    model_config = ConfigDict(frozen=True)

    candidate: CandidateDescriptor
    match: MatchResult

    @property
    def score(self) -> int:
        return self.match.score


class RankedJob(BaseModel):
    """A job post paired with its match against one candidate."""
    model_config = ConfigDict(frozen=True)

    job: JobPostDescriptor
    match: MatchResult

    @property
    def score(self) -> int:
        return self.match.score


class TransitionRequest(BaseModel):
    """A role asking to perform an action on a job post in a given state."""
    model_config = ConfigDict(frozen=True)

    role: Role
    action: JobAction
    status: Optional[JobStatus] = Field(None, description="Current status, None when creating")
    deleted: bool = Field(False, description="Current soft delete flag")
    is_owner: bool = Field(True, description="Whether an employer owns the post")


class StatusWrite(BaseModel):
    """The status columns a caller persists after a committed transition."""
    model_config = ConfigDict(frozen=True)

    status: JobStatus
    on_hold: bool
    deleted: bool

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from connectwork.schemas.location import Coordinate


class _CaseInsensitiveEnum(str, Enum):
    @classmethod
    def _missing_(cls, value):
        """Allow case-insensitive lookup for values coming from the database or CLI."""
        if isinstance(value, str):
            value_lower = value.strip().lower()
            for member in cls:
                if member.value == value_lower:
                    return member
        return None


class JobStatus(_CaseInsensitiveEnum):
    """Lifecycle states of a job posting. Only OPEN jobs are searchable."""

    OPEN = "open"
    ASSIGNED = "assigned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    CLOSED = "closed"


class UrgencyLevel(_CaseInsensitiveEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    EMERGENCY = "emergency"


class Job(BaseModel):
    """A job posted by a customer, as fetched from the jobs table."""

    id: str = Field(description="Unique identifier for the job")
    title: str = Field(description="Job title")
    description: str = Field(default="", description="Free-text job description")
    service_id: str | None = Field(default=None, description="Service category of the job")
    customer_id: str | None = Field(default=None, description="Customer who posted the job")
    location: str | None = Field(default=None, description="Human-readable job location")
    coordinate: Coordinate | None = Field(
        default=None, description="Geocoded job location, if known"
    )
    budget_min: float = Field(ge=0, description="Lower end of the customer's budget")
    budget_max: float = Field(ge=0, description="Upper end of the customer's budget")
    urgency_level: UrgencyLevel = Field(
        default=UrgencyLevel.NORMAL, description="How soon the job must be done"
    )
    status: JobStatus = Field(default=JobStatus.OPEN, description="Current job status")
    required_skills: list[str] = Field(
        default_factory=list, description="Skills the customer asked for (may be empty)"
    )
    created_at: datetime = Field(description="When the job was posted")

    @field_validator("required_skills", mode="before")
    @classmethod
    def _null_skills_to_empty(cls, value):
        return [] if value is None else value

    @property
    def budget_midpoint(self) -> float:
        return (self.budget_min + self.budget_max) / 2

from pydantic import BaseModel, Field, field_validator

from connectwork.schemas.location import Coordinate


class WorkerService(BaseModel):
    """A service category a worker offers."""

    service_id: str = Field(description="Service category identifier")
    name: str = Field(description="Display name of the service")


class Worker(BaseModel):
    """A worker profile merged from the profiles, worker_profiles and skills tables."""

    id: str = Field(description="Unique identifier for the worker")
    full_name: str = Field(description="Worker's display name")
    profession: str | None = Field(default=None, description="Self-described profession")
    hourly_rate: float | None = Field(default=None, ge=0, description="Hourly rate, if set")
    rating: float | None = Field(
        default=None,
        ge=0,
        le=5,
        description="Average review rating on a 1-5 scale; None means not yet rated",
    )
    years_experience: float | None = Field(
        default=None, ge=0, description="Years of professional experience, if stated"
    )
    skills: list[str] = Field(default_factory=list, description="Free-text skills")
    services: list[WorkerService] = Field(
        default_factory=list, description="Service categories offered"
    )
    location: str | None = Field(default=None, description="Human-readable location")
    coordinate: Coordinate | None = Field(
        default=None, description="Geocoded worker location, if known"
    )

    @field_validator("skills", "services", mode="before")
    @classmethod
    def _null_to_empty(cls, value):
        return [] if value is None else value

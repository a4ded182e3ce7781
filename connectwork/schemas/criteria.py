from enum import Enum

from pydantic import BaseModel, Field

from connectwork.schemas.job import UrgencyLevel
from connectwork.schemas.location import Coordinate


class InvalidCriteria(ValueError):
    """Raised when search criteria are malformed or contradictory."""

    pass


class DatePosted(str, Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    ANY = "any"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class JobSortBy(str, Enum):
    DATE = "date"
    BUDGET = "budget"
    RELEVANCE = "relevance"


class WorkerSortBy(str, Enum):
    RELEVANCE = "relevance"
    RATING = "rating"
    RATE = "rate"


def _check_range(low: float | None, high: float | None, name: str) -> None:
    for label, value in ((f"min_{name}", low), (f"max_{name}", high)):
        if value is not None and value < 0:
            raise InvalidCriteria(f"{label} must not be negative (got {value})")
    if low is not None and high is not None and low > high:
        raise InvalidCriteria(f"min_{name} ({low}) is greater than max_{name} ({high})")


def _check_distance(max_distance_km: float | None) -> None:
    if max_distance_km is not None and max_distance_km < 0:
        raise InvalidCriteria(f"max_distance_km must not be negative (got {max_distance_km})")


class JobSearchCriteria(BaseModel):
    """Filters and sort options for searching job postings.

    Every field is optional; an empty criteria object matches every open job.
    """

    query: str | None = Field(default=None, description="Free text matched against title/description")
    service_ids: list[str] = Field(default_factory=list, description="Allowed service categories")
    location: str | None = Field(default=None, description="Location text to geocode")
    coordinates: Coordinate | None = Field(
        default=None, description="Explicit search origin (takes precedence over location)"
    )
    max_distance_km: float | None = Field(default=None, description="Geo-filter radius in km")
    min_budget: float | None = Field(default=None, description="Lowest acceptable budget")
    max_budget: float | None = Field(default=None, description="Highest acceptable budget")
    urgency: list[UrgencyLevel] = Field(default_factory=list, description="Allowed urgency levels")
    date_posted: DatePosted | None = Field(default=None, description="Posted-date window")
    required_skills: list[str] = Field(
        default_factory=list, description="Skills of the searching worker"
    )
    sort_by: JobSortBy | None = Field(default=None, description="Sort key (defaults to date)")
    sort_order: SortOrder | None = Field(default=None, description="Sort direction (defaults to desc)")

    def check(self) -> None:
        """Validate bounds.

        Raises:
            InvalidCriteria: If a bound is negative or min exceeds max.
        """
        _check_range(self.min_budget, self.max_budget, "budget")
        _check_distance(self.max_distance_km)


class WorkerSearchCriteria(BaseModel):
    """Filters and sort options for searching worker profiles."""

    query: str | None = Field(
        default=None, description="Free text matched against name, profession and services"
    )
    service_ids: list[str] = Field(default_factory=list, description="Allowed service categories")
    location: str | None = Field(default=None, description="Location text to geocode")
    coordinates: Coordinate | None = Field(
        default=None, description="Explicit search origin (takes precedence over location)"
    )
    max_distance_km: float | None = Field(
        default=None, description="Geo-filter radius in km (defaults to 50 when a location is given)"
    )
    min_rating: float | None = Field(default=None, description="Minimum average rating (0-5)")
    min_rate: float | None = Field(default=None, description="Minimum hourly rate")
    max_rate: float | None = Field(default=None, description="Maximum hourly rate")
    skills: list[str] = Field(default_factory=list, description="Skills the worker should have")
    sort_by: WorkerSortBy | None = Field(default=None, description="Sort key (defaults to relevance)")
    sort_order: SortOrder | None = Field(default=None, description="Sort direction (defaults to desc)")

    def check(self) -> None:
        """Validate bounds.

        Raises:
            InvalidCriteria: If a bound is out of range or min exceeds max.
        """
        _check_range(self.min_rate, self.max_rate, "rate")
        _check_distance(self.max_distance_km)
        if self.min_rating is not None and not 0 <= self.min_rating <= 5:
            raise InvalidCriteria(f"min_rating must be between 0 and 5 (got {self.min_rating})")

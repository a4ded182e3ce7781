from pydantic import BaseModel, Field

from connectwork.schemas.job import Job
from connectwork.schemas.worker import Worker


class RelevanceScore(BaseModel):
    """Composite relevance of a worker with its weighted components."""

    total: float = Field(description="Weighted sum of the component scores (0-1)")
    skill_match_score: float = Field(description="Share of required skills the worker covers (0-1)")
    experience_score: float = Field(description="Years of experience ramped to 0-1")
    rating_score: float = Field(description="Average rating mapped from 1-5 stars to 0-1")


class ScoredJob(BaseModel):
    """A job search result with the values derived for this search."""

    job: Job = Field(description="The matched job posting")
    distance_km: float | None = Field(
        default=None, description="Distance from the search origin, if a geo-filter ran"
    )
    skill_match_score: float | None = Field(
        default=None, description="How well the searcher's skills cover the job's requirements"
    )


class ScoredWorker(BaseModel):
    """A worker search result with the values derived for this search."""

    worker: Worker = Field(description="The matched worker profile")
    distance_km: float | None = Field(
        default=None, description="Distance from the search origin, if a geo-filter ran"
    )
    relevance: RelevanceScore = Field(description="Composite relevance against the requested skills")

    @property
    def skill_match_score(self) -> float:
        return self.relevance.skill_match_score

"""Skill overlap and composite relevance scoring."""

from typing import Protocol

from rapidfuzz import fuzz

from connectwork.config import (
    EXPERIENCE_CAP_YEARS,
    EXPERIENCE_WEIGHT,
    RATING_WEIGHT,
    SKILL_MATCH_THRESHOLD,
    SKILL_WEIGHT,
    UNRATED_RATING_SCORE,
)
from connectwork.schemas.match import RelevanceScore
from connectwork.schemas.worker import Worker


def normalize_skill(skill: str) -> str:
    return skill.strip().lower()


def normalize_skills(skills: list[str]) -> list[str]:
    """Normalize a skill list, dropping entries that are blank after trimming."""
    return [s for s in (normalize_skill(skill) for skill in skills) if s]


class SkillMatcher(Protocol):
    def matches(self, candidate_skill: str, required_skill: str) -> bool: ...


class ContainmentSkillMatcher:
    """Equal, or either skill contains the other.

    Deliberately loose: "plumb" matches "plumbing" and "painting" matches
    "car painting".
    """

    def matches(self, candidate_skill: str, required_skill: str) -> bool:
        return (
            candidate_skill == required_skill
            or required_skill in candidate_skill
            or candidate_skill in required_skill
        )


class FuzzySkillMatcher:
    """Whole-string fuzzy similarity, tolerant to typos but not to containment."""

    def __init__(self, threshold: int = SKILL_MATCH_THRESHOLD):
        self.threshold = threshold

    def matches(self, candidate_skill: str, required_skill: str) -> bool:
        return fuzz.ratio(candidate_skill, required_skill) >= self.threshold


DEFAULT_MATCHER: SkillMatcher = ContainmentSkillMatcher()


def skill_match_score(
    candidate_skills: list[str],
    required_skills: list[str],
    matcher: SkillMatcher = DEFAULT_MATCHER,
) -> float:
    """Share of required skills covered by the candidate's skills.

    Args:
        candidate_skills: Skills the candidate has.
        required_skills: Skills being asked for.
        matcher: Strategy deciding whether two normalized skills match.

    Returns:
        Score between 0 and 1. Nothing required counts as a perfect match.
    """
    required = normalize_skills(required_skills)
    if not required:
        return 1.0

    candidate = normalize_skills(candidate_skills)
    if not candidate:
        return 0.0

    matched = sum(
        1
        for required_skill in required
        if any(matcher.matches(skill, required_skill) for skill in candidate)
    )
    return matched / len(required)


def experience_score(years_experience: float | None) -> float:
    if years_experience is None or years_experience <= 0:
        return 0.0
    return min(years_experience / EXPERIENCE_CAP_YEARS, 1.0)


def rating_score(rating: float | None) -> float:
    """Map a 1-5 star rating onto 0-1. Unrated workers get UNRATED_RATING_SCORE."""
    if rating is None:
        return UNRATED_RATING_SCORE
    return max(0.0, min((rating - 1) / 4, 1.0))


def relevance_score(
    worker: Worker,
    required_skills: list[str],
    matcher: SkillMatcher = DEFAULT_MATCHER,
) -> RelevanceScore:
    """Compute the weighted relevance of a worker for a set of required skills.

    Args:
        worker: Worker profile to score.
        required_skills: Skills being asked for.
        matcher: Skill matching strategy.

    Returns:
        RelevanceScore with the total and each weighted component.
    """
    skills = skill_match_score(worker.skills, required_skills, matcher)
    experience = experience_score(worker.years_experience)
    rating = rating_score(worker.rating)

    total = (SKILL_WEIGHT * skills) + (EXPERIENCE_WEIGHT * experience) + (RATING_WEIGHT * rating)

    return RelevanceScore(
        total=total,
        skill_match_score=skills,
        experience_score=experience,
        rating_score=rating,
    )

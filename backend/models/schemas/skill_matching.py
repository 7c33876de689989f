"""Matching-layer outputs: overlap, gap analysis and recommendations."""

from typing import Literal

from pydantic import BaseModel

Priority = Literal["high", "medium", "low"]


class SkillMatchResult(BaseModel):
    matches: list[str] = []  # normalized user skills that hit a job skill
    score: float = 0.0


class SkillGap(BaseModel):
    """Matched and missing skills for one job.

    coverage_score = 0.7 * required coverage + 0.3 * nice-to-have coverage,
    where an empty list counts as fully covered.
    """
    missing_required: list[str] = []
    missing_nice_to_have: list[str] = []
    matched_required: list[str] = []
    matched_nice_to_have: list[str] = []
    coverage_score: float = 0.0


class SkillRecommendation(BaseModel):
    skill: str
    demand_count: int
    priority: Priority = "low"


class SimilarSkill(BaseModel):
    skill: str
    similarity: float = 0.0  # cosine similarity of embeddings


class SemanticSkillMatch(BaseModel):
    user_skill: str
    job_skill: str
    similarity: float

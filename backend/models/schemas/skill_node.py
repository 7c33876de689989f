"""Clustering output: positioned, categorized skill nodes."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

MatchType = Literal["exact", "similar", "partial", "none"]


class SkillNode(BaseModel):
    """A single skill produced by one clustering call.

    `weight` is a rendering hint only; it never feeds the clustering math.
    """
    model_config = ConfigDict(frozen=True)

    id: str  # e.g. "skill_0", unique within one clustering call
    label: str  # original skill string, unmodified
    category: str = ""
    weight: float = Field(default=1.0, gt=0)
    cluster_id: int = Field(default=0, ge=0)


class HighlightedSkillNode(SkillNode):
    """A SkillNode annotated with job-match metadata."""
    match_type: MatchType = "none"
    relevance_score: float = Field(default=0.0, ge=0.0, le=1.0)
    matched_jobs: list[str] = []  # job ids, first-seen order
    highlighted: bool = False


class SkillInput(BaseModel):
    """Raw skill with optional prominence hints used to derive a node weight."""
    skill: str
    frequency: int | None = None
    recency: datetime | None = None
    years_of_experience: float | None = None
    is_primary: bool = False


class Point3D(BaseModel):
    x: float
    y: float
    z: float

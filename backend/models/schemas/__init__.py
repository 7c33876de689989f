"""Pydantic contracts shared by the clustering engines and the matching layer."""

from models.schemas.job_requirement import JobRequirement, RankedJob
from models.schemas.skill_matching import (
    SemanticSkillMatch,
    SimilarSkill,
    SkillGap,
    SkillMatchResult,
    SkillRecommendation,
)
from models.schemas.skill_node import HighlightedSkillNode, Point3D, SkillInput, SkillNode

__all__ = [
    "HighlightedSkillNode",
    "JobRequirement",
    "Point3D",
    "RankedJob",
    "SemanticSkillMatch",
    "SimilarSkill",
    "SkillGap",
    "SkillInput",
    "SkillMatchResult",
    "SkillNode",
    "SkillRecommendation",
]

"""Skill-to-job matching: overlap, highlighting, gap analysis, ranking, recommendations.

Everything here is pure and synchronous except find_semantic_skill_matches,
which goes through the embedding provider.

Two skills match when, after trimming and lowercasing, they are equal or
one contains the other ("react" vs "react.js"). Blank strings never match.
"""

import logging
from collections import Counter

from config import settings
from models.schemas.job_requirement import JobRequirement, RankedJob
from models.schemas.skill_matching import (
    SemanticSkillMatch,
    SkillGap,
    SkillMatchResult,
    SkillRecommendation,
)
from models.schemas.skill_node import HighlightedSkillNode, MatchType, SkillNode
from services.embeddings import EmbeddingCache
from services.providers.base import EmbeddingProvider
from services.semantic_clustering import find_similar_skills

logger = logging.getLogger(__name__)

# Highlight relevance per match source
RELEVANCE_REQUIRED = 1.0
RELEVANCE_TOOL = 0.7
RELEVANCE_NICE_TO_HAVE = 0.5

# Coverage weighting: required skills dominate
REQUIRED_WEIGHT = 0.7
NICE_TO_HAVE_WEIGHT = 0.3

# Demand ratio thresholds for recommendation priority
HIGH_PRIORITY_RATIO = 0.7
MEDIUM_PRIORITY_RATIO = 0.4

SEMANTIC_TOP_K = 3


def normalize_skill(skill: str) -> str:
    return skill.strip().lower()


def skills_overlap(a: str, b: str) -> bool:
    """Substring-containment rule on already-normalized skills."""
    if not a or not b:
        return False
    return a == b or a in b or b in a


def _matches_any(skill: str, pool: list[str]) -> bool:
    return any(skills_overlap(skill, other) for other in pool)


def _normalize_all(skills: list[str]) -> list[str]:
    return [normalize_skill(s) for s in skills]


def calculate_skill_match(user_skills: list[str], job_skills: list[str]) -> SkillMatchResult:
    """Normalized user skills that hit any job skill; score = hits / len(job_skills)."""
    job_normalized = _normalize_all(job_skills)
    matches = [
        skill for skill in _normalize_all(user_skills)
        if _matches_any(skill, job_normalized)
    ]
    score = len(matches) / len(job_skills) if job_skills else 0.0
    return SkillMatchResult(matches=matches, score=score)


def _node_fields(node: SkillNode) -> dict:
    return node.model_dump(include=set(SkillNode.model_fields))


def _classify(label: str, required: list[str], tools: list[str], nice: list[str]) -> tuple[MatchType, float]:
    if _matches_any(label, required):
        return "exact", RELEVANCE_REQUIRED
    if _matches_any(label, tools):
        return "exact", RELEVANCE_TOOL
    if _matches_any(label, nice):
        return "partial", RELEVANCE_NICE_TO_HAVE
    return "none", 0.0


def highlight_skills_for_job(nodes: list[SkillNode], job: JobRequirement) -> list[HighlightedSkillNode]:
    """Annotate nodes with how they match one job. Input nodes are not modified.

    Precedence: required -> exact (1.0); tool -> exact (0.7);
    nice-to-have only -> partial (0.5); otherwise none (0).
    """
    required = _normalize_all(job.required_skills)
    tools = _normalize_all(job.tools)
    nice = _normalize_all(job.nice_to_have_skills)

    highlighted = []
    for node in nodes:
        match_type, score = _classify(normalize_skill(node.label), required, tools, nice)
        highlighted.append(HighlightedSkillNode(
            **_node_fields(node),
            match_type=match_type,
            relevance_score=score,
            matched_jobs=[job.id] if match_type != "none" else [],
            highlighted=match_type != "none",
        ))
    return highlighted


def highlight_skills_for_multiple_jobs(
    nodes: list[SkillNode],
    jobs: list[JobRequirement],
) -> list[HighlightedSkillNode]:
    """Best match per node across jobs, plus every job that scored it above 0."""
    per_job = [highlight_skills_for_job(nodes, job) for job in jobs]

    result = []
    for i, node in enumerate(nodes):
        match_type: MatchType = "none"
        best_score = 0.0
        matched_jobs: list[str] = []
        for highlighted in per_job:
            candidate = highlighted[i]
            if candidate.relevance_score <= 0:
                continue
            for job_id in candidate.matched_jobs:
                if job_id not in matched_jobs:
                    matched_jobs.append(job_id)
            if candidate.relevance_score > best_score:
                best_score = candidate.relevance_score
                match_type = candidate.match_type

        result.append(HighlightedSkillNode(
            **_node_fields(node),
            match_type=match_type,
            relevance_score=best_score,
            matched_jobs=matched_jobs,
            highlighted=best_score > 0,
        ))
    return result


def calculate_skill_gap(user_skills: list[str], job: JobRequirement) -> SkillGap:
    """Matched/missing required and nice-to-have skills plus weighted coverage (0-1)."""
    user_normalized = _normalize_all(user_skills)

    matched_required = [s for s in job.required_skills if _matches_any(normalize_skill(s), user_normalized)]
    missing_required = [s for s in job.required_skills if s not in matched_required]
    matched_nice = [s for s in job.nice_to_have_skills if _matches_any(normalize_skill(s), user_normalized)]
    missing_nice = [s for s in job.nice_to_have_skills if s not in matched_nice]

    required_coverage = len(matched_required) / len(job.required_skills) if job.required_skills else 1.0
    nice_coverage = len(matched_nice) / len(job.nice_to_have_skills) if job.nice_to_have_skills else 1.0

    return SkillGap(
        missing_required=missing_required,
        missing_nice_to_have=missing_nice,
        matched_required=matched_required,
        matched_nice_to_have=matched_nice,
        coverage_score=REQUIRED_WEIGHT * required_coverage + NICE_TO_HAVE_WEIGHT * nice_coverage,
    )


def rank_jobs_by_skill_match(user_skills: list[str], jobs: list[JobRequirement]) -> list[RankedJob]:
    """Jobs annotated with match and coverage scores, best coverage first (stable)."""
    ranked = []
    for job in jobs:
        match = calculate_skill_match(user_skills, job.required_skills + job.nice_to_have_skills)
        gap = calculate_skill_gap(user_skills, job)
        ranked.append(RankedJob(
            **job.model_dump(include=set(JobRequirement.model_fields)),
            match_score=match.score,
            coverage_score=gap.coverage_score,
        ))
    ranked.sort(key=lambda r: r.coverage_score, reverse=True)
    return ranked


def _priority(ratio: float) -> str:
    if ratio >= HIGH_PRIORITY_RATIO:
        return "high"
    if ratio >= MEDIUM_PRIORITY_RATIO:
        return "medium"
    return "low"


def get_recommended_skills(
    user_skills: list[str],
    target_jobs: list[JobRequirement],
    max_recommendations: int = 10,
) -> list[SkillRecommendation]:
    """Skills the user lacks, ordered by how many target jobs ask for them."""
    demand: Counter[str] = Counter()
    for job in target_jobs:
        # A job counts once per skill, however often it lists it
        mentioned = dict.fromkeys(_normalize_all(job.required_skills + job.nice_to_have_skills))
        demand.update(skill for skill in mentioned if skill)

    user_normalized = _normalize_all(user_skills)
    missing = [
        (skill, count) for skill, count in demand.items()
        if not _matches_any(skill, user_normalized)
    ]
    # sorted() is stable: equal demand keeps first-mentioned order
    missing = sorted(missing, key=lambda item: item[1], reverse=True)[:max(0, max_recommendations)]
    if not missing:
        return []

    max_demand = missing[0][1]
    return [
        SkillRecommendation(skill=skill, demand_count=count, priority=_priority(count / max_demand))
        for skill, count in missing
    ]


async def find_semantic_skill_matches(
    user_skills: list[str],
    job_skills: list[str],
    threshold: float | None = None,
    provider: EmbeddingProvider | None = None,
    cache: EmbeddingCache | None = None,
) -> list[SemanticSkillMatch]:
    """Top-3 embedding matches per job skill above threshold, most similar first.

    Raises ProviderError if embeddings cannot be obtained.
    """
    threshold = settings.semantic_match_threshold if threshold is None else threshold
    matches: list[SemanticSkillMatch] = []

    for job_skill in job_skills:
        similar = await find_similar_skills(
            job_skill, user_skills, top_k=SEMANTIC_TOP_K, provider=provider, cache=cache
        )
        matches.extend(
            SemanticSkillMatch(user_skill=s.skill, job_skill=job_skill, similarity=s.similarity)
            for s in similar
            if s.similarity >= threshold
        )

    matches.sort(key=lambda m: m.similarity, reverse=True)
    logger.info("Semantic matching: %d pairs above %.2f", len(matches), threshold)
    return matches

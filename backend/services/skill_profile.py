"""Skill preparation helpers: category detection, weight calculation, CV skill intake.

Weights are presentation hints (node size) and never feed clustering math.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as dtparser

from config import settings
from models.responses import ClusterMetadata
from models.schemas.skill_node import SkillInput, SkillNode

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Category detection: first table whose keyword appears inside the skill wins
# ---------------------------------------------------------------------------
CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "frontend": [
        "react", "vue", "angular", "html", "css", "javascript", "typescript",
        "jsx", "sass", "tailwind", "bootstrap", "webpack", "vite", "next.js", "nuxt",
    ],
    "backend": [
        "node.js", "express", "fastify", "nest.js", "django", "flask", "rails",
        "spring", "asp.net", "laravel", "php", "java", "python", "ruby", "go", "rust",
    ],
    "data": [
        "sql", "postgresql", "mysql", "mongodb", "redis", "elasticsearch",
        "cassandra", "dynamodb", "firebase", "prisma", "sequelize", "typeorm",
    ],
    "cloud": [
        "aws", "azure", "gcp", "docker", "kubernetes", "terraform", "ansible",
        "jenkins", "github actions", "gitlab ci", "circleci", "heroku", "vercel", "netlify",
    ],
    "mobile": [
        "react native", "flutter", "swift", "kotlin", "ios", "android",
        "xamarin", "ionic", "cordova",
    ],
    "design": [
        "figma", "sketch", "adobe xd", "photoshop", "illustrator",
        "ui/ux", "wireframing", "prototyping",
    ],
}
DEFAULT_CATEGORY = "default"

MIN_WEIGHT = 0.5
MAX_WEIGHT = 4.0
_DAYS_PER_MONTH = 30

_DATE_DEFAULT = datetime(2000, 1, 1)
_CURRENT_MARKERS = {"", "present", "current", "now", "ongoing"}

# Capitalised words ("Docker", "Node.js") and a few well-known frameworks
_TECH_WORD_PATTERN = re.compile(r"\b[A-Z][a-z]+(?:\.[a-z]+)?|\b(?:Node\.js|React|Vue|Angular)\b")


def detect_category(skill: str) -> str:
    """Auto-detect a skill category from keyword tables."""
    normalized = skill.lower().strip()
    for category, keywords in CATEGORY_KEYWORDS.items():
        if any(keyword in normalized for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def resolve_weight(weights: list[float] | None, index: int) -> float:
    """Caller-supplied weight at `index`, or the configured default."""
    if weights is not None and index < len(weights) and weights[index] > 0:
        return float(weights[index])
    return settings.default_skill_weight


def resolve_category(categories: list[str] | None, index: int) -> str:
    if categories is not None and index < len(categories) and categories[index]:
        return categories[index]
    return ""


def calculate_skill_weight(skill_input: SkillInput, now: datetime | None = None) -> float:
    """Combine frequency, recency, experience and primary-skill hints into a weight.

    Higher weight = larger node. Result is clamped to [0.5, 4.0].
    """
    weight = 1.0

    if skill_input.frequency:
        weight *= min(1 + skill_input.frequency / 10, 2)

    if skill_input.recency is not None:
        # Naive values are local time; compare both in UTC
        current = (now or datetime.now()).astimezone(timezone.utc)
        recency = skill_input.recency.astimezone(timezone.utc)
        months_since = (current - recency).total_seconds() / (86400 * _DAYS_PER_MONTH)
        weight *= max(0.5, 1.5 - months_since / 24)  # decays over two years

    if skill_input.years_of_experience:
        weight *= min(1 + skill_input.years_of_experience / 5, 3)

    if skill_input.is_primary:
        weight *= 1.5

    return max(MIN_WEIGHT, min(weight, MAX_WEIGHT))


def _parse_end_date(value: Any) -> datetime | None:
    """End date of an experience entry.

    Missing dates and "present"-style markers mean the role is current.
    Text that cannot be read as a date gives None (no recency hint).
    """
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or value.strip().lower() in _CURRENT_MARKERS:
        return datetime.now()
    try:
        # Missing day/month default to the 1st / January: "2019-05", "May 2019", "2019"
        return dtparser.parse(value.strip(), default=_DATE_DEFAULT)
    except (ValueError, OverflowError):
        logger.warning("Unparseable end_date %r, ignoring recency", value)
        return None


def extract_skills_from_cv(parsed_data: dict[str, Any]) -> list[SkillInput]:
    """Collect SkillInputs from a parsed CV record.

    Listed skills are primary. Capitalised terms in experience descriptions
    are counted; repeats raise the frequency of an existing entry.
    """
    skills: list[SkillInput] = []
    by_key: dict[str, SkillInput] = {}

    for skill in parsed_data.get("skills") or []:
        if not isinstance(skill, str):
            continue
        entry = SkillInput(skill=skill, frequency=1, is_primary=True)
        skills.append(entry)
        by_key.setdefault(skill.lower(), entry)

    for exp in parsed_data.get("experience") or []:
        if not isinstance(exp, dict):
            continue
        description = exp.get("description") or ""
        for word in _TECH_WORD_PATTERN.findall(description):
            existing = by_key.get(word.lower())
            if existing is not None:
                existing.frequency = (existing.frequency or 1) + 1
                continue
            entry = SkillInput(
                skill=word,
                frequency=1,
                recency=_parse_end_date(exp.get("end_date")),
            )
            skills.append(entry)
            by_key[word.lower()] = entry

    return skills


def prepare_skill_nodes(inputs: list[SkillInput]) -> list[SkillNode]:
    """Nodes with detected categories and computed weights, all in cluster 0."""
    return [
        SkillNode(
            id=f"skill_{i}",
            label=item.skill,
            category=detect_category(item.skill),
            weight=calculate_skill_weight(item),
            cluster_id=0,
        )
        for i, item in enumerate(inputs)
    ]


def cluster_by_category(
    skills: list[str],
    weights: list[float] | None = None,
) -> list[SkillNode]:
    """Fallback clustering: each distinct detected category gets the next cluster id."""
    cluster_for_category: dict[str, int] = {}
    nodes: list[SkillNode] = []
    for i, skill in enumerate(skills):
        category = detect_category(skill)
        cluster_id = cluster_for_category.setdefault(category, len(cluster_for_category))
        nodes.append(SkillNode(
            id=f"skill_{i}",
            label=skill,
            category=category,
            weight=resolve_weight(weights, i),
            cluster_id=cluster_id,
        ))
    return nodes


def summarize_nodes(nodes: list[SkillNode], method: str = "lexical") -> ClusterMetadata:
    """Totals, cluster count, distinct categories and mean weight."""
    if not nodes:
        return ClusterMetadata(method=method)

    categories = list(dict.fromkeys(node.category for node in nodes))
    return ClusterMetadata(
        total_skills=len(nodes),
        num_clusters=max(node.cluster_id for node in nodes) + 1,
        categories=categories,
        avg_weight=sum(node.weight for node in nodes) / len(nodes),
        method=method,
    )

"""Lexical skill clustering: TF-IDF over token unigrams + greedy cosine k-means.

No network and no randomness: centroids are seeded from the first k skill
vectors, so identical input always yields identical cluster assignments.
"""

import logging
import re
from dataclasses import dataclass

import numpy as np
from sklearn.feature_extraction.text import TfidfVectorizer

from config import settings
from models.schemas.skill_node import SkillNode
from services.skill_profile import resolve_category, resolve_weight
from services.vector_math import cosine_similarity_matrix, l2_normalize

logger = logging.getLogger(__name__)

# Runs of ASCII letters/digits after lowercasing; everything else separates tokens
TOKEN_PATTERN = r"[a-z0-9]+"
DEFAULT_NUM_CLUSTERS = 4


@dataclass
class SkillVectors:
    vocabulary: list[str]
    idf: np.ndarray  # one weight per vocabulary term
    vectors: np.ndarray  # (n_skills, n_terms), L2-normalized rows


def tokenize(skill: str) -> list[str]:
    """Lowercase and split on any run of non-alphanumeric characters."""
    return re.findall(TOKEN_PATTERN, skill.lower())


def vectorize_skills(skills: list[str]) -> SkillVectors:
    """Binary TF-IDF vectors with smoothed IDF: ln((N + 1) / (df + 1)) + 1.

    Skills that produce no tokens keep a zero vector.
    """
    vectorizer = TfidfVectorizer(
        lowercase=True,
        token_pattern=TOKEN_PATTERN,
        binary=True,
        use_idf=True,
        smooth_idf=True,
        norm="l2",
    )
    try:
        matrix = vectorizer.fit_transform(skills)
    except ValueError:
        # Empty vocabulary: no skill produced a single token
        logger.warning("No tokens found in %d skills; vectors are empty", len(skills))
        return SkillVectors(vocabulary=[], idf=np.zeros(0), vectors=np.zeros((len(skills), 0)))

    return SkillVectors(
        vocabulary=list(vectorizer.get_feature_names_out()),
        idf=np.asarray(vectorizer.idf_, dtype=float),
        vectors=matrix.toarray(),
    )


def simple_kmeans(vectors: np.ndarray, k: int, iterations: int = 20) -> list[int]:
    """Greedy k-means on cosine similarity with first-k seeding.

    Runs a fixed number of iterations (no convergence check). Ties go to the
    lowest centroid index; a centroid with no members keeps its position.
    """
    n = vectors.shape[0]
    if n == 0:
        return []
    k = max(1, min(k, n))
    if vectors.shape[1] == 0:
        return [0] * n

    centroids = vectors[:k].copy()
    assignments = np.zeros(n, dtype=int)

    for _ in range(iterations):
        # np.argmax returns the first maximum, i.e. lowest index on ties
        assignments = cosine_similarity_matrix(vectors, centroids).argmax(axis=1)

        for c in range(k):
            members = vectors[assignments == c]
            if len(members) == 0:
                continue
            centroids[c] = l2_normalize(members.sum(axis=0))

    return [int(a) for a in assignments]


def cluster_skills(
    skills: list[str],
    k: int = DEFAULT_NUM_CLUSTERS,
    weights: list[float] | None = None,
    categories: list[str] | None = None,
    iterations: int | None = None,
) -> list[SkillNode]:
    """Cluster raw skill strings into at most k lexical groups."""
    if not skills:
        return []

    k_safe = max(1, min(k, len(skills)))
    iterations = settings.lexical_iterations if iterations is None else iterations

    skill_vectors = vectorize_skills(skills)
    assignments = simple_kmeans(skill_vectors.vectors, k_safe, iterations=iterations)
    logger.info(
        "Lexical clustering: %d skills, %d terms, k=%d",
        len(skills),
        len(skill_vectors.vocabulary),
        k_safe,
    )

    return [
        SkillNode(
            id=f"skill_{i}",
            label=skill,
            category=resolve_category(categories, i),
            weight=resolve_weight(weights, i),
            cluster_id=assignments[i],
        )
        for i, skill in enumerate(skills)
    ]

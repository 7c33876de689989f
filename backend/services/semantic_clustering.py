"""Semantic skill clustering: provider embeddings + cosine k-means with k-means++ seeding.

Seeding is randomized, so assignments may differ between calls; only the
structural invariants (cardinality, cluster id bounds) are guaranteed.
"""

import logging
import math

import numpy as np

from config import settings
from models.schemas.skill_matching import SimilarSkill
from models.schemas.skill_node import SkillNode
from services.embeddings import EmbeddingCache, generate_skill_embeddings_with_cache
from services.providers.base import EmbeddingProvider, ProviderError
from services.skill_profile import resolve_category, resolve_weight
from services.vector_math import cosine_similarity, cosine_similarity_matrix, l2_normalize

logger = logging.getLogger(__name__)

MIN_DEFAULT_CLUSTERS = 3
MAX_DEFAULT_CLUSTERS = 8
SKILLS_PER_CLUSTER = 5


def default_cluster_count(num_skills: int) -> int:
    """max(3, min(8, ceil(n / 5)))."""
    return max(MIN_DEFAULT_CLUSTERS, min(MAX_DEFAULT_CLUSTERS, math.ceil(num_skills / SKILLS_PER_CLUSTER)))


def _as_matrix(embeddings) -> np.ndarray:
    """Stack embeddings into a 2-D float array, rejecting ragged or empty vectors."""
    lengths = {len(e) for e in embeddings}
    if len(lengths) != 1 or 0 in lengths:
        raise ProviderError(f"Inconsistent embedding dimensions: {sorted(lengths)}")
    return np.asarray(embeddings, dtype=float)


def kmeans_plus_plus_init(
    embeddings: np.ndarray,
    k: int,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Pick k spread-out initial centroids.

    The first is uniform; each next one is sampled with probability
    proportional to d(x) = min_c (1 - cos(x, c))^2.
    """
    rng = rng or np.random.default_rng()
    n = embeddings.shape[0]
    centroids = [embeddings[rng.integers(n)].copy()]

    while len(centroids) < k:
        distances = np.clip(1.0 - cosine_similarity_matrix(embeddings, np.array(centroids)), 0.0, None)
        weights = (distances ** 2).min(axis=1)
        total = weights.sum()
        if total <= 0:
            # Every point coincides with a centroid; any choice is equivalent
            idx = rng.integers(n)
        else:
            idx = rng.choice(n, p=weights / total)
        centroids.append(embeddings[idx].copy())

    return np.array(centroids)


def kmeans_with_embeddings(
    embeddings,
    k: int,
    max_iterations: int | None = None,
    rng: np.random.Generator | None = None,
) -> list[int]:
    """Cosine k-means over dense embeddings.

    If k >= n every point is its own cluster. Stops early once no
    assignment changes, otherwise after max_iterations.
    """
    n = len(embeddings)
    if n == 0:
        return []
    if k >= n:
        return list(range(n))

    max_iterations = settings.semantic_max_iterations if max_iterations is None else max_iterations
    matrix = _as_matrix(embeddings)
    centroids = kmeans_plus_plus_init(matrix, k, rng=rng)
    assignments = np.full(n, -1)

    for iteration in range(max(1, max_iterations)):
        new_assignments = cosine_similarity_matrix(matrix, centroids).argmax(axis=1)
        if np.array_equal(new_assignments, assignments):
            logger.debug("k-means converged after %d iterations", iteration)
            break
        assignments = new_assignments

        for c in range(k):
            members = matrix[assignments == c]
            if len(members) == 0:
                continue
            centroids[c] = l2_normalize(members.mean(axis=0))

    return [int(a) for a in assignments]


async def cluster_skills_by_semantics(
    skills: list[str],
    num_clusters: int | None = None,
    weights: list[float] | None = None,
    categories: list[str] | None = None,
    provider: EmbeddingProvider | None = None,
    cache: EmbeddingCache | None = None,
    rng: np.random.Generator | None = None,
) -> list[SkillNode]:
    """Cluster skills by embedding similarity. Raises ProviderError on provider failure."""
    if not skills:
        return []

    k = num_clusters if num_clusters and num_clusters > 0 else default_cluster_count(len(skills))

    logger.info("Generating embeddings for %d skills...", len(skills))
    embeddings = await generate_skill_embeddings_with_cache(skills, provider=provider, cache=cache)

    logger.info("Clustering into %d groups...", k)
    cluster_ids = kmeans_with_embeddings(embeddings, k, rng=rng)

    nodes = [
        SkillNode(
            id=f"skill_{i}",
            label=skill,
            category=resolve_category(categories, i),
            weight=resolve_weight(weights, i),
            cluster_id=cluster_ids[i],
        )
        for i, skill in enumerate(skills)
    ]
    logger.info("Clustered %d skills into %d semantic groups", len(skills), min(k, len(skills)))
    return nodes


async def find_similar_skills(
    target_skill: str,
    skill_pool: list[str],
    top_k: int = 5,
    provider: EmbeddingProvider | None = None,
    cache: EmbeddingCache | None = None,
) -> list[SimilarSkill]:
    """Rank pool skills by embedding similarity to target_skill, best first."""
    if not skill_pool or top_k <= 0:
        return []

    embeddings = await generate_skill_embeddings_with_cache(
        [target_skill, *skill_pool], provider=provider, cache=cache
    )
    target = embeddings[0]
    similarities = [
        SimilarSkill(skill=skill, similarity=cosine_similarity(target, embeddings[i + 1]))
        for i, skill in enumerate(skill_pool)
    ]
    similarities.sort(key=lambda s: s.similarity, reverse=True)
    return similarities[:top_k]

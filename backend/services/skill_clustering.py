"""Clustering orchestrator: wires an engine, the sphere layout and metadata together.

Flow:
    ClusterRequest
      ├─ method == "lexical"   → lexical_clustering.cluster_skills      (sync, no network)
      ├─ method == "semantic"  → semantic_clustering.cluster_skills_by_semantics (provider)
      └─ method == "category"  → skill_profile.cluster_by_category     (keyword tables)
                       ↓
         layout.fibonacci_sphere_points + skill_profile.summarize_nodes
                       ↓
         ClusterResponse
"""

import logging

from models.requests import ClusterRequest
from models.responses import ClusterResponse
from services import layout, lexical_clustering, semantic_clustering, skill_profile
from services.embeddings import EmbeddingCache
from services.providers.base import EmbeddingProvider

logger = logging.getLogger(__name__)


async def cluster_skill_set(
    request: ClusterRequest,
    provider: EmbeddingProvider | None = None,
    cache: EmbeddingCache | None = None,
) -> ClusterResponse:
    """Cluster the requested skills and return positioned nodes with metadata.

    ProviderError from the semantic engine propagates to the caller.
    """
    if request.method == "semantic":
        nodes = await semantic_clustering.cluster_skills_by_semantics(
            request.skills,
            num_clusters=request.num_clusters,
            weights=request.weights,
            categories=request.categories,
            provider=provider,
            cache=cache,
        )
    elif request.method == "category":
        nodes = skill_profile.cluster_by_category(request.skills, weights=request.weights)
    else:
        k = request.num_clusters if request.num_clusters is not None else lexical_clustering.DEFAULT_NUM_CLUSTERS
        nodes = lexical_clustering.cluster_skills(
            request.skills,
            k=k,
            weights=request.weights,
            categories=request.categories,
        )

    metadata = skill_profile.summarize_nodes(nodes, method=request.method)
    logger.info(
        "Clustered %d skills into %d groups (%s)",
        metadata.total_skills,
        metadata.num_clusters,
        request.method,
    )
    return ClusterResponse(
        nodes=nodes,
        positions=layout.fibonacci_sphere_points(len(nodes)),
        metadata=metadata,
    )

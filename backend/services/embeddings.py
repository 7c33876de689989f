"""Batched embedding retrieval with a process-wide, LRU-bounded cache.

Cache keys are lowercased skill strings. Batches are requested sequentially
and each successful batch is cached immediately, so a failure in a later
batch never discards embeddings that were already obtained.
"""

import logging
from collections import OrderedDict

from config import settings
from services.providers.base import EmbeddingProvider
from services.providers.registry import get_provider

logger = logging.getLogger(__name__)


class EmbeddingCache:
    """Mapping from lowercased skill string to its embedding vector.

    Single-process, read-your-writes. With max_size > 0 the least recently
    used entry is evicted once the bound is exceeded.
    """

    def __init__(self, max_size: int | None = None) -> None:
        self.max_size = settings.embedding_cache_max_size if max_size is None else max_size
        self._entries: OrderedDict[str, list[float]] = OrderedDict()

    @staticmethod
    def key(skill: str) -> str:
        return skill.lower()

    def get(self, skill: str) -> list[float] | None:
        key = self.key(skill)
        embedding = self._entries.get(key)
        if embedding is not None:
            self._entries.move_to_end(key)
        return embedding

    def set(self, skill: str, embedding: list[float]) -> None:
        key = self.key(skill)
        self._entries[key] = embedding
        self._entries.move_to_end(key)
        if self.max_size > 0:
            while len(self._entries) > self.max_size:
                self._entries.popitem(last=False)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, skill: str) -> bool:
        return self.key(skill) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


_default_cache: EmbeddingCache | None = None


def get_embedding_cache() -> EmbeddingCache:
    """Get the shared process-wide cache, creating it on first use."""
    global _default_cache
    if _default_cache is None:
        _default_cache = EmbeddingCache()
    return _default_cache


def clear_embedding_cache() -> None:
    get_embedding_cache().clear()


def _batches(items: list[str], batch_size: int) -> list[list[str]]:
    size = max(1, batch_size)
    return [items[i:i + size] for i in range(0, len(items), size)]


async def generate_skill_embeddings(
    skills: list[str],
    provider: EmbeddingProvider | None = None,
    batch_size: int | None = None,
) -> list[list[float]]:
    """Embed every skill, one provider request per batch, in input order."""
    if not skills:
        return []

    provider = provider or get_provider()
    batch_size = batch_size or settings.embedding_batch_size

    embeddings: list[list[float]] = []
    for batch in _batches(list(skills), batch_size):
        embeddings.extend(await provider.embed(batch))

    logger.info("Generated %d embeddings via %s", len(embeddings), provider.provider_name)
    return embeddings


async def generate_skill_embeddings_with_cache(
    skills: list[str],
    provider: EmbeddingProvider | None = None,
    cache: EmbeddingCache | None = None,
    batch_size: int | None = None,
) -> list[list[float]]:
    """Embed skills, requesting only cache misses (de-duplicated by cache key).

    Raises ProviderError from the provider; entries cached by earlier
    batches of the same call are kept.
    """
    if not skills:
        return []

    cache = cache if cache is not None else get_embedding_cache()
    batch_size = batch_size or settings.embedding_batch_size

    resolved: dict[str, list[float]] = {}
    misses: dict[str, str] = {}  # cache key -> first spelling seen
    for skill in skills:
        key = cache.key(skill)
        if key in resolved or key in misses:
            continue
        cached = cache.get(skill)
        if cached is not None:
            resolved[key] = cached
        else:
            misses[key] = skill

    if misses:
        provider = provider or get_provider()
        logger.info(
            "Embedding cache: %d hits, %d misses",
            len(resolved),
            len(misses),
        )
        for batch in _batches(list(misses.values()), batch_size):
            vectors = await provider.embed(batch)
            for skill, vector in zip(batch, vectors):
                cache.set(skill, vector)
                resolved[cache.key(skill)] = vector

    return [resolved[cache.key(skill)] for skill in skills]

"""Tests for the embedding cache and batched retrieval."""

import pytest

from services.embeddings import (
    EmbeddingCache,
    clear_embedding_cache,
    generate_skill_embeddings,
    generate_skill_embeddings_with_cache,
    get_embedding_cache,
)
from services.providers.base import ProviderError
from services.providers.registry import register_provider


class TestEmbeddingCache:
    def test_keys_are_lowercased(self):
        cache = EmbeddingCache(max_size=0)
        cache.set("React", [1.0, 0.0])
        assert cache.get("react") == [1.0, 0.0]
        assert cache.get("REACT") == [1.0, 0.0]
        assert "rEaCt" in cache
        assert len(cache) == 1

    def test_miss_returns_none(self):
        assert EmbeddingCache(max_size=0).get("python") is None

    def test_clear(self):
        cache = EmbeddingCache(max_size=0)
        cache.set("python", [0.1])
        cache.clear()
        assert len(cache) == 0
        assert cache.get("python") is None

    def test_lru_eviction(self):
        cache = EmbeddingCache(max_size=2)
        cache.set("a", [1.0])
        cache.set("b", [2.0])
        cache.get("a")  # "b" is now least recently used
        cache.set("c", [3.0])
        assert "a" in cache
        assert "b" not in cache
        assert "c" in cache

    def test_zero_max_size_is_unbounded(self):
        cache = EmbeddingCache(max_size=0)
        for i in range(50):
            cache.set(f"skill {i}", [float(i)])
        assert len(cache) == 50


class TestGenerateSkillEmbeddings:
    @pytest.mark.asyncio
    async def test_empty_input_makes_no_request(self, fake_provider):
        assert await generate_skill_embeddings([], provider=fake_provider) == []
        assert fake_provider.calls == []

    @pytest.mark.asyncio
    async def test_batches_preserve_order(self, fake_provider):
        skills = [f"skill {i}" for i in range(250)]
        embeddings = await generate_skill_embeddings(skills, provider=fake_provider, batch_size=100)
        assert [len(batch) for batch in fake_provider.calls] == [100, 100, 50]
        assert embeddings == [fake_provider.vector_for(s) for s in skills]

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self, failing_provider):
        with pytest.raises(ProviderError, match="rate limit"):
            await generate_skill_embeddings(["python"], provider=failing_provider(1))


class TestGenerateSkillEmbeddingsWithCache:
    @pytest.mark.asyncio
    async def test_second_call_is_cache_hit(self, fake_provider, cache):
        await generate_skill_embeddings_with_cache(["Python"], provider=fake_provider, cache=cache)
        await generate_skill_embeddings_with_cache(["Python"], provider=fake_provider, cache=cache)
        assert len(fake_provider.calls) == 1

    @pytest.mark.asyncio
    async def test_duplicate_keys_requested_once(self, fake_provider, cache):
        embeddings = await generate_skill_embeddings_with_cache(
            ["React", "react", "Vue"], provider=fake_provider, cache=cache
        )
        assert fake_provider.calls == [["React", "Vue"]]
        assert embeddings[0] == embeddings[1]
        assert embeddings[2] == fake_provider.vector_for("vue")

    @pytest.mark.asyncio
    async def test_order_matches_input_with_mixed_hits(self, fake_provider, cache):
        cache.set("docker", [9.0, 9.0, 9.0, 9.0])
        skills = ["React", "Docker", "Django"]
        embeddings = await generate_skill_embeddings_with_cache(skills, provider=fake_provider, cache=cache)
        assert embeddings == [
            fake_provider.vector_for("react"),
            [9.0, 9.0, 9.0, 9.0],
            fake_provider.vector_for("django"),
        ]
        assert fake_provider.calls == [["React", "Django"]]

    @pytest.mark.asyncio
    async def test_failed_batch_keeps_earlier_batches_cached(self, failing_provider, cache):
        provider = failing_provider(2)
        skills = ["react", "vue", "django", "flask", "docker"]
        with pytest.raises(ProviderError):
            await generate_skill_embeddings_with_cache(skills, provider=provider, cache=cache, batch_size=2)

        assert "react" in cache
        assert "vue" in cache
        assert "django" not in cache
        assert len(cache) == 2

    @pytest.mark.asyncio
    async def test_uses_process_wide_cache_and_registry_by_default(self, fake_provider):
        register_provider("gemini", fake_provider)
        await generate_skill_embeddings_with_cache(["Kubernetes"])
        assert "kubernetes" in get_embedding_cache()

        clear_embedding_cache()
        assert len(get_embedding_cache()) == 0

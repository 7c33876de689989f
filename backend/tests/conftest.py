"""Shared test configuration, pytest markers and an in-process embedding provider."""

import hashlib

import pytest

from services.embeddings import EmbeddingCache, clear_embedding_cache
from services.providers.base import EmbeddingProvider, ProviderError
from services.providers.registry import clear as clear_providers

# Hand-placed vectors: frontend on axis 0, backend on axis 1, cloud on axis 2
KNOWN_VECTORS: dict[str, list[float]] = {
    "react": [1.0, 0.02, 0.0, 0.0],
    "react.js": [0.98, 0.05, 0.0, 0.01],
    "vue": [0.95, 0.08, 0.02, 0.0],
    "angular": [0.97, 0.0, 0.05, 0.0],
    "django": [0.02, 1.0, 0.0, 0.0],
    "flask": [0.05, 0.97, 0.03, 0.0],
    "fastapi": [0.0, 0.96, 0.0, 0.08],
    "docker": [0.0, 0.03, 1.0, 0.0],
    "kubernetes": [0.04, 0.0, 0.98, 0.02],
    "terraform": [0.0, 0.06, 0.95, 0.05],
}


def _hashed_vector(text: str, dim: int = 4) -> list[float]:
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [(b / 255.0) * 2 - 1 for b in digest[:dim]]


class FakeEmbeddingProvider(EmbeddingProvider):
    """Deterministic provider that records every batch it is asked for."""

    provider_name = "fake"

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.calls: list[list[str]] = []
        self.fail_on_call = fail_on_call

    def load(self) -> None:
        pass

    @staticmethod
    def vector_for(text: str) -> list[float]:
        return list(KNOWN_VECTORS.get(text.lower(), _hashed_vector(text.lower())))

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.ensure_loaded()
        self.calls.append(list(texts))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise ProviderError("rate limit exceeded", provider=self.provider_name)
        return [self.vector_for(t) for t in texts]


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: talks to a real embedding provider (needs GEMINI_API_KEY)"
    )


@pytest.fixture(autouse=True)
def _reset_shared_state():
    """Clear the process-wide cache and provider registry around each test."""
    clear_embedding_cache()
    clear_providers()
    yield
    clear_embedding_cache()
    clear_providers()


@pytest.fixture
def fake_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider()


@pytest.fixture
def failing_provider():
    """Factory: provider that raises ProviderError on the given call number."""
    def _make(fail_on_call: int = 1) -> FakeEmbeddingProvider:
        return FakeEmbeddingProvider(fail_on_call=fail_on_call)
    return _make


@pytest.fixture
def cache() -> EmbeddingCache:
    return EmbeddingCache(max_size=0)

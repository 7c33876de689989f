"""Lazy-loading registry of embedding providers.

Global singleton per provider name, created on first use.
"""

import logging

from config import settings
from services.providers.base import EmbeddingProvider, ProviderError

logger = logging.getLogger(__name__)

_registry: dict[str, EmbeddingProvider] = {}


def _create_provider(name: str) -> EmbeddingProvider:
    """Factory: create a provider by name with deferred imports."""
    if name == "gemini":
        from services.providers.gemini import GeminiEmbeddingProvider
        return GeminiEmbeddingProvider()
    elif name == "local":
        from services.providers.sentence_transformer import SentenceTransformerProvider
        return SentenceTransformerProvider()
    else:
        raise ProviderError(f"Unknown embedding provider: {name}", provider=name)


def get_provider(name: str | None = None) -> EmbeddingProvider:
    """Get a provider by name (default: settings.embedding_provider)."""
    name = name or settings.embedding_provider
    if name not in _registry:
        _registry[name] = _create_provider(name)
    return _registry[name]


def register_provider(name: str, provider: EmbeddingProvider) -> None:
    """Install a provider instance under `name`, replacing any existing one."""
    logger.info("Registering embedding provider: %s", name)
    _registry[name] = provider


def clear() -> None:
    """Drop all provider instances. Useful for testing."""
    _registry.clear()

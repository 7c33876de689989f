"""Google Gemini embeddings wrapper with typed error propagation."""

import logging

from google import genai
from google.genai import types

from config import settings
from services.providers.base import EmbeddingProvider, ProviderError

logger = logging.getLogger(__name__)


class GeminiEmbeddingProvider(EmbeddingProvider):
    provider_name = "gemini"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: genai.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self.model = model or settings.embedding_model
        self._client = client

    def load(self) -> None:
        if self._client is not None:
            return
        api_key = self._api_key or settings.gemini_api_key
        if not api_key:
            logger.warning("No GEMINI_API_KEY set - semantic clustering disabled")
            raise ProviderError("Gemini API key not configured. Set GEMINI_API_KEY.", provider=self.provider_name)
        self._client = genai.Client(
            api_key=api_key,
            http_options=types.HttpOptions(timeout=settings.embedding_timeout_ms),
        )

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.ensure_loaded()
        try:
            response = await self._client.aio.models.embed_content(
                model=self.model,
                contents=list(texts),
                config=types.EmbedContentConfig(task_type="SEMANTIC_SIMILARITY"),
            )
        except Exception as e:
            logger.error("Gemini embedding error: %s", e)
            raise ProviderError(f"Failed to generate embeddings: {e}", provider=self.provider_name) from e

        vectors = [list(embedding.values or []) for embedding in response.embeddings or []]
        return self._check_batch(texts, vectors)

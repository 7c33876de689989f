"""On-device embeddings with Sentence Transformers (no API key, no network after download)."""

import asyncio
import logging

from config import settings
from services.providers.base import EmbeddingProvider, ProviderError

logger = logging.getLogger(__name__)


class SentenceTransformerProvider(EmbeddingProvider):
    provider_name = "local"

    def __init__(self, model_name: str | None = None) -> None:
        self.model_name = model_name or settings.local_embedding_model
        self._model = None

    def load(self) -> None:
        try:
            from sentence_transformers import SentenceTransformer

            self._model = SentenceTransformer(self.model_name)
            logger.info("Local embedding model loaded: %s", self.model_name)
        except Exception as e:
            logger.warning("Failed to load local embedding model: %s", e)
            raise ProviderError(
                f"Local embedding model {self.model_name} unavailable: {e}",
                provider=self.provider_name,
            ) from e

    async def embed(self, texts: list[str]) -> list[list[float]]:
        self.ensure_loaded()
        try:
            # CPU-bound; keep it off the event loop
            embeddings = await asyncio.to_thread(
                self._model.encode, list(texts), convert_to_numpy=True
            )
        except Exception as e:
            logger.error("Local embedding failed: %s", e)
            raise ProviderError(f"Failed to generate embeddings: {e}", provider=self.provider_name) from e

        return self._check_batch(texts, [emb.tolist() for emb in embeddings])

"""Abstract base class for embedding providers."""

from abc import ABC, abstractmethod
import logging

logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """An embedding provider could not return vectors.

    Carries the provider's own message. Never retried inside this package;
    the caller decides what to do.
    """

    def __init__(self, message: str, provider: str = "") -> None:
        super().__init__(message)
        self.provider = provider


class EmbeddingProvider(ABC):
    """Base class for services that turn strings into dense vectors.

    Subclasses must implement:
        - provider_name: identifier used in the provider registry
        - load(): create clients / load model weights
        - embed(texts): return one vector per text, in input order
    """

    provider_name: str = ""
    _loaded: bool = False

    @abstractmethod
    def load(self) -> None:
        """Prepare the provider. Raises ProviderError when unusable."""

    @abstractmethod
    async def embed(self, texts: list[str]) -> list[list[float]]:
        """Embed one batch of texts. Raises ProviderError on any failure."""

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def ensure_loaded(self) -> None:
        """Load provider if not already loaded."""
        if not self._loaded:
            logger.info("Loading embedding provider: %s", self.provider_name)
            self.load()
            self._loaded = True
            logger.info("Embedding provider ready: %s", self.provider_name)

    def _check_batch(self, texts: list[str], vectors: list[list[float]]) -> list[list[float]]:
        """Reject responses that would break cosine math downstream."""
        if len(vectors) != len(texts):
            raise ProviderError(
                f"{self.provider_name} returned {len(vectors)} embeddings for {len(texts)} inputs",
                provider=self.provider_name,
            )
        if any(not vector for vector in vectors):
            raise ProviderError(
                f"{self.provider_name} returned an empty embedding",
                provider=self.provider_name,
            )
        return vectors

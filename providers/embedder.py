"""
Embedding generators for the active AI provider.

Wraps the Ollama and OpenAI Python clients behind one small interface so
the chunkers and the vector store never branch on the provider.

Design:
- embed() for a single text, embed_batch() for ingestion batches
- dimensions is learnt from the first response (the vector store compares
  it against the provisioned collection)
- Transport failures surface as ConnectionError, API failures as RuntimeError
- No ChromaDB dependency, pure embedding logic

Usage:
    from providers.embedder import OllamaEmbedder

    embedder = OllamaEmbedder(model="all-minilm")
    vector = embedder.embed("def main(): ...")
    vectors = embedder.embed_batch(["Text 1", "Text 2"])
"""

from typing import Optional

import ollama
import openai

from shared.logging_config import get_logger

from .config import SourceChatConfig
from .resolver import ProviderKind, resolve_profile

logger = get_logger(__name__)


class Embedder:
    """Interface for text embedding generators."""

    model: str = ""

    def __init__(self) -> None:
        self._dimensions: Optional[int] = None

    @property
    def dimensions(self) -> Optional[int]:
        """Return the embedding dimensions (available after first embed call)."""
        return self._dimensions

    def embed(self, text: str) -> list[float]:
        if not text or not text.strip():
            raise ValueError("Cannot embed empty text")
        return self.embed_batch([text])[0]

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """
        Generate embeddings for multiple texts.

        Empty texts are skipped and get an empty vector at their position.
        """
        if not texts:
            return []

        non_empty: list[tuple[int, str]] = [
            (i, t) for i, t in enumerate(texts) if t and t.strip()
        ]
        if not non_empty:
            return []

        embeddings = self._embed_many([t for _, t in non_empty])
        if embeddings:
            self._dimensions = len(embeddings[0])

        result: list[list[float]] = [[] for _ in texts]
        for (orig_idx, _), embedding in zip(non_empty, embeddings):
            result[orig_idx] = list(embedding)
        return result

    def _embed_many(self, texts: list[str]) -> list[list[float]]:
        raise NotImplementedError

    def health_check(self) -> dict[str, bool | str]:
        """Embed a short text; healthy when the provider answers."""
        result: dict[str, bool | str] = {"healthy": False, "model": self.model, "error": ""}
        try:
            self.embed("health check")
            result["healthy"] = True
        except (ConnectionError, RuntimeError) as e:
            result["error"] = str(e)
        return result


class OllamaEmbedder(Embedder):
    """
    Generates text embeddings using a local Ollama model.
    """

    def __init__(
        self,
        model: str = "all-minilm",
        base_url: str = "http://localhost:11434",
    ):
        super().__init__()
        self.model = model
        self.base_url = base_url
        self._client = ollama.Client(host=base_url)

    def _embed_many(self, texts: list[str]) -> list[list[float]]:
        try:
            response = self._client.embed(model=self.model, input=texts)
            return response["embeddings"]
        except ollama.ResponseError as e:
            raise RuntimeError(
                f"Ollama embedding failed for model '{self.model}': {e}"
            ) from e
        except Exception as e:
            if "Connection" in type(e).__name__ or "refused" in str(e).lower():
                raise ConnectionError(
                    f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve"
                ) from e
            raise RuntimeError(f"Embedding generation failed: {e}") from e

    def health_check(self) -> dict[str, bool | str]:
        """
        Check if Ollama is running and the embedding model is available.

        Returns:
            Dict with 'healthy' (bool), 'ollama_running' (bool),
            'model_available' (bool), and 'error' (str, if any).
        """
        result = {
            "healthy": False,
            "ollama_running": False,
            "model_available": False,
            "model": self.model,
            "error": "",
        }

        try:
            models = self._client.list()
            result["ollama_running"] = True

            model_names = [m.model for m in models.models]
            # "all-minilm" matches "all-minilm:latest"
            result["model_available"] = any(
                m.startswith(self.model) for m in model_names
            )

            if not result["model_available"]:
                result["error"] = (
                    f"Model '{self.model}' not found. "
                    f"Available: {model_names}. "
                    f"Pull it with: ollama pull {self.model}"
                )
            else:
                result["healthy"] = True

        except Exception as e:
            result["error"] = f"Cannot connect to Ollama: {e}"

        return result


class OpenAIEmbedder(Embedder):
    """
    Generates embeddings through the OpenAI (or Azure OpenAI) embeddings API.

    For Azure, ``model`` is the embedding deployment name.
    """

    def __init__(self, client: openai.OpenAI, model: str = "text-embedding-3-small"):
        super().__init__()
        self.model = model
        self._client = client

    def _embed_many(self, texts: list[str]) -> list[list[float]]:
        try:
            response = self._client.embeddings.create(model=self.model, input=texts)
        except openai.APIConnectionError as e:
            raise ConnectionError(f"Cannot connect to OpenAI API: {e}") from e
        except openai.APIError as e:
            raise RuntimeError(
                f"OpenAI embedding failed for model '{self.model}': {e}"
            ) from e
        ordered = sorted(response.data, key=lambda item: item.index)
        return [item.embedding for item in ordered]


def create_embedder(config: SourceChatConfig) -> Embedder:
    """Build the embedding generator for the configured provider."""
    profile = resolve_profile(config)

    if profile.kind is ProviderKind.OPENAI:
        embedder: Embedder = OpenAIEmbedder(
            openai.OpenAI(api_key=config.openai_api_key),
            model=profile.embedding_model,
        )
    elif profile.kind is ProviderKind.AZURE_OPENAI:
        embedder = OpenAIEmbedder(
            openai.AzureOpenAI(
                api_key=config.azure_openai_api_key,
                api_version=config.azure_openai_api_version,
                azure_endpoint=config.azure_openai_endpoint,
            ),
            model=profile.embedding_model,
        )
    else:
        embedder = OllamaEmbedder(
            model=profile.embedding_model,
            base_url=config.ollama_endpoint,
        )

    logger.info(
        "Initialized embedding generator for provider: %s (%s)",
        profile.kind.value,
        profile.embedding_model,
    )
    return embedder

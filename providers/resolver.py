"""
Provider Configuration Resolver

Turns the configured provider name and model names into the two values
the rest of the pipeline needs before touching any AI service:

1. embedding_dimension - how wide the vector collection is provisioned
2. tokenizer_model     - which tiktoken encoding sizes the chunks

Design:
- ProviderKind is a closed enum; parsing is case-insensitive and an
  unknown provider is a ConfigurationError raised at startup
- One resolver function per provider variant, selected through a table
- Dimension lookup never fails: unknown embedding models fall back to
  DEFAULT_EMBEDDING_DIMENSION (the vector store confirms the real
  dimension when it writes)

Usage:
    from providers.resolver import resolve_profile

    profile = resolve_profile(SourceChatConfig.from_env())
    print(profile.embedding_dimension, profile.tokenizer_model)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from shared.exceptions import ConfigurationError

from .config import SourceChatConfig

DEFAULT_EMBEDDING_DIMENSION = 1536

# tiktoken has no encodings for Ollama model names; gpt-4 maps to cl100k_base.
OLLAMA_TOKENIZER_MODEL = "gpt-4"

EMBEDDING_DIMENSIONS: dict[str, int] = {
    "cohere-embed-v3-english": 1024,
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
    "all-minilm": 384,
    "nomic-embed-text": 768,
    "mxbai-embed-large": 1024,
    "qwen3-embedding": 4096,
}


class ProviderKind(str, Enum):
    OPENAI = "OpenAI"
    AZURE_OPENAI = "AzureOpenAI"
    OLLAMA = "Ollama"

    @classmethod
    def parse(cls, name: str) -> "ProviderKind":
        normalized = (name or "").strip().lower()
        for kind in cls:
            if kind.value.lower() == normalized:
                return kind
        valid = ", ".join(kind.value for kind in cls)
        raise ConfigurationError(
            f"Unknown AI provider: {name}. Valid options: {valid}",
            setting="AI_PROVIDER",
        )


@dataclass(frozen=True)
class ProviderProfile:
    kind: ProviderKind
    chat_model: str
    embedding_model: str
    tokenizer_model: str
    embedding_dimension: int


def embedding_dimension_for(model_name: str) -> int:
    """
    Look up the embedding width of a model.

    Ollama tags are ignored ("all-minilm:latest" resolves as "all-minilm").
    """
    normalized = (model_name or "").strip().lower()
    if normalized in EMBEDDING_DIMENSIONS:
        return EMBEDDING_DIMENSIONS[normalized]
    base_name = normalized.split(":", 1)[0]
    return EMBEDDING_DIMENSIONS.get(base_name, DEFAULT_EMBEDDING_DIMENSION)


def _resolve_openai(config: SourceChatConfig) -> ProviderProfile:
    return ProviderProfile(
        kind=ProviderKind.OPENAI,
        chat_model=config.openai_chat_model,
        embedding_model=config.openai_embedding_model,
        tokenizer_model=config.openai_chat_model,
        embedding_dimension=embedding_dimension_for(config.openai_embedding_model),
    )


def _resolve_azure_openai(config: SourceChatConfig) -> ProviderProfile:
    return ProviderProfile(
        kind=ProviderKind.AZURE_OPENAI,
        chat_model=config.azure_openai_chat_deployment,
        embedding_model=config.azure_openai_embedding_deployment,
        tokenizer_model=config.azure_openai_chat_deployment,
        embedding_dimension=embedding_dimension_for(
            config.azure_openai_embedding_deployment
        ),
    )


def _resolve_ollama(config: SourceChatConfig) -> ProviderProfile:
    return ProviderProfile(
        kind=ProviderKind.OLLAMA,
        chat_model=config.ollama_chat_model,
        embedding_model=config.ollama_embedding_model,
        tokenizer_model=OLLAMA_TOKENIZER_MODEL,
        embedding_dimension=embedding_dimension_for(config.ollama_embedding_model),
    )


_RESOLVERS: dict[ProviderKind, Callable[[SourceChatConfig], ProviderProfile]] = {
    ProviderKind.OPENAI: _resolve_openai,
    ProviderKind.AZURE_OPENAI: _resolve_azure_openai,
    ProviderKind.OLLAMA: _resolve_ollama,
}


def resolve_profile(config: SourceChatConfig) -> ProviderProfile:
    """
    Derive the active provider's models, tokenizer and embedding dimension.

    Raises:
        ConfigurationError: If the configured provider is unknown.
    """
    kind = ProviderKind.parse(config.ai_provider)
    return _RESOLVERS[kind](config)

"""
Provider Module - configuration, model resolution and AI clients

Quick Start:
    from providers import SourceChatConfig, resolve_profile, create_embedder

    config = SourceChatConfig.from_env()
    config.validate()
    profile = resolve_profile(config)
    embedder = create_embedder(config)
"""

from .chat import (
    ASSISTANT,
    SYSTEM,
    USER,
    ChatClient,
    ChatMessage,
    OllamaChatClient,
    OpenAIChatClient,
    create_chat_client,
)
from .config import SourceChatConfig, mask_api_key
from .embedder import Embedder, OllamaEmbedder, OpenAIEmbedder, create_embedder
from .resolver import (
    DEFAULT_EMBEDDING_DIMENSION,
    ProviderKind,
    ProviderProfile,
    embedding_dimension_for,
    resolve_profile,
)

__all__ = [
    "SourceChatConfig",
    "mask_api_key",
    "ProviderKind",
    "ProviderProfile",
    "DEFAULT_EMBEDDING_DIMENSION",
    "embedding_dimension_for",
    "resolve_profile",
    "Embedder",
    "OllamaEmbedder",
    "OpenAIEmbedder",
    "create_embedder",
    "ChatClient",
    "ChatMessage",
    "OllamaChatClient",
    "OpenAIChatClient",
    "create_chat_client",
    "SYSTEM",
    "USER",
    "ASSISTANT",
]

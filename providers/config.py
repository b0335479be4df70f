from dataclasses import dataclass
import os

from shared.exceptions import ConfigurationError


@dataclass
class SourceChatConfig:
    ai_provider: str = "OpenAI"
    db_path: str = "./sourcechat.db"

    openai_api_key: str = ""
    openai_chat_model: str = "gpt-4"
    openai_embedding_model: str = "text-embedding-3-small"

    azure_openai_endpoint: str = ""
    azure_openai_api_key: str = ""
    azure_openai_api_version: str = "2024-06-01"
    azure_openai_chat_deployment: str = "gpt-4"
    azure_openai_embedding_deployment: str = "text-embedding-3-small"

    ollama_endpoint: str = "http://localhost:11434"
    ollama_chat_model: str = "llama3.2"
    ollama_embedding_model: str = "all-minilm"

    max_tokens_per_chunk: int = 2000
    chunk_overlap_tokens: int = 200
    enrichment_enabled: bool = False

    @classmethod
    def from_env(cls) -> "SourceChatConfig":
        def _str(name: str, default: str) -> str:
            value = os.environ.get(name)
            return value.strip() if value and value.strip() else default

        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value and value.strip() else default

        def _bool(name: str, default: bool) -> bool:
            value = os.environ.get(name)
            if not value or not value.strip():
                return default
            return value.strip().lower() in {"1", "true", "yes", "on"}

        return cls(
            ai_provider=_str("AI_PROVIDER", cls.ai_provider),
            db_path=_str("VECTOR_DB_PATH", cls.db_path),
            openai_api_key=_str("OPENAI_API_KEY", cls.openai_api_key),
            openai_chat_model=_str("OPENAI_CHAT_MODEL", cls.openai_chat_model),
            openai_embedding_model=_str("OPENAI_EMBEDDING_MODEL", cls.openai_embedding_model),
            azure_openai_endpoint=_str("AZURE_OPENAI_ENDPOINT", cls.azure_openai_endpoint),
            azure_openai_api_key=_str("AZURE_OPENAI_API_KEY", cls.azure_openai_api_key),
            azure_openai_api_version=_str("AZURE_OPENAI_API_VERSION", cls.azure_openai_api_version),
            azure_openai_chat_deployment=_str(
                "AZURE_OPENAI_CHAT_DEPLOYMENT", cls.azure_openai_chat_deployment
            ),
            azure_openai_embedding_deployment=_str(
                "AZURE_OPENAI_EMBEDDING_DEPLOYMENT", cls.azure_openai_embedding_deployment
            ),
            ollama_endpoint=_str("OLLAMA_ENDPOINT", cls.ollama_endpoint),
            ollama_chat_model=_str("OLLAMA_CHAT_MODEL", cls.ollama_chat_model),
            ollama_embedding_model=_str("OLLAMA_EMBEDDING_MODEL", cls.ollama_embedding_model),
            max_tokens_per_chunk=_int("MAX_TOKENS_PER_CHUNK", cls.max_tokens_per_chunk),
            chunk_overlap_tokens=_int("CHUNK_OVERLAP_TOKENS", cls.chunk_overlap_tokens),
            enrichment_enabled=_bool("SOURCECHAT_ENRICHMENT", cls.enrichment_enabled),
        )

    def validate(self) -> None:
        """Fail fast on an unknown provider or missing credentials."""
        # Imported here: resolver imports this module.
        from .resolver import ProviderKind

        kind = ProviderKind.parse(self.ai_provider)

        if kind is ProviderKind.OPENAI and not self.openai_api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY must be set for OpenAI provider",
                setting="OPENAI_API_KEY",
            )
        if kind is ProviderKind.AZURE_OPENAI and (
            not self.azure_openai_endpoint or not self.azure_openai_api_key
        ):
            raise ConfigurationError(
                "AZURE_OPENAI_ENDPOINT and AZURE_OPENAI_API_KEY must be set "
                "for AzureOpenAI provider",
                setting="AZURE_OPENAI_ENDPOINT",
            )
        if kind is ProviderKind.OLLAMA and not self.ollama_endpoint:
            raise ConfigurationError(
                "OLLAMA_ENDPOINT must be set for Ollama provider",
                setting="OLLAMA_ENDPOINT",
            )
        if self.chunk_overlap_tokens >= self.max_tokens_per_chunk:
            raise ConfigurationError(
                f"CHUNK_OVERLAP_TOKENS ({self.chunk_overlap_tokens}) must be less than "
                f"MAX_TOKENS_PER_CHUNK ({self.max_tokens_per_chunk})",
                setting="CHUNK_OVERLAP_TOKENS",
            )

    def describe(self) -> list[str]:
        """Human-readable configuration lines with secrets masked."""
        from .resolver import ProviderKind

        lines = [
            f"AI Provider: {self.ai_provider}",
            f"Database Path: {self.db_path}",
            f"Max Tokens Per Chunk: {self.max_tokens_per_chunk}",
            f"Chunk Overlap: {self.chunk_overlap_tokens}",
            f"Enrichment: {'on' if self.enrichment_enabled else 'off'}",
        ]
        kind = ProviderKind.parse(self.ai_provider)
        if kind is ProviderKind.OPENAI:
            lines += [
                f"Chat Model: {self.openai_chat_model}",
                f"Embedding Model: {self.openai_embedding_model}",
                f"API Key: {mask_api_key(self.openai_api_key)}",
            ]
        elif kind is ProviderKind.AZURE_OPENAI:
            lines += [
                f"Endpoint: {self.azure_openai_endpoint}",
                f"Chat Deployment: {self.azure_openai_chat_deployment}",
                f"Embedding Deployment: {self.azure_openai_embedding_deployment}",
                f"API Key: {mask_api_key(self.azure_openai_api_key)}",
            ]
        else:
            lines += [
                f"Endpoint: {self.ollama_endpoint}",
                f"Chat Model: {self.ollama_chat_model}",
                f"Embedding Model: {self.ollama_embedding_model}",
            ]
        return lines


def mask_api_key(api_key: str) -> str:
    if not api_key:
        return "[NOT SET]"
    if len(api_key) <= 8:
        return "****"
    return api_key[:4] + "****" + api_key[-4:]

"""
Chat completion clients for the active AI provider.

Usage:
    from providers.chat import ChatMessage, create_chat_client

    client = create_chat_client(config)
    answer = client.complete([
        ChatMessage(role="system", content="You are helpful."),
        ChatMessage(role="user", content="What does main.py do?"),
    ])
"""

from dataclasses import dataclass

import ollama
import openai

from shared.logging_config import get_logger

from .config import SourceChatConfig
from .resolver import ProviderKind, resolve_profile

logger = get_logger(__name__)

SYSTEM = "system"
USER = "user"
ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    role: str
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


class ChatClient:
    """Interface for completion backends."""

    model: str = ""

    def complete(self, messages: list[ChatMessage]) -> str:
        raise NotImplementedError


class OllamaChatClient(ChatClient):
    def __init__(
        self,
        model: str = "llama3.2",
        base_url: str = "http://localhost:11434",
        temperature: float = 0.2,
    ):
        self.model = model
        self.base_url = base_url
        self.temperature = temperature
        self._client = ollama.Client(host=base_url)

    def complete(self, messages: list[ChatMessage]) -> str:
        try:
            response = self._client.chat(
                model=self.model,
                messages=[m.to_dict() for m in messages],
                stream=False,
                options={"temperature": self.temperature},
            )
        except ollama.ResponseError as e:
            raise RuntimeError(f"Ollama chat failed for model '{self.model}': {e}") from e
        except Exception as e:
            if "Connection" in type(e).__name__ or "refused" in str(e).lower():
                raise ConnectionError(
                    f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve"
                ) from e
            raise
        message = response["message"]
        return (message["content"] or "").strip()


class OpenAIChatClient(ChatClient):
    """
    Chat completions through the OpenAI SDK.

    Works for both OpenAI and Azure OpenAI (pass an ``AzureOpenAI`` client
    and the chat deployment name as ``model``).
    """

    def __init__(
        self,
        client: openai.OpenAI,
        model: str = "gpt-4",
        temperature: float = 0.2,
        max_tokens: int = 1024,
    ):
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client

    def complete(self, messages: list[ChatMessage]) -> str:
        try:
            response = self._client.chat.completions.create(
                model=self.model,
                messages=[m.to_dict() for m in messages],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except openai.APIConnectionError as e:
            raise ConnectionError(f"Cannot connect to OpenAI API: {e}") from e
        except openai.APIError as e:
            raise RuntimeError(f"OpenAI chat failed for model '{self.model}': {e}") from e

        choice = response.choices[0]
        if choice.finish_reason == "content_filter":
            raise RuntimeError("Response blocked by content filter")
        return (choice.message.content or "").strip()


def create_chat_client(config: SourceChatConfig) -> ChatClient:
    """Build the completion client for the configured provider."""
    profile = resolve_profile(config)

    if profile.kind is ProviderKind.OPENAI:
        client: ChatClient = OpenAIChatClient(
            openai.OpenAI(api_key=config.openai_api_key),
            model=profile.chat_model,
        )
    elif profile.kind is ProviderKind.AZURE_OPENAI:
        client = OpenAIChatClient(
            openai.AzureOpenAI(
                api_key=config.azure_openai_api_key,
                api_version=config.azure_openai_api_version,
                azure_endpoint=config.azure_openai_endpoint,
            ),
            model=profile.chat_model,
        )
    else:
        client = OllamaChatClient(
            model=profile.chat_model,
            base_url=config.ollama_endpoint,
        )

    logger.info("Initialized chat client for provider: %s", profile.kind.value)
    return client

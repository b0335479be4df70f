"""
Pytest fixtures for SourceChat tests.

External services are replaced by deterministic fakes:
- FakeEmbedder: bag-of-words hashing into a fixed number of buckets, so
  texts sharing words are similar
- FakeChatClient: answers by echoing the retrieved context block

ChromaDB runs for real inside the test's temporary directory.
"""

import hashlib
import math
import re

import chromadb
import pytest
from chromadb.config import Settings

from providers.chat import ChatClient, ChatMessage
from providers.config import SourceChatConfig
from providers.embedder import Embedder
from sourcechat.app import SourceChat
from tracking.change_detector import FileChangeDetector
from vector_store.models import StoreConfig
from vector_store.store import VectorStoreGateway

# all-minilm
TEST_DIMENSION = 384

FUNCTIONAL_DOCUMENT = """# Functional Test Document

SourceChat is a local RAG (Retrieval-Augmented Generation) tool. It ingests the
files of a project and answers questions about them.

## Usage

Run the ingest command first, then ask questions with the query command.
"""

_WORD = re.compile(r"\w+")


class FakeEmbedder(Embedder):
    """Deterministic bag-of-words embedder."""

    def __init__(self, dimension: int = TEST_DIMENSION):
        super().__init__()
        self.model = "fake-embedder"
        self.dimension = dimension
        self.calls = 0

    def _embed_many(self, texts: list[str]) -> list[list[float]]:
        self.calls += 1
        return [self._vector(text) for text in texts]

    def _vector(self, text: str) -> list[float]:
        vector = [0.0] * self.dimension
        vector[0] = 1.0
        for word in _WORD.findall(text.lower()):
            bucket = int(hashlib.md5(word.encode("utf-8")).hexdigest(), 16)
            vector[1 + bucket % (self.dimension - 1)] += 1.0
        norm = math.sqrt(sum(v * v for v in vector))
        return [v / norm for v in vector]


class FakeChatClient(ChatClient):
    """Echoes the retrieved context so answers contain ingested text."""

    def __init__(self):
        self.model = "fake-chat"
        self.calls: list[list[ChatMessage]] = []

    def complete(self, messages: list[ChatMessage]) -> str:
        self.calls.append(list(messages))
        system = messages[0].content
        start = system.find("from the codebase:")
        end = system.find("Instructions:")
        context = system[start + len("from the codebase:"):end].strip()
        return f"Based on the codebase: {context}"


class FailingChatClient(ChatClient):
    def complete(self, messages: list[ChatMessage]) -> str:
        raise ConnectionError("Cannot connect to Ollama")


@pytest.fixture
def fake_embedder():
    return FakeEmbedder()


@pytest.fixture
def fake_chat():
    return FakeChatClient()


@pytest.fixture
def config(tmp_path):
    """Ollama configuration (all-minilm -> 384 dimensions) in a temp dir."""
    return SourceChatConfig(
        ai_provider="Ollama",
        db_path=str(tmp_path / "data" / "sourcechat.db"),
        ollama_embedding_model="all-minilm",
        max_tokens_per_chunk=200,
        chunk_overlap_tokens=20,
    )


@pytest.fixture
def chroma_client(config):
    return chromadb.PersistentClient(
        path=config.db_path,
        settings=Settings(anonymized_telemetry=False),
    )


@pytest.fixture
def store(fake_embedder, config, chroma_client):
    return VectorStoreGateway(
        fake_embedder,
        StoreConfig(persist_directory=config.db_path),
        chroma_client=chroma_client,
    )


@pytest.fixture
def detector(config):
    return FileChangeDetector(config.db_path)


@pytest.fixture
def app(config, fake_embedder, fake_chat, chroma_client):
    return SourceChat(
        config,
        embedder=fake_embedder,
        chat_client=fake_chat,
        chroma_client=chroma_client,
    )


@pytest.fixture
def project_dir(tmp_path):
    """A small project tree with Markdown, text and JSON files."""
    root = tmp_path / "project"
    (root / "docs").mkdir(parents=True)
    (root / "README.md").write_text(FUNCTIONAL_DOCUMENT, encoding="utf-8")
    (root / "docs" / "notes.txt").write_text(
        "Notes about the vector store.\nThe collection is called data.\n",
        encoding="utf-8",
    )
    (root / "settings.json").write_text(
        '{"provider": "Ollama", "chunk_size": 2000}', encoding="utf-8"
    )
    return root

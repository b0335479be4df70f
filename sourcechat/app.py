"""
SourceChat application facade.

Wires one instance of every component per process: configuration,
provider profile, embedding generator, chat client, vector store gateway,
change tracker, ingestion and query services.

Usage:
    from sourcechat import SourceChat

    app = SourceChat(SourceChatConfig.from_env())
    app.ingest_directory("./src", "*.py;*.md")
    print(app.query("How are files discovered?").value)
"""

from pathlib import Path
from typing import Any, Callable, Optional

import chromadb

from chunking.models import ChunkingStrategy
from ingestion.discovery import DEFAULT_PATTERNS
from ingestion.enrichment import ImageAltTextEnricher, SummaryEnricher
from ingestion.models import IngestionResult
from ingestion.service import IngestionService, ProgressCallback
from providers.chat import ChatClient, create_chat_client
from providers.config import SourceChatConfig
from providers.embedder import Embedder, create_embedder
from providers.resolver import resolve_profile
from query.context import ConversationContext
from query.service import DEFAULT_MAX_RESULTS, QueryService
from query.session import InteractiveSession
from shared.logging_config import get_logger
from shared.result import Result
from tracking.change_detector import FileChangeDetector
from vector_store.models import StoreConfig
from vector_store.store import VectorStoreGateway

logger = get_logger(__name__)


class SourceChat:
    """
    Entry point for ingesting a project tree and asking questions about it.

    Raises:
        ConfigurationError: Unknown provider or missing credentials.
    """

    def __init__(
        self,
        config: Optional[SourceChatConfig] = None,
        embedder: Optional[Embedder] = None,
        chat_client: Optional[ChatClient] = None,
        chroma_client: Optional[chromadb.ClientAPI] = None,
    ):
        self.config = config or SourceChatConfig.from_env()
        self.config.validate()
        self.profile = resolve_profile(self.config)

        self.embedder = embedder or create_embedder(self.config)
        self._chat_client = chat_client

        self.store = VectorStoreGateway(
            self.embedder,
            StoreConfig(persist_directory=self.config.db_path),
            chroma_client=chroma_client,
        )
        self.change_detector = FileChangeDetector(self.config.db_path)

        self._ingestion_service: Optional[IngestionService] = None
        self._query_service: Optional[QueryService] = None

    @property
    def chat_client(self) -> ChatClient:
        if self._chat_client is None:
            self._chat_client = create_chat_client(self.config)
        return self._chat_client

    @property
    def ingestion_service(self) -> IngestionService:
        if self._ingestion_service is None:
            document_processors = []
            chunk_processors = []
            if self.config.enrichment_enabled:
                document_processors.append(ImageAltTextEnricher(self.chat_client))
                chunk_processors.append(SummaryEnricher(self.chat_client))
            self._ingestion_service = IngestionService(
                self.config,
                self.store,
                self.change_detector,
                self.embedder,
                profile=self.profile,
                document_processors=document_processors,
                chunk_processors=chunk_processors,
            )
        return self._ingestion_service

    @property
    def query_service(self) -> QueryService:
        if self._query_service is None:
            self._query_service = QueryService(
                self.config, self.store, self.chat_client, profile=self.profile
            )
        return self._query_service

    def ingest_directory(
        self,
        path: str | Path,
        patterns: str = DEFAULT_PATTERNS,
        strategy: ChunkingStrategy = ChunkingStrategy.SEMANTIC,
        incremental: bool = True,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Result[IngestionResult]:
        return self.ingestion_service.ingest_directory(
            path, patterns, strategy, incremental, progress_callback
        )

    def query(
        self,
        question: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        context: Optional[ConversationContext] = None,
    ) -> Result[str]:
        return self.query_service.query(question, max_results=max_results, context=context)

    def list_tracked_files(self) -> list[str]:
        return self.change_detector.tracked_files()

    def clear_all(self) -> None:
        """Drop the vector collection and delete the tracking file."""
        self.store.drop()
        self.change_detector.clear()
        logger.info("All ingested data cleared")

    def interactive_session(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> InteractiveSession:
        return InteractiveSession(
            self.query_service,
            input_fn=input_fn,
            output_fn=output_fn,
            max_results=max_results,
        )

    def database_stats(self) -> dict[str, Any]:
        db_path = Path(self.config.db_path)
        return {
            "database_path": str(db_path),
            "database_size_kb": round(_directory_size(db_path) / 1024.0, 2),
            "collection": self.store.collection_name,
            "collection_exists": self.store.exists(),
            "dimension": self.store.stored_dimension(),
            "chunks_stored": self.store.count(),
            "documents_stored": len(self.store.get_document_ids()),
            "tracked_files": len(self.change_detector),
            "tracking_file": str(self.change_detector.tracking_file_path),
        }


def _directory_size(path: Path) -> int:
    if path.is_file():
        return path.stat().st_size
    if not path.exists():
        return 0
    return sum(p.stat().st_size for p in path.rglob("*") if p.is_file())

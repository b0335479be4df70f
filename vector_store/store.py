"""
Vector Store Gateway - ChromaDB-backed storage for chunks

Owns the single persistent collection ("data") of the configured
database directory:
- Provision: create the collection on first write, fixing its dimension
- Write: embed chunks and upsert them as schema-checked records
- Search: similarity search ordered by descending score
- Manage: count, list documents, drop

Design:
- Uses ChromaDB PersistentClient for on-disk storage
- Cosine distance for text similarity
- The embedding dimension is stored in the collection metadata; every
  later writer and reader must use the same dimension
- Upsert semantics with deterministic keys: re-ingesting a file
  overwrites its rows instead of duplicating them
- A missing collection is CollectionNotFound, never an empty result

Usage:
    from vector_store import VectorStoreGateway

    store = VectorStoreGateway(embedder, StoreConfig(persist_directory="./sourcechat.db"))
    store.write(chunks, dimension=384)
    results = store.search("How is the config loaded?", top_k=5)
"""

from typing import Callable, Optional

import chromadb

from chunking.models import Chunk
from shared.exceptions import CollectionNotFoundError, DimensionMismatchError
from shared.logging_config import get_logger
from shared.result import Error, ErrorCode, Result

from .models import CollectionSchema, SearchResult, StoreConfig, VectorStoreRecord

logger = get_logger(__name__)

DIMENSION_KEY = "dimension"


class VectorStoreGateway:
    """
    Vector store backed by ChromaDB.

    One instance (and one client) per process run.
    """

    def __init__(
        self,
        embedder,
        config: Optional[StoreConfig] = None,
        chroma_client: Optional[chromadb.ClientAPI] = None,
    ):
        """
        Initialize the gateway.

        Args:
            embedder: Embedding generator (embed / embed_batch).
            config: Store configuration. Uses defaults if not provided.
            chroma_client: Optional pre-created ChromaDB client (for testing).
                           If not provided, a PersistentClient is created.
        """
        self.config = config or StoreConfig()
        self._embedder = embedder
        if chroma_client is not None:
            self._client = chroma_client
        else:
            self._client = chromadb.PersistentClient(
                path=self.config.persist_directory,
            )
        self._collection = None

    @property
    def collection_name(self) -> str:
        return self.config.collection_name

    # -------------------------------------------------------------------------
    # Result-returning operations
    # -------------------------------------------------------------------------

    def check_dimension(self, dimension: int) -> Result[None]:
        """Success if the collection is absent or provisioned with ``dimension``."""
        try:
            self._ensure_dimension(self._get_collection(), dimension)
        except DimensionMismatchError as e:
            return Result.failure(e.to_error())
        return Result.success()

    def open_or_create(self, dimension: int) -> Result[CollectionSchema]:
        try:
            return Result.success(self._provision(dimension)[1])
        except DimensionMismatchError as e:
            return Result.failure(e.to_error())

    def open(self, dimension: int) -> Result[CollectionSchema]:
        """Open the existing collection; it is never created here."""
        collection = self._get_collection()
        if collection is None:
            return Result.failure(Error.failure(
                ErrorCode.COLLECTION_NOT_FOUND,
                CollectionNotFoundError(self.collection_name).message,
            ))
        try:
            self._ensure_dimension(collection, dimension)
        except DimensionMismatchError as e:
            return Result.failure(e.to_error())
        return Result.success(
            CollectionSchema(name=self.collection_name, dimension=dimension)
        )

    # -------------------------------------------------------------------------
    # Raising operations (used inside the orchestrators)
    # -------------------------------------------------------------------------

    def write(
        self,
        chunks: list[Chunk],
        dimension: int,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> int:
        """
        Embed and store chunks.

        Args:
            chunks: Chunks of one document.
            dimension: Dimension the collection is (or will be) provisioned with.
            progress_callback: Optional callback(current, total, status).

        Returns:
            Number of rows written.

        Raises:
            DimensionMismatchError: The collection or an embedding has a
                different dimension. Nothing of this batch is written.
        """
        if not chunks:
            return 0

        # The collection is only created once the embeddings match the
        # schema, so a failed first write leaves no collection behind.
        self._ensure_dimension(self._get_collection(), dimension)
        schema = CollectionSchema(name=self.collection_name, dimension=dimension)

        embeddings = self._embedder.embed_batch([c.content for c in chunks])
        records = [
            VectorStoreRecord(
                key=chunk.key,
                vector=embedding,
                content=chunk.content,
                context=chunk.context,
                document_id=chunk.document_id,
            )
            for chunk, embedding in zip(chunks, embeddings)
        ]
        for record in records:
            schema.validate_record(record)

        collection, _ = self._provision(dimension)

        # ChromaDB has a batch size limit
        batch_size = self.config.batch_size
        stored = 0
        for i in range(0, len(records), batch_size):
            batch = records[i:i + batch_size]
            collection.upsert(
                ids=[r.key for r in batch],
                embeddings=[r.vector for r in batch],
                documents=[r.content for r in batch],
                metadatas=[r.to_metadata() for r in batch],
            )
            stored += len(batch)

            if progress_callback:
                progress_callback(stored, len(records), "Storing...")

        return stored

    def search(self, query: str, top_k: int = 5) -> list[SearchResult]:
        """
        Perform semantic similarity search.

        Args:
            query: The search query text.
            top_k: Maximum number of results.

        Returns:
            List of SearchResult objects ranked by similarity (best first).

        Raises:
            CollectionNotFoundError: Nothing has been written yet.
            DimensionMismatchError: The query embedding has a different width.
        """
        collection = self._get_collection()
        if collection is None:
            raise CollectionNotFoundError(self.collection_name)

        total = collection.count()
        if total == 0 or top_k <= 0:
            return []

        query_embedding = self._embedder.embed(query)
        self._ensure_dimension(collection, len(query_embedding))

        raw = collection.query(
            query_embeddings=[query_embedding],
            n_results=min(top_k, total),
            include=["documents", "metadatas", "distances"],
        )

        results: list[SearchResult] = []
        if not raw["ids"] or not raw["ids"][0]:
            return results

        for i, key in enumerate(raw["ids"][0]):
            distance = raw["distances"][0][i]
            metadata = raw["metadatas"][0][i] or {}
            results.append(SearchResult(
                key=key,
                content=raw["documents"][0][i] or "",
                context=metadata.get("context", ""),
                document_id=metadata.get("document_id", ""),
                distance=round(distance, 6),
                score=round(1 - distance, 6),
            ))

        results.sort(key=lambda r: r.score, reverse=True)
        return results

    def count(self) -> int:
        """Return the total number of rows (0 when the collection is absent)."""
        collection = self._get_collection()
        return collection.count() if collection is not None else 0

    def exists(self) -> bool:
        return self._get_collection() is not None

    def stored_dimension(self) -> Optional[int]:
        collection = self._get_collection()
        if collection is None:
            return None
        return (collection.metadata or {}).get(DIMENSION_KEY)

    def get_document_ids(self) -> list[str]:
        """
        List all unique document IDs in the store.

        Returns:
            Sorted list of document IDs.
        """
        collection = self._get_collection()
        if collection is None:
            return []
        all_metadata = collection.get(include=["metadatas"])
        doc_ids = set()
        for meta in all_metadata["metadatas"] or []:
            if meta and "document_id" in meta:
                doc_ids.add(meta["document_id"])
        return sorted(doc_ids)

    def get_keys_for_document(self, document_id: str) -> list[str]:
        collection = self._get_collection()
        if collection is None:
            return []
        results = collection.get(where={"document_id": document_id}, include=[])
        return sorted(results["ids"])

    def drop(self) -> bool:
        """
        Delete the collection with all its rows.

        Returns:
            True if a collection was deleted.
        """
        existed = self._get_collection() is not None
        if existed:
            self._client.delete_collection(self.collection_name)
            logger.info("Dropped collection '%s'", self.collection_name)
        self._collection = None
        return existed

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _collection_names(self) -> set[str]:
        # list_collections() yields names or Collection objects depending on
        # the chromadb release.
        return {
            c if isinstance(c, str) else c.name
            for c in self._client.list_collections()
        }

    def _get_collection(self):
        if self._collection is None and self.collection_name in self._collection_names():
            self._collection = self._client.get_collection(name=self.collection_name)
        return self._collection

    def _ensure_dimension(self, collection, dimension: int) -> None:
        if collection is None:
            return
        stored = (collection.metadata or {}).get(DIMENSION_KEY)
        if stored is not None and stored != dimension:
            raise DimensionMismatchError(
                expected=stored,
                actual=dimension,
                collection=self.collection_name,
            )

    def _provision(self, dimension: int):
        """Open the collection, creating it with ``dimension`` if absent."""
        collection = self._get_collection()
        if collection is None:
            collection = self._client.create_collection(
                name=self.collection_name,
                metadata={
                    "hnsw:space": self.config.distance_metric,
                    DIMENSION_KEY: dimension,
                },
            )
            self._collection = collection
            logger.info(
                "Created collection '%s' with dimension %d",
                self.collection_name,
                dimension,
            )
        else:
            self._ensure_dimension(collection, dimension)
        return collection, CollectionSchema(name=self.collection_name, dimension=dimension)

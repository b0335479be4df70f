"""
Vector Store Module - ChromaDB storage and similarity search

Quick Start:
    from vector_store import VectorStoreGateway, StoreConfig

    store = VectorStoreGateway(embedder, StoreConfig(persist_directory="./sourcechat.db"))
    store.write(chunks, dimension=384)
    for hit in store.search("where is logging configured?", top_k=5):
        print(f"[{hit.score:.3f}] {hit.document_id}")
"""

from .models import (
    DEFAULT_COLLECTION,
    CollectionSchema,
    SearchResult,
    StoreConfig,
    VectorStoreRecord,
)
from .store import VectorStoreGateway

__all__ = [
    "VectorStoreGateway",
    "StoreConfig",
    "CollectionSchema",
    "VectorStoreRecord",
    "SearchResult",
    "DEFAULT_COLLECTION",
]

"""
Data Models for the Vector Store

Defines:
1. StoreConfig - where and how the collection is persisted
2. CollectionSchema - the fixed record layout and its embedding dimension
3. VectorStoreRecord - one row (key, vector, content, context, document_id)
4. SearchResult - a single search hit with distance/similarity

Design Principles:
- Pydantic v2 for validation (consistent with chunking and tracking)
- The dimension is part of the schema, so every record is checked
  against it before it reaches ChromaDB
"""

from typing import Any

from pydantic import BaseModel, Field

from shared.exceptions import DimensionMismatchError

DEFAULT_COLLECTION = "data"


class StoreConfig(BaseModel):
    """Configuration for the vector store."""
    collection_name: str = Field(
        DEFAULT_COLLECTION,
        description="ChromaDB collection name",
    )
    persist_directory: str = Field(
        "./sourcechat.db",
        description="Directory for ChromaDB persistent storage",
    )
    distance_metric: str = Field(
        "cosine",
        description="Distance metric for similarity search (cosine, l2, ip)",
    )
    batch_size: int = Field(
        500,
        description="Rows per ChromaDB upsert call",
        ge=1,
    )


class CollectionSchema(BaseModel):
    """
    Record layout of the collection: one key, one vector of ``dimension``
    floats and three string fields (content, context, document_id).
    """
    name: str = Field(
        DEFAULT_COLLECTION,
        description="Collection name",
    )
    dimension: int = Field(
        ...,
        description="Embedding dimension fixed by the first writer",
        ge=1,
    )

    def validate_record(self, record: "VectorStoreRecord") -> None:
        """Raise DimensionMismatchError if the record's vector has the wrong width."""
        if len(record.vector) != self.dimension:
            raise DimensionMismatchError(
                expected=self.dimension,
                actual=len(record.vector),
                collection=self.name,
            )


class VectorStoreRecord(BaseModel):
    """A single row of the collection."""
    key: str = Field(
        ...,
        description="Row key (format: {document_id}::chunk_{index:04d})",
    )
    vector: list[float] = Field(
        ...,
        description="Embedding vector",
    )
    content: str = Field(
        ...,
        description="Chunk text",
    )
    context: str = Field(
        "",
        description="Surrounding context of the chunk",
    )
    document_id: str = Field(
        ...,
        description="Identifier of the source document",
    )

    def to_metadata(self) -> dict[str, Any]:
        """ChromaDB metadata for this row (flat string values)."""
        return {"context": self.context, "document_id": self.document_id}


class SearchResult(BaseModel):
    """A single search hit from the vector store."""
    key: str = Field(
        ...,
        description="Row key of the matched chunk",
    )
    content: str = Field(
        ...,
        description="Chunk text content",
    )
    context: str = Field(
        "",
        description="Stored chunk context",
    )
    document_id: str = Field(
        "",
        description="Identifier of the source document",
    )
    distance: float = Field(
        ...,
        description="Cosine distance (lower = more similar)",
    )
    score: float = Field(
        ...,
        description="Similarity score (1 - distance, higher = more similar)",
    )

"""
Data Models for the Chunking Pipeline

Defines:
1. ChunkingStrategy - which chunker splits a document
2. ChunkingConfig - token budget, overlap and tokenizer identity
3. SourceDocument - one file's text handed to a chunker
4. Chunk - a single token-bounded unit ready for embedding

Design Principles:
- Pydantic v2 for validation and serialization
- Chunks carry their document id and position so the vector store can
  derive stable row keys
- A chunk never holds more than max_tokens_per_chunk tokens

Usage:
    config = ChunkingConfig(max_tokens_per_chunk=512, overlap_tokens=64)
    chunker = create_chunker(ChunkingStrategy.SECTION, config)
    chunks = list(chunker.process(document))
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class ChunkingStrategy(str, Enum):
    SEMANTIC = "Semantic"
    SECTION = "Section"
    STRUCTURE = "Structure"

    @classmethod
    def parse(cls, name: str) -> "ChunkingStrategy":
        normalized = (name or "").strip().lower()
        for strategy in cls:
            if strategy.value.lower() == normalized:
                return strategy
        valid = ", ".join(s.value for s in cls)
        raise ValueError(f"Unknown chunking strategy: {name}. Valid options: {valid}")


class ChunkingConfig(BaseModel):
    """
    Configuration for the chunkers.

    Defaults mirror the MAX_TOKENS_PER_CHUNK / CHUNK_OVERLAP_TOKENS
    environment defaults.
    """
    max_tokens_per_chunk: int = Field(
        2000,
        description="Maximum tokens per chunk",
        ge=1,
    )
    overlap_tokens: int = Field(
        200,
        description="Target overlap in tokens between consecutive chunks (sliding window)",
        ge=0,
    )
    tokenizer_model: str = Field(
        "gpt-4",
        description="Model name used to pick the tiktoken encoding",
    )

    @model_validator(mode="after")
    def _check_overlap(self) -> "ChunkingConfig":
        if self.overlap_tokens >= self.max_tokens_per_chunk:
            raise ValueError(
                f"overlap_tokens ({self.overlap_tokens}) must be less than "
                f"max_tokens_per_chunk ({self.max_tokens_per_chunk})"
            )
        return self


class SourceDocument(BaseModel):
    """
    Text of one discovered file, as produced by a content extractor.
    """
    document_id: str = Field(
        ...,
        description="Unique identifier (absolute file path)",
    )
    path: str = Field(
        ...,
        description="Path of the source file",
    )
    content: str = Field(
        "",
        description="Extracted text content",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Extractor metadata (title, headers, keys, ...)",
    )


class Chunk(BaseModel):
    """
    A single text chunk, ready for embedding and storage.
    """
    content: str = Field(
        ...,
        description="The chunk text content",
        min_length=1,
    )
    token_count: int = Field(
        ...,
        description="Number of tokens in this chunk",
        ge=1,
    )
    document_id: str = Field(
        ...,
        description="Identifier of the source document",
    )
    index: int = Field(
        0,
        description="Position of this chunk within the document (0-indexed)",
        ge=0,
    )
    context: str = Field(
        "",
        description="Surrounding context (header trail, title or summary)",
    )

    @property
    def key(self) -> str:
        """Row key in the vector store (format: {document_id}::chunk_{index:04d})."""
        return f"{self.document_id}::chunk_{self.index:04d}"

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

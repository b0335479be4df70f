"""
Chunking Module - token-bounded sliding window chunking for RAG

Three strategies share one windowing algorithm and differ in how they cut
a document into units: paragraphs (SECTION), Markdown header sections
(STRUCTURE) or embedding-similarity topic groups (SEMANTIC).

Quick Start:
    from chunking import ChunkingConfig, ChunkingStrategy, create_chunker

    config = ChunkingConfig(max_tokens_per_chunk=512, overlap_tokens=64)
    chunker = create_chunker(ChunkingStrategy.STRUCTURE, config)
    chunks = list(chunker.process(document))
"""

from .chunker import BaseChunker, SectionChunker
from .header_chunker import HeaderChunker, split_sections
from .models import Chunk, ChunkingConfig, ChunkingStrategy, SourceDocument
from .selector import create_chunker
from .semantic_chunker import SemanticChunker
from .sentence_splitter import split_paragraphs, split_sentences
from .token_counter import count_tokens

__all__ = [
    "BaseChunker",
    "SectionChunker",
    "HeaderChunker",
    "SemanticChunker",
    "create_chunker",
    "Chunk",
    "ChunkingConfig",
    "ChunkingStrategy",
    "SourceDocument",
    "split_sections",
    "split_paragraphs",
    "split_sentences",
    "count_tokens",
]

"""
Chunking Strategy Selector

Maps the configured ChunkingStrategy to a concrete chunker.

    SEMANTIC  -> SemanticChunker (needs an embedder)
    SECTION   -> SectionChunker
    STRUCTURE -> HeaderChunker
"""

from .chunker import BaseChunker, SectionChunker
from .header_chunker import HeaderChunker
from .models import ChunkingConfig, ChunkingStrategy
from .semantic_chunker import SemanticChunker


def create_chunker(
    strategy: ChunkingStrategy | str,
    config: ChunkingConfig,
    embedder=None,
) -> BaseChunker:
    """
    Build the chunker for a strategy.

    Raises:
        ValueError: Unknown strategy, or SEMANTIC without an embedder.
    """
    if not isinstance(strategy, ChunkingStrategy):
        strategy = ChunkingStrategy.parse(strategy)

    if strategy is ChunkingStrategy.SEMANTIC:
        if embedder is None:
            raise ValueError("Semantic chunking requires an embedding generator")
        return SemanticChunker(embedder, config)
    if strategy is ChunkingStrategy.SECTION:
        return SectionChunker(config)
    return HeaderChunker(config)

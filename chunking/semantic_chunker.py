"""
Semantic Chunker - topic-aware chunking driven by embeddings

Algorithm:
1. Split the document into sentences.
2. Embed every sentence (one batch call).
3. Compute cosine similarity between each pair of adjacent sentences.
4. Place a topic boundary wherever the similarity falls below the given
   percentile of all adjacent similarities.
5. Window each topic group with the shared sliding-window algorithm.

Usage:
    from chunking import SemanticChunker, ChunkingConfig

    chunker = SemanticChunker(embedder, ChunkingConfig(max_tokens_per_chunk=512))
    chunks = list(chunker.process(document))
"""

import math
from typing import Iterable, Optional

from .chunker import BaseChunker
from .models import ChunkingConfig, SourceDocument
from .sentence_splitter import split_sentences


def cosine_similarity(a: list[float], b: list[float]) -> float:
    dot = sum(x * y for x, y in zip(a, b))
    norm = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if norm == 0:
        return 0.0
    return dot / norm


def percentile(values: list[float], pct: float) -> float:
    """Linear-interpolated percentile (0-100) of a non-empty list."""
    ordered = sorted(values)
    if len(ordered) == 1:
        return ordered[0]
    rank = (len(ordered) - 1) * pct / 100.0
    lower = math.floor(rank)
    upper = math.ceil(rank)
    fraction = rank - lower
    return ordered[lower] + (ordered[upper] - ordered[lower]) * fraction


class SemanticChunker(BaseChunker):
    """
    Sentence units grouped by embedding similarity.

    Args:
        embedder: Anything with embed_batch(list[str]) -> list[list[float]].
        config: Token budget and overlap.
        breakpoint_percentile: Adjacent similarities below this percentile
            start a new topic group.
    """

    separator = " "

    def __init__(
        self,
        embedder,
        config: Optional[ChunkingConfig] = None,
        breakpoint_percentile: float = 25.0,
    ):
        super().__init__(config)
        if not 0 <= breakpoint_percentile <= 100:
            raise ValueError("breakpoint_percentile must be between 0 and 100")
        self.embedder = embedder
        self.breakpoint_percentile = breakpoint_percentile

    def _segments(self, document: SourceDocument) -> Iterable[tuple[str, list[str]]]:
        sentences = split_sentences(document.content)
        for group in self._group_by_topic(sentences):
            yield "", group

    def _group_by_topic(self, sentences: list[str]) -> list[list[str]]:
        if len(sentences) < 3:
            return [sentences] if sentences else []

        embeddings = self.embedder.embed_batch(sentences)
        similarities = [
            cosine_similarity(embeddings[i], embeddings[i + 1])
            for i in range(len(sentences) - 1)
        ]
        threshold = percentile(similarities, self.breakpoint_percentile)

        groups: list[list[str]] = [[sentences[0]]]
        for i, similarity in enumerate(similarities):
            if similarity < threshold:
                groups.append([])
            groups[-1].append(sentences[i + 1])
        return groups

"""
Chunkers - Core chunking logic for the ingestion pipeline

Takes a SourceDocument (from a content extractor) and yields token-bounded,
overlapping chunks ready for embedding.

Algorithm (shared by every strategy):
1. The strategy cuts the document into segments (whole document, header
   sections, topic groups) and each segment into text units (paragraphs
   or sentences).
2. A unit larger than max_tokens_per_chunk is split by lines, then by raw
   token slices, so every unit fits the budget on its own.
3. Units are accumulated into a chunk up to max_tokens_per_chunk.
4. Sliding window: the next chunk starts far enough back to repeat about
   overlap_tokens worth of units.

Usage:
    from chunking import SectionChunker, ChunkingConfig, SourceDocument

    chunker = SectionChunker(ChunkingConfig(max_tokens_per_chunk=512, overlap_tokens=64))
    for chunk in chunker.process(document):
        print(chunk.index, chunk.token_count)
"""

from typing import Iterable, Iterator, Optional

from .models import Chunk, ChunkingConfig, SourceDocument
from .sentence_splitter import split_paragraphs
from .token_counter import count_tokens, split_by_tokens


class BaseChunker:
    """
    Sliding-window chunker over text units.

    Subclasses override _segments() to decide where units come from.
    """

    separator = "\n\n"

    def __init__(self, config: Optional[ChunkingConfig] = None):
        self.config = config or ChunkingConfig()

    def process(self, document: SourceDocument) -> Iterator[Chunk]:
        """
        Chunk a document.

        Args:
            document: Extracted file content.

        Yields:
            Chunks in document order, indexed from 0.
        """
        if not document.content.strip():
            return

        index = 0
        for context, units in self._segments(document):
            for text, token_count in self._build_chunks(self._fit_units(units)):
                yield Chunk(
                    content=text,
                    token_count=token_count,
                    document_id=document.document_id,
                    index=index,
                    context=context,
                )
                index += 1

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _segments(self, document: SourceDocument) -> Iterable[tuple[str, list[str]]]:
        """(context, units) pairs; each segment is windowed independently."""
        raise NotImplementedError

    def _count(self, text: str) -> int:
        return count_tokens(text, self.config.tokenizer_model)

    def _fit_units(self, units: list[str]) -> list[str]:
        """Break up units that exceed the token budget on their own."""
        limit = self.config.max_tokens_per_chunk
        fitted: list[str] = []

        for unit in units:
            if self._count(unit) <= limit:
                fitted.append(unit)
                continue

            current: list[str] = []
            for line in unit.splitlines():
                if self._count(line) > limit:
                    if current:
                        fitted.append("\n".join(current))
                        current = []
                    fitted.extend(
                        split_by_tokens(line, limit, self.config.tokenizer_model)
                    )
                    continue
                if current and self._count("\n".join(current + [line])) > limit:
                    fitted.append("\n".join(current))
                    current = []
                current.append(line)
            if current:
                fitted.append("\n".join(current))

        return [u for u in fitted if u.strip()]

    def _join(self, units: list[str], start: int, end: int) -> str:
        return self.separator.join(units[start:end])

    def _build_chunks(self, units: list[str]) -> list[tuple[str, int]]:
        """
        Build chunks using a sliding window over units.

        Returns:
            List of (text, token_count) tuples.
        """
        limit = self.config.max_tokens_per_chunk
        chunks: list[tuple[str, int]] = []
        total_units = len(units)
        start_idx = 0

        while start_idx < total_units:
            # Accumulate units until the joined text would exceed the limit.
            # Every unit fits on its own, so the first one is always taken.
            end_idx = start_idx + 1
            while (
                end_idx < total_units
                and self._count(self._join(units, start_idx, end_idx + 1)) <= limit
            ):
                end_idx += 1

            text = self._join(units, start_idx, end_idx)
            chunks.append((text, self._count(text)))

            if end_idx >= total_units:
                break

            start_idx = max(self._overlap_start(units, start_idx, end_idx), start_idx + 1)

        return chunks

    def _overlap_start(self, units: list[str], start_idx: int, end_idx: int) -> int:
        """
        Index the next chunk starts at.

        Walks backwards from the end of the current chunk until about
        overlap_tokens have been collected, then moves forward again until
        the next unit still fits after the overlap.
        """
        if self.config.overlap_tokens == 0:
            return end_idx

        overlap_start = end_idx
        accumulated = 0
        for j in range(end_idx - 1, start_idx - 1, -1):
            accumulated += self._count(units[j])
            if accumulated >= self.config.overlap_tokens:
                overlap_start = j
                break

        limit = self.config.max_tokens_per_chunk
        while (
            overlap_start < end_idx
            and self._count(self._join(units, overlap_start, end_idx + 1)) > limit
        ):
            overlap_start += 1
        return overlap_start


class SectionChunker(BaseChunker):
    """Paragraph units over the whole document."""

    def _segments(self, document: SourceDocument) -> Iterable[tuple[str, list[str]]]:
        yield "", split_paragraphs(document.content)

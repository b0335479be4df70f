"""
Data Models for Ingestion Runs

Defines:
1. SummaryChunk - one hit of the post-ingestion sanity search
2. IngestionResult - what a single ingest_directory() call did

Usage:
    result = service.ingest_directory("./src", "*.py", ChunkingStrategy.SECTION, True)
    if result.is_success:
        print(result.value.summary())
"""

from pydantic import BaseModel, Field

SUMMARY_CONTENT_LIMIT = 500


class SummaryChunk(BaseModel):
    """A sample hit shown after ingestion."""
    score: float = Field(
        0.0,
        description="Similarity score of the hit",
    )
    content: str = Field(
        "",
        description="Chunk content, truncated for display",
    )

    @classmethod
    def from_content(cls, score: float, content: str) -> "SummaryChunk":
        if len(content) > SUMMARY_CONTENT_LIMIT:
            content = content[:SUMMARY_CONTENT_LIMIT] + "..."
        return cls(score=score, content=content)


class IngestionResult(BaseModel):
    """
    Outcome of one ingestion run. Returned to the caller, never persisted.
    """
    files_processed: int = Field(
        0,
        description="Files chunked, embedded, written and tracked in this run",
    )
    errors: int = Field(
        0,
        description="Files that failed and were skipped",
    )
    files_discovered: int = Field(
        0,
        description="Files matching the patterns",
    )
    files_skipped: int = Field(
        0,
        description="Unchanged files skipped by incremental mode",
    )
    total_chunks: int = Field(
        0,
        description="Rows written to the vector store",
    )
    removed_from_tracking: list[str] = Field(
        default_factory=list,
        description="Tracked files no longer discovered (their vector rows are kept)",
    )
    failures: list[str] = Field(
        default_factory=list,
        description="Rendered per-file errors",
    )
    summary_chunks: list[SummaryChunk] = Field(
        default_factory=list,
        description="Sample hits of the post-ingestion search",
    )
    elapsed_seconds: float = Field(
        0.0,
        description="Wall-clock duration of the run",
    )

    def summary(self) -> str:
        return (
            f"Files processed: {self.files_processed}, "
            f"skipped: {self.files_skipped}, "
            f"errors: {self.errors}, "
            f"chunks: {self.total_chunks} "
            f"({self.elapsed_seconds:.1f}s)"
        )

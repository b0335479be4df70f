"""
Ingestion Module - directory -> chunks -> vectors -> tracking

Quick Start:
    from ingestion import IngestionService

    service = IngestionService(config, store, detector, embedder)
    result = service.ingest_directory("./docs", "*.md", ChunkingStrategy.STRUCTURE, True)
"""

from .discovery import DEFAULT_PATTERNS, discover_files, parse_patterns
from .enrichment import ImageAltTextEnricher, SummaryEnricher
from .extractors import (
    DEFAULT_EXTRACTORS,
    ExtractedContent,
    FileContentExtractor,
    extract_file,
)
from .models import IngestionResult, SummaryChunk
from .service import SUMMARY_QUERY, IngestionService

__all__ = [
    "IngestionService",
    "IngestionResult",
    "SummaryChunk",
    "SUMMARY_QUERY",
    "DEFAULT_PATTERNS",
    "discover_files",
    "parse_patterns",
    "FileContentExtractor",
    "ExtractedContent",
    "DEFAULT_EXTRACTORS",
    "extract_file",
    "ImageAltTextEnricher",
    "SummaryEnricher",
]

"""
Ingestion Service - incremental ingestion of a directory tree

Pipeline per run:
1. Discover files (semicolon-delimited glob patterns, recursive).
2. Incremental mode: drop tracking records of files that disappeared and
   skip files whose modification time is unchanged.
3. Per file: extract -> (enrich document) -> chunk -> (enrich chunks)
   -> embed + write -> record in the change tracker.
4. Flush the tracking file, also when the run aborts.
5. If no file failed, run a diagnostic search and attach the top hits.

Failure policy:
- A failing file is logged, counted and skipped; the run continues
- A dimension mismatch aborts the whole run with DimensionMismatch
- Expected failures are returned as Result failures, never raised

Known gap: vector rows of files that were deleted from disk stay in the
collection; only their tracking records are removed.

Usage:
    from ingestion import IngestionService

    service = IngestionService(config, store, detector, embedder)
    result = service.ingest_directory("./src", "*.py;*.md", ChunkingStrategy.SECTION, True)
"""

import time
from pathlib import Path
from typing import Callable, Optional

from chunking.models import Chunk, ChunkingConfig, ChunkingStrategy, SourceDocument
from chunking.selector import create_chunker
from providers.config import SourceChatConfig
from providers.resolver import ProviderProfile, resolve_profile
from shared.exceptions import (
    CollectionNotFoundError,
    DimensionMismatchError,
    format_error_chain,
)
from shared.logging_config import get_logger
from shared.result import Error, ErrorCode, Result
from tracking.change_detector import FileChangeDetector, modified_time
from vector_store.store import VectorStoreGateway

from . import errors
from .discovery import DEFAULT_PATTERNS, discover_files
from .extractors import FileContentExtractor, extract_file
from .models import IngestionResult, SummaryChunk

logger = get_logger(__name__)

SUMMARY_QUERY = "summary overview content"
SUMMARY_TOP_RESULTS = 5

ProgressCallback = Callable[[int, int, str], None]


class IngestionService:
    """
    Drives one complete ingestion run at a time.
    """

    def __init__(
        self,
        config: SourceChatConfig,
        store: VectorStoreGateway,
        change_detector: FileChangeDetector,
        embedder,
        profile: Optional[ProviderProfile] = None,
        extractors: Optional[tuple[FileContentExtractor, ...]] = None,
        document_processors: Optional[list] = None,
        chunk_processors: Optional[list] = None,
    ):
        self.config = config
        self.store = store
        self.change_detector = change_detector
        self.embedder = embedder
        self.profile = profile or resolve_profile(config)
        self.extractors = extractors
        self.document_processors = document_processors or []
        self.chunk_processors = chunk_processors or []

    def ingest_directory(
        self,
        path: str | Path,
        patterns: str = DEFAULT_PATTERNS,
        strategy: ChunkingStrategy = ChunkingStrategy.SEMANTIC,
        incremental: bool = True,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> Result[IngestionResult]:
        """
        Ingest every file under path matching patterns.

        Args:
            path: Root directory (must exist).
            patterns: Semicolon-delimited glob patterns.
            strategy: Chunking strategy.
            incremental: Only process new or modified files.
            progress_callback: Optional callback(current, total, status).

        Returns:
            Success with an IngestionResult (per-file failures are counted
            in it), or a failure for DirectoryNotFound, DimensionMismatch,
            FileTrackingSaveError and SummaryRetrievalError.
        """
        started = time.time()
        root = Path(path)
        if not root.is_dir():
            logger.error("Directory does not exist: %s", path)
            return Result.failure(errors.directory_not_found(str(path)))

        try:
            chunker = create_chunker(strategy, self._chunking_config(), self.embedder)
        except ValueError as e:
            logger.error("Cannot create chunker: %s", e)
            return Result.failure(Error.failure(ErrorCode.CONFIGURATION_ERROR, str(e)))

        dimension = self.profile.embedding_dimension
        dimension_check = self.store.check_dimension(dimension)
        if dimension_check.is_failure:
            logger.error("%s", dimension_check.error.message)
            return Result.failure(dimension_check.error)

        logger.info(
            "Starting to process files from directory: %s with patterns: %s",
            root, patterns,
        )
        files = discover_files(root, patterns)
        logger.info(
            "Found %d files matching patterns: %s",
            len(files), ", ".join(f.name for f in files),
        )

        result = IngestionResult(files_discovered=len(files))
        to_process = self._select_files(files, incremental, result)

        fatal: Optional[Error] = None
        try:
            self._process_files(to_process, chunker, dimension, result, progress_callback)
        except DimensionMismatchError as e:
            logger.error("Aborting ingestion: %s", e.message)
            fatal = e.to_error()
        finally:
            save_error = self._flush_tracking()

        result.elapsed_seconds = round(time.time() - started, 2)
        if fatal is not None:
            return Result.failure(fatal)
        if save_error is not None:
            return Result.failure(save_error)

        logger.info("Finished processing. %s", result.summary())

        if result.errors == 0:
            summary = self._retrieve_summary()
            if summary.is_failure:
                return Result.failure(summary.error)
            result.summary_chunks = summary.value

        return Result.success(result)

    # -------------------------------------------------------------------------
    # Internal methods
    # -------------------------------------------------------------------------

    def _chunking_config(self) -> ChunkingConfig:
        return ChunkingConfig(
            max_tokens_per_chunk=self.config.max_tokens_per_chunk,
            overlap_tokens=self.config.chunk_overlap_tokens,
            tokenizer_model=self.profile.tokenizer_model,
        )

    def _select_files(
        self, files: list[Path], incremental: bool, result: IngestionResult
    ) -> list[Path]:
        if not incremental:
            return files

        removed = self.change_detector.reconcile_deletions(files)
        for stale in removed:
            self.change_detector.remove(stale)
            logger.warning(
                "File no longer present, removed from tracking (vector rows kept): %s",
                stale,
            )
        result.removed_from_tracking = removed

        selected: list[Path] = []
        unreadable = 0
        for f in files:
            try:
                last_modified = modified_time(f)
            except OSError as e:
                logger.error("Cannot read modification time of %s:\n%s", f, format_error_chain(e))
                self._record_failure(result, errors.file_processing_error(str(f), str(e)))
                unreadable += 1
                continue
            if self.change_detector.needs_processing(f, last_modified):
                selected.append(f)

        result.files_skipped = len(files) - len(selected) - unreadable
        if result.files_skipped:
            logger.info("Skipping %d unchanged files", result.files_skipped)
        return selected

    def _process_files(
        self,
        files: list[Path],
        chunker,
        dimension: int,
        result: IngestionResult,
        progress_callback: Optional[ProgressCallback],
    ) -> None:
        total = len(files)
        for i, file in enumerate(files):
            if progress_callback:
                progress_callback(i, total, f"Processing {file.name}")

            try:
                last_modified = modified_time(file)
                document = self._read_document(file)
                written = self._write_document(document, chunker, dimension)
            except DimensionMismatchError:
                raise
            except Exception as e:
                logger.error("Error while processing file %s:\n%s", file, format_error_chain(e))
                self._record_failure(result, errors.file_processing_error(str(file), str(e)))
                continue

            if written == 0 and document.content.strip():
                logger.warning("Failed to process document: %s", file)
                self._record_failure(result, errors.file_processing_failed(str(file)))
                continue

            try:
                content_hash = self.change_detector.compute_hash(file)
                self.change_detector.record_success(file, last_modified, content_hash)
            except OSError as e:
                logger.error("Failed to track file: %s", file, exc_info=True)
                self._record_failure(result, errors.file_tracking_error(str(file), str(e)))
                continue

            result.files_processed += 1
            result.total_chunks += written
            logger.info("Completed processing '%s' (%d chunks)", file, written)

        if progress_callback:
            progress_callback(total, total, "Done")

    def _read_document(self, file: Path) -> SourceDocument:
        extracted = extract_file(file, self.extractors)
        document = SourceDocument(
            document_id=str(file),
            path=str(file),
            content=extracted.content,
            metadata=extracted.metadata,
        )
        for processor in self.document_processors:
            document = processor.process(document)
        return document

    def _write_document(self, document: SourceDocument, chunker, dimension: int) -> int:
        title = document.metadata.get("title", "")
        chunks: list[Chunk] = []
        for chunk in chunker.process(document):
            if not chunk.context and title:
                chunk = chunk.model_copy(update={"context": title})
            for processor in self.chunk_processors:
                chunk = processor.process(chunk)
            chunks.append(chunk)

        if not chunks:
            return 0
        return self.store.write(chunks, dimension)

    @staticmethod
    def _record_failure(result: IngestionResult, error: Error) -> None:
        result.errors += 1
        result.failures.append(str(error))

    def _flush_tracking(self) -> Optional[Error]:
        try:
            self.change_detector.save()
        except OSError as e:
            logger.error("Failed to save file tracking", exc_info=True)
            return errors.file_tracking_save_error(str(e))
        logger.info("File tracking saved successfully")
        return None

    def _retrieve_summary(self) -> Result[list[SummaryChunk]]:
        logger.info(
            "Performing semantic search on collection '%s' with query: '%s', top: %d",
            self.store.collection_name, SUMMARY_QUERY, SUMMARY_TOP_RESULTS,
        )
        try:
            hits = self.store.search(SUMMARY_QUERY, top_k=SUMMARY_TOP_RESULTS)
        except CollectionNotFoundError:
            logger.warning(
                "Collection '%s' does not exist yet, nothing was written",
                self.store.collection_name,
            )
            return Result.success([])
        except Exception as e:
            logger.error("Failed to retrieve ingestion summary: %s", e, exc_info=True)
            return Result.failure(errors.summary_retrieval_error(str(e)))

        samples = [
            SummaryChunk.from_content(hit.score, hit.content)
            for hit in hits
            if hit.content.strip()
        ]
        logger.info("Retrieved %d summary chunks from vector store", len(samples))
        return Result.success(samples)

"""
Command-line front end.

Commands:
    ingest PATH   Ingest files (--patterns, --strategy, --incremental/--no-incremental)
    query [Q]     Ask a question, or start an interactive session without one
    list          List tracked files (--stats for database statistics)
    clear         Delete all ingested data (--confirm skips the prompt)
    config        Show the active configuration and check the embedding provider

Examples:
    python -m sourcechat ingest ./src --patterns "*.py;*.md" --strategy Structure
    python -m sourcechat query "Where is the tracking file written?"
    python -m sourcechat clear --confirm
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from chunking.models import ChunkingStrategy
from ingestion.discovery import DEFAULT_PATTERNS
from providers.config import SourceChatConfig
from providers.embedder import create_embedder
from query.service import DEFAULT_MAX_RESULTS
from shared.exceptions import ConfigurationError, format_error_chain
from shared.logging_config import get_logger, setup_logging
from tracking.change_detector import tracking_path_for

from .app import SourceChat

logger = get_logger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sourcechat",
        description="Chat with your source code using local retrieval-augmented generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ingest = subparsers.add_parser("ingest", help="Ingest files from a directory")
    ingest.add_argument("path", help="Directory to ingest")
    ingest.add_argument(
        "--strategy",
        type=ChunkingStrategy.parse,
        default=ChunkingStrategy.SEMANTIC,
        help="Chunking strategy: Semantic, Section or Structure (default: Semantic)",
    )
    ingest.add_argument(
        "--patterns",
        default=DEFAULT_PATTERNS,
        help=f"Semicolon-separated file patterns (default: {DEFAULT_PATTERNS})",
    )
    ingest.add_argument(
        "--incremental",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Only process new or modified files (default: on)",
    )

    query = subparsers.add_parser("query", help="Ask a question about the ingested files")
    query.add_argument("question", nargs="?", help="Question (omit for interactive mode)")
    query.add_argument(
        "--max-results",
        type=int,
        default=DEFAULT_MAX_RESULTS,
        help=f"Number of fragments to retrieve (default: {DEFAULT_MAX_RESULTS})",
    )
    query.add_argument(
        "--interactive",
        action="store_true",
        help="Start an interactive session",
    )

    list_cmd = subparsers.add_parser("list", help="List tracked files")
    list_cmd.add_argument("--stats", action="store_true", help="Show database statistics")

    clear = subparsers.add_parser("clear", help="Clear all ingested data")
    clear.add_argument("--confirm", action="store_true", help="Skip confirmation prompt")

    subparsers.add_parser("config", help="Show the active configuration")

    return parser


def _print_progress(current: int, total: int, status: str) -> None:
    print(f"  [{current}/{total}] {status}")


def cmd_ingest(app: SourceChat, args: argparse.Namespace) -> int:
    print(f"Ingesting files from: {args.path}")
    print(f"Strategy: {args.strategy.value}")
    print(f"Patterns: {args.patterns}")
    print(f"Incremental: {args.incremental}")
    print()

    result = app.ingest_directory(
        args.path,
        args.patterns,
        args.strategy,
        args.incremental,
        progress_callback=_print_progress,
    )
    if result.is_failure:
        print(f"Error: {result.error.message}")
        return 1

    ingestion = result.value
    print(f"\n{ingestion.summary()}")
    for stale in ingestion.removed_from_tracking:
        print(f"  No longer tracked: {stale}")

    if ingestion.errors > 0:
        print(f"\nCompleted with {ingestion.errors} error(s)")
        for failure in ingestion.failures:
            print(f"  {failure}")
        return 1

    if ingestion.files_processed > 0:
        print("\n=== Ingestion Summary ===")
        if ingestion.summary_chunks:
            print("\nSample content from ingested documents:\n")
            for chunk in ingestion.summary_chunks:
                print(f"Score: {chunk.score:.4f}")
                print(f"\tContent: {chunk.content}")
                print()
        else:
            print("No summary content available.")
    return 0


def cmd_query(app: SourceChat, args: argparse.Namespace) -> int:
    if args.interactive or not args.question:
        app.interactive_session(max_results=args.max_results).run()
        return 0

    result = app.query(args.question, max_results=args.max_results)
    if result.is_failure:
        print(f"Error: {result.error.message}")
        return 1
    print(result.value)
    return 0


def cmd_list(app: SourceChat, args: argparse.Namespace) -> int:
    tracked = app.list_tracked_files()
    if not tracked:
        print("No files have been ingested yet.")
    else:
        print(f"Tracked Files ({len(tracked)}):")
        print()
        for path in tracked:
            print(f"  {path}")

    if args.stats:
        print()
        print("Database Statistics:")
        for key, value in app.database_stats().items():
            print(f"  {key}: {value}")
    return 0


def cmd_clear(app: SourceChat, args: argparse.Namespace) -> int:
    if not args.confirm:
        response = input("Are you sure you want to clear all ingested data? (yes/no): ")
        if response.strip().lower() not in {"yes", "y"}:
            print("Operation cancelled.")
            return 0

    app.clear_all()
    print("All data cleared successfully.")
    return 0


def cmd_config(config: SourceChatConfig) -> int:
    print("Current Configuration:")
    for line in config.describe():
        print(f"  {line}")
    print(f"  Tracking File: {tracking_path_for(config.db_path)}")

    try:
        config.validate()
    except ConfigurationError as e:
        print(f"\nConfiguration is invalid: {e.message}")
        return 1
    print("\nConfiguration is valid.")

    status = create_embedder(config).health_check()
    if not status["healthy"]:
        print(f"Embedding provider unavailable ({status['model']}): {status['error']}")
        return 1
    print(f"Embedding provider reachable ({status['model']}).")
    return 0


_COMMANDS = {
    "ingest": cmd_ingest,
    "query": cmd_query,
    "list": cmd_list,
    "clear": cmd_clear,
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    # Variables already set in the environment win over .env entries.
    load_dotenv(Path.cwd() / ".env")

    try:
        config = SourceChatConfig.from_env()
        if args.command == "config":
            return cmd_config(config)
        app = SourceChat(config)
        return _COMMANDS[args.command](app, args)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted.")
        return 1
    except Exception as e:
        logger.error("Unexpected error:\n%s", format_error_chain(e), exc_info=True)
        print(f"Fatal error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

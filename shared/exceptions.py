"""
Exceptions raised inside SourceChat components.

Orchestrators translate these into ``Result`` failures at their public
boundary; they never escape ``ingest_directory`` or ``query``.

Exception Hierarchy:
    SourceChatError (base)
    ├── ConfigurationError
    ├── DimensionMismatchError
    └── CollectionNotFoundError

Usage:
    from shared.exceptions import DimensionMismatchError

    try:
        store.write(chunks, dimension=384)
    except DimensionMismatchError as e:
        print(f"Expected {e.expected}, got {e.actual}")
"""

from __future__ import annotations

from typing import Optional

from .result import Error, ErrorCode


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class SourceChatError(Exception):
    """
    Base exception for all SourceChat errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "A SourceChat error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# CONFIGURATION
# =============================================================================


class ConfigurationError(SourceChatError):
    """Raised at startup for an unknown provider or missing credentials."""

    def __init__(self, message: str, setting: Optional[str] = None):
        self.setting = setting
        super().__init__(message)


# =============================================================================
# VECTOR STORE
# =============================================================================


class DimensionMismatchError(SourceChatError):
    """
    Raised when an embedding does not match the collection dimension.

    Attributes:
        expected: Dimension the collection was provisioned with
        actual: Dimension the current embedding model produced
    """

    def __init__(self, expected: int, actual: int, collection: str = "data"):
        self.expected = expected
        self.actual = actual
        self.collection = collection
        super().__init__(
            message=(
                f"Embedding dimension mismatch: collection '{collection}' expects "
                f"{expected} dimensions, but the current embedding model produces "
                f"{actual} dimensions. This usually happens when switching between "
                f"embedding models. Run the 'clear' command to delete the existing "
                f"database and try again."
            ),
        )

    def to_error(self) -> Error:
        """The DimensionMismatch failure returned at Result boundaries."""
        return Error.failure(
            ErrorCode.DIMENSION_MISMATCH,
            self.message,
            expected=self.expected,
            actual=self.actual,
        )


class CollectionNotFoundError(SourceChatError):
    """Raised when the vector collection has never been created."""

    def __init__(self, collection: str = "data"):
        self.collection = collection
        super().__init__(message=f"Collection '{collection}' does not exist")


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: BaseException) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current: Optional[BaseException] = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")
        current = current.__cause__
        depth += 1

    return "\n".join(lines)

"""
Result / Error model.

Every fallible operation that crosses a component boundary returns a
``Result``: exactly one of a success value or an ``Error``. Expected
failure modes are described by ``ErrorCode``; exceptions are reserved for
conditions outside that taxonomy.

Usage:
    result = service.ingest_directory("./src", "*.md", strategy, True)
    if result.is_failure:
        print(result.error)
    else:
        print(result.value.files_processed)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Mapping, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


class ErrorCode(str, Enum):
    """Closed taxonomy of expected failures."""

    DIRECTORY_NOT_FOUND = "DirectoryNotFound"
    FILE_PROCESSING_ERROR = "FileProcessingError"
    FILE_PROCESSING_FAILED = "FileProcessingFailed"
    FILE_TRACKING_ERROR = "FileTrackingError"
    FILE_TRACKING_SAVE_ERROR = "FileTrackingSaveError"
    COLLECTION_NOT_FOUND = "CollectionNotFound"
    COLLECTION_ACCESS_ERROR = "CollectionAccessError"
    QUERY_EXECUTION_ERROR = "QueryExecutionError"
    NO_SEARCH_RESULTS = "NoSearchResults"
    DIMENSION_MISMATCH = "DimensionMismatch"
    SUMMARY_RETRIEVAL_ERROR = "SummaryRetrievalError"
    CONFIGURATION_ERROR = "ConfigurationError"
    GENERAL_FAILURE = "GeneralFailure"


@dataclass(frozen=True)
class Error:
    """
    A failure description.

    Attributes:
        code: Member of the error taxonomy
        message: Human-readable description
        details: Machine-readable diagnostics (e.g. expected/actual dimension)
    """

    code: ErrorCode
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def failure(cls, code: ErrorCode, message: str, **details: Any) -> "Error":
        return cls(code=code, message=message, details=dict(details))

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class ResultAccessError(RuntimeError):
    """Raised when reading the value of a failure or the error of a success."""


_MISSING = object()


class Result(Generic[T]):
    """Either a success carrying a value or a failure carrying an Error."""

    __slots__ = ("_value", "_error")

    def __init__(self, value: Any = _MISSING, error: Error | None = None):
        if (value is _MISSING) == (error is None):
            raise ValueError("Result needs exactly one of value or error")
        self._value = None if value is _MISSING else value
        self._error = error

    @classmethod
    def success(cls, value: T = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: Union[Error, str]) -> "Result[T]":
        if isinstance(error, str):
            error = Error.failure(ErrorCode.GENERAL_FAILURE, error)
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        return self._error is None

    @property
    def is_failure(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ResultAccessError(
                f"Cannot access value of failed result. Error: {self._error}"
            )
        return self._value

    @property
    def error(self) -> Error:
        if self._error is None:
            raise ResultAccessError("Cannot access error of successful result")
        return self._error

    def map(self, mapper: Callable[[T], U]) -> "Result[U]":
        """Transform the value of a success; failures pass through."""
        if self.is_failure:
            return Result.failure(self._error)
        return Result.success(mapper(self._value))

    def bind(self, binder: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain an operation that itself returns a Result."""
        if self.is_failure:
            return Result.failure(self._error)
        return binder(self._value)

    def on_success(self, action: Callable[[T], Any]) -> "Result[T]":
        if self.is_success:
            action(self._value)
        return self

    def on_failure(self, action: Callable[[Error], Any]) -> "Result[T]":
        if self.is_failure:
            action(self._error)
        return self

    def value_or(self, default: T) -> T:
        return self._value if self.is_success else default

    def __repr__(self) -> str:
        if self.is_success:
            return f"Success({self._value!r})"
        return f"Failure({self._error})"

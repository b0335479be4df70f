"""
Shared building blocks used by every SourceChat component.

- Result / Error: uniform success-or-failure contract between components
- Exception hierarchy for faults raised inside a component
- Logging setup under the ``sourcechat`` namespace
"""

from .exceptions import (
    CollectionNotFoundError,
    ConfigurationError,
    DimensionMismatchError,
    SourceChatError,
    format_error_chain,
)
from .logging_config import get_logger, setup_logging
from .result import Error, ErrorCode, Result, ResultAccessError

__all__ = [
    "Error",
    "ErrorCode",
    "Result",
    "ResultAccessError",
    "SourceChatError",
    "ConfigurationError",
    "DimensionMismatchError",
    "CollectionNotFoundError",
    "format_error_chain",
    "setup_logging",
    "get_logger",
]

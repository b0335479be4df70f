"""
Error definitions for query operations.
"""

from shared.result import Error, ErrorCode


def collection_not_found() -> Error:
    return Error.failure(
        ErrorCode.COLLECTION_NOT_FOUND,
        "No data has been ingested yet. Please run the 'ingest' command first.",
    )


def collection_access_error(exception_message: str) -> Error:
    return Error.failure(
        ErrorCode.COLLECTION_ACCESS_ERROR,
        "Unable to access the 'data' collection. Please ensure files have been "
        f"ingested first. {exception_message}",
    )


def query_execution_error(exception_message: str) -> Error:
    return Error.failure(
        ErrorCode.QUERY_EXECUTION_ERROR,
        f"Error during query execution: {exception_message}",
    )


def no_search_results() -> Error:
    return Error.failure(
        ErrorCode.NO_SEARCH_RESULTS,
        "I couldn't find any relevant information in the codebase to answer your question.",
    )

"""
Error definitions for ingestion operations.
"""

from shared.result import Error, ErrorCode


def directory_not_found(path: str) -> Error:
    return Error.failure(ErrorCode.DIRECTORY_NOT_FOUND, f"Directory not found: {path}", path=path)


def file_processing_error(path: str, exception_message: str) -> Error:
    return Error.failure(
        ErrorCode.FILE_PROCESSING_ERROR,
        f"Error while processing file {path}: {exception_message}",
        path=path,
    )


def file_processing_failed(document_id: str) -> Error:
    return Error.failure(
        ErrorCode.FILE_PROCESSING_FAILED,
        f"Failed to process document: {document_id}",
        path=document_id,
    )


def file_tracking_error(path: str, exception_message: str) -> Error:
    return Error.failure(
        ErrorCode.FILE_TRACKING_ERROR,
        f"Failed to track file: {path}. {exception_message}",
        path=path,
    )


def file_tracking_save_error(exception_message: str) -> Error:
    return Error.failure(
        ErrorCode.FILE_TRACKING_SAVE_ERROR,
        f"Failed to save file tracking: {exception_message}",
    )


def summary_retrieval_error(exception_message: str) -> Error:
    return Error.failure(
        ErrorCode.SUMMARY_RETRIEVAL_ERROR,
        f"Failed to retrieve ingestion summary: {exception_message}",
    )

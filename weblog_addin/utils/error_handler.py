"""
Error types and logging utilities for metadata decoding and migration.

Decoding never fails an edit: codecs raise MetadataParseError internally,
the processor recovers from it and reports it through ErrorHandler.
"""

import logging
from typing import Dict, List, Optional, Tuple


class WeblogMetadataError(Exception):
    """Base exception for metadata-related errors."""

    def __init__(
        self,
        message: str,
        encoding: str = None,
        source: str = None,
        error_code: str = None,
    ):
        super().__init__(message)
        self.encoding = encoding
        self.source = source
        self.error_code = error_code


class MetadataParseError(WeblogMetadataError):
    """Exception raised when a metadata block cannot be decoded."""

    pass


class ConfigurationError(WeblogMetadataError):
    """Exception raised for invalid add-in configuration values."""

    pass


class MigrationError(WeblogMetadataError):
    """Exception raised when a document cannot be migrated."""

    pass


class ErrorHandler:
    """
    Logging helper shared by the processors, managers and the migrator.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the error handler.

        Args:
            logger: Optional logger instance. If None, creates a new logger.
        """
        self.logger = logger or logging.getLogger(__name__)

    def log_parse_error(
        self,
        error: Exception,
        encoding: str,
        source: str = None,
        additional_context: Dict = None,
    ) -> None:
        """
        Log a recovered metadata decoding failure.

        Args:
            error: The exception that occurred
            encoding: Metadata encoding being decoded (yaml, legacy)
            source: Document being decoded (if known)
            additional_context: Additional context information
        """
        error_details = {
            "encoding": encoding,
            "source": source or "Unknown",
            "error_type": type(error).__name__,
            "error_message": str(error),
        }

        if additional_context:
            error_details.update(additional_context)

        self.logger.warning(
            f"Could not decode {encoding} metadata in '{source or 'document'}' - {str(error)}",
            extra={"error_details": error_details},
        )

    def log_configuration_error(self, setting: str, error_message: str = None) -> None:
        """
        Log a configuration problem with guidance.

        Args:
            setting: Name of the offending setting
            error_message: Optional specific error message
        """
        base_message = f"Invalid configuration value for {setting}"

        if error_message:
            full_message = f"{base_message}: {error_message}"
        else:
            full_message = base_message

        self.logger.error(
            f"{full_message}. Check the environment variable or your .env file."
        )

    def log_success(
        self,
        source: str,
        title: str,
        action: str,
        additional_info: Dict = None,
    ) -> None:
        """
        Log a successful operation.

        Args:
            source: Document that was processed
            title: Title of the post
            action: Action performed (decoded, encoded, migrated, skipped)
            additional_info: Additional information to log
        """
        base_message = f"SUCCESS: {action.capitalize()} '{title}' ({source})"

        if additional_info:
            details = ", ".join([f"{k}: {v}" for k, v in additional_info.items()])
            base_message += f" - {details}"

        self.logger.debug(base_message)

    def log_partial_failure_summary(
        self,
        operation: str,
        successful_sources: List[str],
        failed_sources: List[Tuple[str, str]],
    ) -> None:
        """
        Log summary of partial failures across documents.

        Args:
            operation: Operation that was run over the documents
            successful_sources: Documents that succeeded
            failed_sources: List of tuples (source, error_message)
        """
        if successful_sources and failed_sources:
            self.logger.warning(
                f"PARTIAL SUCCESS for {operation}: "
                f"{len(successful_sources)} succeeded; "
                f"Failed on {', '.join([s[0] for s in failed_sources])}"
            )

            for source, error_msg in failed_sources:
                self.logger.error(f"  - {source}: {error_msg}")

        elif failed_sources and not successful_sources:
            self.logger.error(
                f"COMPLETE FAILURE for {operation}: "
                f"Failed on all documents: {', '.join([s[0] for s in failed_sources])}"
            )

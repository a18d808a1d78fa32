"""
Custom exception classes for the knowledge index.

Provides specific exception types for the failure modes of configuring,
loading and linking a context tree so callers can decide per error how to react.
"""

from typing import Any


class BaseError(Exception):
    """
    Base exception class for all knowledge index errors.

    All custom exceptions in the system inherit from this base class
    to enable consistent error handling and logging.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize the error.

        Args:
            message: Human-readable error description
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context information
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation including error code if present."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"context={self.context})"
        )


class ConfigurationError(BaseError):
    """Raised when there are configuration or settings issues."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        expected_type: str | None = None,
        actual_value: Any | None = None,
    ):
        context = {}
        if config_key:
            context["config_key"] = config_key
        if expected_type:
            context["expected_type"] = expected_type
        if actual_value is not None:
            context["actual_value"] = str(actual_value)

        super().__init__(message, error_code="CONFIG_ERROR", context=context)


class DocumentParsingError(BaseError):
    """Raised when a markdown file cannot be read."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        parsing_stage: str | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if file_path:
            context["file_path"] = file_path
        if parsing_stage:
            context["parsing_stage"] = parsing_stage

        super().__init__(message, error_code="PARSING_ERROR", context=context, cause=underlying_error)


class FrontmatterError(BaseError):
    """Raised when a detected frontmatter block is not a valid YAML mapping."""

    def __init__(
        self,
        message: str,
        file_path: str | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if file_path:
            context["file_path"] = file_path

        super().__init__(message, error_code="FRONTMATTER_ERROR", context=context, cause=underlying_error)


class DocumentLoadError(BaseError):
    """Raised when a collection directory cannot be loaded."""

    def __init__(
        self,
        message: str,
        root_dir: str | None = None,
        file_path: str | None = None,
        documents_loaded: int | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if root_dir:
            context["root_dir"] = root_dir
        if file_path:
            context["file_path"] = file_path
        if documents_loaded is not None:
            context["documents_loaded"] = documents_loaded

        super().__init__(message, error_code="LOAD_ERROR", context=context, cause=underlying_error)


class LinkingError(BaseError):
    """Raised when dependency linking is invoked with invalid collections."""

    def __init__(
        self,
        message: str,
        document_key: str | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if document_key:
            context["document_key"] = document_key

        super().__init__(message, error_code="LINKING_ERROR", context=context, cause=underlying_error)


class InitializationError(BaseError):
    """Raised when engine initialization fails or the engine is used before it."""

    def __init__(
        self,
        message: str,
        component: str | None = None,
        initialization_stage: str | None = None,
        underlying_error: Exception | None = None,
    ):
        context = {}
        if component:
            context["component"] = component
        if initialization_stage:
            context["initialization_stage"] = initialization_stage

        super().__init__(
            message,
            error_code="INITIALIZATION_ERROR",
            context=context,
            cause=underlying_error,
        )


def raise_config_error(
    message: str,
    config_key: str,
    expected_type: str | None = None,
    actual_value: Any | None = None,
) -> None:
    """Raise a configuration error with context."""
    raise ConfigurationError(
        message=message,
        config_key=config_key,
        expected_type=expected_type,
        actual_value=actual_value,
    )

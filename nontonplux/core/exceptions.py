"""
Core Exceptions - Custom exception classes for NontonPlux.

This module defines the exception hierarchy shared by the providers,
the provider registry and the command-line front end.
"""

from typing import Optional, Any


class NontonPluxError(Exception):
    """Base exception class for all NontonPlux-specific errors."""

    def __init__(self, message: str, details: Optional[Any] = None):
        """
        Initialize NontonPlux error.

        Args:
            message: Human-readable error message
            details: Additional error details for debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        return self.message


class ConfigurationError(NontonPluxError):
    """Raised when configuration-related errors occur."""

    def __init__(self, message: str, config_path: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.config_path = config_path


class ProviderError(NontonPluxError):
    """Raised when a provider cannot be loaded or fails an operation."""

    def __init__(self, message: str, provider_name: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize provider error.

        Args:
            message: Error description
            provider_name: Name of the problematic provider
            details: Additional error context
        """
        super().__init__(message, details)
        self.provider_name = provider_name


class NetworkError(NontonPluxError):
    """Raised when a page or API request fails."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None, details: Optional[Any] = None):
        """
        Initialize network error.

        Args:
            message: Error description
            url: URL that caused the error
            status_code: HTTP status code if applicable
            details: Additional error context
        """
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class ExtractionError(NontonPluxError):
    """Raised when a single mirror or embed cannot be turned into a link."""

    def __init__(self, message: str, url: Optional[str] = None, details: Optional[Any] = None):
        super().__init__(message, details)
        self.url = url


class SearchError(NontonPluxError):
    """Raised when search-related errors occur."""

    def __init__(self, message: str, query: Optional[str] = None, source: Optional[str] = None, details: Optional[Any] = None):
        """
        Initialize search error.

        Args:
            message: Error description
            query: Search query that caused the error
            source: Provider that failed
            details: Additional error context
        """
        super().__init__(message, details)
        self.query = query
        self.source = source


# Export all exception classes
__all__ = [
    "NontonPluxError",
    "ConfigurationError",
    "ProviderError",
    "NetworkError",
    "ExtractionError",
    "SearchError",
]

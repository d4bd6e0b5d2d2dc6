"""
Error Handler - Error panels with context and suggestions.

This module renders every error that reaches the command-line front
end as a Rich panel: the message, whatever the exception knows about
its origin (provider, URL, query), and a short list of suggestions.
"""

import traceback
from typing import List, Optional

from rich.panel import Panel

from nontonplux.core.exceptions import (
    ConfigurationError,
    ExtractionError,
    NetworkError,
    NontonPluxError,
    ProviderError,
    SearchError,
)
from nontonplux.ui.console import get_console
from nontonplux.ui.themes import ColorPalette, get_palette


class ErrorHandler:
    """Handles error display with consistent formatting and helpful context."""

    @property
    def palette(self) -> ColorPalette:
        return get_palette()

    def handle_error(
        self,
        error: Exception,
        context: Optional[str] = None,
        show_traceback: bool = False
    ) -> None:
        """
        Handle and display an error with appropriate formatting.

        Args:
            error: Exception to handle
            context: Additional context about where the error occurred
            show_traceback: Whether to show the full traceback
        """
        if isinstance(error, ConfigurationError):
            facts = [("Configuration file", error.config_path)]
            suggestions = [
                "Check configuration file syntax and format",
                "Validate with [cyan]nontonplux config validate[/cyan]",
                "Reset to defaults with [cyan]nontonplux config reset[/cyan]",
            ]
            title = "⚙️  Configuration Error"
        elif isinstance(error, ProviderError):
            facts = [("Provider", error.provider_name)]
            suggestions = [
                "List providers with [cyan]nontonplux sources list[/cyan]",
                "Verify the provider is enabled in sources configuration",
                "Check the provider's host URL overrides",
            ]
            title = "🔌 Provider Error"
        elif isinstance(error, NetworkError):
            facts = [("URL", error.url), ("Status Code", error.status_code)]
            suggestions = self._network_suggestions(error.status_code)
            title = "🌐 Network Error"
        elif isinstance(error, ExtractionError):
            facts = [("URL", error.url)]
            suggestions = [
                "The page layout may have changed",
                "Try another mirror or episode",
            ]
            title = "🧩 Extraction Error"
        elif isinstance(error, SearchError):
            facts = [("Query", error.query), ("Source", error.source)]
            suggestions = [
                "Try different search terms or keywords",
                "Try the Indonesian title",
                "Try searching other enabled sources",
            ]
            title = "🔍 Search Error"
        elif isinstance(error, NontonPluxError):
            facts = [("Details", error.details)]
            suggestions = []
            title = "❌ Error"
        else:
            self._display(
                f"{error.__class__.__name__}: {error}",
                "💥 Unexpected Error",
                [],
                context,
                ["Check the command syntax and arguments", "Report this issue if it persists"],
                traceback.format_exc() if show_traceback else None,
            )
            return

        details = None
        if show_traceback:
            details = str(error.details) if error.details else traceback.format_exc()

        self._display(error.message, title, facts, context, suggestions, details)

    @staticmethod
    def _network_suggestions(status_code: Optional[int]) -> List[str]:
        suggestions = [
            "Check your internet connection",
            "Verify the source website is accessible",
            "The site may have moved; override main_url in sources.json",
        ]
        if status_code == 403:
            suggestions.insert(0, "The source may be blocking requests - try a different user agent")
        elif status_code == 404:
            suggestions.insert(0, "The requested content may no longer be available")
        elif status_code and status_code >= 500:
            suggestions.insert(0, "The source server is experiencing issues")
        return suggestions

    def _display(
        self,
        message: str,
        title: str,
        facts: list,
        context: Optional[str],
        suggestions: List[str],
        details: Optional[str],
    ) -> None:
        palette = self.palette
        content_parts = [f"[{palette.error}]{message}[/{palette.error}]"]

        for label, value in facts:
            if value is not None:
                content_parts.append(f"\n[dim]{label}:[/dim] [cyan]{value}[/cyan]")

        if context:
            content_parts.append(f"\n[dim]Context:[/dim] {context}")

        if suggestions:
            content_parts.append(f"\n\n[{palette.info}]💡 Suggestions:[/{palette.info}]")
            content_parts.extend(f"• {suggestion}" for suggestion in suggestions)

        if details:
            content_parts.append(f"\n\n[dim]Details:[/dim]\n{details}")

        get_console().print(Panel(
            "\n".join(content_parts),
            title=title,
            border_style=palette.error,
            padding=(1, 2)
        ))

    def display_warning(self, message: str, title: str = "⚠️  Warning") -> None:
        """Display a warning message."""
        palette = self.palette
        get_console().print(Panel(
            f"[{palette.warning}]{message}[/{palette.warning}]",
            title=f"[{palette.warning}]{title}[/{palette.warning}]",
            border_style=palette.warning,
            padding=(1, 2)
        ))

    def display_info(self, message: str, title: str = "ℹ️  Information") -> None:
        """Display an information message."""
        palette = self.palette
        get_console().print(Panel(
            f"[{palette.info}]{message}[/{palette.info}]",
            title=f"[{palette.info}]{title}[/{palette.info}]",
            border_style=palette.info,
            padding=(1, 2)
        ))


# Global error handler instance
_error_handler = ErrorHandler()


def get_error_handler() -> ErrorHandler:
    """Get the global error handler instance."""
    return _error_handler


def handle_error(
    error: Exception,
    context: Optional[str] = None,
    show_traceback: bool = False
) -> None:
    """
    Handle and display an error using the global error handler.

    Args:
        error: Exception to handle
        context: Additional context
        show_traceback: Whether to show traceback
    """
    _error_handler.handle_error(error, context, show_traceback)


def display_warning(message: str, title: str = "⚠️  Warning") -> None:
    """Display a warning message using the global error handler."""
    _error_handler.display_warning(message, title)


def display_info(message: str, title: str = "ℹ️  Information") -> None:
    """Display an information message using the global error handler."""
    _error_handler.display_info(message, title)


# Export error handling functions
__all__ = [
    "ErrorHandler",
    "get_error_handler",
    "handle_error",
    "display_warning",
    "display_info",
]

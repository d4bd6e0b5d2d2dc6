"""
UI Layer - Themes and Rich components.

This module contains the theme system and the Rich components that
give every command a consistent look.
"""

from nontonplux.ui.components import UIComponents
from nontonplux.ui.themes import ThemeManager, ThemeName, get_theme, set_theme
from nontonplux.ui.error_handler import ErrorHandler, handle_error, display_warning, display_info
from nontonplux.ui.progress import status_spinner, search_progress
from nontonplux.ui.console import get_console, setup_console, update_console_theme

__all__ = [
    # Core UI Components
    "UIComponents",
    # Theme System
    "ThemeManager",
    "ThemeName",
    "get_theme",
    "set_theme",
    # Error Handling
    "ErrorHandler",
    "handle_error",
    "display_warning",
    "display_info",
    # Progress Indicators
    "status_spinner",
    "search_progress",
    # Console Management
    "get_console",
    "setup_console",
    "update_console_theme",
]

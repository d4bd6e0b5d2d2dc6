"""
Progress Indicators - Spinners shown while providers work.
"""

from contextlib import contextmanager
from typing import Iterator, List

from rich.status import Status

from nontonplux.ui.console import get_console


@contextmanager
def status_spinner(message: str, spinner: str = "dots") -> Iterator[Status]:
    """Simple status spinner context manager."""
    status = Status(message, spinner=spinner, console=get_console())

    try:
        status.start()
        yield status
    finally:
        status.stop()


@contextmanager
def search_progress(sources: List[str]) -> Iterator[Status]:
    """Spinner for a search across several providers."""
    with status_spinner(f"Searching {len(sources)} sources ({', '.join(sources)})...") as status:
        yield status


# Export components
__all__ = [
    "status_spinner",
    "search_progress",
]

"""Shared pytest fixtures."""

import pytest

from tests.fakes import RecordingResolver


@pytest.fixture
def resolver() -> RecordingResolver:
    return RecordingResolver()

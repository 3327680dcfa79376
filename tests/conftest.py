"""Shared fixtures for homework progress tests."""

from datetime import datetime

import pytest

from homework_progress import ProgressFacade
from tests.helpers import NOW


@pytest.fixture
def now() -> datetime:
    """Fixed evaluation instant shared by all builders."""
    return NOW


@pytest.fixture
def facade() -> ProgressFacade:
    """ProgressFacade with the default configuration."""
    return ProgressFacade()

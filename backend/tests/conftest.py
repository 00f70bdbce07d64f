from datetime import UTC, datetime

import pytest

from models.types import Applet
from tests.factories import make_applet

NOW = datetime(2026, 1, 15, 10, 0, 0, tzinfo=UTC)


@pytest.fixture
def applet() -> Applet:
    """Instagram -> Dropbox applet with id 1."""
    return Applet(**make_applet())


@pytest.fixture
def fixed_clock():
    return lambda: NOW

"""Shared fixtures."""
import sys
from pathlib import Path

import pytest

# Make the helpers module importable regardless of pytest import mode
sys.path.insert(0, str(Path(__file__).parent))

from helpers import FakeProber  # noqa: E402

from linkwatch.core import i18n  # noqa: E402


@pytest.fixture
def fake_prober():
    return FakeProber()


@pytest.fixture
def english():
    """Force English text and restore it afterwards."""
    i18n.set_language("en")
    yield
    i18n.set_language("en")

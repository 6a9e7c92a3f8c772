import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from nowplaying.style import StyleConfig  # noqa: E402


@pytest.fixture
def style():
    return StyleConfig()

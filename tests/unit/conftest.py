"""
Pytest configuration and fixtures for lectro-check tests.
"""
import sys
import random
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture
def rng():
    """Deterministically seeded random source."""
    return random.Random(1234)


@pytest.fixture
def record_file(tmp_path):
    """Path for a regression file inside a per-test temp directory."""
    return tmp_path / "regressions.jsonl"

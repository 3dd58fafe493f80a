"""Shared pytest fixtures."""

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / 'tests' / 'fixtures'


def load_fixture(filename):
    """Load a JSON fixture from tests/fixtures."""
    with open(FIXTURES_DIR / filename, 'r') as f:
        return json.load(f)


@pytest.fixture
def market_rows():
    """Five daily API rows, newest first (2025-01-06 .. 2025-01-10)."""
    return load_fixture('market_daily_small.json')

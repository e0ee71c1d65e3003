"""Pytest configuration for repository-relative imports."""

import os
import sys

import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from tablestats import StatsTable  # noqa: E402


@pytest.fixture
def linear_table():
    """Two variables with y = 2 + 3x exactly, x in column 0."""
    return StatsTable.from_rows([[x, 2.0 + 3.0 * x] for x in range(6)])

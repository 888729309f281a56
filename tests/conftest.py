"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minegrid import Cell, Grid, GridConfig


# ============================================================================
# Grid Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine placement."""
    return random.Random(1234)


@pytest.fixture
def default_grid(rng: random.Random) -> Grid:
    """Create a 10x10 grid with 15 mines."""
    return Grid(10, 10, 15, rng=rng)


@pytest.fixture
def empty_grid() -> Grid:
    """Create a grid with no mines for cascade testing."""
    return Grid(5, 5, 0)


@pytest.fixture
def corner_grid() -> Grid:
    """
    5x5 grid with a mine in each corner.

    Numbers (M = mine):
        M 1 0 1 M
        1 1 0 1 1
        0 0 0 0 0
        1 1 0 1 1
        M 1 0 1 M
    """
    return Grid.from_layout([
        "*...*",
        ".....",
        ".....",
        ".....",
        "*...*",
    ])


@pytest.fixture
def single_mine_grid() -> Grid:
    """
    3x3 grid with one mine in the top-left corner.

    Numbers (M = mine):
        M 1 0
        1 1 0
        0 0 0
    """
    return Grid.from_layout([
        "*..",
        "...",
        "...",
    ])


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(0, 0)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(0, 0, is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> GridConfig:
    """Create a valid grid configuration."""
    return GridConfig(10, 10, 15)


@pytest.fixture
def small_config() -> GridConfig:
    """Small configuration for environment tests."""
    return GridConfig(4, 4, 2)

"""Shared test fixtures for shape geometry tests."""
import pytest


@pytest.fixture(scope="session")
def box():
    """5x5 box from (1,1) to (6,6), open."""
    return [(1, 1), (6, 1), (6, 6), (1, 6)]


@pytest.fixture(scope="session")
def triangle():
    """Triangle with its apex at (3.5, 7), overlapping box's top corners."""
    return [(0, 0), (7, 0), (3.5, 7)]


@pytest.fixture(scope="session")
def bar_h():
    """Horizontal 6x2 bar."""
    return [(0, 2), (6, 2), (6, 4), (0, 4)]


@pytest.fixture(scope="session")
def bar_v():
    """Vertical 2x6 bar crossing bar_h in the middle."""
    return [(2, 0), (4, 0), (4, 6), (2, 6)]


@pytest.fixture(scope="session")
def ccw_square():
    """Square (1,1)-(3,3) wound counter-clockwise, usable as a clip polygon."""
    return [(1, 1), (3, 1), (3, 3), (1, 3)]

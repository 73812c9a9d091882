"""
Pytest configuration file for lazyiter tests.

This file ensures that the project root is in the Python path
so that test files can import lazyiter, utils, and models modules.
"""

import sys
from pathlib import Path

# Add the parent directory to the Python path
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import pytest

from utils import clear_performance_metrics


@pytest.fixture
def numbers():
    """The five-element source used throughout the suite"""
    return [1, 2, 3, 4, 5]


@pytest.fixture
def is_odd():
    return lambda value, index: value % 2 == 1


@pytest.fixture(autouse=True)
def reset_performance_metrics():
    """Each test starts with an empty measurement registry"""
    clear_performance_metrics()
    yield
    clear_performance_metrics()

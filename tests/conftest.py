import os
import sys

import numpy as np
import pytest

# Get the path to the project root (one level up from 'tests')
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(project_root, 'src')

# Add 'src' to sys.path
sys.path.insert(0, src_path)

from loft.dynamics.vector import M1, Vy, Vz, rot  # noqa: E402


@pytest.fixture
def My():
    """Body x -> absolute -z, z -> x."""
    return rot(M1, np.pi / 2 * Vy)


@pytest.fixture
def Mz():
    """Body x -> absolute y, y -> -x."""
    return rot(M1, np.pi / 2 * Vz)


@pytest.fixture
def Myz(My):
    """My followed by a quarter turn about the rotated z."""
    return rot(My, np.pi / 2 * Vz)

"""
Shared fixtures for the reputation tests.
"""

import numpy as np
import pytest

from yzlm.rating_manager import RatingManager
from yzlm.reputation_engine import YZLM


@pytest.fixture
def symmetric_ratings():
    """Two users agreeing on object 0 and disagreeing symmetrically on object 1."""
    return RatingManager([(0, 0, 5.0), (0, 1, 5.0), (1, 0, 1.0), (1, 1, 9.0)])


@pytest.fixture
def single_user_ratings():
    """One user rating three objects."""
    return RatingManager([(0, 0, 2.0), (1, 0, 7.5), (2, 0, 4.25)])


@pytest.fixture
def noisy_ratings():
    """Three users on four objects; user 2 is far off the consensus and user 3 never rates."""
    return RatingManager([
        (0, 0, 4.0), (0, 1, 4.2), (0, 2, 9.0),
        (1, 0, 6.0), (1, 1, 5.8), (1, 2, 1.0),
        (2, 0, 2.1), (2, 1, 1.9), (2, 2, 8.0),
        (3, 0, 7.0), (3, 1, 7.1), (3, 2, 0.5),
    ], n_objects=4, n_users=4)


@pytest.fixture
def yzlm():
    return YZLM()


@pytest.fixture
def rng():
    return np.random.default_rng(12345)

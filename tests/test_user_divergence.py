import numpy as np
import pytest

from yzlm.rating_manager import RatingManager, VectorSizeError
from yzlm.user_divergence import UserDivergenceEstimator


@pytest.fixture
def estimator():
    return UserDivergenceEstimator()


def test_sum_of_squared_residuals(estimator, symmetric_ratings):
    divergence = estimator.compute(symmetric_ratings, np.array([5.0, 5.0]))
    np.testing.assert_array_equal(divergence, [16.0, 16.0])


def test_not_normalized_by_link_count(estimator):
    rm = RatingManager([(0, 0, 1.0), (1, 0, 3.0), (0, 1, 2.0)])
    divergence = estimator.compute(rm, np.array([2.0, 2.0]))
    np.testing.assert_array_equal(divergence, [2.0, 0.0])


def test_unlinked_user_has_zero_divergence(estimator, noisy_ratings):
    divergence = estimator.compute(noisy_ratings, np.zeros(4))
    assert divergence[3] == 0.0
    assert np.all(divergence[:3] > 0)


def test_repeated_calls_do_not_accumulate(estimator, symmetric_ratings):
    first = estimator.compute(symmetric_ratings, np.array([4.0, 4.0]))
    second = estimator.compute(symmetric_ratings, np.array([4.0, 4.0]))
    np.testing.assert_array_equal(first, second)


def test_wrong_object_reputation_size(estimator, symmetric_ratings):
    with pytest.raises(VectorSizeError):
        estimator.compute(symmetric_ratings, np.ones(5))

import numpy as np
import pytest

from yzlm.config import ERROR_RANGE, QUALITY_RANGE
from yzlm.reputation_engine import YZLM
from yzlm.synthetic import generate_trial, quality_error


def test_every_user_rates_every_object(rng):
    trial = generate_trial(rng, 4, 3)

    assert len(trial.ratings) == 12
    assert trial.ratings.n_objects == 4
    assert trial.ratings.n_users == 3
    np.testing.assert_array_equal(trial.ratings.objects, np.repeat(np.arange(4), 3))
    np.testing.assert_array_equal(trial.ratings.users, np.tile(np.arange(3), 4))
    np.testing.assert_array_equal(trial.ratings.user_links(), [4, 4, 4])


def test_draws_within_ranges(rng):
    trial = generate_trial(rng, 20, 10)

    assert np.all((trial.object_quality >= QUALITY_RANGE[0]) & (trial.object_quality < QUALITY_RANGE[1]))
    assert np.all((trial.user_error >= ERROR_RANGE[0]) & (trial.user_error < ERROR_RANGE[1]))

    q = trial.object_quality[trial.ratings.objects]
    e = trial.user_error[trial.ratings.users]
    w = trial.ratings.weights
    assert np.all(w >= q - e)
    assert np.all(w <= q + e)


def test_seeded_generator_is_reproducible():
    a = generate_trial(np.random.default_rng(7), 5, 4)
    b = generate_trial(np.random.default_rng(7), 5, 4)

    np.testing.assert_array_equal(a.object_quality, b.object_quality)
    np.testing.assert_array_equal(a.ratings.weights, b.ratings.weights)


def test_negative_size(rng):
    with pytest.raises(ValueError):
        generate_trial(rng, -1, 3)


def test_quality_error():
    assert quality_error([1.0, 2.0], [1.0, 4.0]) == pytest.approx(np.sqrt(2.0))
    assert quality_error([], []) == 0.0
    with pytest.raises(ValueError):
        quality_error([1.0], [1.0, 2.0])


def test_reputation_recovers_quality(rng):
    trial = generate_trial(rng, 30, 20)
    result = YZLM(max_iter=10000).calculate_reputation(trial.ratings, np.ones(20))

    assert result.converged
    assert quality_error(result.object_reputation, trial.object_quality) < ERROR_RANGE[1]

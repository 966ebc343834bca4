# synthetic.py

from typing import NamedTuple

import numpy as np
import pandas as pd

from yzlm.config import QUALITY_RANGE, ERROR_RANGE
from yzlm.rating_manager import RatingManager


class SyntheticTrial(NamedTuple):
    object_quality: np.ndarray
    user_error: np.ndarray
    ratings: RatingManager


def generate_trial(rng: np.random.Generator, n_objects: int, n_users: int,
                   quality_range=QUALITY_RANGE, error_range=ERROR_RANGE) -> SyntheticTrial:
    """
    Generates a complete rating set where every user rates every object.

    Each object gets a true quality q ~ U(quality_range) and each user an error
    e ~ U(error_range). The rating of user u on object o is drawn from
    U(q_o - e_u, q_o + e_u). Ratings are ordered by object, then by user.
    """
    if n_objects < 0 or n_users < 0:
        raise ValueError(f"Sizes must be non-negative, got objects={n_objects}, users={n_users}")

    object_quality = rng.uniform(*quality_range, size=n_objects)
    user_error = rng.uniform(*error_range, size=n_users)

    objects, users = np.meshgrid(np.arange(n_objects), np.arange(n_users), indexing="ij")
    low = object_quality[:, None] - user_error[None, :]
    high = object_quality[:, None] + user_error[None, :]
    weights = rng.uniform(low, high)

    df = pd.DataFrame({
        "object": objects.ravel(),
        "user": users.ravel(),
        "weight": weights.ravel(),
    })
    return SyntheticTrial(object_quality, user_error, RatingManager(df, n_objects, n_users))


def quality_error(object_reputation: np.ndarray, object_quality: np.ndarray) -> float:
    """Root mean squared error of the estimated object reputation against the true quality."""
    object_reputation = np.asarray(object_reputation, dtype=np.float64)
    object_quality = np.asarray(object_quality, dtype=np.float64)
    if object_reputation.shape != object_quality.shape:
        raise ValueError(f"Shape mismatch: {object_reputation.shape} vs {object_quality.shape}")
    if object_quality.size == 0:
        return 0.0
    return float(np.sqrt(np.mean((object_reputation - object_quality) ** 2)))

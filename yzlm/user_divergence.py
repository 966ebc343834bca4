# user_divergence.py

import numpy as np

from yzlm.rating_manager import RatingManager


class UserDivergenceEstimator:
    def compute(self, ratings: RatingManager, object_reputation: np.ndarray) -> np.ndarray:
        """
        Computes, for every user, the sum of squared residuals between the user's
        ratings and the current object reputation:

            D_u = sum_r (w_r - R_{o_r})^2    over all ratings r authored by u

        The sum is not divided by the number of ratings; the user reputation update
        does that with the user's own link count.

        Args:
            ratings (RatingManager): The rating set.
            object_reputation (np.ndarray): Current object reputation, length n_objects.

        Returns:
            np.ndarray: User divergence vector of length n_users.
        """
        object_reputation = ratings.check_vector("object_reputation", object_reputation,
                                                 ratings.n_objects)
        residual = ratings.weights - object_reputation[ratings.objects]
        return np.bincount(ratings.users, weights=residual * residual, minlength=ratings.n_users)

# object_reputation.py

import numpy as np
from typing import Optional

from yzlm.rating_manager import RatingManager


class ObjectReputationEstimator:
    def update(self, ratings: RatingManager, user_reputation: np.ndarray,
               previous: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Computes the reputation of every object as the reliability-weighted average
        of the ratings it received:

            R_o = sum_r(u_r * w_r) / sum_r(u_r)    over all ratings r of object o

        where u_r is the reputation of the user who authored r and w_r its weight.
        Objects whose weight sum is not positive (no ratings, or only raters with zero
        reputation) keep their previous value instead of being divided by zero.

        Args:
            ratings (RatingManager): The rating set.
            user_reputation (np.ndarray): Current user reputation, length n_users.
            previous (np.ndarray, optional): Previous object reputation, length n_objects.
                Defaults to zeros.

        Returns:
            np.ndarray: A new object reputation vector of length n_objects.
        """
        user_reputation = ratings.check_vector("user_reputation", user_reputation, ratings.n_users)
        if previous is None:
            object_reputation = np.zeros(ratings.n_objects, dtype=np.float64)
        else:
            object_reputation = ratings.check_vector("previous", previous, ratings.n_objects).copy()

        # Accumulators start from zero on every call.
        rater_weight = user_reputation[ratings.users]
        weighted_sum = np.bincount(ratings.objects, weights=rater_weight * ratings.weights,
                                   minlength=ratings.n_objects)
        weight_sum = np.bincount(ratings.objects, weights=rater_weight,
                                 minlength=ratings.n_objects)

        rated = weight_sum > 0
        object_reputation[rated] = weighted_sum[rated] / weight_sum[rated]
        return object_reputation


# Example usage:
if __name__ == "__main__":
    rm = RatingManager([(0, 0, 5.0), (0, 1, 5.0), (1, 0, 1.0), (1, 1, 9.0)], n_objects=3)
    estimator = ObjectReputationEstimator()

    print("Uniform raters:", estimator.update(rm, np.ones(2)))
    print("Trusting user 1 more:", estimator.update(rm, np.array([1.0, 3.0])))

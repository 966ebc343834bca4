# reputation_engine.py

import logging
from enum import Enum
from typing import NamedTuple, Optional

import numpy as np

from yzlm.config import CONVERGENCE_THRESHOLD, EXPONENT, MIN_DIVERGENCE, MAX_ITER
from yzlm.object_reputation import ObjectReputationEstimator
from yzlm.rating_manager import RatingManager
from yzlm.user_divergence import UserDivergenceEstimator
from yzlm.user_reputation import UserReputationEstimator

logger = logging.getLogger(__name__)


class ConvergenceStatus(Enum):
    CONVERGED = "converged"
    NOT_CONVERGED = "not_converged"


class ReputationResult(NamedTuple):
    object_reputation: np.ndarray
    user_reputation: np.ndarray
    iterations: int
    diff: float
    status: ConvergenceStatus

    @property
    def converged(self) -> bool:
        return self.status is ConvergenceStatus.CONVERGED


class YZLM:
    def __init__(self, convergence: float = CONVERGENCE_THRESHOLD, exponent: float = EXPONENT,
                 min_divergence: float = MIN_DIVERGENCE, max_iter: Optional[int] = MAX_ITER):
        """
        Iterative refinement of object and user reputation on a bipartite rating graph.

        Object reputation is the user-reputation-weighted average of the ratings an object
        received. User reputation is an inverse power of the user's mean squared divergence
        from the object reputation. The two are updated in turn until the object reputation
        stops moving:

            diff = sum_o (R_o(t+1) - R_o(t))^2 <= convergence

        Args:
            convergence (float): Threshold on the squared L2 change of object reputation.
            exponent (float): Power of the user reputation law.
            min_divergence (float): Floor added to the mean divergence of each user.
            max_iter (int, optional): Iteration cap. None loops until convergence, which
                never ends on a non-convergent rating set.
        """
        if convergence < 0:
            raise ValueError(f"convergence must be non-negative, got {convergence}")
        if max_iter is not None and max_iter < 1:
            raise ValueError(f"max_iter must be a positive integer or None, got {max_iter}")
        if not min_divergence > 0:
            raise ValueError(f"min_divergence must be positive, got {min_divergence}")
        if not exponent >= 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")

        self.convergence = convergence
        self.exponent = exponent
        self.min_divergence = min_divergence
        self.max_iter = max_iter

        self.object_estimator = ObjectReputationEstimator()
        self.divergence_estimator = UserDivergenceEstimator()
        self.user_estimator = UserReputationEstimator(exponent, min_divergence)

    def calculate_reputation(self, ratings: RatingManager, user_reputation: np.ndarray,
                             object_reputation: Optional[np.ndarray] = None) -> ReputationResult:
        """
        Runs the iteration from the given user reputation.

        Args:
            ratings (RatingManager): The rating set.
            user_reputation (np.ndarray): Initial non-negative user reputation, length n_users.
            object_reputation (np.ndarray, optional): Values kept by objects that never
                get a positive weight sum. Defaults to zeros.

        Returns:
            ReputationResult: Final object and user reputation, the number of iterations,
                the last diff and whether the threshold was reached.
        """
        user_reputation = ratings.check_vector("user_reputation", user_reputation,
                                               ratings.n_users).copy()
        if not np.all(user_reputation >= 0):
            raise ValueError("user_reputation must be non-negative")
        user_links = ratings.user_links()

        # Warm start so the first diff compares against a computed estimate.
        object_reputation = self.object_estimator.update(ratings, user_reputation,
                                                         object_reputation)

        iterations = 0
        while True:
            user_divergence = self.divergence_estimator.compute(ratings, object_reputation)
            user_reputation = self.user_estimator.update(user_divergence, user_links)

            reputation_buf = object_reputation
            object_reputation = self.object_estimator.update(ratings, user_reputation,
                                                             reputation_buf)

            delta = object_reputation - reputation_buf
            diff = float(np.dot(delta, delta))
            iterations += 1
            logger.debug("Iteration %d: diff = %e", iterations, diff)

            if diff <= self.convergence:
                status = ConvergenceStatus.CONVERGED
                break
            if self.max_iter is not None and iterations >= self.max_iter:
                status = ConvergenceStatus.NOT_CONVERGED
                logger.warning("Did not converge within %d iterations (diff = %e).",
                               self.max_iter, diff)
                break

        logger.info("Exited in %d iterations with diff = %e", iterations, diff)
        return ReputationResult(object_reputation, user_reputation, iterations, diff, status)


# Example usage:
if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    rm = RatingManager([(0, 0, 5.0), (0, 1, 5.0), (1, 0, 1.0), (1, 1, 9.0),
                        (2, 0, 3.0), (2, 1, 7.5)])
    yzlm = YZLM()
    result = yzlm.calculate_reputation(rm, np.ones(rm.n_users))

    print("Object reputation:", result.object_reputation)
    print("User reputation:", result.user_reputation)
    print(f"{result.status.value} after {result.iterations} iterations, diff = {result.diff:e}")

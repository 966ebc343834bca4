# user_reputation.py

import numpy as np
from yzlm.config import EXPONENT, MIN_DIVERGENCE
from yzlm.rating_manager import VectorSizeError
from typing import Optional


class UserReputationEstimator:
    def __init__(self, exponent: float = EXPONENT, min_divergence: float = MIN_DIVERGENCE):
        """
        Initializes the user reputation updater.

        Args:
            exponent (float): Power of the inverse law, normally in (0, 1).
            min_divergence (float): Floor added to the mean divergence so that a user
                whose residuals sum to exactly zero gets a finite reputation.
        """
        self.exponent = exponent
        self.min_divergence = min_divergence

    def update(self, user_divergence: np.ndarray, user_links: np.ndarray,
               exponent: Optional[float] = None,
               min_divergence: Optional[float] = None) -> np.ndarray:
        """
        Converts divergence into reliability with an inverse power law:

            U_u = (D_u / L_u + min_divergence) ^ (-exponent)    if L_u > 0
            U_u = 0                                             otherwise

        where D_u is the divergence of user u and L_u the number of ratings u authored.

        Args:
            user_divergence (np.ndarray): Sum of squared residuals per user.
            user_links (np.ndarray): Number of ratings per user.
            exponent (float, optional): Overrides the configured exponent.
            min_divergence (float, optional): Overrides the configured floor.

        Returns:
            np.ndarray: A new user reputation vector.
        """
        exponent = self.exponent if exponent is None else exponent
        min_divergence = self.min_divergence if min_divergence is None else min_divergence

        user_divergence = np.asarray(user_divergence, dtype=np.float64)
        user_links = np.asarray(user_links)
        if user_divergence.shape != user_links.shape:
            raise VectorSizeError(f"user_divergence has shape {user_divergence.shape} but "
                             f"user_links has shape {user_links.shape}")

        user_reputation = np.zeros_like(user_divergence)
        linked = user_links > 0
        base = user_divergence[linked] / user_links[linked] + min_divergence
        user_reputation[linked] = np.power(base, -exponent)
        return user_reputation


# Example usage:
if __name__ == "__main__":
    divergence = np.array([0.0, 4.0, 16.0, 0.0])
    links = np.array([3, 2, 2, 0])

    estimator = UserReputationEstimator()
    print("User reputation:", estimator.update(divergence, links))

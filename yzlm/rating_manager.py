# rating_manager.py

import logging
from typing import Iterable, NamedTuple, Optional, Union

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

COLUMNS = ["object", "user", "weight"]


class Rating(NamedTuple):
    """One (object, user, weight) observation."""
    object: int
    user: int
    weight: float


class RatingIndexError(IndexError):
    """Raised when a rating references an object or user outside the declared range."""


class VectorSizeError(ValueError):
    """Raised when a reputation vector does not match the number of objects or users."""


def _as_rating_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Casts a ratings DataFrame to integer indices and float weights.

    Raises:
        RatingIndexError: If an object or user index is missing, non-numeric or fractional.
    """
    for column in ("object", "user"):
        values = pd.to_numeric(df[column], errors="coerce")
        bad = values[values.isna() | (values % 1 != 0)]
        if not bad.empty:
            position = bad.index[0]
            raise RatingIndexError(
                f"Rating {position} has {column} index {df[column].loc[position]}, "
                f"expected an integer"
            )
    df = df.astype({"object": np.int64, "user": np.int64, "weight": np.float64})
    return df.reset_index(drop=True)


class RatingManager:
    def __init__(self, ratings: Union[pd.DataFrame, Iterable] = (),
                 n_objects: Optional[int] = None, n_users: Optional[int] = None):
        """
        Holds the static rating set of one reputation run.

        The ratings are kept in a DataFrame with columns ["object", "user", "weight"],
        in the order they were given. Duplicate (object, user) pairs are kept and
        each one contributes on its own.

        Args:
            ratings (pd.DataFrame or Iterable): A DataFrame with the columns above, or an
                iterable of Rating / (object, user, weight) tuples.
            n_objects (int, optional): Number of objects. Inferred as max(object) + 1 if omitted.
            n_users (int, optional): Number of users. Inferred as max(user) + 1 if omitted.
        """
        if isinstance(ratings, pd.DataFrame):
            missing = [c for c in COLUMNS if c not in ratings.columns]
            if missing:
                raise ValueError(f"Ratings DataFrame is missing columns: {missing}")
            df = ratings[COLUMNS].copy()
        else:
            df = pd.DataFrame([tuple(r) for r in ratings], columns=COLUMNS)

        self.ratings = _as_rating_frame(df)

        self.n_objects = self._infer_size("object") if n_objects is None else int(n_objects)
        self.n_users = self._infer_size("user") if n_users is None else int(n_users)

        self._user_links = None
        self.validate()

    def _infer_size(self, column: str) -> int:
        if self.ratings.empty:
            return 0
        return int(self.ratings[column].max()) + 1

    def __len__(self):
        return len(self.ratings)

    def __repr__(self):
        return (f"RatingManager(ratings={len(self)}, objects={self.n_objects}, "
                f"users={self.n_users})")

    @property
    def objects(self) -> np.ndarray:
        return self.ratings["object"].to_numpy()

    @property
    def users(self) -> np.ndarray:
        return self.ratings["user"].to_numpy()

    @property
    def weights(self) -> np.ndarray:
        return self.ratings["weight"].to_numpy()

    def validate(self) -> None:
        """
        Checks that every rating references an object in [0, n_objects) and a
        user in [0, n_users).

        Raises:
            RatingIndexError: On the first column holding an out-of-range index.
        """
        for column, size in (("object", self.n_objects), ("user", self.n_users)):
            values = self.ratings[column]
            bad = values[(values < 0) | (values >= size)]
            if not bad.empty:
                position = bad.index[0]
                raise RatingIndexError(
                    f"Rating {position} has {column} index {bad.iloc[0]}, "
                    f"expected 0 <= {column} < {size}"
                )

    def add_rating(self, obj: int, user: int, weight: float) -> None:
        """
        Appends a rating to the set. The user link counts are recomputed on next use.
        """
        new_row = _as_rating_frame(pd.DataFrame([Rating(obj, user, weight)], columns=COLUMNS))
        candidate = pd.concat([self.ratings, new_row], ignore_index=True)

        previous = self.ratings
        self.ratings = candidate
        try:
            self.validate()
        except RatingIndexError:
            self.ratings = previous
            raise
        self._user_links = None
        logger.debug("Added rating %s", Rating(obj, user, weight))

    def user_links(self) -> np.ndarray:
        """
        Returns the number of ratings authored by each user.

        Returns:
            np.ndarray: Integer array of length n_users.
        """
        if self._user_links is None:
            self._user_links = np.bincount(self.users, minlength=self.n_users).astype(np.int64)
        return self._user_links.copy()

    def check_vector(self, name: str, vector, size: int) -> np.ndarray:
        """
        Converts a caller-supplied vector to a float array and checks its length.

        Raises:
            VectorSizeError: If the vector is not one-dimensional with the expected length.
        """
        array = np.asarray(vector, dtype=np.float64)
        if array.ndim != 1 or array.shape[0] != size:
            raise VectorSizeError(f"{name} has shape {array.shape}, expected ({size},)")
        return array


# Example usage:
if __name__ == "__main__":
    rm = RatingManager([(0, 0, 5.0), (0, 1, 5.0), (1, 0, 1.0), (1, 1, 9.0)])
    print(rm)
    print("User links:", rm.user_links())

    rm.add_rating(1, 0, 2.5)
    print("User links after adding a rating:", rm.user_links())

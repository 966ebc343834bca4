# main.py

import argparse
import logging
import sys
from typing import Optional

import numpy as np
import pandas as pd

from yzlm.config import (CONVERGENCE_THRESHOLD, EXPONENT, MIN_DIVERGENCE, MAX_ITER,
                         INITIAL_USER_REPUTATION, NUM_TRIALS)
from yzlm.reputation_engine import YZLM
from yzlm.synthetic import generate_trial, quality_error


def run_trials(yzlm: YZLM, n_objects: int, n_users: int, trials: int = NUM_TRIALS,
               seed: Optional[int] = None) -> pd.DataFrame:
    """
    Runs the reputation iteration on a series of freshly generated rating sets.

    Every trial draws new object qualities, user errors and ratings from one
    generator seeded with `seed`, starts all users at the same reputation and
    reports how well the object reputation recovers the true quality.

    Returns:
        pd.DataFrame: One row per trial with columns
            ["trial", "ratings", "iterations", "diff", "converged", "error"].
    """
    rng = np.random.default_rng(seed)
    records = []
    iter_total = 0

    for i in range(trials):
        trial = generate_trial(rng, n_objects, n_users)
        print(f"[{i}] Generated {len(trial.ratings)} ratings")

        user_reputation = np.full(n_users, INITIAL_USER_REPUTATION)
        result = yzlm.calculate_reputation(trial.ratings, user_reputation)
        print(f"Exited in {result.iterations} iterations with diff = {result.diff:e}")
        if not result.converged:
            print(f"Stopped at the iteration cap of {yzlm.max_iter}")

        iter_total += result.iterations
        delta = quality_error(result.object_reputation, trial.object_quality)
        print(f"Error in quality estimate: {delta}")
        print("--------")

        records.append({
            "trial": i,
            "ratings": len(trial.ratings),
            "iterations": result.iterations,
            "diff": result.diff,
            "converged": result.converged,
            "error": delta,
        })

    print(f"Total iterations: {iter_total}")
    return pd.DataFrame(records, columns=["trial", "ratings", "iterations", "diff",
                                          "converged", "error"])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Estimate object and user reputation on synthetic rating sets.")
    parser.add_argument("objects", type=int, help="Number of rated objects.")
    parser.add_argument("users", type=int, help="Number of users; every user rates every object.")
    parser.add_argument("--trials", type=int, default=NUM_TRIALS,
                        help=f"Number of generated rating sets (default: {NUM_TRIALS}).")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed of the random generator. Fresh entropy if omitted.")
    parser.add_argument("--max-iter", type=int, default=MAX_ITER,
                        help="Stop a run after this many iterations even if it has not converged.")
    parser.add_argument("--convergence", type=float, default=CONVERGENCE_THRESHOLD,
                        help=f"Squared L2 convergence threshold (default: {CONVERGENCE_THRESHOLD}).")
    parser.add_argument("--exponent", type=float, default=EXPONENT,
                        help=f"User reputation exponent (default: {EXPONENT}).")
    parser.add_argument("--min-divergence", type=float, default=MIN_DIVERGENCE,
                        help=f"Divergence floor (default: {MIN_DIVERGENCE}).")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Logging level of the reputation engine.")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.objects < 0 or args.users < 0:
        parser.error("objects and users must be non-negative")
    if args.trials < 0:
        parser.error("--trials must be non-negative")

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        yzlm = YZLM(convergence=args.convergence, exponent=args.exponent,
                    min_divergence=args.min_divergence, max_iter=args.max_iter)
    except ValueError as e:
        parser.error(str(e))

    run_trials(yzlm, args.objects, args.users, trials=args.trials, seed=args.seed)
    return 0


if __name__ == "__main__":
    sys.exit(main())

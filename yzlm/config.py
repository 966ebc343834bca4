# config.py
CONVERGENCE_THRESHOLD = 1e-24   # Maximum squared-L2 change in object reputation between iterations
EXPONENT = 0.8                  # Power applied to the mean divergence of a user (negated)
MIN_DIVERGENCE = 1e-36          # Added to the mean divergence to avoid division by zero
MAX_ITER = None                 # Optional iteration cap, None loops until convergence

# Synthetic trial harness
INITIAL_USER_REPUTATION = 1.0   # Warm start value for every user
NUM_TRIALS = 100                # Number of generated rating sets per run
QUALITY_RANGE = (0.0, 10.0)     # Uniform range of the true object quality
ERROR_RANGE = (0.0, 1.0)        # Uniform range of the user rating error

"""
Example 1: Basic Synthetic Series Generation

This example demonstrates the fundamental workflow for sampling an AR process:
1. Build an AR(1) generator
2. Pull single values, a fixed-length prefix, and an indexed Series
3. Generate an Ensemble of independent realizations and summarize it

Key parameters to explore:
- COEFFICIENTS: lag weights (sum of magnitudes < 1 keeps the process stable)
- NOISE_VARIANCE: variance of the white noise
- N_REALIZATIONS: Number of synthetic traces
- SEED: Random seed for reproducibility
"""
import logging

from autoregressive import AutoregressiveGenerator

logging.basicConfig(level=logging.INFO)

# ============================================================================
# Configuration
# ============================================================================
OFFSET = 5.0              # Constant term c
NOISE_VARIANCE = 1.0      # Variance of epsilon
COEFFICIENTS = [0.5]      # phi, most recent lag first
N_TIMESTEPS = 100         # Length of each synthetic trace
N_REALIZATIONS = 50       # Number of synthetic traces
SEED = 42                 # Random seed for reproducibility

# ============================================================================
# Sample a single trace
# ============================================================================
ar = AutoregressiveGenerator(OFFSET, NOISE_VARIANCE, COEFFICIENTS, random_seed=SEED)

first = ar.step()
next10 = ar.take(10)
print(f"First value: {first:.3f}")
print(f"Next 10 values: {next10.round(3)}")

series = ar.to_series(N_TIMESTEPS)
print(series.describe())

# ============================================================================
# Generate an ensemble of independent traces
# ============================================================================
ensemble = ar.generate(n_timesteps=N_TIMESTEPS, n_realizations=N_REALIZATIONS, seed=SEED)
print(ensemble)
print(ensemble.summary().describe())

bands = ensemble.percentile([10, 50, 90])
print(bands.tail())

print(ar.summary())

"""
autoregressive: Synthetic Autoregressive Time Series

A library for sampling synthetic scalar time series from a univariate
autoregressive AR(N) process with Gaussian white noise.

See https://en.wikipedia.org/wiki/Autoregressive_model.
"""

__version__ = "0.1.0"

# Core utilities
from autoregressive.core import (
    Generator,
    GeneratorState,
    GeneratorParams,
    Ensemble,
    EnsembleMetadata,
)

# Generators
from autoregressive.methods.generation.parametric.ar import AutoregressiveGenerator

# Errors
from autoregressive.utils.validation import InvalidParameterError


# Public API
__all__ = [
    # Base classes
    "Generator",
    "GeneratorState",
    "GeneratorParams",
    # Individual generators
    "AutoregressiveGenerator",
    # Ensemble management
    "Ensemble",
    "EnsembleMetadata",
    # Errors
    "InvalidParameterError",
]

"""
autoregressive Core Module

Base classes and ensemble container for synthetic generation.
"""

from autoregressive.core.base import (
    Generator,
    GeneratorState,
    GeneratorParams,
)
from autoregressive.core.ensemble import Ensemble, EnsembleMetadata

__all__ = [
    # Generator classes
    'Generator',
    'GeneratorState',
    'GeneratorParams',
    # Ensemble
    'Ensemble',
    'EnsembleMetadata',
]

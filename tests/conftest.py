"""
Pytest configuration and fixtures for autoregressive tests.
"""

import pytest
import numpy as np
import pandas as pd
from unittest.mock import Mock

from autoregressive import AutoregressiveGenerator


@pytest.fixture
def ar1_generator():
    """Seeded AR(1) generator with offset 5 and unit noise."""
    return AutoregressiveGenerator(5.0, 1.0, [0.5], random_seed=42)


@pytest.fixture
def ar3_generator():
    """Seeded AR(3) generator centred on zero."""
    return AutoregressiveGenerator(0.0, 1.0, [0.5, -0.2, 0.1], random_seed=7)


@pytest.fixture
def deterministic_generator():
    """AR(1) generator with zero noise variance."""
    return AutoregressiveGenerator(5.0, 0.0, [0.5], random_seed=0)


@pytest.fixture
def fixed_noise_rng():
    """
    Build a stand-in random source returning a fixed list of draws.

    Usage: ``rng = fixed_noise_rng([1.0, -0.5])``.
    """
    def _make(draws):
        rng = Mock(spec=np.random.Generator)
        rng.standard_normal.side_effect = list(draws)
        return rng
    return _make


@pytest.fixture
def sample_ensemble_data():
    """Generate sample ensemble data for testing."""
    index = pd.RangeIndex(20, name='step')
    ensemble = {}
    for realization in range(3):
        rng = np.random.default_rng(42 + realization)
        ensemble[realization] = pd.Series(rng.normal(0.0, 1.0, size=len(index)), index=index)
    return ensemble


@pytest.fixture
def sample_dated_ensemble_data():
    """Ensemble data on a monthly DatetimeIndex."""
    index = pd.date_range(start='2010-01-01', periods=24, freq='MS')
    ensemble = {}
    for realization in range(4):
        rng = np.random.default_rng(realization)
        ensemble[realization] = pd.Series(rng.normal(10.0, 2.0, size=len(index)), index=index)
    return ensemble

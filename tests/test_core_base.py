"""
Tests for autoregressive.core.base module (Generator base class and GeneratorState).
"""

import logging

import pytest
import numpy as np
import pandas as pd

from autoregressive.core.base import Generator, GeneratorState, GeneratorParams
from autoregressive.core.ensemble import Ensemble


class MockGenerator(Generator):
    """Concrete implementation of Generator for testing: counts up from zero."""

    def __init__(self, name=None, debug=False):
        super().__init__(name=name, debug=debug)
        self._next = 0.0

    def step(self):
        value = self._next
        self._next += 1.0
        self.update_state(value)
        return value

    def generate(self, n_timesteps, n_realizations=1, seed=None, **kwargs):
        realizations = {}
        for r in range(n_realizations):
            gen = MockGenerator()
            realizations[r] = pd.Series(gen.take(n_timesteps))
        return Ensemble(realizations)


class TestGeneratorState:
    """Tests for GeneratorState dataclass."""

    def test_initial_state(self):
        """Test initial state values."""
        state = GeneratorState()
        assert state.n_steps == 0
        assert state.last_value is None
        assert state.created_timestamp is not None

    def test_state_modification(self):
        """Test state can be modified."""
        state = GeneratorState()
        state.n_steps = 3
        state.last_value = 1.5
        assert state.n_steps == 3
        assert state.last_value == 1.5


class TestGeneratorParams:
    """Tests for GeneratorParams dataclass."""

    def test_to_dict_flattens(self):
        """Test nested parameter groups are flattened."""
        params = GeneratorParams(
            random_seed=1,
            algorithm_params={'offset': 2.0},
            computational_params={'dtype': 'float64'},
        )
        assert params.to_dict() == {
            'random_seed': 1,
            'debug': False,
            'offset': 2.0,
            'dtype': 'float64',
        }

    def test_repr(self):
        """Test readable representation lists groups."""
        params = GeneratorParams(
            random_seed=1,
            debug=True,
            algorithm_params={'offset': 2.0},
            computational_params={'dtype': 'float64'},
        )
        text = repr(params)
        assert text.startswith("GeneratorParams:")
        assert "random_seed: 1" in text
        assert "debug: True" in text
        assert "Algorithm parameters:" in text
        assert "Computational parameters:" in text

    def test_repr_empty(self):
        """Test defaults render a header only."""
        assert repr(GeneratorParams()) == "GeneratorParams:"


class TestGenerator:
    """Tests for Generator abstract base class."""

    def test_cannot_instantiate_abstract(self):
        """Test the base class itself is abstract."""
        with pytest.raises(TypeError):
            Generator()

    def test_instantiation(self):
        """Test that MockGenerator can be instantiated."""
        gen = MockGenerator()
        assert gen.name == 'MockGenerator'
        assert gen.debug is False
        assert gen.n_steps == 0

    def test_debug_mode(self):
        """Test debug mode initialization."""
        gen = MockGenerator(name='mock_debug', debug=True)
        assert gen.debug is True
        assert gen.logger.level == logging.DEBUG

    def test_logger_name(self):
        """Test the instance logger is namespaced under the package."""
        gen = MockGenerator(name='named')
        assert gen.logger.name == 'autoregressive.named'
        assert gen.logger.level == logging.INFO

    def test_default_dtype(self):
        """Test base generators produce double precision."""
        assert MockGenerator().dtype == np.float64

    def test_iterator_protocol(self):
        """Test next() delegates to step()."""
        gen = MockGenerator()
        assert iter(gen) is gen
        assert next(gen) == 0.0
        assert next(gen) == 1.0
        assert gen.n_steps == 2

    def test_take(self):
        """Test take pulls consecutive values."""
        gen = MockGenerator()
        np.testing.assert_array_equal(gen.take(3), [0.0, 1.0, 2.0])
        np.testing.assert_array_equal(gen.take(2), [3.0, 4.0])

    def test_update_state(self):
        """Test update_state records progress."""
        gen = MockGenerator()
        gen.update_state(4.0)
        assert gen.state.n_steps == 1
        assert gen.state.last_value == 4.0

    def test_create_output_index_range(self):
        """Test a step index is the default."""
        gen = MockGenerator()
        index = gen._create_output_index(5)
        assert isinstance(index, pd.RangeIndex)
        assert index.name == 'step'
        assert len(index) == 5

    def test_create_output_index_dates(self):
        """Test a date index with explicit start and frequency."""
        gen = MockGenerator()
        index = gen._create_output_index(3, freq='D', start_date='2021-06-01')
        assert isinstance(index, pd.DatetimeIndex)
        assert index[0] == pd.Timestamp('2021-06-01')
        assert index[-1] == pd.Timestamp('2021-06-03')

    def test_create_output_index_default_start(self):
        """Test frequency alone starts at the default date."""
        gen = MockGenerator()
        index = gen._create_output_index(2, freq='MS')
        assert index[0] == pd.Timestamp('2000-01-01')

    def test_to_series(self):
        """Test values are returned with their index."""
        gen = MockGenerator(name='series')
        series = gen.to_series(4)
        assert series.name == 'series'
        assert series.tolist() == [0.0, 1.0, 2.0, 3.0]

    def test_get_params(self):
        """Test get_params method."""
        params = MockGenerator().get_params()
        assert isinstance(params, dict)
        assert params['debug'] is False

    def test_get_state_info(self):
        """Test state info includes identity and progress."""
        gen = MockGenerator()
        gen.take(2)
        info = gen.get_state_info()
        assert info['name'] == 'MockGenerator'
        assert info['class'] == 'MockGenerator'
        assert info['n_steps'] == 2
        assert info['last_value'] == 1.0

    def test_summary(self):
        """Test summary text."""
        gen = MockGenerator()
        gen.step()
        text = gen.summary()
        assert 'MockGenerator Summary' in text
        assert 'Generator Type:          MockGenerator' in text
        assert 'Last Value:' in text
        assert 'Initialization Parameters' in text

    def test_repr(self):
        """Test repr shows name and step count."""
        assert repr(MockGenerator()) == "MockGenerator(name='MockGenerator', n_steps=0)"

    def test_generate_workflow(self):
        """Test generate returns an Ensemble."""
        result = MockGenerator().generate(n_timesteps=5, n_realizations=2)
        assert isinstance(result, Ensemble)
        assert result.n_realizations == 2

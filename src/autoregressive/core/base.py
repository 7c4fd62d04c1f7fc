"""
Base Generator Class for autoregressive

This module provides an abstract base class for stateful sample generators.
"""

from abc import ABC, abstractmethod
import logging
from itertools import islice
from typing import Dict, Any, Optional, Union
from datetime import datetime
import numpy as np
import pandas as pd
from dataclasses import dataclass, field

from autoregressive.utils.validation import validate_count


@dataclass
class GeneratorState:
    """Track how far a generator has advanced."""
    n_steps: int = 0
    last_value: Optional[float] = None
    created_timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class GeneratorParams:
    """
    Store initialization/configuration parameters for generators.

    These are user-specified settings fixed at construction.
    """
    # Common parameters across all generators
    random_seed: Optional[int] = None
    debug: bool = False

    # Flexible storage for generator-specific parameters
    algorithm_params: Dict[str, Any] = field(default_factory=dict)
    computational_params: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to flat dictionary."""
        result = {
            'random_seed': self.random_seed,
            'debug': self.debug,
        }
        result.update(self.algorithm_params)
        result.update(self.computational_params)
        return result

    def __repr__(self) -> str:
        """Readable string representation."""
        lines = ["GeneratorParams:"]
        if self.random_seed is not None:
            lines.append(f"  random_seed: {self.random_seed}")
        if self.debug:
            lines.append(f"  debug: {self.debug}")

        if self.algorithm_params:
            lines.append("  Algorithm parameters:")
            for key, val in self.algorithm_params.items():
                lines.append(f"    {key}: {val}")

        if self.computational_params:
            lines.append("  Computational parameters:")
            for key, val in self.computational_params.items():
                lines.append(f"    {key}: {val}")

        return "\n".join(lines)


class Generator(ABC):
    """
    Abstract base class for stateful synthetic sample generators.

    A generator is also an infinite iterator: each ``next()`` is exactly one
    call to ``step()``. Iteration never stops on its own and cannot be
    restarted; truncate it with ``take()`` or ``itertools.islice``.
    """

    def __init__(self,
                 name: Optional[str] = None,
                 debug: bool = False,
                 ) -> None:
        """
        Initialize the generator base class.

        Parameters
        ----------
        name : str, optional
            Name identifier for this generator instance
        debug : bool, default False
            Enable debug logging
        """
        self.name = name or self.__class__.__name__
        self.debug = debug

        self.state = GeneratorState()

        # Initialize parameter storage
        self.init_params = GeneratorParams(debug=debug)

        # Setup logging
        self._setup_logging(debug)

    def _setup_logging(self,
                       debug: bool) -> None:
        """Setup logging infrastructure."""
        self.logger = logging.getLogger(f"autoregressive.{self.name}")
        if debug:
            self.logger.setLevel(logging.DEBUG)
        else:
            self.logger.setLevel(logging.INFO)

    def update_state(self, value: float) -> None:
        """
        Record that one more value has been produced.

        Parameters
        ----------
        value : float
            The value just returned by ``step()``.
        """
        self.state.n_steps += 1
        self.state.last_value = value
        if self.logger.isEnabledFor(logging.DEBUG):
            self.logger.debug(f"Step {self.state.n_steps}: value={value}")

    @property
    def n_steps(self) -> int:
        """Number of values produced so far."""
        return self.state.n_steps

    @property
    def dtype(self) -> np.dtype:
        """Floating-point precision of produced values."""
        return np.dtype(np.float64)

    @abstractmethod
    def step(self) -> float:
        """
        Produce the next value and advance the internal state.

        Returns
        -------
        float
            The newly generated value.
        """
        pass

    @abstractmethod
    def generate(
        self,
        n_timesteps: int,
        n_realizations: int = 1,
        seed: Optional[int] = None,
        **kwargs: Any
    ) -> 'Ensemble':
        """
        Generate independent synthetic realizations.

        Parameters
        ----------
        n_timesteps : int
            Number of timesteps per realization.
        n_realizations : int, default=1
            Number of independent realizations.
        seed : int, optional
            Random seed for reproducibility.
        **kwargs : Any
            Additional generation parameters.

        Returns
        -------
        Ensemble
            Generated sequences as an Ensemble object.
        """
        pass

    def __iter__(self) -> 'Generator':
        return self

    def __next__(self) -> float:
        return self.step()

    def take(self, n: int) -> np.ndarray:
        """
        Pull the next ``n`` values.

        Parameters
        ----------
        n : int
            Number of values to produce. Zero gives an empty array.

        Returns
        -------
        np.ndarray
            One-dimensional array of length ``n``.

        Raises
        ------
        ValueError
            If n is negative or not an integer.
        """
        n = validate_count(n, variable_name='n', allow_zero=True)
        return np.fromiter(islice(self, n), dtype=self.dtype, count=n)

    def to_series(
        self,
        n: int,
        start_date: Optional[Union[str, pd.Timestamp]] = None,
        freq: Optional[str] = None
    ) -> pd.Series:
        """
        Pull the next ``n`` values paired with their index.

        Parameters
        ----------
        n : int
            Number of values to produce.
        start_date : str or pd.Timestamp, optional
            If given, index the values with dates starting here.
            Otherwise a RangeIndex named 'step' is used.
        freq : str, optional
            Pandas frequency string for the date index. Defaults to 'D'.

        Returns
        -------
        pd.Series
            The produced values.
        """
        values = self.take(n)
        index = self._create_output_index(len(values), freq=freq, start_date=start_date)
        return pd.Series(values, index=index, name=self.name)

    def _create_output_index(
        self,
        n_timesteps: int,
        freq: Optional[str] = None,
        start_date: Optional[Union[str, pd.Timestamp]] = None
    ) -> pd.Index:
        """
        Create the index for generated data.

        Parameters
        ----------
        n_timesteps : int
            Number of timesteps.
        freq : str, optional
            Pandas frequency string ('D' for daily, 'MS' for month start).
        start_date : str or pd.Timestamp, optional
            Start date for a DatetimeIndex. If None and freq is None, a
            RangeIndex is returned.

        Returns
        -------
        pd.Index
            RangeIndex named 'step' or DatetimeIndex named 'date'.
        """
        if start_date is None and freq is None:
            return pd.RangeIndex(n_timesteps, name='step')

        if start_date is None:
            # Default to arbitrary start date
            start_date = pd.Timestamp('2000-01-01')

        return pd.date_range(start=start_date, periods=n_timesteps,
                             freq=freq or 'D', name='date')

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """
        Get initialization parameters (scikit-learn style).

        Parameters
        ----------
        deep : bool, default=True
            Kept for scikit-learn compatibility.

        Returns
        -------
        Dict[str, Any]
            Dictionary of initialization parameters.
        """
        return self.init_params.to_dict()

    def get_state_info(self) -> Dict[str, Any]:
        """
        Get complete state information including params and metadata.

        Returns
        -------
        Dict[str, Any]
            Dictionary containing generator state and parameters.
        """
        return {
            'name': self.name,
            'class': self.__class__.__name__,
            'n_steps': self.state.n_steps,
            'last_value': self.state.last_value,
            'created_timestamp': self.state.created_timestamp,
            'init_params': self.init_params.to_dict(),
        }

    def summary(self) -> str:
        """
        Generate summary of generator configuration and progress.

        Returns
        -------
        str
            Formatted summary string.
        """
        lines = []
        lines.append("=" * 80)
        lines.append(f"{self.name} Summary".center(80))
        lines.append("=" * 80)
        lines.append("")

        # Model Information
        lines.append("Model Information")
        lines.append("-" * 80)
        lines.append(f"Generator Type:          {self.__class__.__name__}")
        lines.append(f"Created:                 {self.state.created_timestamp}")
        lines.append(f"Steps Taken:             {self.state.n_steps}")
        if self.state.last_value is not None:
            lines.append(f"Last Value:              {self.state.last_value}")
        lines.append("")

        # Initialization Parameters
        lines.append("Initialization Parameters")
        lines.append("-" * 80)
        params_str = str(self.init_params)
        for line in params_str.split('\n')[1:]:  # Skip first line "GeneratorParams:"
            lines.append(line)
        lines.append("")

        lines.append("=" * 80)

        return "\n".join(lines)

    def __repr__(self) -> str:
        """String representation showing key info."""
        return f"{self.__class__.__name__}(name='{self.name}', n_steps={self.state.n_steps})"

"""
Univariate autoregressive AR(N) sample generator.

Each new value is a weighted sum of the previous N values plus a constant
offset plus zero-mean Gaussian white noise:

    x_t = c + phi[0] * x_{t-1} + ... + phi[N-1] * x_{t-N} + epsilon_t

See https://en.wikipedia.org/wiki/Autoregressive_model.
"""
import logging
from typing import Optional, Sequence, Union, Any

import numpy as np
import pandas as pd
from scipy import stats

from autoregressive.core.base import Generator
from autoregressive.core.ensemble import Ensemble, EnsembleMetadata
from autoregressive.utils.validation import (
    InvalidParameterError,
    validate_offset,
    validate_noise_variance,
    validate_dtype,
    validate_coefficients,
    validate_window,
    validate_count,
)

logger = logging.getLogger(__name__)

RandomSource = Union[None, int, np.random.SeedSequence, np.random.Generator]


class AutoregressiveGenerator(Generator):
    """
    Stateful generator for a univariate AR(N) process.

    Keeps a window of the last N outputs, most recent first, starting from
    all zeros. Every call to ``step()`` draws one noise sample, computes the
    next value from the window, shifts the window and returns the value.
    The instance is also an infinite iterator over ``step()``.

    One instance computes in a single precision (float32 or float64) and is
    not safe for concurrent use; use ``spawn()`` to get an independent
    instance per thread.

    Examples
    --------
    >>> from autoregressive import AutoregressiveGenerator
    >>> ar = AutoregressiveGenerator(5.0, 1.0, [0.5], random_seed=42)
    >>> x = ar.step()
    >>> next10 = ar.take(10)
    >>> import itertools
    >>> more = list(itertools.islice(ar, 5))
    """

    def __init__(
        self,
        offset: float,
        noise_variance: float,
        coefficients: Union[Sequence[float], np.ndarray],
        dtype=np.float64,
        random_seed: RandomSource = None,
        name: Optional[str] = None,
        debug: bool = False,
        init_log_level: int = logging.INFO,
    ):
        """
        Initialize the AutoregressiveGenerator.

        Parameters
        ----------
        offset : float
            Constant term added at every step.
        noise_variance : float
            Variance of the Gaussian white noise. Must be finite and >= 0;
            zero makes the process deterministic.
        coefficients : sequence of float
            Lag weights, most recent first. The length sets the order N and
            may be zero. The values are copied.
        dtype : {np.float32, np.float64}, default=np.float64
            Precision used for all arithmetic of this instance.
        random_seed : int, SeedSequence or np.random.Generator, optional
            Seed for the instance's own random source, or a ready-made
            numpy Generator to draw from. Fresh OS entropy if None.
        name : str, optional
            Name for this generator instance.
        debug : bool, default=False
            Enable debug logging.
        init_log_level : int, default=logging.INFO
            Level of the construction log message.

        Raises
        ------
        InvalidParameterError
            If any parameter cannot define a valid process.
        """
        super().__init__(name=name, debug=debug)

        try:
            self._dtype = validate_dtype(dtype)
            self._offset = validate_offset(offset, dtype=self._dtype)
            self._noise_variance = validate_noise_variance(noise_variance, dtype=self._dtype)
            self._coefficients = validate_coefficients(coefficients, dtype=self._dtype)
        except InvalidParameterError as e:
            self.logger.error(f"Invalid parameters for {self.name}: {e}")
            raise

        self._coefficients.setflags(write=False)
        self._window = np.zeros_like(self._coefficients)
        validate_window(self._window, self._coefficients)

        # Draws come from the rng in the instance dtype; norm.rvs only yields float64
        self._noise_scale = self._dtype.type(np.sqrt(self._noise_variance))
        self._noise = stats.norm(loc=0.0, scale=np.sqrt(self._noise_variance))
        self._offset_typed = self._dtype.type(self._offset)

        self._rng = self._make_rng(random_seed)

        # Store initialization parameters
        self.init_params.random_seed = random_seed if isinstance(random_seed, (int, np.integer)) else None
        self.init_params.algorithm_params = {
            'method': f'AR({self.order})',
            'offset': self._offset,
            'noise_variance': self._noise_variance,
            'coefficients': self._coefficients.tolist(),
        }
        self.init_params.computational_params = {
            'dtype': self._dtype.name,
        }

        self.logger.log(
            init_log_level,
            f"Initialized AR({self.order}) generator: offset={self._offset}, "
            f"noise_variance={self._noise_variance}, dtype={self._dtype.name}"
        )

    @staticmethod
    def _make_rng(random_seed: RandomSource) -> np.random.Generator:
        if isinstance(random_seed, np.random.Generator):
            return random_seed
        return np.random.default_rng(random_seed)

    @property
    def offset(self) -> float:
        """Constant term ``c``."""
        return self._offset

    @property
    def noise_variance(self) -> float:
        return self._noise_variance

    @property
    def coefficients(self) -> np.ndarray:
        """Lag weights, most recent first (read-only)."""
        return self._coefficients

    @property
    def window(self) -> np.ndarray:
        """Copy of the last N outputs, most recent first."""
        return self._window.copy()

    @property
    def order(self) -> int:
        """Number of lags N."""
        return self._coefficients.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def noise_distribution(self):
        """Frozen ``scipy.stats.norm`` the noise is drawn from."""
        return self._noise

    @property
    def rng(self) -> np.random.Generator:
        return self._rng

    def step(self) -> float:
        """
        Produce the next value of the process.

        Draws one noise sample, computes
        ``offset + dot(window, coefficients) + noise``, shifts the window
        right by one (dropping the oldest value) and stores the new value at
        the front.

        Returns
        -------
        float
            The new value, as a numpy scalar of the instance's dtype.
        """
        # Scalar draws come back as Python floats
        draw = self._dtype.type(self._rng.standard_normal(dtype=self._dtype))
        epsilon = self._noise_scale * draw
        new_value = self._offset_typed + self._window.dot(self._coefficients) + epsilon

        if self.order > 0:
            self._window[1:] = self._window[:-1]
            self._window[0] = new_value

        self.update_state(new_value)
        return new_value

    def spawn(
        self,
        random_seed: RandomSource = None,
        name: Optional[str] = None,
        init_log_level: int = logging.INFO,
    ) -> 'AutoregressiveGenerator':
        """
        Create an independent generator with the same parameters.

        The new instance starts from a zero window and owns its own random
        source, so it can be stepped from another thread.

        Parameters
        ----------
        random_seed : int, SeedSequence or np.random.Generator, optional
            Seed for the new instance's random source.
        name : str, optional
            Name for the new instance. Defaults to this instance's name.
        init_log_level : int, default=logging.INFO
            Level of the new instance's construction log message.

        Returns
        -------
        AutoregressiveGenerator
            Fresh generator, unaffected by this instance's state.
        """
        return AutoregressiveGenerator(
            self._offset,
            self._noise_variance,
            self._coefficients,
            dtype=self._dtype,
            random_seed=random_seed,
            name=name or self.name,
            debug=self.debug,
            init_log_level=init_log_level,
        )

    def generate(
        self,
        n_timesteps: int,
        n_realizations: int = 1,
        seed: Optional[int] = None,
        start_date: Optional[Union[str, pd.Timestamp]] = None,
        freq: Optional[str] = None,
        **kwargs: Any
    ) -> Ensemble:
        """
        Generate independent realizations of the process.

        Each realization comes from a freshly spawned generator that starts
        at rest, with seeds derived from ``seed``. This instance's window
        is left untouched.

        Parameters
        ----------
        n_timesteps : int
            Number of values per realization.
        n_realizations : int, default=1
            Number of realizations.
        seed : int, optional
            Random seed for reproducibility.
        start_date : str or pd.Timestamp, optional
            Start of a DatetimeIndex. A step index is used if neither
            start_date nor freq is given.
        freq : str, optional
            Pandas frequency string of the DatetimeIndex.
        **kwargs : dict, optional
            Additional parameters (currently unused).

        Returns
        -------
        Ensemble
            Ensemble object containing all realizations.

        Raises
        ------
        ValueError
            If n_timesteps or n_realizations is not a positive integer.
        """
        n_timesteps = validate_count(n_timesteps, variable_name='n_timesteps')
        n_realizations = validate_count(n_realizations, variable_name='n_realizations')

        child_seeds = np.random.SeedSequence(seed).spawn(n_realizations)
        index = self._create_output_index(n_timesteps, freq=freq, start_date=start_date)

        realizations = {}
        for i, child_seed in enumerate(child_seeds):
            worker = self.spawn(random_seed=child_seed, init_log_level=logging.DEBUG)
            realizations[i] = pd.Series(worker.take(n_timesteps), index=index, name=i)

        metadata = EnsembleMetadata(
            generator_class=self.__class__.__name__,
            generator_params=self.get_params(),
            seed=seed,
            description=f"Generated with {self.name}",
        )

        self.logger.info(
            f"Generated {n_realizations} realizations of {n_timesteps} timesteps each"
        )

        return Ensemble(realizations, metadata=metadata)

    def check_state(self) -> None:
        """
        Verify the window still matches the coefficients.

        Raises
        ------
        InvalidParameterError
            If window and coefficients have diverged.
        """
        validate_window(self._window, self._coefficients)

    def summary(self) -> str:
        """Summary including the current window."""
        text = super().summary()
        lines = text.split("\n")
        extra = [
            "Current Window (most recent first)",
            "-" * 80,
            f"  {self._window.tolist()}",
            "",
        ]
        return "\n".join(lines[:-1] + extra + lines[-1:])

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(name='{self.name}', order={self.order}, "
                f"offset={self._offset}, noise_variance={self._noise_variance}, "
                f"dtype={self._dtype.name}, n_steps={self.state.n_steps})")

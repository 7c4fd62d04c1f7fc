"""
Ensemble management for synthetic timeseries data.

This module provides the Ensemble class for holding independent realizations
of a univariate synthetic process. All realizations share one index, so the
ensemble can be viewed either realization by realization or as a single
DataFrame with one column per realization.
"""
import logging
from datetime import datetime
from typing import Dict, List, Optional, Union, Any, Iterator
from dataclasses import dataclass, field
import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


@dataclass
class EnsembleMetadata:
    """
    Store metadata about an ensemble.

    Attributes
    ----------
    generator_class : str, optional
        Name of the generator class that created this ensemble.
    generator_params : Dict, optional
        Parameters used to configure the generator.
    creation_timestamp : str
        ISO format timestamp of when ensemble was created.
    n_realizations : int
        Number of realizations in the ensemble.
    n_timesteps : int
        Length of each realization.
    time_resolution : str, optional
        Pandas frequency of a date index, if there is one.
    seed : int, optional
        Seed the realizations were derived from.
    description : str, optional
        User-provided description of the ensemble.
    """
    generator_class: Optional[str] = None
    generator_params: Optional[Dict[str, Any]] = None
    creation_timestamp: str = field(default_factory=lambda: datetime.now().isoformat())
    n_realizations: int = 0
    n_timesteps: int = 0
    time_resolution: Optional[str] = None
    seed: Optional[int] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert metadata to dictionary."""
        return {
            'generator_class': self.generator_class,
            'generator_params': self.generator_params,
            'creation_timestamp': self.creation_timestamp,
            'n_realizations': self.n_realizations,
            'n_timesteps': self.n_timesteps,
            'time_resolution': self.time_resolution,
            'seed': self.seed,
            'description': self.description,
        }


class Ensemble:
    """
    Collection of independent realizations of a univariate process.

    Parameters
    ----------
    data : Dict[int, pd.Series]
        Realizations keyed by realization id. Every Series must have the
        same length; the index of the first one is used for all.
    metadata : EnsembleMetadata, optional
        Metadata about the ensemble. If None, creates default metadata.

    Attributes
    ----------
    data_by_realization : Dict[int, pd.Series]
        Data organized by realization number.
    realization_ids : List[int]
        List of all realization IDs.
    metadata : EnsembleMetadata
        Ensemble metadata and provenance information.

    Examples
    --------
    >>> from autoregressive import AutoregressiveGenerator
    >>> gen = AutoregressiveGenerator(0.0, 1.0, [0.5, 0.2])
    >>> ensemble = gen.generate(n_timesteps=100, n_realizations=10, seed=42)
    >>> ensemble.to_dataframe().shape
    (100, 10)
    >>> stats = ensemble.summary()
    >>> bands = ensemble.percentile([10, 50, 90])
    """

    def __init__(self,
                 data: Dict[int, pd.Series],
                 metadata: Optional[EnsembleMetadata] = None):
        """
        Initialize Ensemble with data and optional metadata.

        Raises
        ------
        TypeError
            If data is not a dictionary.
        ValueError
            If data is empty or realizations differ in length.
        """
        if not isinstance(data, dict):
            logger.error("Data must be a dictionary")
            raise TypeError("Data must be a dictionary")

        if len(data) == 0:
            logger.error("Data dictionary is empty")
            raise ValueError("Data dictionary cannot be empty")

        lengths = {len(series) for series in data.values()}
        if len(lengths) > 1:
            logger.error(f"Realizations have differing lengths: {sorted(lengths)}")
            raise ValueError(
                f"All realizations must have the same length, got {sorted(lengths)}"
            )

        first = next(iter(data.values()))
        index = first.index if isinstance(first, pd.Series) else pd.RangeIndex(len(first), name='step')

        self.data_by_realization = {
            r_id: pd.Series(np.asarray(series), index=index, name=r_id)
            for r_id, series in data.items()
        }
        self.realization_ids = list(self.data_by_realization.keys())

        # Initialize or update metadata
        if metadata is None:
            self.metadata = EnsembleMetadata()
        else:
            self.metadata = metadata
        self.metadata.n_realizations = len(self.realization_ids)
        self.metadata.n_timesteps = len(index)
        if self.metadata.time_resolution is None and isinstance(index, pd.DatetimeIndex):
            self.metadata.time_resolution = index.freqstr

        logger.info(f"Ensemble initialized: {self.n_realizations} realizations, "
                    f"{self.n_timesteps} timesteps")

    @property
    def index(self) -> pd.Index:
        """Index shared by every realization."""
        return self.data_by_realization[self.realization_ids[0]].index

    @property
    def n_realizations(self) -> int:
        return len(self.realization_ids)

    @property
    def n_timesteps(self) -> int:
        return len(self.index)

    @property
    def frequency(self) -> Optional[str]:
        """
        Get the time frequency of the ensemble data.

        Returns
        -------
        Optional[str]
            Pandas frequency string, or None for a step index.
        """
        return self.metadata.time_resolution

    def to_dataframe(self) -> pd.DataFrame:
        """
        Combine all realizations into one DataFrame.

        Returns
        -------
        pd.DataFrame
            Shared index as rows, one column per realization.
        """
        df = pd.concat(self.data_by_realization.values(), axis=1)
        df.columns.name = 'realization'
        return df

    def summary(self) -> pd.DataFrame:
        """
        Compute statistics of each realization.

        Returns
        -------
        pd.DataFrame
            Summary statistics (mean, std, min, max) indexed by realization.
        """
        results = []
        for real_id, series in self.data_by_realization.items():
            stats = {
                'realization': real_id,
                'mean': series.mean(),
                'std': series.std(),
                'min': series.min(),
                'max': series.max(),
            }
            results.append(stats)
        return pd.DataFrame(results).set_index('realization')

    def percentile(self, q: Union[float, List[float]]) -> pd.DataFrame:
        """
        Compute percentiles across realizations at every timestep.

        Parameters
        ----------
        q : float or List[float]
            Percentile(s) to compute (0-100).

        Returns
        -------
        pd.DataFrame
            One column per percentile, named 'p{q}', over the shared index.

        Examples
        --------
        >>> bands = ensemble.percentile([10, 50, 90])
        >>> median = bands['p50']
        """
        if not isinstance(q, list):
            q = [q]

        for percentile in q:
            if not 0 <= percentile <= 100:
                raise ValueError(f"Percentiles must be within [0, 100], got {percentile}")

        df = self.to_dataframe()
        percentiles = {}
        for percentile in q:
            percentiles[f'p{percentile}'] = df.quantile(percentile / 100, axis=1)
        return pd.DataFrame(percentiles, index=df.index)

    def subset(self,
               realizations: Optional[List[int]] = None,
               start: Optional[Any] = None,
               end: Optional[Any] = None) -> 'Ensemble':
        """
        Create subset of ensemble by realizations or index range.

        Parameters
        ----------
        realizations : List[int], optional
            Realization IDs to include.
        start, end : optional
            Inclusive bounds on the index, as step numbers or dates.

        Returns
        -------
        Ensemble
            New ensemble containing only the subset.

        Raises
        ------
        ValueError
            If the selection is empty.
        """
        data = self.data_by_realization.copy()

        # Filter by realizations
        if realizations is not None:
            data = {k: v for k, v in data.items() if k in realizations}
            if not data:
                raise ValueError(f"None of the realizations {realizations} are in the ensemble")

        # Filter by index range
        if start is not None or end is not None:
            data = {k: v.loc[start:end] for k, v in data.items()}

        new_metadata = EnsembleMetadata(
            generator_class=self.metadata.generator_class,
            generator_params=self.metadata.generator_params,
            seed=self.metadata.seed,
            description=f"Subset of {self.metadata.description or 'ensemble'}"
        )

        return Ensemble(data, metadata=new_metadata)

    def __len__(self) -> int:
        return self.n_realizations

    def __getitem__(self, realization_id: int) -> pd.Series:
        return self.data_by_realization[realization_id]

    def __iter__(self) -> Iterator[pd.Series]:
        return iter(self.data_by_realization.values())

    def __repr__(self) -> str:
        """String representation of Ensemble."""
        return (f"Ensemble(n_realizations={self.n_realizations}, "
                f"n_timesteps={self.n_timesteps}, "
                f"generator={self.metadata.generator_class or 'unknown'})")

    def __str__(self) -> str:
        """Detailed string representation."""
        lines = [
            "=" * 60,
            "Ensemble Summary",
            "=" * 60,
            f"Realizations: {self.n_realizations}",
            f"Timesteps: {self.n_timesteps}",
        ]

        if self.frequency:
            lines.append(f"Frequency: {self.frequency}")

        if self.metadata.generator_class:
            lines.append(f"Generator: {self.metadata.generator_class}")

        if self.metadata.seed is not None:
            lines.append(f"Seed: {self.metadata.seed}")

        if self.metadata.description:
            lines.append(f"Description: {self.metadata.description}")

        lines.append("=" * 60)

        return "\n".join(lines)

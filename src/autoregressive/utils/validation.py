"""
Parameter validation utilities.

Provides the validation functions used when constructing generators and
when requesting output from them.
"""
import logging
import numbers
from typing import Sequence, Union

import numpy as np

logger = logging.getLogger(__name__)

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


class InvalidParameterError(ValueError):
    """Raised when a generator cannot be built from the given parameters."""


def _is_real(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _fits(value, dtype) -> bool:
    with np.errstate(over="ignore"):
        return bool(np.isfinite(np.dtype(dtype).type(value)))


def validate_offset(value: float, dtype=np.float64, variable_name: str = "offset") -> float:
    """
    Validate the constant term of the recurrence.

    Parameters
    ----------
    value : float
        Offset to validate.
    dtype : np.dtype, default=np.float64
        Precision the offset must be representable in.
    variable_name : str, default='offset'
        Name of variable for error messages.

    Returns
    -------
    float
        The offset as a Python float.

    Raises
    ------
    InvalidParameterError
        If the offset is not a finite real number in ``dtype``.
    """
    if not _is_real(value):
        raise InvalidParameterError(
            f"{variable_name} must be a real number, got {type(value).__name__}"
        )
    if not np.isfinite(value):
        raise InvalidParameterError(f"{variable_name} must be finite, got {value}")
    if not _fits(value, dtype):
        raise InvalidParameterError(
            f"{variable_name} overflows {np.dtype(dtype)}, got {value}"
        )
    return float(value)


def validate_noise_variance(
    value: float,
    dtype=np.float64,
    variable_name: str = "noise_variance"
) -> float:
    """
    Validate the variance of the white noise term.

    Parameters
    ----------
    value : float
        Noise variance. Zero is allowed and gives deterministic output.
    dtype : np.dtype, default=np.float64
        Precision the noise scale ``sqrt(value)`` must be representable in.
    variable_name : str, default='noise_variance'
        Name of variable for error messages.

    Returns
    -------
    float
        The variance as a Python float.

    Raises
    ------
    InvalidParameterError
        If the variance is negative, non-finite or not a real number, or
        if its square root overflows ``dtype``.

    Examples
    --------
    >>> from autoregressive.utils.validation import validate_noise_variance
    >>> validate_noise_variance(1)
    1.0
    >>> validate_noise_variance(-0.5)  # Raises InvalidParameterError
    """
    if not _is_real(value):
        raise InvalidParameterError(
            f"{variable_name} must be a real number, got {type(value).__name__}"
        )
    if not np.isfinite(value):
        raise InvalidParameterError(f"{variable_name} must be finite, got {value}")
    if value < 0:
        raise InvalidParameterError(
            f"{variable_name} must be non-negative, got {value}"
        )
    if not _fits(np.sqrt(value), dtype):
        raise InvalidParameterError(
            f"{variable_name} gives a noise scale that overflows "
            f"{np.dtype(dtype)}, got {value}"
        )
    return float(value)


def validate_dtype(dtype) -> np.dtype:
    """
    Validate the floating-point precision of a generator.

    Parameters
    ----------
    dtype : type, str or np.dtype
        Anything numpy understands as a dtype.

    Returns
    -------
    np.dtype
        Either float32 or float64.

    Raises
    ------
    InvalidParameterError
        If dtype is not single or double precision float.
    """
    try:
        resolved = np.dtype(dtype)
    except TypeError as e:
        raise InvalidParameterError(f"Unrecognized dtype {dtype!r}: {e}")

    if resolved not in SUPPORTED_DTYPES:
        raise InvalidParameterError(
            f"dtype must be float32 or float64, got {resolved}"
        )
    return resolved


def validate_coefficients(
    values: Union[Sequence[float], np.ndarray],
    dtype=np.float64,
    variable_name: str = "coefficients"
) -> np.ndarray:
    """
    Validate AR coefficients and return an independent copy.

    Parameters
    ----------
    values : sequence of float or np.ndarray
        Coefficients, most recent lag first. May be empty.
    dtype : np.dtype, default=np.float64
        Precision of the returned array.
    variable_name : str, default='coefficients'
        Name of variable for error messages.

    Returns
    -------
    np.ndarray
        Fresh 1-D array in ``dtype``. Later changes to ``values`` do not
        affect it.

    Raises
    ------
    InvalidParameterError
        If values are not a 1-D sequence of finite reals.
    """
    try:
        arr = np.array(values, dtype=dtype, copy=True)
    except (TypeError, ValueError, OverflowError) as e:
        raise InvalidParameterError(
            f"{variable_name} must be a sequence of real numbers: {e}"
        )

    if arr.ndim != 1:
        raise InvalidParameterError(
            f"{variable_name} must be one-dimensional, got shape {arr.shape}"
        )

    # Checked after the cast so float32 overflow is caught too
    if not np.all(np.isfinite(arr)):
        raise InvalidParameterError(
            f"{variable_name} must all be finite in {arr.dtype}, got {values!r}"
        )

    logger.debug(f"{variable_name} passed validation: order {arr.shape[0]}")
    return arr


def validate_window(window: np.ndarray, coefficients: np.ndarray) -> None:
    """
    Check that the state window matches the coefficient vector.

    Raises
    ------
    InvalidParameterError
        If the window and coefficients differ in length or dtype.
    """
    if window.shape != coefficients.shape:
        raise InvalidParameterError(
            f"Window length {window.shape[0]} does not match "
            f"order {coefficients.shape[0]}"
        )
    if window.dtype != coefficients.dtype:
        raise InvalidParameterError(
            f"Window dtype {window.dtype} does not match "
            f"coefficient dtype {coefficients.dtype}"
        )


def validate_count(
    value: int,
    variable_name: str = "n",
    allow_zero: bool = False
) -> int:
    """
    Validate a requested number of timesteps or realizations.

    Parameters
    ----------
    value : int
        Requested count.
    variable_name : str, default='n'
        Name of variable for error messages.
    allow_zero : bool, default=False
        If True, zero is accepted.

    Returns
    -------
    int
        The count as a Python int.

    Raises
    ------
    ValueError
        If the count is not an integer or is out of range.
    """
    if not isinstance(value, numbers.Integral) or isinstance(value, (bool, np.bool_)):
        raise ValueError(
            f"{variable_name} must be an integer, got {type(value).__name__}"
        )

    lower = 0 if allow_zero else 1
    if value < lower:
        qualifier = "non-negative" if allow_zero else "positive"
        raise ValueError(f"{variable_name} must be {qualifier}, got {value}")
    return int(value)


__all__ = [
    'InvalidParameterError',
    'validate_offset',
    'validate_noise_variance',
    'validate_dtype',
    'validate_coefficients',
    'validate_window',
    'validate_count',
]

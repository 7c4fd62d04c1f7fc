"""
Utility functions for autoregressive.

This module provides parameter validation used by the generators.
"""

from autoregressive.utils.validation import (
    InvalidParameterError,
    validate_offset,
    validate_noise_variance,
    validate_dtype,
    validate_coefficients,
    validate_window,
    validate_count,
)

__all__ = [
    'InvalidParameterError',
    'validate_offset',
    'validate_noise_variance',
    'validate_dtype',
    'validate_coefficients',
    'validate_window',
    'validate_count',
]

"""
Parametric generation methods for autoregressive.
"""
from autoregressive.methods.generation.parametric.ar import AutoregressiveGenerator

__all__ = ['AutoregressiveGenerator']

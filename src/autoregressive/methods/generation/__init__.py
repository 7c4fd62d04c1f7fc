"""
Synthetic generation methods.
"""
from autoregressive.methods.generation.parametric import AutoregressiveGenerator

__all__ = ['AutoregressiveGenerator']

"""
Generation methods for autoregressive.
"""

"""Mutational signature fitting with quadratic programming and bootstrap backward elimination."""

__version__ = "0.1.0"
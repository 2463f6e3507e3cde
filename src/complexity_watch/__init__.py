"""Complexity Watch - cognitive complexity analysis for C++ and Python."""

__version__ = "0.1.0"

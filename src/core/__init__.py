"""
Core domain models, arithmetic primitives, and invariants.

This module contains the foundational building blocks that are independent
of the terminal (decimal values, operation algorithms, error taxonomy).
"""

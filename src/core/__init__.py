"""
Core domain models, mathematical primitives, and invariants.

This module contains the foundational building blocks of the bonding curve
that are independent of external collaborators (tokens, vaults, hooks).
"""

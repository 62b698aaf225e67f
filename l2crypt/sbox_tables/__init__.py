"""
Substitution Table Constants Package

This package holds the pi-derived initialization constants for the
Blowfish subkey array and its four substitution tables, together with
the fixed sizes the rest of the library is built around.
"""

from .pi_constants import (
    BLOCK_SIZE, ROUNDS, P_SZ, S_BOX_SK, MAX_KEY_LENGTH, P_INIT, S_INIT
)

__all__ = [
    'BLOCK_SIZE', 'ROUNDS', 'P_SZ', 'S_BOX_SK', 'MAX_KEY_LENGTH', 'P_INIT', 'S_INIT'
]

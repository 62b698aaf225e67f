"""
Key Schedule Package

This package implements the Blowfish key schedule that turns a
variable-length key into the subkey array and substitution tables,
plus helpers for generating and stretching key material.
"""

from .blowfish_key_schedule import (
    CipherState, derive, generate_key, derive_key_from_password, KDF_DEFAULT_PARAMS
)

__all__ = ['CipherState', 'derive', 'generate_key', 'derive_key_from_password', 'KDF_DEFAULT_PARAMS']

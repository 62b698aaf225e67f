"""
Block Engine Package

This package exposes the single-block Blowfish engine and its mode
enumeration, along with one-shot block helpers.
"""

from .block_cipher import Mode, BlowfishEngine, encrypt_block, decrypt_block

__all__ = ['Mode', 'BlowfishEngine', 'encrypt_block', 'decrypt_block']

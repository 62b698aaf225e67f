"""
Cipher Core Package

This package implements the Blowfish Feistel network (round function,
forward and inverse traversals) and the byte-order primitives used to
move 32-bit words in and out of byte buffers.
"""

from .feistel import f_function, encrypt_words, decrypt_words
from .word_codec import read_u32_le, write_u32_le, read_u32_be, pack_key_word

__all__ = [
    'f_function', 'encrypt_words', 'decrypt_words',
    'read_u32_le', 'write_u32_le', 'read_u32_be', 'pack_key_word',
]

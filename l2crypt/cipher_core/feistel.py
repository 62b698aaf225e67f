"""
Feistel Network

This module implements the Blowfish round function and the two traversals
of the subkey array: the forward one used for encryption and for the key
schedule's self-encryption, and the downward one used for decryption.
"""

from typing import Sequence, Tuple

from ..sbox_tables.pi_constants import ROUNDS
from .word_codec import MASK32


def f_function(x: int, s_boxes: Sequence[Sequence[int]]) -> int:
    """
    Blowfish non-linear function F.

    Splits the word into four bytes, most significant first, and mixes them
    through the substitution tables with modular addition and XOR.

    Args:
        x: 32-bit input word
        s_boxes: The four substitution tables

    Returns:
        The 32-bit output word
    """
    s0, s1, s2, s3 = s_boxes
    result = (s0[x >> 24] + s1[(x >> 16) & 0xFF]) & MASK32
    result ^= s2[(x >> 8) & 0xFF]
    return (result + s3[x & 0xFF]) & MASK32


def encrypt_words(xl: int, xr: int,
                  p_array: Sequence[int],
                  s_boxes: Sequence[Sequence[int]]) -> Tuple[int, int]:
    """
    Run the forward Feistel transform over one block.

    The halves come back swapped: the first element is the left output
    word and the second the right, so a caller writes result[0] first.
    Feeding the result straight back in chains blocks as the key schedule
    requires.

    Args:
        xl: Left input word
        xr: Right input word
        p_array: The 18 subkeys
        s_boxes: The four substitution tables

    Returns:
        Tuple of (left, right) output words
    """
    xl ^= p_array[0]

    for i in range(1, ROUNDS, 2):
        xr ^= f_function(xl, s_boxes) ^ p_array[i]
        xl ^= f_function(xr, s_boxes) ^ p_array[i + 1]

    xr ^= p_array[ROUNDS + 1]

    return xr, xl


def decrypt_words(xl: int, xr: int,
                  p_array: Sequence[int],
                  s_boxes: Sequence[Sequence[int]]) -> Tuple[int, int]:
    """
    Run the inverse Feistel transform over one block.

    Walks the subkey array downward from the final whitening word, undoing
    encrypt_words including its output swap.

    Args:
        xl: Left ciphertext word
        xr: Right ciphertext word
        p_array: The 18 subkeys
        s_boxes: The four substitution tables

    Returns:
        Tuple of (left, right) plaintext words
    """
    xl ^= p_array[ROUNDS + 1]

    for i in range(ROUNDS, 0, -2):
        xr ^= f_function(xl, s_boxes) ^ p_array[i]
        xl ^= f_function(xr, s_boxes) ^ p_array[i - 1]

    xr ^= p_array[0]

    return xr, xl

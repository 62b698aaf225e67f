"""
Word Codec

Fixed-width conversions between byte windows and 32-bit words. Block
halves are stored little-endian; key material is folded big-endian.
"""

import struct
from typing import Union

_U32_LE = struct.Struct('<I')

MASK32 = 0xFFFFFFFF

Buffer = Union[bytes, bytearray, memoryview]


def read_u32_le(data: Buffer, offset: int) -> int:
    """
    Read a little-endian 32-bit word.

    Args:
        data: Source buffer
        offset: Position of the first byte of the word

    Returns:
        The word as an unsigned integer
    """
    return _U32_LE.unpack_from(data, offset)[0]


def write_u32_le(data: Union[bytearray, memoryview], offset: int, value: int) -> None:
    """
    Write a 32-bit word in little-endian order.

    Args:
        data: Writable destination buffer
        offset: Position of the first byte of the word
        value: Word to store (reduced modulo 2^32)
    """
    _U32_LE.pack_into(data, offset, value & MASK32)


def read_u32_be(data: Buffer, offset: int) -> int:
    """Read a big-endian 32-bit word."""
    return int.from_bytes(data[offset:offset + 4], byteorder='big')


def pack_key_word(key: Buffer, position: int) -> int:
    """
    Fold four consecutive key bytes into one word, most significant first.

    The key is walked cyclically, so position may be any index and the
    four bytes wrap to the start of the key when it runs out.

    Args:
        key: Non-empty key material
        position: Index of the first byte to take

    Returns:
        The big-endian composition of the four bytes
    """
    length = len(key)
    word = 0
    for j in range(4):
        word = (word << 8) | key[(position + j) % length]
    return word

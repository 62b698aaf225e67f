"""
Blowfish Block Engine

This module provides the stateful single-block Blowfish engine. An engine
is bound once to a mode and a key, after which it transforms one 8-byte
block at a time between caller-supplied buffers.
"""

import enum
from typing import Optional, Union

from ..cipher_core.feistel import decrypt_words, encrypt_words
from ..cipher_core.word_codec import read_u32_le, write_u32_le
from ..exceptions import AlreadyInitializedError, BufferBoundsError, UninitializedEngineError
from ..key_schedule.blowfish_key_schedule import CipherState, KeyBytes, derive
from ..sbox_tables.pi_constants import BLOCK_SIZE


class Mode(enum.Enum):
    """Direction an engine transforms blocks in."""
    ENCRYPT = 'encrypt'
    DECRYPT = 'decrypt'


class BlowfishEngine:
    """
    Blowfish block cipher engine operating on 8-byte blocks.

    Each 32-bit half of a block is read and written in little-endian
    byte order. The engine must be initialised with init() exactly once
    before any block is processed.
    """

    def __init__(self):
        self._mode: Optional[Mode] = None
        self._state: Optional[CipherState] = None

    @property
    def mode(self) -> Optional[Mode]:
        """The mode fixed by init(), or None before initialisation."""
        return self._mode

    @property
    def block_size(self) -> int:
        return BLOCK_SIZE

    def get_block_size(self) -> int:
        """
        Return the block size of the cipher.

        Returns:
            The block size in bytes (8)
        """
        return BLOCK_SIZE

    @property
    def initialized(self) -> bool:
        return self._state is not None

    def init(self, mode: Mode, key: KeyBytes) -> None:
        """
        Bind the engine to a mode and derive the key schedule.

        Args:
            mode: Mode.ENCRYPT or Mode.DECRYPT
            key: Key material (1 to 56 bytes)

        Raises:
            AlreadyInitializedError: If init() has already been called
            EmptyKeyError: If the key is empty
        """
        if self._state is not None:
            raise AlreadyInitializedError("Blowfish engine already initialised")
        if not isinstance(mode, Mode):
            raise TypeError(f"mode must be a Mode, got {mode!r}")

        state = derive(key)
        self._mode = mode
        self._state = state

    def process_block(self,
                      input: Union[bytes, bytearray, memoryview],
                      in_offset: int,
                      output: Union[bytearray, memoryview],
                      out_offset: int) -> None:
        """
        Encrypt or decrypt one block, depending on the engine's mode.

        Args:
            input: Buffer holding the source block
            in_offset: Offset of the source block in input
            output: Writable buffer receiving the transformed block
            out_offset: Offset of the destination block in output

        Raises:
            UninitializedEngineError: If init() has not been called
            BufferBoundsError: If either buffer has fewer than 8 bytes
                available from its offset
        """
        if self._state is None:
            raise UninitializedEngineError("Blowfish engine not initialised")
        self._check_buffer(input, in_offset, "input")
        self._check_buffer(output, out_offset, "output")

        xl = read_u32_le(input, in_offset)
        xr = read_u32_le(input, in_offset + 4)

        if self._mode is Mode.ENCRYPT:
            xl, xr = encrypt_words(xl, xr, self._state.p_array, self._state.s_boxes)
        else:
            xl, xr = decrypt_words(xl, xr, self._state.p_array, self._state.s_boxes)

        write_u32_le(output, out_offset, xl)
        write_u32_le(output, out_offset + 4, xr)

    @staticmethod
    def _check_buffer(buffer, offset: int, name: str) -> None:
        if offset < 0 or offset + BLOCK_SIZE > memoryview(buffer).nbytes:
            raise BufferBoundsError(
                f"{name} buffer too short: need {BLOCK_SIZE} bytes at offset {offset}, "
                f"buffer holds {memoryview(buffer).nbytes}"
            )


def encrypt_block(plaintext: bytes, key: KeyBytes) -> bytes:
    """
    Convenience function to encrypt a single block.

    Args:
        plaintext: The 8-byte block to encrypt
        key: The key

    Returns:
        The encrypted block
    """
    engine = BlowfishEngine()
    engine.init(Mode.ENCRYPT, key)
    output = bytearray(BLOCK_SIZE)
    engine.process_block(plaintext, 0, output, 0)
    return bytes(output)


def decrypt_block(ciphertext: bytes, key: KeyBytes) -> bytes:
    """
    Convenience function to decrypt a single block.

    Args:
        ciphertext: The 8-byte block to decrypt
        key: The key

    Returns:
        The decrypted block
    """
    engine = BlowfishEngine()
    engine.init(Mode.DECRYPT, key)
    output = bytearray(BLOCK_SIZE)
    engine.process_block(ciphertext, 0, output, 0)
    return bytes(output)

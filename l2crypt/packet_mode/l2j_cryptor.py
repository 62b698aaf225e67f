"""
Packet Cryptor

This module applies the Blowfish engine to whole game-protocol packets and
maintains the XOR checksum carried in the packet trailer. The last 8 bytes
of a checksummed packet are reserved; the checksum word sits at offset
len - 8 and the final 4 bytes are left untouched.
"""

import logging
import os
from typing import Union

import numpy as np

from ..block_engine.block_cipher import BlowfishEngine, Mode
from ..cipher_core.word_codec import read_u32_le, write_u32_le
from ..exceptions import InvalidLengthError
from ..sbox_tables.pi_constants import BLOCK_SIZE

logger = logging.getLogger(__name__)

# Environment variable read by PacketCryptor.from_env
KEY_ENV_VAR = 'L2CRYPT_BLOWFISH_KEY'

# Bytes at the end of a packet excluded from the checksum
TRAILER_SIZE = 8

Key = Union[str, bytes, bytearray, memoryview]


def _key_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode('utf-8')
    return bytes(key)


class PacketCryptor:
    """
    Packet-level Blowfish cryptor with trailer checksum support.

    Holds one engine for encryption and one for decryption, each with its
    own key schedule.
    """

    def __init__(self, key: Key):
        """
        Initialize both engines from a key.

        Args:
            key: Key string (encoded as UTF-8) or raw key bytes
        """
        key_bytes = _key_bytes(key)

        self._encryptor = BlowfishEngine()
        self._encryptor.init(Mode.ENCRYPT, key_bytes)

        self._decryptor = BlowfishEngine()
        self._decryptor.init(Mode.DECRYPT, key_bytes)

    @classmethod
    def from_env(cls, var: str = KEY_ENV_VAR) -> 'PacketCryptor':
        """
        Build a cryptor from a key held in an environment variable.

        Args:
            var: Name of the environment variable

        Returns:
            A new PacketCryptor

        Raises:
            ValueError: If the variable is unset or empty
        """
        key = os.environ.get(var)
        if not key:
            raise ValueError(f"Blowfish key not found in environment variable {var}")
        return cls(key)

    def _apply_cipher(self, data: Union[bytes, bytearray, memoryview], engine: BlowfishEngine) -> bytes:
        """
        Run an engine over every block of a buffer, in offset order.

        Args:
            data: Input buffer, a positive multiple of the block size
            engine: The encrypting or decrypting engine

        Returns:
            The transformed data as a new bytes object
        """
        block_size = engine.get_block_size()
        length = memoryview(data).nbytes

        if length == 0 or length % block_size != 0:
            raise InvalidLengthError(
                f"Invalid data length {length}: must be a positive multiple of {block_size}"
            )

        result = bytearray(length)
        for offset in range(0, length, block_size):
            engine.process_block(data, offset, result, offset)

        return bytes(result)

    def crypt(self, data: Union[bytes, bytearray, memoryview]) -> bytes:
        """
        Encrypt a packet.

        Args:
            data: Plain packet bytes, length a positive multiple of 8

        Returns:
            The encrypted packet

        Raises:
            InvalidLengthError: If the length is not a positive multiple of 8
        """
        return self._apply_cipher(data, self._encryptor)

    def decrypt(self, data: Union[bytes, bytearray, memoryview]) -> bytes:
        """
        Decrypt a packet.

        Args:
            data: Encrypted packet bytes, length a positive multiple of 8

        Returns:
            The decrypted packet

        Raises:
            InvalidLengthError: If the length is not a positive multiple of 8
        """
        return self._apply_cipher(data, self._decryptor)

    @staticmethod
    def checksum(data: Union[bytearray, memoryview]) -> bool:
        """
        Verify and rewrite the trailer checksum of a packet.

        The checksum is the XOR of every little-endian 32-bit word before
        the 8-byte trailer. A final partial word is zero-padded, so no
        trailer byte enters the sum. The word stored at offset len - 8 is
        compared against it and then overwritten with it, whatever the
        outcome, so a second call on the same buffer always succeeds.

        Args:
            data: Writable packet buffer, at least 8 bytes long

        Returns:
            True if the stored checksum matched the computed one

        Raises:
            InvalidLengthError: If the buffer is shorter than 8 bytes
            TypeError: If the buffer is read-only
        """
        view = memoryview(data)
        if view.readonly:
            raise TypeError("checksum() rewrites the trailer and needs a writable buffer")

        length = view.nbytes
        if length < TRAILER_SIZE:
            raise InvalidLengthError(
                f"Invalid packet length {length}: must be at least {TRAILER_SIZE}"
            )

        count = length - TRAILER_SIZE
        view = view.cast('B')
        computed = 0
        if count:
            body = view[:count].tobytes() + bytes(-count % 4)
            words = np.frombuffer(body, dtype='<u4')
            computed = int(np.bitwise_xor.reduce(words))

        stored = read_u32_le(view, count)
        write_u32_le(view, count, computed)

        if stored != computed:
            logger.debug(f"Checksum mismatch: stored 0x{stored:08X}, computed 0x{computed:08X}")

        return stored == computed


def crypt(data: bytes, key: Key) -> bytes:
    """
    Encrypt a packet with a one-off cryptor.

    Args:
        data: Plain packet bytes
        key: The key string or bytes

    Returns:
        The encrypted packet
    """
    return PacketCryptor(key).crypt(data)


def decrypt(data: bytes, key: Key) -> bytes:
    """
    Decrypt a packet with a one-off cryptor.

    Args:
        data: Encrypted packet bytes
        key: The key string or bytes

    Returns:
        The decrypted packet
    """
    return PacketCryptor(key).decrypt(data)


def checksum(data: Union[bytearray, memoryview]) -> bool:
    """Verify and rewrite the trailer checksum of a packet, see PacketCryptor.checksum."""
    return PacketCryptor.checksum(data)


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    cryptor = PacketCryptor("l2crypt-test-key")
    packet = bytearray(b"This is a test packet for the checksum!!")
    packet.extend(bytes(8))

    # First call writes the checksum, second call verifies it
    print(f"First checksum: {cryptor.checksum(packet)}")
    assert cryptor.checksum(packet)

    encrypted = cryptor.crypt(packet)
    print(f"Encrypted: {encrypted.hex()}")

    decrypted = cryptor.decrypt(encrypted)
    assert decrypted == bytes(packet)
    assert cryptor.checksum(bytearray(decrypted))

    # Tampered packet fails verification
    tampered = bytearray(decrypted)
    tampered[0] ^= 0x01
    assert not cryptor.checksum(tampered)

    try:
        cryptor.crypt(b"1234567")
        print("ERROR: Invalid length not detected!")
    except InvalidLengthError as e:
        print(f"Correctly rejected invalid length: {e}")

    print("Packet cryptor tests completed successfully!")

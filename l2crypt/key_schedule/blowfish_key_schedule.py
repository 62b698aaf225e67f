"""
Blowfish Key Schedule Implementation

This module derives the key-dependent subkey array and substitution tables
from a variable-length key, and provides helpers for producing key material
(random keys and password-derived keys).
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

import argon2

from ..cipher_core.feistel import encrypt_words
from ..cipher_core.word_codec import pack_key_word
from ..exceptions import EmptyKeyError
from ..sbox_tables.pi_constants import MAX_KEY_LENGTH, P_INIT, P_SZ, S_BOX_SK, S_INIT

logger = logging.getLogger(__name__)

# Default parameters for Argon2id password stretching
KDF_DEFAULT_PARAMS = {
    'time_cost': 4,        # Number of iterations
    'memory_cost': 65536,  # 64 MB
    'parallelism': 4,      # Number of threads
    'hash_len': MAX_KEY_LENGTH,
    'salt_len': 16,
}

KeyBytes = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class CipherState:
    """Subkeys and substitution tables derived from one key."""
    p_array: Tuple[int, ...]
    s_boxes: Tuple[Tuple[int, ...], ...]


def generate_key(key_size: int = MAX_KEY_LENGTH) -> bytes:
    """
    Generate a cryptographically secure random key.

    Args:
        key_size: Size of the key in bytes (default: 56)

    Returns:
        A random key as bytes
    """
    if not 1 <= key_size <= MAX_KEY_LENGTH:
        raise ValueError(f"Key size must be between 1 and {MAX_KEY_LENGTH} bytes")
    return secrets.token_bytes(key_size)


def derive_key_from_password(password: Union[str, bytes],
                             salt: Optional[bytes] = None,
                             params: Optional[Dict[str, int]] = None) -> Tuple[bytes, bytes]:
    """
    Stretch a password into Blowfish key material using Argon2id.

    Args:
        password: The password to derive the key from
        salt: Optional salt (will be generated if not provided)
        params: Optional Argon2id parameters, see KDF_DEFAULT_PARAMS

    Returns:
        A tuple of (key, salt)
    """
    if params is None:
        params = KDF_DEFAULT_PARAMS

    if salt is None:
        salt = secrets.token_bytes(params.get('salt_len', KDF_DEFAULT_PARAMS['salt_len']))

    if isinstance(password, str):
        password = password.encode('utf-8')

    hash_len = params.get('hash_len', KDF_DEFAULT_PARAMS['hash_len'])
    if not 4 <= hash_len <= MAX_KEY_LENGTH:
        raise ValueError(f"hash_len must be between 4 and {MAX_KEY_LENGTH} bytes")

    key = argon2.low_level.hash_secret_raw(
        secret=password,
        salt=salt,
        time_cost=params.get('time_cost', KDF_DEFAULT_PARAMS['time_cost']),
        memory_cost=params.get('memory_cost', KDF_DEFAULT_PARAMS['memory_cost']),
        parallelism=params.get('parallelism', KDF_DEFAULT_PARAMS['parallelism']),
        hash_len=hash_len,
        type=argon2.low_level.Type.ID  # Argon2id variant
    )

    return key, salt


def _xor_key_into_subkeys(p_array: List[int], key: KeyBytes) -> None:
    # The key pointer keeps wrapping across subkey boundaries
    position = 0
    for i in range(P_SZ):
        p_array[i] ^= pack_key_word(key, position)
        position = (position + 4) % len(key)


def _process_table(xl: int, xr: int, table: List[int],
                   p_array: List[int], s_boxes: List[List[int]]) -> None:
    """
    Overwrite a table with successive encryptions of a chained block.

    Each output pair is written into the table and becomes the input
    for the next pair.

    Args:
        xl: Left seed word
        xr: Right seed word
        table: The subkey array or a substitution table, replaced in place
        p_array: Current subkeys
        s_boxes: Current substitution tables
    """
    for s in range(0, len(table), 2):
        xl, xr = encrypt_words(xl, xr, p_array, s_boxes)
        table[s] = xl
        table[s + 1] = xr


def derive(key: KeyBytes) -> CipherState:
    """
    Derive the Blowfish cipher state for a key.

    Args:
        key: Key material, 1 to 56 bytes. Longer keys lie outside the
            Blowfish key domain; they are accepted with a logged warning,
            but only the first 72 bytes reach the subkeys and the rest are
            silently ignored

    Returns:
        The derived CipherState

    Raises:
        EmptyKeyError: If the key is empty
        TypeError: If the key is not bytes-like
    """
    if not isinstance(key, (bytes, bytearray, memoryview)):
        raise TypeError(f"Key must be bytes-like, got {type(key).__name__}")

    key = bytes(key)
    if not key:
        raise EmptyKeyError("Key must not be empty")

    if len(key) > MAX_KEY_LENGTH:
        logger.warning(f"Key is {len(key)} bytes, longer than the {MAX_KEY_LENGTH}-byte Blowfish maximum")

    # Step 1: Start from the pi constants
    p_array = list(P_INIT)
    s_boxes = [list(table) for table in S_INIT]

    # Step 2: XOR key material into the subkeys
    _xor_key_into_subkeys(p_array, key)

    # Step 3: Replace every table with chained encryptions of a zero block
    _process_table(0, 0, p_array, p_array, s_boxes)
    _process_table(p_array[P_SZ - 2], p_array[P_SZ - 1], s_boxes[0], p_array, s_boxes)
    for n in range(1, 4):
        previous = s_boxes[n - 1]
        _process_table(previous[S_BOX_SK - 2], previous[S_BOX_SK - 1], s_boxes[n], p_array, s_boxes)

    logger.debug(f"Derived Blowfish key schedule for a {len(key)}-byte key")

    return CipherState(
        p_array=tuple(p_array),
        s_boxes=tuple(tuple(table) for table in s_boxes),
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)

    # Standard test vector: all-zero key and plaintext
    state = derive(bytes(8))
    left, right = encrypt_words(0, 0, state.p_array, state.s_boxes)
    print(f"Ciphertext: {left:08X}{right:08X}")
    assert (left, right) == (0x4EF99745, 0x6198DD78)

    # Shortest and longest keys both derive distinct states
    short_state = derive(b'k')
    long_state = derive(generate_key(MAX_KEY_LENGTH))
    assert short_state != long_state

    print("Key schedule test passed!")

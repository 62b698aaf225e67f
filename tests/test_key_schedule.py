"""
Blowfish Key Schedule Tests
"""

import dataclasses
import logging

import pytest

from l2crypt.exceptions import EmptyKeyError, L2CryptError
from l2crypt.key_schedule import (
    CipherState, derive, generate_key, derive_key_from_password, KDF_DEFAULT_PARAMS
)
from l2crypt.sbox_tables import MAX_KEY_LENGTH, P_INIT, S_INIT

# Cheap Argon2id parameters so the tests stay fast
FAST_KDF_PARAMS = {'time_cost': 1, 'memory_cost': 64, 'parallelism': 1, 'hash_len': 56, 'salt_len': 16}


class TestDerive:
    """Tests for key schedule derivation."""

    def test_empty_key_rejected(self):
        with pytest.raises(EmptyKeyError):
            derive(b"")

    def test_empty_key_error_is_value_error(self):
        with pytest.raises(ValueError):
            derive(bytearray())
        assert issubclass(EmptyKeyError, L2CryptError)

    def test_str_key_rejected(self):
        with pytest.raises(TypeError):
            derive("secret")

    def test_shapes(self):
        state = derive(b"abc")
        assert len(state.p_array) == 18
        assert len(state.s_boxes) == 4
        assert all(len(table) == 256 for table in state.s_boxes)

    def test_deterministic(self):
        assert derive(b"same key") == derive(b"same key")
        assert derive(bytearray(b"same key")) == derive(memoryview(b"same key"))

    def test_state_differs_from_constants(self):
        state = derive(b"k")
        assert state.p_array != P_INIT
        assert state.s_boxes != S_INIT

    def test_boundary_key_lengths(self):
        """One-byte and 56-byte keys both derive, and to different states."""
        shortest = derive(b"\x01")
        longest = derive(bytes(range(1, MAX_KEY_LENGTH + 1)))
        assert shortest != longest

    def test_key_wraps_cyclically(self):
        """A key repeated to fill the subkeys derives the same state."""
        assert derive(b"abcd") == derive(b"abcdabcd")
        assert derive(b"abcd") != derive(b"abc")

    def test_state_is_immutable(self):
        state = derive(b"immutable")
        with pytest.raises(dataclasses.FrozenInstanceError):
            state.p_array = ()
        with pytest.raises(TypeError):
            state.p_array[0] = 0
        with pytest.raises(TypeError):
            state.s_boxes[0][0] = 0

    def test_caller_key_mutation_does_not_leak(self):
        key = bytearray(b"mutable key")
        state = derive(key)
        key[0] ^= 0xFF
        assert derive(b"mutable key") == state

    def test_long_key_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="l2crypt.key_schedule.blowfish_key_schedule"):
            derive(bytes(MAX_KEY_LENGTH + 1))
        assert "longer than" in caplog.text

    def test_bytes_past_72_ignored(self):
        """Only the first 72 key bytes reach the subkeys."""
        assert derive(bytes(72) + b"x") == derive(bytes(72) + b"y")
        assert derive(bytes(71) + b"x") != derive(bytes(71) + b"y")


class TestKeyMaterial:
    """Tests for key generation and password stretching."""

    def test_generate_key_default_length(self):
        assert len(generate_key()) == MAX_KEY_LENGTH

    def test_generate_key_is_random(self):
        assert generate_key(16) != generate_key(16)

    @pytest.mark.parametrize("size", [0, MAX_KEY_LENGTH + 1])
    def test_generate_key_rejects_bad_size(self, size):
        with pytest.raises(ValueError):
            generate_key(size)

    def test_password_key_is_reproducible(self):
        key, salt = derive_key_from_password("hunter2", params=FAST_KDF_PARAMS)
        assert len(key) == 56
        assert len(salt) == 16
        again, _ = derive_key_from_password(b"hunter2", salt=salt, params=FAST_KDF_PARAMS)
        assert again == key

    def test_password_salt_changes_key(self):
        key1, _ = derive_key_from_password("hunter2", salt=bytes(16), params=FAST_KDF_PARAMS)
        key2, _ = derive_key_from_password("hunter2", salt=bytes([1] * 16), params=FAST_KDF_PARAMS)
        assert key1 != key2

    def test_password_key_feeds_schedule(self):
        key, _ = derive_key_from_password("hunter2", salt=bytes(16), params=FAST_KDF_PARAMS)
        assert isinstance(derive(key), CipherState)

    def test_hash_len_bounded(self):
        params = dict(FAST_KDF_PARAMS, hash_len=64)
        with pytest.raises(ValueError):
            derive_key_from_password("hunter2", salt=bytes(16), params=params)

    def test_default_params(self):
        assert KDF_DEFAULT_PARAMS['hash_len'] == MAX_KEY_LENGTH

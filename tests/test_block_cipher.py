"""
Blowfish Block Engine Tests
"""

import os

import pytest
from Cryptodome.Cipher import Blowfish

from l2crypt.block_engine import Mode, BlowfishEngine, encrypt_block, decrypt_block
from l2crypt.exceptions import (
    AlreadyInitializedError, BufferBoundsError, EngineStateError, UninitializedEngineError
)
from tests.conftest import swap_words


def _engine(mode: Mode, key: bytes) -> BlowfishEngine:
    engine = BlowfishEngine()
    engine.init(mode, key)
    return engine


class TestEngineState:
    """Tests for engine initialisation rules."""

    def test_block_size(self):
        engine = BlowfishEngine()
        assert engine.get_block_size() == 8
        assert engine.block_size == 8

    def test_uninitialised_use_rejected(self):
        engine = BlowfishEngine()
        assert not engine.initialized
        assert engine.mode is None
        with pytest.raises(UninitializedEngineError):
            engine.process_block(bytes(8), 0, bytearray(8), 0)

    def test_uninitialised_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            BlowfishEngine().process_block(bytes(8), 0, bytearray(8), 0)

    def test_double_init_rejected(self):
        engine = _engine(Mode.ENCRYPT, b"key")
        with pytest.raises(AlreadyInitializedError):
            engine.init(Mode.DECRYPT, b"other")
        assert engine.mode is Mode.ENCRYPT
        assert issubclass(AlreadyInitializedError, EngineStateError)

    def test_mode_must_be_enum(self):
        with pytest.raises(TypeError):
            BlowfishEngine().init(True, b"key")

    def test_failed_init_leaves_engine_unset(self):
        engine = BlowfishEngine()
        with pytest.raises(ValueError):
            engine.init(Mode.ENCRYPT, b"")
        assert not engine.initialized
        engine.init(Mode.ENCRYPT, b"key")
        assert engine.initialized


class TestBufferBounds:
    """Tests for offset and length validation."""

    @pytest.mark.parametrize("in_len,in_off,out_len,out_off", [
        (7, 0, 8, 0),
        (16, 9, 8, 0),
        (8, 0, 7, 0),
        (8, 0, 16, 12),
        (8, -1, 8, 0),
        (8, 0, 8, -1),
    ])
    def test_short_buffers_rejected(self, in_len, in_off, out_len, out_off):
        engine = _engine(Mode.ENCRYPT, b"key")
        with pytest.raises(BufferBoundsError):
            engine.process_block(bytes(in_len), in_off, bytearray(out_len), out_off)

    def test_offsets_respected(self):
        engine = _engine(Mode.ENCRYPT, b"key")
        source = bytes(range(24))
        output = bytearray(b"\xaa" * 20)
        engine.process_block(source, 8, output, 4)
        assert output[:4] == b"\xaa" * 4
        assert output[12:] == b"\xaa" * 8
        assert bytes(output[4:12]) == encrypt_block(source[8:16], b"key")

    def test_wide_memoryview_counts_bytes(self):
        """Bounds are measured in bytes, not in memoryview items."""
        engine = _engine(Mode.ENCRYPT, b"key")
        source = memoryview(bytearray(range(8))).cast("I")
        output = bytearray(8)
        engine.process_block(source, 0, output, 0)
        assert bytes(output) == encrypt_block(bytes(range(8)), b"key")
        with pytest.raises(BufferBoundsError):
            engine.process_block(source, 4, output, 0)

    def test_in_place(self):
        engine = _engine(Mode.ENCRYPT, b"key")
        buf = bytearray(range(16))
        expected = encrypt_block(bytes(buf[8:]), b"key")
        engine.process_block(buf, 8, buf, 8)
        assert bytes(buf[8:]) == expected
        assert buf[:8] == bytearray(range(8))


class TestVectors:
    """Tests for the little-endian block layout."""

    def test_zero_key_vector(self):
        """Standard vector 4EF997456198DD78 with each word stored little-endian."""
        assert encrypt_block(bytes(8), bytes(8)).hex() == "4597f94e78dd9861"

    def test_zero_key_decrypt(self):
        assert decrypt_block(bytes.fromhex("4597f94e78dd9861"), bytes(8)) == bytes(8)

    @pytest.mark.parametrize("key", [b"k", bytes(8), b"l2crypt-test-key", bytes(range(56))])
    def test_round_trip(self, key):
        block = os.urandom(8)
        assert decrypt_block(encrypt_block(block, key), key) == block

    def test_engines_with_same_key_agree(self):
        first = _engine(Mode.ENCRYPT, b"determinism")
        second = _engine(Mode.ENCRYPT, b"determinism")
        out1, out2 = bytearray(8), bytearray(8)
        first.process_block(b"ABCDEFGH", 0, out1, 0)
        second.process_block(b"ABCDEFGH", 0, out2, 0)
        assert out1 == out2


class TestAgainstReference:
    """Compare against an independent Blowfish implementation."""

    @pytest.mark.parametrize("key", [b"four", b"l2crypt-test-key", bytes(range(56))])
    def test_matches_pycryptodome(self, key):
        reference = Blowfish.new(key, Blowfish.MODE_ECB)
        for _ in range(8):
            block = os.urandom(8)
            expected = swap_words(reference.encrypt(swap_words(block)))
            assert encrypt_block(block, key) == expected
            assert decrypt_block(expected, key) == block

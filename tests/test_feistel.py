"""
Feistel Network and Word Codec Tests
"""

import pytest

from l2crypt.cipher_core import (
    f_function, encrypt_words, decrypt_words,
    read_u32_le, write_u32_le, read_u32_be, pack_key_word,
)
from l2crypt.key_schedule import derive

# Published Blowfish vectors: (key, plaintext, ciphertext), big-endian words
KNOWN_ANSWERS = [
    (bytes(8), "0000000000000000", "4EF997456198DD78"),
    (bytes.fromhex("FFFFFFFFFFFFFFFF"), "FFFFFFFFFFFFFFFF", "51866FD5B85ECB8A"),
    (bytes.fromhex("FEDCBA9876543210"), "0123456789ABCDEF", "0ACEAB0FC6A0A28D"),
    (b"abcdefghijklmnopqrstuvwxyz", b"BLOWFISH".hex(), "324ED0FEF413A203"),
    (b"abcdefghijklmnopqrstuvwxyz", "0123456789ABCDEF", "FEE93BE40A60AF5C"),
]


def _words(hex_block: str):
    value = int(hex_block, 16)
    return value >> 32, value & 0xFFFFFFFF


class TestKnownAnswers:
    """Standard Blowfish test vectors at the word level."""

    @pytest.mark.parametrize("key,plaintext,ciphertext", KNOWN_ANSWERS)
    def test_encrypt(self, key, plaintext, ciphertext):
        state = derive(key)
        assert encrypt_words(*_words(plaintext), state.p_array, state.s_boxes) == _words(ciphertext)

    @pytest.mark.parametrize("key,plaintext,ciphertext", KNOWN_ANSWERS)
    def test_decrypt(self, key, plaintext, ciphertext):
        state = derive(key)
        assert decrypt_words(*_words(ciphertext), state.p_array, state.s_boxes) == _words(plaintext)


class TestFeistel:
    """Tests for the round function and traversals."""

    def test_f_function_wraps_modulo_2_32(self):
        s_boxes = ([0xFFFFFFFF] * 256, [0x00000002] * 256, [0] * 256, [0xFFFFFFFF] * 256)
        # (0xFFFFFFFF + 2) mod 2^32 = 1, then 1 + 0xFFFFFFFF wraps to 0
        assert f_function(0x12345678, s_boxes) == 0

    def test_f_function_byte_order(self):
        s_boxes = tuple([0] * 256 for _ in range(4))
        s_boxes[0][0xAA] = 1
        s_boxes[1][0xBB] = 2
        s_boxes[2][0xCC] = 4
        s_boxes[3][0xDD] = 8
        assert f_function(0xAABBCCDD, s_boxes) == 15
        assert f_function(0xDDCCBBAA, s_boxes) == 0

    def test_decrypt_inverts_encrypt(self):
        state = derive(b"inverse")
        for left, right in [(0, 0), (0xFFFFFFFF, 1), (0xDEADBEEF, 0xCAFEBABE)]:
            out = encrypt_words(left, right, state.p_array, state.s_boxes)
            assert decrypt_words(*out, state.p_array, state.s_boxes) == (left, right)

    def test_encrypt_is_not_self_inverse(self):
        state = derive(b"inverse")
        out = encrypt_words(1, 2, state.p_array, state.s_boxes)
        assert encrypt_words(*out, state.p_array, state.s_boxes) != (1, 2)


class TestWordCodec:
    """Tests for the byte-order primitives."""

    def test_read_le(self):
        assert read_u32_le(b"\x01\x02\x03\x04", 0) == 0x04030201
        assert read_u32_le(b"\xff\x78\x56\x34\x12", 1) == 0x12345678

    def test_read_be(self):
        assert read_u32_be(b"\x01\x02\x03\x04", 0) == 0x01020304

    def test_write_le(self):
        buf = bytearray(6)
        write_u32_le(buf, 1, 0x12345678)
        assert buf == bytearray(b"\x00\x78\x56\x34\x12\x00")

    def test_write_le_truncates(self):
        buf = bytearray(4)
        write_u32_le(buf, 0, 0x1_0000_0001)
        assert buf == bytearray(b"\x01\x00\x00\x00")

    def test_pack_key_word(self):
        assert pack_key_word(b"\x01\x02\x03\x04\x05", 0) == 0x01020304

    def test_pack_key_word_wraps(self):
        assert pack_key_word(b"\x01\x02\x03\x04\x05", 3) == 0x04050102
        assert pack_key_word(b"\xab", 0) == 0xABABABAB

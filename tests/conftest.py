"""
l2crypt Test Fixtures
"""

import pytest

from l2crypt.packet_mode import PacketCryptor


def swap_words(block: bytes) -> bytes:
    """Reverse the byte order of every 4-byte word."""
    return b"".join(block[i:i + 4][::-1] for i in range(0, len(block), 4))


@pytest.fixture
def packet_key() -> str:
    """Key string used by the packet cryptor tests."""
    return "l2crypt-test-key"


@pytest.fixture
def cryptor(packet_key) -> PacketCryptor:
    """Packet cryptor bound to the test key."""
    return PacketCryptor(packet_key)


@pytest.fixture
def plain_packet() -> bytearray:
    """A 48-byte packet: 40 bytes of payload plus the 8-byte trailer."""
    payload = b"This is a test packet for the checksum!!"
    return bytearray(payload + bytes(8))

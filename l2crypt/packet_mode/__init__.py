"""
Packet Mode Package

This package applies the Blowfish block engine to multi-block game
protocol packets and verifies the XOR checksum in the packet trailer.
"""

from .l2j_cryptor import PacketCryptor, crypt, decrypt, checksum

__all__ = ['PacketCryptor', 'crypt', 'decrypt', 'checksum']

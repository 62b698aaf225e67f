"""
l2crypt - Blowfish Packet Cryptography Library

This library implements the Blowfish block cipher from scratch together
with the packet-level wrapper used by a game-network protocol: whole-packet
encryption and decryption in 8-byte blocks, and verification of the XOR
checksum carried in each packet's trailer.

Key Features:
- Standard Blowfish key schedule over pi-derived constants
- 16-round Feistel network with separate forward and inverse traversals
- Little-endian block engine as used on the wire by the protocol
- Packet cryptor with trailer checksum verification
- Argon2id stretching of passwords into Blowfish keys

"""

from .block_engine import BlowfishEngine, Mode
from .packet_mode import PacketCryptor

__version__ = '0.1.0'
__author__ = 'l2crypt Team'

__all__ = ['BlowfishEngine', 'Mode', 'PacketCryptor']

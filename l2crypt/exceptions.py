"""
Error Types

All failures raised by the library derive from L2CryptError. Each concrete
error also derives from the built-in exception a caller would expect
(ValueError for rejected input, RuntimeError for misuse of engine state).
"""


class L2CryptError(Exception):
    """Base class for every error raised by l2crypt."""


class EngineStateError(L2CryptError, RuntimeError):
    """A block engine was used in a state that does not allow the call."""


class UninitializedEngineError(EngineStateError):
    """A block engine was asked to process data before init()."""


class AlreadyInitializedError(EngineStateError):
    """init() was called on a block engine that already holds a key."""


class InvalidLengthError(L2CryptError, ValueError):
    """A buffer length does not fit the block or checksum layout."""


class BufferBoundsError(L2CryptError, ValueError):
    """An offset leaves fewer than one block of room in a buffer."""


class EmptyKeyError(L2CryptError, ValueError):
    """Key schedule derivation was given a zero-length key."""

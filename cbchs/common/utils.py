"""Byte helpers: base64url, uint64 big-endian, constant-time compare."""
"""
Utility Module - Helper Functions
Helper signatures: b64url_encode, b64url_decode, encode_uint64_be,
constant_time_compare and flip_bit.
"""

import base64
from cryptography.hazmat.primitives import constant_time


UINT64_MAX = (1 << 64) - 1


def b64url_encode(b: bytes):
    """
    Base64url encode bytes without padding.

    Args:
        b: Bytes to encode

    Returns:
        str: Base64url string (no '=' padding)
    """
    return base64.urlsafe_b64encode(b).rstrip(b'=').decode('ascii')


def b64url_decode(s):
    """
    Base64url decode a string, restoring any stripped padding.

    Args:
        s: Base64url string or bytes

    Returns:
        bytes: Decoded bytes
    """
    if isinstance(s, str):
        s = s.encode('ascii')
    return base64.urlsafe_b64decode(s + b'=' * (-len(s) % 4))


def encode_uint64_be(value):
    """
    Encode a non-negative integer as 8 bytes, big-endian.

    Args:
        value: Integer in [0, 2^64 - 1]

    Returns:
        bytes: 8-byte big-endian representation

    Raises:
        ValueError: If value does not fit in 64 bits
    """
    if value < 0 or value > UINT64_MAX:
        raise ValueError(f"Value {value} does not fit in an unsigned 64-bit integer")
    return value.to_bytes(8, byteorder='big')


def constant_time_compare(a, b):
    """
    Constant-time byte comparison to prevent timing attacks.

    Args:
        a: First byte string
        b: Second byte string

    Returns:
        bool: True if the byte strings are equal
    """
    return constant_time.bytes_eq(bytes(a), bytes(b))


def flip_bit(data, bit_index):
    """
    Return a copy of data with one bit inverted.

    Args:
        data: Input bytes
        bit_index: Bit position, 0 is the most significant bit of data[0]

    Returns:
        bytes: Modified copy
    """
    buf = bytearray(data)
    buf[bit_index // 8] ^= 0x80 >> (bit_index % 8)
    return bytes(buf)


def to_bytes(value, name='value'):
    """Coerce str (ASCII) or bytes-like input to bytes."""
    if isinstance(value, str):
        return value.encode('ascii')
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"{name} must be bytes or str, got {type(value).__name__}")


if __name__ == '__main__':
    print("Testing utility functions...")

    encoded = b64url_encode(b"\xfb\xff")
    assert encoded == "-_8"
    assert b64url_decode(encoded) == b"\xfb\xff"
    print(f"✓ b64url_encode/b64url_decode: {encoded}")

    assert encode_uint64_be(336) == b"\x00\x00\x00\x00\x00\x00\x01\x50"
    print("✓ encode_uint64_be")

    assert constant_time_compare(b"secret", b"secret") is True
    assert constant_time_compare(b"secret", b"public") is False
    print("✓ constant_time_compare")

    assert flip_bit(b"\x00", 0) == b"\x80"
    print("✓ flip_bit")

    print("\n✅ All utility functions working correctly!")

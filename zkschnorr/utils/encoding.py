"""
Canonical encoding of integers for storage and wire use.

Each integer is written as a 4-byte big-endian length followed by its big-endian magnitude.
Zero has an empty magnitude.
"""

import struct

from petlib.bn import Bn

from zkschnorr.utils.groups import ensure_bn

LENGTH_PREFIX = struct.Struct(">I")


def encode_int(value):
    """
    Encode a non-negative integer.

    >>> encode_int(258)
    b'\\x00\\x00\\x00\\x02\\x01\\x02'
    >>> encode_int(0)
    b'\\x00\\x00\\x00\\x00'
    """
    value = ensure_bn(value)
    if value < 0:
        raise ValueError("Only non-negative integers have a canonical encoding")
    magnitude = value.binary() if value != 0 else b""
    return LENGTH_PREFIX.pack(len(magnitude)) + magnitude


def decode_int(data, offset=0):
    """
    Decode one integer starting at ``offset``.

    Returns:
        tuple: The integer and the offset right after it.

    >>> decode_int(b'\\x00\\x00\\x00\\x02\\x01\\x02')
    (258, 6)
    """
    if len(data) < offset + LENGTH_PREFIX.size:
        raise ValueError("Truncated length prefix")
    (length,) = LENGTH_PREFIX.unpack_from(data, offset)
    start = offset + LENGTH_PREFIX.size
    end = start + length
    if len(data) < end:
        raise ValueError("Truncated integer: expected {} bytes".format(length))
    magnitude = data[start:end]
    if magnitude[:1] == b"\x00":
        raise ValueError("Non-canonical encoding: leading zero byte")
    value = Bn.from_binary(magnitude) if magnitude else Bn(0)
    return value, end


def encode_ints(*values):
    """Encode a sequence of integers back to back."""
    return b"".join(encode_int(v) for v in values)


def decode_ints(data, count):
    """
    Decode exactly ``count`` integers, rejecting trailing bytes.

    >>> decode_ints(encode_ints(23, 11, 4), 3)
    [23, 11, 4]
    """
    values = []
    offset = 0
    for _ in range(count):
        value, offset = decode_int(data, offset)
        values.append(value)
    if offset != len(data):
        raise ValueError("Trailing bytes after {} integers".format(count))
    return values

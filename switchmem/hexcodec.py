# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Conversion between binary data and the ASCII hex text exchanged with the target.
"""

import binascii
import re

from .errors import DecodeError

# Leading run of hex digits; the terminator (and anything after it) is not hex
_HEX_PREFIX = re.compile(rb'[0-9a-fA-F]*')


def encode(data: bytes) -> bytes:
    """
    Return *data* as upper-case ASCII hex, two characters per byte.
    """
    return binascii.hexlify(bytes(data)).upper()


def decode(buffer, length=None) -> bytes:
    """
    Decode ASCII hex digit pairs in *buffer* and return the binary data.

    When *length* is given, the first ``2 * length`` bytes of *buffer* must
    all be hex digits and exactly *length* bytes are returned. Anything past
    that span (e.g. a trailing newline) is ignored.

    Otherwise, *buffer* is truncated at its first non-hex byte and the
    remaining digits are decoded.

    Raises :py:exc:`~switchmem.errors.DecodeError` if the data to decode is
    not well-formed hex.
    """
    buffer = bytes(buffer)

    if length is None:
        span = _HEX_PREFIX.match(buffer).group(0)
        if len(span) % 2 != 0:
            raise DecodeError('Odd number of hex digits in response: {:d}'.format(len(span)))
    else:
        if length < 0:
            raise ValueError('Length cannot be negative: {:d}'.format(length))

        span = buffer[:length * 2]
        if len(span) != length * 2:
            msg = 'Expected {:d} hex digits, buffer only holds {:d}'
            raise DecodeError(msg.format(length * 2, len(span)))

    try:
        return binascii.unhexlify(span)
    except binascii.Error as e:
        raise DecodeError('Malformed hex in response: ' + str(e)) from e

# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Partitioning of a transfer into bounded chunks
"""

# Largest payload, in bytes, that sys-botbase accepts in a single peek or poke.
MAX_TRANSFER_SIZE = 0x1C0


def iter_chunks(length: int, max_size: int = MAX_TRANSFER_SIZE):
    """
    Yield ``(index, size)`` tuples partitioning a *length*-byte transfer
    into chunks of at most *max_size* bytes.

    Chunks are yielded in increasing *index* order, never overlap, and their sizes
    sum to *length*. Only the final chunk may be shorter than *max_size*.
    Nothing is yielded when *length* is 0.
    """
    if max_size <= 0:
        raise ValueError('Maximum transfer size must be positive: {:d}'.format(max_size))

    for index in range(0, length, max_size):
        yield (index, min(max_size, length - index))

# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets

"""
This module provides the base Operation class atop which the memory read and
write operations are constructed.
"""

from .log import SwitchmemLog


class Operation:
    """
    This class provides a common base for different types of target interactions.

    The constructor takes a single context object, which must provide
    ``connection``, ``timing``, and ``max_transfer_size`` attributes
    (e.g. a :py:class:`~switchmem.Switch`).
    """

    def __init__(self, ctx, **_kwargs):
        self._ctx = ctx
        self.log = SwitchmemLog('(' + self.name + ') ')

    @property
    def name(self) -> str:
        """
        Operation name (string)
        """
        return self.__class__.__name__

    @property
    def max_transfer_size(self) -> int:
        """
        Largest payload, in bytes, moved by a single command.
        """
        return self._ctx.max_transfer_size

    @staticmethod
    def _check_range(offset: int, length: int):
        """
        Raise :py:exc:`ValueError` if *offset* and *length* do not describe
        a region within the unsigned 64-bit address range.
        """
        if offset < 0:
            raise ValueError('Offset cannot be negative: {:d}'.format(offset))

        if length < 0:
            raise ValueError('Length cannot be negative: {:d}'.format(length))

        if offset + length > 1 << 64:
            msg = 'Region of {:d} bytes @ 0x{:x} exceeds 64-bit address range'
            raise ValueError(msg.format(length, offset))

    def _send(self, cmd: bytes) -> int:
        self.log.debug('Sending: ' + cmd.decode('ascii', errors='replace').rstrip())
        return self._ctx.connection.send(cmd)

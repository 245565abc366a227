# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Exceptions raised by switchmem.

All of these derive from :py:exc:`SwitchmemError`. None of them are caught
internally; a failure partway through a multi-chunk transfer aborts the
remaining chunks and leaves the remote memory region partially read or written.
"""


class SwitchmemError(Exception):
    """
    Base class for all switchmem errors.
    """


class TransportError(SwitchmemError):
    """
    Raised when the underlying connection fails, or is used while disconnected.
    """


class TransportConnectError(TransportError):
    """
    Raised when a connection to the target cannot be established.
    """


class TransportSendError(TransportError):
    """
    Raised when a command cannot be written to the target.
    """


class TransportReceiveError(TransportError):
    """
    Raised when reading a response from the target fails.
    """


class DecodeError(SwitchmemError):
    """
    Raised when a response does not contain valid ASCII hex where it is expected.
    """


class ShortReadError(SwitchmemError):
    """
    Raised when fewer response bytes are received than a command requires.

    The *expected* and *received* byte counts are retained as attributes of
    the same name.
    """
    def __init__(self, expected: int, received: int, msg=None):
        if msg is None:
            msg = 'Expected {:d}-byte response, received {:d} bytes'.format(expected, received)
        super().__init__(msg)
        self.expected = expected
        self.received = received

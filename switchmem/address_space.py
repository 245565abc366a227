# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Mapping of logical address spaces to the commands used to access them.

The numeric base of the heap and main spaces is resolved by the target,
not the host. The host only needs to pick the right command vocabulary.
"""

from enum import Enum

from . import command


class AddressSpace(Enum):
    """
    Logical region that a transfer offset is relative to.
    """
    HEAP     = 'heap'
    MAIN     = 'main'
    ABSOLUTE = 'absolute'


# (read builder, write builder)
_METHODS = {
    AddressSpace.HEAP:     (command.peek,          command.poke),
    AddressSpace.MAIN:     (command.peek_main,     command.poke_main),
    AddressSpace.ABSOLUTE: (command.peek_absolute, command.poke_absolute),
}


def get(space) -> AddressSpace:
    """
    Return the :py:class:`AddressSpace` corresponding to *space*, which may
    be an :py:class:`AddressSpace` or its case-insensitive name
    (e.g. ``'heap'``, ``'Main'``).
    """
    if isinstance(space, AddressSpace):
        return space

    if isinstance(space, str):
        try:
            return AddressSpace(space.lower())
        except ValueError:
            pass

    raise ValueError('Invalid address space: ' + repr(space))


def resolve(space) -> tuple:
    """
    Return the ``(read_builder, write_builder)`` pair for *space*.

    The read builder is invoked as ``read_builder(offset, length)`` and the write
    builder as ``write_builder(offset, data)``. Both return the command as ``bytes``.
    """
    return _METHODS[get(space)]


def read_method(space):
    """
    Return the read command builder for *space*.
    """
    return resolve(space)[0]


def write_method(space):
    """
    Return the write command builder for *space*.
    """
    return resolve(space)[1]

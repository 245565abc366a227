# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Builders for the text commands understood by the target's sys-botbase sysmodule.

Each builder is a pure function returning the ASCII command as ``bytes``,
terminated by ``\\r\\n``. Nothing here performs I/O.

+-----------------------------------+------------------------------------------------+
| Builder                           | Command text                                   |
+===================================+================================================+
| :py:func:`peek`                   | ``peek 0x<offset> <length>``                   |
+-----------------------------------+------------------------------------------------+
| :py:func:`peek_main`              | ``peekMain 0x<offset> <length>``               |
+-----------------------------------+------------------------------------------------+
| :py:func:`peek_absolute`          | ``peekAbsolute 0x<offset> <length>``           |
+-----------------------------------+------------------------------------------------+
| :py:func:`poke`                   | ``poke 0x<offset> 0x<data>``                   |
+-----------------------------------+------------------------------------------------+
| :py:func:`poke_main`              | ``pokeMain 0x<offset> 0x<data>``               |
+-----------------------------------+------------------------------------------------+
| :py:func:`poke_absolute`          | ``pokeAbsolute 0x<offset> 0x<data>``           |
+-----------------------------------+------------------------------------------------+
| :py:func:`get_main_nso_base`      | ``getMainNsoBase``                             |
+-----------------------------------+------------------------------------------------+
| :py:func:`get_heap_base`          | ``getHeapBase``                                |
+-----------------------------------+------------------------------------------------+

Heap offsets are relative to the heap base and rendered with 8 hex digits.
Main and absolute offsets are rendered with 16.
"""

from . import hexcodec

U64_MAX = 0xffff_ffff_ffff_ffff


def _encode(cmd: str) -> bytes:
    return (cmd + '\r\n').encode('ascii')


def _check_offset(offset: int):
    if not isinstance(offset, int):
        raise TypeError('Offset must be an int, got ' + type(offset).__name__)

    if not 0 <= offset <= U64_MAX:
        raise ValueError('Offset is not an unsigned 64-bit value: {:d}'.format(offset))


def _peek(verb: str, width: int, offset: int, length: int) -> bytes:
    _check_offset(offset)
    if length < 0:
        raise ValueError('Length cannot be negative: {:d}'.format(length))

    return _encode('{:s} 0x{:0{:d}X} {:d}'.format(verb, offset, width, length))


def _poke(verb: str, width: int, offset: int, data: bytes) -> bytes:
    _check_offset(offset)
    payload = hexcodec.encode(data).decode('ascii')
    return _encode('{:s} 0x{:0{:d}X} 0x{:s}'.format(verb, offset, width, payload))


def peek(offset: int, length: int) -> bytes:
    """
    Read *length* bytes at *offset* from the heap base.
    """
    return _peek('peek', 8, offset, length)


def peek_main(offset: int, length: int) -> bytes:
    """
    Read *length* bytes at *offset* from the main NSO base.
    """
    return _peek('peekMain', 16, offset, length)


def peek_absolute(offset: int, length: int) -> bytes:
    """
    Read *length* bytes at absolute address *offset*.
    """
    return _peek('peekAbsolute', 16, offset, length)


def poke(offset: int, data: bytes) -> bytes:
    """
    Write *data* at *offset* from the heap base.
    """
    return _poke('poke', 8, offset, data)


def poke_main(offset: int, data: bytes) -> bytes:
    """
    Write *data* at *offset* from the main NSO base.
    """
    return _poke('pokeMain', 16, offset, data)


def poke_absolute(offset: int, data: bytes) -> bytes:
    """
    Write *data* at absolute address *offset*.
    """
    return _poke('pokeAbsolute', 16, offset, data)


def get_main_nso_base() -> bytes:
    """
    Request the absolute address of the main NSO.
    """
    return _encode('getMainNsoBase')


def get_heap_base() -> bytes:
    """
    Request the absolute address of the heap.
    """
    return _encode('getHeapBase')

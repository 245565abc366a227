# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Provides the MemoryWriter operation
"""

from .. import address_space
from ..address_space import AddressSpace
from ..operation import Operation
from ..progress import Progress

from .chunk import iter_chunks


class MemoryWriter(Operation):
    """
    Writes memory on the target using the ``poke`` family of commands.

    Write commands are fire-and-forget: the target sends no acknowledgement,
    so nothing is read back and no delay is applied between commands.
    """

    def _describe_op(self, offset: int, data: bytes, space: AddressSpace) -> str:
        s = '({:s}) Writing {:d} bytes @ {:s}+0x{:08x}'
        return s.format(self.name, len(data), space.value, offset)

    def write(self, data: bytes, offset: int, space=AddressSpace.HEAP, **kwargs):
        """
        Write *data* at *offset* within the specified address *space*.

        Specify a *show_progress=False* keyword argument to disable the progress
        bar printed during multi-chunk writes.
        """
        space = address_space.get(space)
        data = bytes(data)
        size = len(data)
        self._check_range(offset, size)

        if size == 0:
            return

        write_cmd = address_space.write_method(space)
        max_size = self.max_transfer_size

        if size <= max_size:
            self._send(write_cmd(offset, data))
            return

        desc = self._describe_op(offset, data, space)
        show = kwargs.get('show_progress', True)
        progress = Progress.create(size, desc, unit='B', show=show)

        try:
            for (i, to_write) in iter_chunks(size, max_size):
                self._send(write_cmd(offset + i, data[i:i + to_write]))
                progress.update(to_write)
        finally:
            progress.close()

    def write_from_file(self, filename: str, offset: int, space=AddressSpace.HEAP, **kwargs):
        """
        Open the file specified via *filename* and write its contents
        at *offset* within the specified address *space*.
        """
        with open(filename, 'rb') as infile:
            data = infile.read()

        self.write(data, offset, space, **kwargs)

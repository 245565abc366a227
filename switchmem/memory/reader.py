# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Provides the MemoryReader operation
"""

from .. import address_space
from .. import hexcodec
from ..address_space import AddressSpace
from ..errors import ShortReadError
from ..operation import Operation
from ..progress import Progress

from .chunk import iter_chunks


class MemoryReader(Operation):
    """
    Reads memory from the target using the ``peek`` family of commands.

    Each command is followed by the context's synchronization delay
    (see :py:class:`~switchmem.timing.Timing`) and then by a blocking receive
    of the ASCII hex response. Reads larger than the context's
    ``max_transfer_size`` are performed as a sequence of bounded reads.
    """

    def _describe_op(self, offset: int, length: int, space: AddressSpace) -> str:
        """
        Return a short string, suitable for logging and progress bars,
        describing a read operation.

        *Example:*

        ``(MemoryReader) Reading 4096 bytes @ main+0x0004c120``
        """
        s = '({:s}) Reading {:d} bytes @ {:s}+0x{:08x}'
        return s.format(self.name, length, space.value, offset)

    def read_response(self, length: int) -> bytes:
        """
        Wait for, receive, and decode the response to a previously
        sent command requesting *length* bytes.

        The response is expected to consist of ``2 * length`` hex digits
        followed by a single terminator byte. A
        :py:exc:`~switchmem.errors.ShortReadError` is raised if fewer bytes arrive
        before the connection's receive timeout.
        """
        self._ctx.timing.wait(length)

        expected = length * 2 + 1
        buf = bytearray(expected)
        count = self._ctx.connection.receive(buf)
        if count < expected:
            self.log.error('Response truncated: {:d} / {:d} bytes'.format(count, expected))
            self._ctx.connection.discard_input()
            raise ShortReadError(expected, count)

        return hexcodec.decode(buf, length)

    def query(self, cmd: bytes, length: int) -> bytes:
        """
        Send *cmd* and return the *length* bytes of data in its response.

        Input left over from an earlier, truncated response is discarded
        before *cmd* is sent.
        """
        self._ctx.connection.discard_input()
        self._send(cmd)
        return self.read_response(length)

    def _read(self, offset: int, length: int, space: AddressSpace, handle_data, show: bool):
        read_cmd = address_space.read_method(space)
        max_size = self.max_transfer_size

        if length <= max_size:
            handle_data(self.query(read_cmd(offset, length), length))
            return

        desc = self._describe_op(offset, length, space)
        progress = Progress.create(length, desc, unit='B', show=show)

        try:
            for (i, size) in iter_chunks(length, max_size):
                # Each response is sized by its own chunk, not the total length
                handle_data(self.query(read_cmd(offset + i, size), size))
                progress.update(size)
        finally:
            progress.close()

    def read(self, offset: int, length: int, space=AddressSpace.HEAP, **kwargs) -> bytes:
        """
        Read *length* bytes at *offset* within the specified address *space*
        and return the data as a ``bytes`` object.

        Specify a *show_progress=False* keyword argument to disable the progress
        bar printed during multi-chunk reads.
        """
        space = address_space.get(space)
        self._check_range(offset, length)

        ret = bytearray()
        self._read(offset, length, space, ret.extend, kwargs.get('show_progress', True))
        return bytes(ret)

    def read_to_file(self, offset: int, length: int, filename: str,
                     space=AddressSpace.HEAP, **kwargs):
        """
        Read *length* bytes at *offset* within the specified address *space*
        and stream the data to the file named *filename*.

        Specify a *show_progress=False* keyword argument to disable the
        progress bar printed during multi-chunk reads.
        """
        space = address_space.get(space)
        self._check_range(offset, length)

        with open(filename, 'wb') as outfile:
            self._read(offset, length, space, outfile.write, kwargs.get('show_progress', True))

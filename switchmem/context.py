# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets

"""
The top level of the switchmem API is the :py:class:`~switchmem.Switch` class.
An instance of it effectively represents a "context handle" to a target running
the sys-botbase sysmodule, encapsulating the connection, the read timing
heuristic, and the memory read/write operations built atop them.

In the simplest case, creating a handle consists of a single step:

.. code:: python

    with Switch('192.168.0.42:6000') as switch:
        heap_base = switch.get_heap_base()
        data = switch.read_bytes(0x4_2000, 0x1000)

A pre-configured :py:class:`~switchmem.Connection` may be passed instead of a
target string, for example to attach a :py:class:`~switchmem.monitor.Monitor`.

**Keyword Arguments:**

:Read timing: *base_delay* and *delay_factor* (milliseconds) tune the delay
    between sending a read command and receiving its response.
    Alternatively, a :py:class:`~switchmem.timing.Timing` instance may be
    provided via *timing*, in which case neither of the former may be given.

:Transfer size: *max_transfer_size* sets the largest number of bytes moved
    by a single command. Larger transfers are split into multiple commands.
    Defaults to :py:data:`~switchmem.memory.MAX_TRANSFER_SIZE`.

:Connection: The connection is established during construction, unless
    *connect=False* is specified.

Only a single command is ever in flight. A :py:class:`Switch` performs no
locking, so callers sharing one across threads must serialize access to it.
"""

from . import log

from .address_space import AddressSpace
from . import command
from .connection    import Connection
from .memory        import MAX_TRANSFER_SIZE, MemoryReader, MemoryWriter
from .timing        import Timing, BASE_DELAY, DELAY_FACTOR

_U32_MAX = 0xffff_ffff


def _check_heap_offset(offset: int):
    if not 0 <= offset <= _U32_MAX:
        raise ValueError('Heap offset is not an unsigned 32-bit value: 0x{:x}'.format(offset))


class Switch:
    """
    This class represents a context handle for reading and writing target memory.

    The *connection* argument is either an initialized :py:class:`~switchmem.Connection`
    or a target string that can be passed directly to its constructor.
    """

    def __init__(self, connection, **kwargs):
        if isinstance(connection, str):
            connection = Connection(connection)

        self.connection = connection

        timing = kwargs.get('timing', None)
        if timing is not None and ('base_delay' in kwargs or 'delay_factor' in kwargs):
            raise ValueError('The timing and base_delay/delay_factor keyword arguments are mutually exclusive')

        if timing is None:
            timing = Timing(kwargs.get('base_delay', BASE_DELAY),
                            kwargs.get('delay_factor', DELAY_FACTOR))
        self.timing = timing

        max_transfer_size = int(kwargs.get('max_transfer_size', MAX_TRANSFER_SIZE))
        if max_transfer_size <= 0:
            raise ValueError('Maximum transfer size must be positive: {:d}'.format(max_transfer_size))
        self.max_transfer_size = max_transfer_size

        self._reader = MemoryReader(self)
        self._writer = MemoryWriter(self)

        if kwargs.get('connect', True) and not self.connection.connected:
            self.connection.connect()

    @property
    def connected(self) -> bool:
        """
        ``True`` if the underlying connection is established.
        """
        return self.connection.connected

    def connect(self):
        """
        Establish the underlying connection.
        """
        self.connection.connect()

    def disconnect(self):
        """
        Tear down the underlying connection.
        """
        self.connection.disconnect()

    def reset(self):
        """
        Disconnect from and then re-connect to the target.
        """
        self.connection.reset()

    def close(self):
        """
        Disconnect and release the underlying connection and its monitor.
        """
        self.connection.close()

    def __enter__(self):
        if not self.connected:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def memory_reader(self) -> MemoryReader:
        """
        :py:class:`~switchmem.memory.MemoryReader` used by this context.
        """
        return self._reader

    @property
    def memory_writer(self) -> MemoryWriter:
        """
        :py:class:`~switchmem.memory.MemoryWriter` used by this context.
        """
        return self._writer

    def read_memory(self, offset: int, length: int, space=AddressSpace.HEAP, **kwargs) -> bytes:
        """
        Read *length* bytes at *offset* within address *space* and return the data.

        .. code:: python

            # Read 16 KiB from 0x0100_0000 past the main NSO base
            data = switch.read_memory(0x0100_0000, 16384, AddressSpace.MAIN)

            # Address spaces can also be named as strings
            data = switch.read_memory(0x0100_0000, 16384, 'main')

        See :py:meth:`MemoryReader.read() <switchmem.memory.MemoryReader.read>`
        for supported keyword arguments.
        """
        return self._reader.read(offset, length, space, **kwargs)

    def read_memory_to_file(self, offset: int, length: int, filename: str,
                            space=AddressSpace.HEAP, **kwargs):
        """
        Read *length* bytes at *offset* within address *space* and write the
        data to a file named *filename*.
        """
        self._reader.read_to_file(offset, length, filename, space, **kwargs)

    def write_memory(self, data: bytes, offset: int, space=AddressSpace.HEAP, **kwargs):
        """
        Write *data* at *offset* within address *space*.

        No acknowledgement is returned by the target. Read the region back
        if confirmation is needed.
        """
        self._writer.write(data, offset, space, **kwargs)

    def write_memory_from_file(self, filename: str, offset: int, space=AddressSpace.HEAP, **kwargs):
        """
        Write the contents of the binary file accessed via *filename* at
        *offset* within address *space*.
        """
        self._writer.write_from_file(filename, offset, space, **kwargs)

    def read_bytes(self, offset: int, length: int, **kwargs) -> bytes:
        """
        Read *length* bytes at a 32-bit *offset* from the heap base.
        """
        _check_heap_offset(offset)
        return self.read_memory(offset, length, AddressSpace.HEAP, **kwargs)

    def read_bytes_main(self, offset: int, length: int, **kwargs) -> bytes:
        """
        Read *length* bytes at *offset* from the main NSO base.
        """
        return self.read_memory(offset, length, AddressSpace.MAIN, **kwargs)

    def read_bytes_absolute(self, offset: int, length: int, **kwargs) -> bytes:
        """
        Read *length* bytes at absolute address *offset*.
        """
        return self.read_memory(offset, length, AddressSpace.ABSOLUTE, **kwargs)

    def write_bytes(self, data: bytes, offset: int, **kwargs):
        """
        Write *data* at a 32-bit *offset* from the heap base.
        """
        _check_heap_offset(offset)
        self.write_memory(data, offset, AddressSpace.HEAP, **kwargs)

    def write_bytes_main(self, data: bytes, offset: int, **kwargs):
        """
        Write *data* at *offset* from the main NSO base.
        """
        self.write_memory(data, offset, AddressSpace.MAIN, **kwargs)

    def write_bytes_absolute(self, data: bytes, offset: int, **kwargs):
        """
        Write *data* at absolute address *offset*.
        """
        self.write_memory(data, offset, AddressSpace.ABSOLUTE, **kwargs)

    def _read_base(self, cmd: bytes) -> int:
        # The target reports these in the opposite byte order
        # from the host's native interpretation
        data = self._reader.query(cmd, 8)
        return int.from_bytes(bytes(reversed(data)), 'little')

    def get_main_nso_base(self) -> int:
        """
        Return the absolute address of the main NSO.
        """
        base = self._read_base(command.get_main_nso_base())
        log.debug('Main NSO base: 0x{:016x}'.format(base))
        return base

    def get_heap_base(self) -> int:
        """
        Return the absolute address of the heap.
        """
        base = self._read_base(command.get_heap_base())
        log.debug('Heap base: 0x{:016x}'.format(base))
        return base

# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
A :py:class:`Monitor` can be attached to a :py:class:`~switchmem.Connection`
to observe the commands sent to, and the responses received from, a target.
This is mostly useful when debugging a target that appears to hang or return
truncated responses.
"""

from . import log


class Monitor:
    """
    The :py:class:`.Monitor` class implements a no-op base implementation
    that simply discards all data.
    """
    def __init__(self):
        self._f = None

    _default_file = '/tmp/switchmem-monitor.txt'

    _impls = {}

    @classmethod
    def register(cls, name: str, impl_class):
        """
        Register a :py:class:`Monitor` implementation to be returned by
        :py:meth:`Monitor.create()`.
        """
        if not issubclass(impl_class, Monitor):
            raise ValueError('Implementation must be a subclass of switchmem.Monitor')

        cls._impls[name.lower()] = impl_class

    @classmethod
    def create(cls, spec: str):
        """
        Create and return a monitor from a "specification" string structured as follows:

        ``<type>[:arg1,...]``

        Currently, only the ``'file'`` type is provided. Its optional argument is
        the name of the file to write traffic to. When omitted or empty, the
        monitor writes to ``/tmp/switchmem-monitor.txt``.
        """
        if spec is None or len(spec) == 0:
            return Monitor()

        fields = spec.split(':', maxsplit=1)

        name = fields[0].lower()
        try:
            args = fields[1].split(',')
        except IndexError:
            args = []

        try:
            impl = cls._impls[name]
        except KeyError:
            raise ValueError('Invalid Monitor name: ' + name)

        return impl(*args)

    def read(self, data: bytes):
        """
        Record data *received from* the target.
        """
        self._record(data)

    def write(self, data: bytes):
        """
        Record data *sent to* the target.
        """
        self._record(data)

    def _record(self, data: bytes):
        if self._f is None:
            return

        for b in data:
            if 0x20 <= b < 0x7f or b in (0x09, 0x0a, 0x0d):
                self._f.write(bytes([b]))
            else:
                self._f.write('<{:02x}>'.format(b).encode('ascii'))
        self._f.flush()

    def close(self):
        """
        Close the monitor and its underlying resources.
        """
        if self._f is not None:
            self._f.close()
            self._f = None


class FileMonitor(Monitor):
    """
    A :py:class:`.Monitor` subclass that logs traffic to a file.
    Non-printable bytes are written as ``<xx>``.
    """

    def __init__(self, path=None):
        super().__init__()
        if not path:
            path = self._default_file

        log.note('Recording target traffic to ' + path)
        self._f = open(path, 'wb')


# Register default monitors
Monitor.register('file', FileMonitor)

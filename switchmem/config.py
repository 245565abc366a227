# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Target connection settings.

A target may be described by a string in the form:

    ``'<ip>[:<port>][,<key>=<value>][...]'``

The port may be given as a bare integer immediately following the colon, for
convenience. For example, both of the following are equivalent:

.. code:: python

    cfg = ConnectionConfig.from_string('192.168.0.42:6000,timeout=2.5')
    cfg = ConnectionConfig('192.168.0.42', port=6000, timeout=2.5)

The receive timeout can also be set through a ``SWITCHMEM_TIMEOUT`` environment
variable (float, seconds). The environment variable takes precedence.
"""

import os

DEFAULT_PORT    = 6000
DEFAULT_TIMEOUT = 1.0


def keyval_list_to_dict(arg_list: list) -> dict:
    """
    Convert strings in the form ``'key1=val1,key2=val2,...'`` into a dictionary.

    Keys given with no value are assigned ``True``. Values are converted
    to ``int`` or ``float`` where possible, and left as strings otherwise.
    """
    ret = {}
    for arg in arg_list:
        for keyval in arg.split(','):
            fields = keyval.split('=')
            if len(fields) not in (1, 2) or not fields[0].strip():
                keyval = '<empty>' if len(keyval) == 0 else keyval
                raise ValueError('Invalid argument. Expected key=val syntax: ' + keyval)

            key = fields[0].strip()
            if len(fields) == 1:
                ret[key] = True
                continue

            value = fields[1].strip()
            for conv in (lambda v: int(v, 0), float):
                try:
                    value = conv(value)
                    break
                except ValueError:
                    pass

            ret[key] = value

    return ret


class ConnectionConfig:
    """
    Address, port, and receive timeout (in seconds) of a target.

    Raises :py:exc:`ValueError` if any of these are invalid.
    """

    def __init__(self, ip: str, port=DEFAULT_PORT, timeout=DEFAULT_TIMEOUT):
        timeout_env = os.getenv('SWITCHMEM_TIMEOUT')
        if timeout_env is not None:
            timeout = float(timeout_env)

        ip = str(ip).strip()
        if not ip:
            raise ValueError('Target address cannot be empty')

        port = int(port)
        if not 0 < port <= 0xffff:
            raise ValueError('Invalid port: {:d}'.format(port))

        timeout = float(timeout)
        if timeout <= 0:
            raise ValueError('Timeout must be positive: {:f}'.format(timeout))

        self.ip = ip
        self.port = port
        self.timeout = timeout

    @classmethod
    def from_string(cls, target: str):
        """
        Create a :py:class:`ConnectionConfig` from a target description string.
        See the module documentation for the accepted syntax.
        """
        try:
            separator_idx = target.index(':')
        except ValueError:
            return cls(target)

        ip = target[:separator_idx].strip()
        kwargs = keyval_list_to_dict([target[separator_idx + 1:]])

        # Special case - port allowed without 'port=' syntax
        for key in list(kwargs.keys()):
            if kwargs[key] is True:
                try:
                    kwargs['port'] = int(key)
                    kwargs.pop(key)
                except ValueError:
                    raise ValueError('Invalid target setting: ' + key)

        unknown = set(kwargs) - {'port', 'timeout'}
        if unknown:
            raise ValueError('Unsupported target setting(s): ' + ', '.join(sorted(unknown)))

        return cls(ip, **kwargs)

    @property
    def url(self) -> str:
        """
        pyserial URL used to open a TCP connection to the target.
        """
        return 'socket://{:s}:{:d}'.format(self.ip, self.port)

    def __str__(self):
        return '{:s}:{:d}'.format(self.ip, self.port)

    def __repr__(self):
        s = '{:s}(ip={!r}, port={:d}, timeout={!r})'
        return s.format(self.__class__.__name__, self.ip, self.port, self.timeout)

# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
TCP connection to a target running the sys-botbase sysmodule.

The connection is opened through pyserial's ``socket://`` URL handler, so the
receive timeout behaves the same way it would for a serial port: a read returns
early, with fewer bytes than requested, once the timeout expires.
"""

from enum import Enum

import serial

from . import log
from .config import ConnectionConfig
from .errors import (TransportError,
                     TransportConnectError,
                     TransportSendError,
                     TransportReceiveError)
from .monitor import Monitor


class ConnectionState(Enum):
    """
    Connection lifecycle state.
    """
    DISCONNECTED = 0
    CONNECTED    = 1


class Connection:
    """
    Raw connect/send/receive/disconnect over TCP.

    The *config* argument may either be a :py:class:`~switchmem.config.ConnectionConfig`
    or a target string accepted by :py:meth:`ConnectionConfig.from_string()
    <switchmem.config.ConnectionConfig.from_string>`.

    If you wish to view or capture data sent and received using this connection,
    provide a :py:class:`~switchmem.monitor.Monitor` instance as the *monitor* parameter.

    A :py:class:`Connection` is initially disconnected. It may be used as a
    context manager, in which case it is connected upon entry and disconnected upon exit.

    No locking is performed; a single :py:class:`Connection` must not be used by
    multiple threads at once.
    """

    def __init__(self, config, monitor=None):
        if isinstance(config, str):
            config = ConnectionConfig.from_string(config)

        self._config = config
        self._state = ConnectionState.DISCONNECTED
        self._port = None

        self.monitor = monitor if monitor is not None else Monitor()

    @property
    def config(self) -> ConnectionConfig:
        """
        Target connection settings.
        """
        return self._config

    @property
    def state(self) -> ConnectionState:
        """
        Current :py:class:`ConnectionState`.
        """
        return self._state

    @property
    def connected(self) -> bool:
        """
        ``True`` if the connection is currently established.
        """
        return self._state is ConnectionState.CONNECTED

    def connect(self):
        """
        Establish a connection to the target.

        Raises :py:exc:`~switchmem.errors.TransportConnectError` on failure,
        in which case the connection remains disconnected.
        """
        log.note('Connecting to {:s}...'.format(str(self._config)))

        try:
            self._port = serial.serial_for_url(self._config.url, timeout=self._config.timeout)
        except (serial.SerialException, OSError) as e:
            self._port = None
            self._state = ConnectionState.DISCONNECTED
            msg = 'Failed to connect to {:s}: {:s}'
            raise TransportConnectError(msg.format(str(self._config), str(e))) from e

        self._state = ConnectionState.CONNECTED
        log.note('Connected!')

    def disconnect(self):
        """
        Tear down the connection to the target.

        Disconnecting an already-disconnected :py:class:`Connection` has no effect.
        """
        if self._port is None:
            self._state = ConnectionState.DISCONNECTED
            return

        log.note('Disconnecting from {:s}...'.format(str(self._config)))

        port = self._port
        self._port = None
        self._state = ConnectionState.DISCONNECTED

        try:
            port.close()
        except (serial.SerialException, OSError) as e:
            raise TransportError('Failed to disconnect cleanly: ' + str(e)) from e

        log.note('Disconnected!')

    def reset(self):
        """
        Disconnect and then re-connect to the target.
        """
        self.disconnect()
        self.connect()

    def close(self, close_monitor=True):
        """
        Disconnect, and close the attached monitor if *close_monitor* is ``True``.
        """
        self.disconnect()
        if close_monitor:
            self.monitor.close()

    def _require_connection(self):
        if self._state is not ConnectionState.CONNECTED:
            raise TransportError('Not connected to ' + str(self._config))

    def send(self, data: bytes) -> int:
        """
        Write *data* to the target and return the number of bytes written.
        """
        self._require_connection()

        try:
            count = self._port.write(data)
            self._port.flush()
        except (serial.SerialException, OSError) as e:
            raise TransportSendError('Send failed: ' + str(e)) from e

        self.monitor.write(data)
        return len(data) if count is None else count

    def receive(self, buffer: bytearray) -> int:
        """
        Read up to ``len(buffer)`` bytes from the target into *buffer* and
        return the number of bytes actually received.

        Fewer bytes are returned if the receive timeout expires first.
        """
        self._require_connection()

        try:
            count = self._port.readinto(buffer)
        except (serial.SerialException, OSError) as e:
            raise TransportReceiveError('Receive failed: ' + str(e)) from e

        self.monitor.read(bytes(buffer[:count]))
        return count

    def discard_input(self):
        """
        Drop any received data not yet consumed by :py:meth:`receive()`,
        such as the late tail of a response that previously timed out.
        """
        self._require_connection()

        try:
            self._port.reset_input_buffer()
        except (serial.SerialException, OSError) as e:
            raise TransportReceiveError('Failed to discard input: ' + str(e)) from e

    def __enter__(self):
        if not self.connected:
            self.connect()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.disconnect()

# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
Pre-read delay heuristic.

The target provides no acknowledgement or ready signal. After a read command is
sent, the host waits for a fixed amount of time, scaled by the size of the
request, before attempting to receive the response. This is not adaptive;
if the delay is too short for a given target, raise *base_delay* (or lower
*delay_factor*).

The defaults may be overridden by the ``SWITCHMEM_BASE_DELAY`` and
``SWITCHMEM_DELAY_FACTOR`` environment variables, which take precedence over
constructor arguments.
"""

import os
import time

from . import log

BASE_DELAY   = 64
DELAY_FACTOR = 256


class Timing:
    """
    Computes and applies the delay between sending a command and reading its response.

    Both *base_delay* and *delay_factor* are integers in milliseconds.
    The *sleep* callable (default: :py:func:`time.sleep`) takes a duration in seconds.
    """

    def __init__(self, base_delay=BASE_DELAY, delay_factor=DELAY_FACTOR, sleep=time.sleep):
        base_delay_env = os.getenv('SWITCHMEM_BASE_DELAY')
        if base_delay_env is not None:
            base_delay = int(base_delay_env, 0)

        delay_factor_env = os.getenv('SWITCHMEM_DELAY_FACTOR')
        if delay_factor_env is not None:
            delay_factor = int(delay_factor_env, 0)

        self.base_delay = base_delay
        self.delay_factor = delay_factor
        self._sleep = sleep

    @property
    def base_delay(self) -> int:
        """
        Minimum delay applied to every read, in milliseconds.
        """
        return self._base_delay

    @base_delay.setter
    def base_delay(self, value: int):
        if value < 0:
            raise ValueError('Base delay cannot be negative: {:d}'.format(value))
        self._base_delay = int(value)

    @property
    def delay_factor(self) -> int:
        """
        Number of requested bytes per additional millisecond of delay.
        """
        return self._delay_factor

    @delay_factor.setter
    def delay_factor(self, value: int):
        if value <= 0:
            raise ValueError('Delay factor must be positive: {:d}'.format(value))
        self._delay_factor = int(value)

    def delay(self, length: int) -> int:
        """
        Return the delay, in milliseconds, to apply before reading
        the response to a *length*-byte read.
        """
        return length // self._delay_factor + self._base_delay

    def wait(self, length: int):
        """
        Synchronization delay: block until the response to a
        *length*-byte read should be available.
        """
        delay_ms = self.delay(length)
        log.debug('Waiting {:d} ms for {:d}-byte response'.format(delay_ms, length))
        self._sleep(delay_ms / 1000)

# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets

"""
switchmem provides simple logging functionality atop of Python's own
``logging`` module.

The log level is initialized according to the level name (string) set in the
``SWITCHMEM_LOG_LEVEL`` environment variable. If not present, switchmem
logging defaults to the ``'note'`` level.

Below are the available levels in order of decreasing verbosity, and with their
associated message prefix symbols.

+----------------+-------------+------------------------------------------------------------------+
|   Level Name   | Msg. Prefix | Description                                                      |
+================+=============+==================================================================+
| debug          |   ``[#]``   | Per-command traffic and other low-level diagnostic information   |
+----------------+-------------+------------------------------------------------------------------+
| note           |   ``[*]``   | Connection status and transfer progress                          |
+----------------+-------------+------------------------------------------------------------------+
| info           |   ``[+]``   | Higher-level status - usually success                            |
+----------------+-------------+------------------------------------------------------------------+
| warning        |   ``[!]``   | Similar to info, but for reporting undesirable status            |
+----------------+-------------+------------------------------------------------------------------+
| error          |   ``[X]``   | Describes what is failing and why                                |
+----------------+-------------+------------------------------------------------------------------+
| silent         |     N/A     | switchmem does not write log output to stderr                    |
+----------------+-------------+------------------------------------------------------------------+

Progress bars for multi-chunk transfers are only displayed when the log level
is set to *note*, *info*, or *warning*.
"""

import os
import platform
import sys
import logging

DEBUG   = logging.DEBUG
NOTE    = logging.DEBUG + (logging.INFO - logging.DEBUG) // 2
INFO    = logging.INFO
WARNING = logging.WARN
ERROR   = logging.ERROR
SILENT  = logging.CRITICAL + (logging.CRITICAL - logging.ERROR)


class SwitchmemLog:
    """
    Prefixed, level-aware logger.

    All instances of this class share the same underlying Python logger.
    """

    _level_name_map = {
        'debug':    DEBUG,
        'note':     NOTE,
        'info':     INFO,
        'warn':     WARNING,
        'warning':  WARNING,
        'error':    ERROR,
        'fatal':    ERROR,
        'critical': ERROR,
        'silent':   SILENT
    }

    def __init__(self, prefix='', logger_name='switchmem'):
        """
        Create a log instance with an optional *prefix* string.

        The *logger_name* is used to obtain the underlying Python logging instance.
        """

        pfx = {
            DEBUG:   ('[#] ', '\033[34m'),
            NOTE:    ('[*] ', '\033[36m'),
            INFO:    ('[+] ', '\033[32m'),
            WARNING: ('[!] ', '\033[33m'),
            ERROR:   ('[X] ', '\033[31m'),
        }

        color = platform.system() in ('Linux', 'Darwin') and sys.stdout.isatty()

        if prefix != '' and not prefix.endswith(' '):
            prefix += ' '

        self._pfx = {}
        for level, (symbol, escape) in pfx.items():
            if color:
                symbol = escape + symbol + '\033[0m'
            self._pfx[level] = symbol + prefix

        self.logger = logging.getLogger(logger_name)

    @property
    def level(self):
        """
        Current log level
        """
        return self.logger.level

    @level.setter
    def level(self, level):
        if isinstance(level, str):
            try:
                level = self._level_name_map[level.lower()]
            except KeyError:
                raise ValueError('Invalid log level: ' + level)

        self.logger.setLevel(level)

    def _log(self, level, args, kwargs):
        self.logger.log(level, *((self._pfx[level] + args[0],) + args[1:]), **kwargs)

    def debug(self, *args, **kwargs):
        """
        Write a debug-level message to the log.

        Used for per-command traffic that most users will never need to see.
        """
        self._log(DEBUG, args, kwargs)

    def note(self, *args, **kwargs):
        """
        Write a note-level message to the log.
        """
        self._log(NOTE, args, kwargs)

    def info(self, *args, **kwargs):
        """
        Write an info-level message to the log.
        """
        self._log(INFO, args, kwargs)

    def warning(self, *args, **kwargs):
        """
        Write a warning-level message to the log.

        This should be used to report undesired behavior that does not,
        by itself, cause an operation to fail.
        """
        self._log(WARNING, args, kwargs)

    def error(self, *args, **kwargs):
        """
        Write an error-level message to the log.

        This should be used to report issues that will immediately
        result in a failed operation.
        """
        self._log(ERROR, args, kwargs)


# Create a root logger instance
_switchmem_root = SwitchmemLog()  # pylint: disable=invalid-name
_switchmem_root.logger.addHandler(logging.StreamHandler())
_switchmem_root.level = os.getenv('SWITCHMEM_LOG_LEVEL', NOTE)


# Expose root logger for API users
def debug(*args, **kwargs):
    """
    Invokes the root logger's :py:meth:`SwitchmemLog.debug()` method
    """
    _switchmem_root.debug(*args, **kwargs)


def note(*args, **kwargs):
    """
    Invokes the root logger's :py:meth:`SwitchmemLog.note()` method
    """
    _switchmem_root.note(*args, **kwargs)


def info(*args, **kwargs):
    """
    Invokes the root logger's :py:meth:`SwitchmemLog.info()` method
    """
    _switchmem_root.info(*args, **kwargs)


def warning(*args, **kwargs):
    """
    Invokes the root logger's :py:meth:`SwitchmemLog.warning()` method
    """
    _switchmem_root.warning(*args, **kwargs)


def error(*args, **kwargs):
    """
    Invokes the root logger's :py:meth:`SwitchmemLog.error()` method
    """
    _switchmem_root.error(*args, **kwargs)


def set_level(level):
    """
    Set switchmem's logger to the specified level.

    This may be one of the integer constants defined in this module
    (e.g. ``switchmem.log.NOTE``) or one of the following strings:
    ``'debug'``, ``'note'``, ``'info'``, ``'warning'``, ``'error'``, ``'silent'``.
    """
    _switchmem_root.level = level


def get_level() -> int:
    """
    Get the current level of switchmem's logger.
    """
    return _switchmem_root.level

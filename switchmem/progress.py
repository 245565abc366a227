# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets

"""
Tracking and reporting the progress of multi-chunk transfers.
"""

from datetime import datetime
from tqdm import tqdm

from . import log


class Progress:
    """
    This base class implementation is a no-op that is substituted in when
    no progress should be presented. Otherwise, the :py:class:`.ProgressBar`
    subclass is used to display the progress of an ongoing transfer.

    Basic statistics are recorded internally, just to support debugging efforts.
    """

    @staticmethod
    def create(total_operations: int, desc: str, **kwargs):
        """
        Create either a ProgressBar or a Progress instance, depending upon the
        the log level. The following levels will result in a progress bar,
        while other levels will not.

        * switchmem.log.NOTE
        * switchmem.log.INFO
        * switchmem.log.WARNING

        The DEBUG level is not included because per-chunk log messages
        would interfere with drawing a progress bar.

        A *show=False* keyword argument suppresses the progress bar regardless
        of the log level.
        """
        show  = kwargs.pop('show', True)
        show &= log.get_level() in (log.NOTE, log.INFO, log.WARNING)

        if show:
            cls = ProgressBar
        else:
            cls = Progress

            # Just to track hidden progress
            log.debug(desc)

        return cls(total_operations, desc, **kwargs)

    def __init__(self, total_operations: int, desc: str, **_kwargs):
        self._desc  = desc
        self._total = total_operations
        self._count = 0
        self._last_update = None

    @property
    def count(self) -> int:
        """
        Sum of all values passed to :py:meth:`update()`.
        """
        return self._count

    def update(self, count=1):
        """
        Record an updated count of operations that have completed since the
        the previous invocation of update().
        """
        self._last_update = datetime.now()
        self._count += count

    def close(self):
        """
        Close and cleanup progress status.
        """
        self._total = None
        self._desc  = None


class ProgressBar(Progress):
    """
    A thin wrapper around tqdm.

    Do not instantiate this class directly; use :py:meth:`.Progress.create()`.
    """

    def __init__(self, total_operations, desc=None, unit='op', **kwargs):
        if not unit.startswith(' '):
            unit = ' ' + unit
        super().__init__(total_operations, desc)

        self._pbar = tqdm(total=total_operations, desc=desc, unit=unit, leave=False, **kwargs)

    def update(self, count=1):
        super().update(count)
        self._pbar.update(n=count)

    def close(self):
        super().close()
        self._pbar.close()

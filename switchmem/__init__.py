# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
#
# flake8: noqa=F401
"""
switchmem: Read and write memory on a remote target running the sys-botbase
sysmodule, over TCP.
"""

from .version import __version__

# Expose items from the various submodules to the top-level namespace

from . import log

from . import command
from . import hexcodec
from . import memory

from .context       import Switch
from .connection    import Connection, ConnectionState
from .config        import ConnectionConfig
from .address_space import AddressSpace
from .timing        import Timing
from .monitor       import Monitor, FileMonitor

from .errors import (SwitchmemError,
                     TransportError,
                     TransportConnectError,
                     TransportSendError,
                     TransportReceiveError,
                     DecodeError,
                     ShortReadError)

from .progress  import Progress, ProgressBar

# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
#
# flake8: noqa=F401
"""
This module provides memory access functionality through the :py:class:`.MemoryReader`
and :py:class:`.MemoryWriter` operations.

In general, an API user should not need to instantiate these directly. Instead,
use higher level methods such as
:py:meth:`Switch.read_memory() <switchmem.Switch.read_memory>` and
:py:meth:`Switch.write_memory() <switchmem.Switch.write_memory>`.
"""

from .chunk  import MAX_TRANSFER_SIZE, iter_chunks
from .reader import MemoryReader
from .writer import MemoryWriter

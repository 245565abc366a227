# SPDX-License-Identifier: BSD-3-Clause
# switchmem: Remote memory access over sys-botbase sockets
"""
switchmem version information
"""

__version__ = '0.1.0'

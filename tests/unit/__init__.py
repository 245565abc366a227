# flake8: noqa=E401
# pylint: disable=missing-module-docstring

from .test_command import TestCommand, TestAddressSpace
from .test_config import TestConnectionConfig, TestKeyvalListToDict
from .test_connection import TestConnection, TestMonitor
from .test_context import TestSwitch, TestBaseAccessors
from .test_hexcodec import TestHexCodec
from .test_log import TestLog, TestProgress
from .test_memory import TestIterChunks, TestMemoryReader, TestMemoryWriter
from .test_timing import TestTiming

# SPDX-License-Identifier: BSD-3-Clause
#
# Relax style and documentation requirements for unit tests.
# pylint: disable=missing-function-docstring,missing-class-docstring,too-few-public-methods
#

"""
Unit tests for switchmem.memory
"""

import math
import os
import tempfile

from unittest import TestCase, mock

from switchmem import (AddressSpace, Connection, DecodeError, ShortReadError, Switch, Timing,
                       TransportSendError, TransportReceiveError)
from switchmem.memory import MAX_TRANSFER_SIZE, iter_chunks

from .test_utils import FailingConnection, create_switch, random_data


class TestIterChunks(TestCase):

    def test_single(self):
        self.assertEqual(list(iter_chunks(16, 448)), [(0, 16)])
        self.assertEqual(list(iter_chunks(448, 448)), [(0, 448)])
        self.assertEqual(list(iter_chunks(0, 448)), [])

    def test_multiple(self):
        for length in (449, 896, 897, 5000):
            chunks = list(iter_chunks(length, 448))
            self.assertEqual(len(chunks), math.ceil(length / 448))
            self.assertEqual(sum(size for (_, size) in chunks), length)

            # Contiguous, non-overlapping, and only the last one may be short
            expected_index = 0
            for (index, size) in chunks[:-1]:
                self.assertEqual(index, expected_index)
                self.assertEqual(size, 448)
                expected_index += size

            self.assertEqual(chunks[-1], (expected_index, length - expected_index))

    def test_invalid(self):
        with self.assertRaises(ValueError):
            list(iter_chunks(16, 0))


class TestMemoryReader(TestCase):

    def test_single_command(self):
        for length in (0, 1, 8, 447, MAX_TRANSFER_SIZE):
            switch, conn = create_switch()
            data = random_data(length, seed=length, ret_bytes=True)
            conn.load(AddressSpace.HEAP, 0x1000, data)

            result = switch.read_memory(0x1000, length, show_progress=False)
            self.assertEqual(result, data)
            self.assertEqual(len(conn.commands), 1)
            self.assertEqual(conn.peek_lengths(), [length])

    def test_chunked(self):
        for length in (MAX_TRANSFER_SIZE + 1, 2 * MAX_TRANSFER_SIZE, 5000):
            switch, conn = create_switch()
            data = random_data(length, seed=length, ret_bytes=True)
            conn.load(AddressSpace.MAIN, 0x20_0000, data)

            result = switch.read_memory(0x20_0000, length, AddressSpace.MAIN, show_progress=False)
            self.assertEqual(result, data)

            n_chunks = math.ceil(length / MAX_TRANSFER_SIZE)
            lengths = conn.peek_lengths()
            self.assertEqual(len(lengths), n_chunks)
            self.assertEqual(lengths[-1], length - (n_chunks - 1) * MAX_TRANSFER_SIZE)
            self.assertTrue(all(n == MAX_TRANSFER_SIZE for n in lengths[:-1]))

            offsets = conn.peek_offsets()
            self.assertEqual(offsets, [0x20_0000 + i * MAX_TRANSFER_SIZE for i in range(n_chunks)])

    def test_chunk_response_sizes(self):
        """
        Each chunk's response buffer is sized by that chunk, not the total length.
        """
        switch, conn = create_switch(max_transfer_size=16)
        switch.read_memory(0, 40, show_progress=False)

        receives = [e[1] for e in conn.events if e[0] == 'receive']
        self.assertEqual(receives, [33, 33, 17])

    def test_delay_once_per_command(self):
        switch, conn = create_switch(max_transfer_size=16)
        switch.read_memory(0, 40, show_progress=False)

        kinds = [e[0] for e in conn.events]
        self.assertEqual(kinds, ['send', 'wait', 'receive'] * 3)

        waits = [e[1] for e in conn.events if e[0] == 'wait']
        self.assertEqual(len(waits), 3)
        for w in waits:
            self.assertAlmostEqual(w, 0.064)

    def test_progress_bar(self):
        switch, conn = create_switch(max_transfer_size=64)
        data = random_data(1000, ret_bytes=True)
        conn.load(AddressSpace.ABSOLUTE, 0x8_0000_0000, data)
        self.assertEqual(switch.read_memory(0x8_0000_0000, 1000, 'absolute'), data)

    def test_short_read(self):
        switch, conn = create_switch()
        conn.response_override = b'0102'

        with self.assertRaises(ShortReadError) as cm:
            switch.read_memory(0, 4, show_progress=False)

        self.assertEqual(cm.exception.expected, 9)
        self.assertEqual(cm.exception.received, 4)
        self.assertGreaterEqual(conn.discard_count, 2)

    def test_short_read_late_tail(self):
        """
        The remainder of a truncated response, arriving after the receive
        timeout, is not mistaken for the response to the next command.
        """
        rx = bytearray()
        late = bytearray()

        def _write(data):
            if data.startswith(b'peek '):
                response = b'AB' * 64 + b'\n'
                rx.extend(response[:10])
                late.extend(response[10:])
            elif data == b'getHeapBase\r\n':
                rx.extend(b'0000000085040000\n')
            return len(data)

        def _readinto(buf):
            n = min(len(buf), len(rx))
            buf[:n] = rx[:n]
            del rx[:n]

            # Whatever was still in flight shows up once the read times out
            rx.extend(late)
            late.clear()
            return n

        port = mock.MagicMock()
        port.write.side_effect = _write
        port.readinto.side_effect = _readinto
        port.reset_input_buffer.side_effect = rx.clear

        with mock.patch('serial.serial_for_url', return_value=port):
            switch = Switch(Connection('10.0.0.5'), timing=Timing(sleep=lambda _s: None))

            with self.assertRaises(ShortReadError) as cm:
                switch.read_memory(0, 64, show_progress=False)
            self.assertEqual(cm.exception.received, 10)

            self.assertEqual(switch.get_heap_base(), 0x85040000)

    def test_decode_error(self):
        switch, conn = create_switch()
        conn.response_override = b'01020Z04\n'

        with self.assertRaises(DecodeError):
            switch.read_memory(0, 4, show_progress=False)

    def test_failure_aborts(self):
        conn = FailingConnection(2, TransportSendError('Broken pipe'))
        switch, conn = create_switch(conn, max_transfer_size=16)

        with self.assertRaises(TransportSendError):
            switch.read_memory(0, 64, show_progress=False)

        # Only the first chunk made it out; nothing was retried
        self.assertEqual(len(conn.commands), 1)

    def test_receive_failure(self):
        switch, conn = create_switch()

        def _fail(_buf):
            raise TransportReceiveError('Connection reset by peer')

        conn.receive = _fail
        with self.assertRaises(TransportReceiveError):
            switch.read_memory(0, 4, show_progress=False)

    def test_invalid_range(self):
        switch, conn = create_switch()

        with self.assertRaises(ValueError):
            switch.read_memory(-1, 4)

        with self.assertRaises(ValueError):
            switch.read_memory(0, -4)

        with self.assertRaises(ValueError):
            switch.read_memory(0xffff_ffff_ffff_fff0, 32, AddressSpace.ABSOLUTE)

        with self.assertRaises(ValueError):
            switch.read_memory(0, 4, 'stack')

        self.assertEqual(conn.commands, [])

    def test_read_to_file(self):
        switch, conn = create_switch(max_transfer_size=100)
        data = random_data(1234, seed=3, ret_bytes=True)
        conn.load(AddressSpace.HEAP, 0x400, data)

        with tempfile.TemporaryDirectory() as tmpdir:
            filename = os.path.join(tmpdir, 'heap.bin')
            switch.read_memory_to_file(0x400, len(data), filename, show_progress=False)

            with open(filename, 'rb') as infile:
                self.assertEqual(infile.read(), data)


class TestMemoryWriter(TestCase):

    def test_single_command(self):
        switch, conn = create_switch()
        data = random_data(MAX_TRANSFER_SIZE, ret_bytes=True)

        switch.write_memory(data, 0x80, show_progress=False)

        self.assertEqual(len(conn.commands), 1)
        self.assertEqual(conn.dump(AddressSpace.HEAP, 0x80, len(data)), data)

        # Fire-and-forget: no delay, no response read
        self.assertEqual([e[0] for e in conn.events], ['send'])

    def test_empty(self):
        switch, conn = create_switch()
        switch.write_memory(b'', 0x80)
        self.assertEqual(conn.commands, [])

    def test_chunked(self):
        switch, conn = create_switch()
        length = 3 * MAX_TRANSFER_SIZE + 5
        data = random_data(length, seed=7, ret_bytes=True)

        switch.write_memory(data, 0x1000, AddressSpace.MAIN, show_progress=False)

        self.assertEqual(len(conn.commands), 4)
        self.assertEqual(conn.dump(AddressSpace.MAIN, 0x1000, length), data)
        self.assertEqual(conn.dump(AddressSpace.HEAP, 0x1000, length), bytes(length))

        for (i, cmd) in enumerate(conn.commands):
            fields = cmd.decode('ascii').split()
            self.assertEqual(fields[0], 'pokeMain')
            self.assertEqual(int(fields[1], 16), 0x1000 + i * MAX_TRANSFER_SIZE)
            expected_size = MAX_TRANSFER_SIZE if i < 3 else 5
            self.assertEqual(len(fields[2]) - 2, 2 * expected_size)

    def test_failure_aborts(self):
        conn = FailingConnection(3, TransportSendError('Broken pipe'))
        switch, conn = create_switch(conn, max_transfer_size=8)

        with self.assertRaises(TransportSendError):
            switch.write_memory(bytes(range(64)), 0, show_progress=False)

        # Partial writes are left in place
        self.assertEqual(len(conn.commands), 2)
        self.assertEqual(conn.dump(AddressSpace.HEAP, 0, 16), bytes(range(16)))

    def test_write_from_file(self):
        switch, conn = create_switch(max_transfer_size=32)
        data = random_data(100, seed=11, ret_bytes=True)

        with tempfile.TemporaryDirectory() as tmpdir:
            filename = os.path.join(tmpdir, 'payload.bin')
            with open(filename, 'wb') as outfile:
                outfile.write(data)

            switch.write_memory_from_file(filename, 0x10, AddressSpace.ABSOLUTE, show_progress=False)

        self.assertEqual(conn.dump(AddressSpace.ABSOLUTE, 0x10, 100), data)
        self.assertEqual(len(conn.commands), 4)

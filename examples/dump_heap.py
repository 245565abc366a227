#!/usr/bin/env python3
#
# Simple demo script that dumps the start of the heap to a file and reports
# the heap and main NSO base addresses.
#
# Usage: dump_heap.py <ip>[:<port>] <length> <output file>

import sys
import traceback

from switchmem import Monitor, Connection, Switch, log

if len(sys.argv) != 4:
    print('Usage: ' + sys.argv[0] + ' <ip>[:<port>] <length> <output file>', file=sys.stderr)
    sys.exit(2)

target, length, filename = sys.argv[1], int(sys.argv[2], 0), sys.argv[3]

try:
    connection = Connection(target, monitor=Monitor.create('file'))
    with Switch(connection) as switch:
        log.info('Heap base:     0x{:016x}'.format(switch.get_heap_base()))
        log.info('Main NSO base: 0x{:016x}'.format(switch.get_main_nso_base()))

        switch.read_memory_to_file(0, length, filename)
        log.info('Wrote {:d} bytes to {:s}'.format(length, filename))

except Exception as error:
    log.error(str(error))

    # Shown if SWITCHMEM_LOG_LEVEL=debug in environment
    log.debug(traceback.format_exc())
    sys.exit(1)

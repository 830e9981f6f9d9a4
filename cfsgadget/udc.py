#!/usr/bin/python3

''' USB device controllers (as listed in /sys/class/udc) '''

import logging

from path import Path

_logger = logging.getLogger(__name__)

UDC_PATH = '/sys/class/udc'

def get_udcs(path=UDC_PATH):
    ''' controller names, sorted; empty if there are none '''
    path = Path(path)
    if not path.is_dir():
        _logger.debug('%s: no controllers', path)
        return []
    return sorted(e.name for e in path.iterdir())

def first_udc(path=UDC_PATH):
    udcs = get_udcs(path)
    if not udcs:
        return None
    return udcs[0]

#!/usr/bin/python3

# NOTE: configfs attributes are tiny; these helpers only wrap what the
#    store adapter and the bitmask setters need

import errno
import logging

import numpy
from path import Path

_logger = logging.getLogger(__name__)

def makedirs(name, exist_ok=False):
    ''' create a directory (and parents); an existing directory is only
    an error when exist_ok is False
    '''
    name = Path(name)
    try:
        name.makedirs()
    except OSError as exc:
        if exc.errno == errno.EEXIST and name.is_dir() and exist_ok:
            pass
        else:
            raise

def write(data, fname):
    ''' truncate fname and write data (text or bytes) to it '''
    if isinstance(data, str):
        data = data.encode()
    with Path(fname).open('wb') as f:
        f.write(data)

def readline(fname):
    ''' first line of fname (newline kept); undecodable bytes become U+FFFD '''
    with Path(fname).open('r', errors='replace') as f:
        return f.readline()

def encode_bools(bool_lst):
    ''' pack a list of bools (lsb first) into an int '''
    if not len(bool_lst):
        return 0
    return int(numpy.sum(2**numpy.arange(len(bool_lst))*numpy.array(bool_lst, dtype=int)))

def decode_bools(intval, bits):
    ''' unpack the lowest `bits` bits of intval (lsb first) '''
    res = []
    for bit in range(bits):
        mask = 1 << bit
        res.append((intval & mask) == mask)
    return res

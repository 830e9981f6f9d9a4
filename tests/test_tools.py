import pytest

from cfsgadget.tools import decode_bools, encode_bools, makedirs, readline, write
from cfsgadget.functions import FunctionType, split_name


def test_bools():
    assert encode_bools([True, False, True]) == 5
    assert encode_bools([]) == 0
    assert decode_bools(5, 3) == [True, False, True]
    bits = [False] * 5 + [True, True, True]
    assert encode_bools(bits) == 0xe0
    assert decode_bools(0xe0, 8) == bits

def test_write_readline(tmp_path):
    fname = str(tmp_path / 'attr')
    write('0x1d6b\nmore\n', fname)
    assert readline(fname) == '0x1d6b\n'
    write(b'raw', fname)
    assert readline(fname) == 'raw'

def test_makedirs(tmp_path):
    d = str(tmp_path / 'a' / 'b')
    makedirs(d)
    makedirs(d, exist_ok=True)
    with pytest.raises(OSError):
        makedirs(d)

def test_function_type_lookup():
    assert FunctionType.lookup('acm') == FunctionType.ACM
    assert FunctionType.lookup('geth') == FunctionType.SUBSET
    assert FunctionType.lookup('hid') == FunctionType.UNKNOWN
    assert FunctionType.SERIAL.kind_name == 'gser'
    assert FunctionType.UNKNOWN.kind_name is None

def test_split_name():
    assert split_name('acm.GS0') == ('acm', 'GS0')
    assert split_name('ecm.usb.0') == ('ecm', 'usb.0')
    assert split_name('odd') == ('odd', '')

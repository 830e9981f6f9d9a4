import pytest

from cfsgadget import codec


def test_decode_dec():
    assert codec.decode_dec('120\n') == 120
    assert codec.decode_dec(None) == 0
    assert codec.decode_dec('') == 0
    assert codec.decode_dec('bogus\n') == 0

def test_decode_hex():
    assert codec.decode_hex('0x1d6b\n') == 0x1d6b
    assert codec.decode_hex('ef') == 0xef
    assert codec.decode_hex('0X0200\n') == 0x0200
    assert codec.decode_hex(None) == 0
    assert codec.decode_hex('zz\n') == 0

def test_encode_hex_widths():
    assert codec.encode_hex(0x1d6b, 16) == '0x1d6b\n'
    assert codec.encode_hex(0x200, 16) == '0x0200\n'
    assert codec.encode_hex8(0x5) == '0x05\n'
    assert codec.encode_hex16(0xABCD) == '0xabcd\n'
    with pytest.raises(ValueError):
        codec.encode_hex(1, 12)

def test_encode_dec():
    assert codec.encode_dec(250) == '250\n'

def test_decode_str_trims_one_newline():
    assert codec.decode_str('Foo Inc.\n') == 'Foo Inc.'
    assert codec.decode_str('two\n\n') == 'two\n'
    assert codec.decode_str('none') == 'none'
    assert codec.decode_str(None) == ''

def test_ether_aton():
    assert codec.ether_aton('02:00:00:00:00:01\n') == b'\x02\x00\x00\x00\x00\x01'
    assert codec.ether_aton('2:0:a:b:c:FF') == b'\x02\x00\x0a\x0b\x0c\xff'

@pytest.mark.parametrize('text', [
    None, '', '\n', 'garbage', '02:00:00:00:00', '02:00:00:00:00:01:02',
    '02:00:00:00:00:zz', '002:00:00:00:00:01', '02::00:00:00:01',
    '+f: 2:00:00:00:00', '02:00:00:00:00:-1',
])
def test_ether_aton_malformed(text):
    assert codec.ether_aton(text) is None

def test_ether_ntoa():
    assert codec.ether_ntoa(b'\x02\x00\x0a\x0b\x0c\xff') == '02:00:0a:0b:0c:ff'
    with pytest.raises(ValueError):
        codec.ether_ntoa(b'\x00')

def test_to_ether():
    assert codec.to_ether('02:00:00:00:00:01') == b'\x02\x00\x00\x00\x00\x01'
    assert codec.to_ether(bytearray(6)) == bytes(6)
    with pytest.raises(ValueError):
        codec.to_ether('nope')
    with pytest.raises(ValueError):
        codec.to_ether(b'\x01\x02')

#!/usr/bin/python3

''' text <-> value conversions for configfs attribute files

every attribute is a single line; readers hand us None when the
file couldn't be read, which always decodes to a default
'''

import binascii
import logging
import string

_logger = logging.getLogger(__name__)

ETH_ALEN = 6
ZERO_ADDR = bytes(ETH_ALEN)

def _strip(text):
    if text is None:
        return None
    return text.strip()

def decode_int(text, base):
    text = _strip(text)
    if not text:
        return 0
    try:
        return int(text, base)
    except ValueError:
        _logger.warning('unable to parse %r as base %s; using 0', text, base)
        return 0

def decode_dec(text):
    return decode_int(text, 10)

def decode_hex(text):
    # int() already accepts a 0x prefix with base 16
    return decode_int(text, 16)

def encode_dec(value):
    return '%d\n' % value

def encode_hex(value, width=16):
    if width == 8:
        return '0x%02x\n' % value
    elif width == 16:
        return '0x%04x\n' % value
    raise ValueError('unsupported hex width: %s' % width)

def encode_hex8(value):
    return encode_hex(value, 8)

def encode_hex16(value):
    return encode_hex(value, 16)

def decode_str(text):
    if text is None:
        return ''
    if text.endswith('\n'):
        return text[:-1]
    return text

def ether_aton(text):
    ''' parse 'xx:xx:xx:xx:xx:xx' (1 or 2 hex digits per octet)
    returns bytes, or None if text isn't an address
    '''
    text = _strip(text)
    if not text:
        return None
    octets = text.split(':')
    if len(octets) != ETH_ALEN:
        return None
    addr = bytearray()
    for o in octets:
        # int() alone would take signs and padding (' 2', '+f')
        if not 1 <= len(o) <= 2 or not all(c in string.hexdigits for c in o):
            return None
        addr.append(int(o, 16))
    return bytes(addr)

def ether_ntoa(addr):
    if len(addr) != ETH_ALEN:
        raise ValueError('hardware address must be %s bytes' % ETH_ALEN)
    h = binascii.hexlify(bytes(addr)).decode('ascii')
    return ':'.join(h[i:i+2] for i in range(0, len(h), 2))

def to_ether(addr):
    ''' accept bytes or text; raise ValueError on anything else '''
    if isinstance(addr, str):
        parsed = ether_aton(addr)
        if parsed is None:
            raise ValueError('invalid hardware address: %r' % addr)
        return parsed
    addr = bytes(addr)
    if len(addr) != ETH_ALEN:
        raise ValueError('hardware address must be %s bytes' % ETH_ALEN)
    return addr

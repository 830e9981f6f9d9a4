#!/usr/bin/python3

''' USB function kinds and their attribute shapes

SEE: Documentation/ABI/testing/configfs-usb-gadget-* in the kernel tree
'''

from collections import namedtuple
from enum import IntEnum

from cfsgadget.codec import ZERO_ADDR

class FunctionType(IntEnum):
    UNKNOWN = -1
    SERIAL = 0 # gser
    ACM = 1
    OBEX = 2
    ECM = 3
    SUBSET = 4 # geth (cdc subset)
    NCM = 5
    EEM = 6
    RNDIS = 7
    PHONET = 8

    @property
    def kind_name(self):
        return function_names.get(self)

    @classmethod
    def lookup(cls, name):
        ''' kind name (directory prefix) -> FunctionType (UNKNOWN if unrecognized) '''
        return name_types.get(name, cls.UNKNOWN)

function_names = {
    FunctionType.SERIAL: 'gser',
    FunctionType.ACM: 'acm',
    FunctionType.OBEX: 'obex',
    FunctionType.ECM: 'ecm',
    FunctionType.SUBSET: 'geth',
    FunctionType.NCM: 'ncm',
    FunctionType.EEM: 'eem',
    FunctionType.RNDIS: 'rndis',
    FunctionType.PHONET: 'phonet',
}
name_types = dict((n, t) for t, n in function_names.items())

serial_types = {FunctionType.SERIAL, FunctionType.ACM, FunctionType.OBEX}
net_types = {
    FunctionType.ECM, FunctionType.SUBSET, FunctionType.NCM,
    FunctionType.EEM, FunctionType.RNDIS,
}
phonet_types = {FunctionType.PHONET}

SerialAttrs = namedtuple('SerialAttrs', 'port_num')
NetAttrs = namedtuple('NetAttrs', 'dev_addr host_addr ifname qmult', defaults=(None,) * 4)
PhonetAttrs = namedtuple('PhonetAttrs', 'ifname')

def default_attrs(ftype):
    ''' attrs for a freshly seen function before anything's been read '''
    if ftype in serial_types:
        return SerialAttrs(0)
    elif ftype in net_types:
        return NetAttrs(ZERO_ADDR, ZERO_ADDR, '', 0)
    elif ftype in phonet_types:
        return PhonetAttrs('')
    return None

def split_name(name):
    ''' 'acm.GS0' -> ('acm', 'GS0'); the instance may itself contain dots '''
    kind, _, instance = name.partition('.')
    return kind, instance

#!/usr/bin/python3

''' configfs USB gadget library

mirrors /sys/kernel/config/usb_gadget in memory and writes every
change straight back to configfs

    s = cfsgadget.init()
    g = s.create_gadget('g1', 0x1d6b, 0x0104)
    acm = g.create_function(FunctionType.ACM, 'GS0')
    c = g.create_config('c.1')
    c.add_function('acm.GS0', acm)
    g.enable()
    cfsgadget.cleanup(s)
'''

import logging

from path import Path

from cfsgadget.errors import GadgetError, DuplicateError, StoreError
from cfsgadget.functions import FunctionType, SerialAttrs, NetAttrs, PhonetAttrs
from cfsgadget.gadget import (
    State, Gadget, Function, Config, Binding,
    GadgetAttrs, GadgetStrs, ConfigAttrs, ConfigStrs, BmFlags,
    LANG_US_ENG,
)
from cfsgadget.loader import load_state
from cfsgadget.store import Store
from cfsgadget.udc import UDC_PATH, get_udcs

_logger = logging.getLogger(__name__)

CONFIGFS_PATH = '/sys/kernel/config'
GADGET_DIR = 'usb_gadget'

def init(configfs_path=CONFIGFS_PATH, store=None, udc_path=UDC_PATH):
    ''' load the gadget tree under <configfs_path>/usb_gadget
    raises StoreError if that isn't a directory
    '''
    path = Path(configfs_path) / GADGET_DIR
    if not path.exists():
        _logger.error('%s: not found', path)
        raise StoreError(path, msg='%s: not found (is libcomposite loaded?)' % path)
    if not path.is_dir():
        _logger.error('%s: not a directory', path)
        raise StoreError(path, msg='%s: not a directory' % path)
    return load_state(path, store, udc_path)

def cleanup(state):
    state.cleanup()

# flat api, for callers that prefer functions over methods

def create_gadget(state, name, vendor, product, attrs=None, strs=None):
    return state.create_gadget(name, vendor, product, attrs, strs)

def create_function(gadget, ftype, instance, attrs=None):
    return gadget.create_function(ftype, instance, attrs)

def create_config(gadget, name, attrs=None, strs=None):
    return gadget.create_config(name, attrs, strs)

def add_binding(config, name, function):
    return config.add_function(name, function)

def enable(gadget, udc=None):
    return gadget.enable(udc)

def disable(gadget):
    return gadget.disable()

def lookup_gadget(state, name):
    return state.get_gadget(name)

def lookup_function(gadget, name):
    return gadget.get_function(name)

def lookup_config(gadget, name):
    return gadget.get_config(name)

def lookup_binding(config, name):
    return config.get_binding(name)

def lookup_link_binding(config, function):
    return config.get_link_binding(function)

__all__ = [
    'init', 'cleanup', 'create_gadget', 'create_function', 'create_config',
    'add_binding', 'enable', 'disable', 'lookup_gadget', 'lookup_function',
    'lookup_config', 'lookup_binding', 'lookup_link_binding', 'get_udcs',
    'State', 'Gadget', 'Function', 'Config', 'Binding', 'Store',
    'FunctionType', 'SerialAttrs', 'NetAttrs', 'PhonetAttrs',
    'GadgetAttrs', 'GadgetStrs', 'ConfigAttrs', 'ConfigStrs', 'BmFlags',
    'GadgetError', 'DuplicateError', 'StoreError',
    'CONFIGFS_PATH', 'GADGET_DIR', 'UDC_PATH', 'LANG_US_ENG',
]

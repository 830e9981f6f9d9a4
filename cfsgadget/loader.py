#!/usr/bin/python3

''' rebuild a State from an existing usb_gadget directory '''

import logging

from path import Path

from cfsgadget.gadget import (
    State, Gadget, Function, Config, Binding,
    CONFIGS_DIR, FUNCTIONS_DIR,
)
from cfsgadget.functions import FunctionType, split_name
from cfsgadget.store import Store, join
from cfsgadget.udc import UDC_PATH

_logger = logging.getLogger(__name__)

def load_state(path, store=None, udc_path=UDC_PATH):
    s = State(path, store or Store(), udc_path)
    for name in s.store.list_entries(s.path):
        s.gadgets.append(load_gadget(s, name))
    _logger.debug('%s: loaded %s gadget(s)', s.path, len(s.gadgets))
    return s

def load_gadget(state, name):
    g = Gadget(state, name)
    g.parse_udc()
    g.parse_attrs()
    g.parse_strings()
    load_functions(g)
    load_configs(g)
    return g

def load_functions(g):
    fpath = join(g.path, FUNCTIONS_DIR)
    for name in g.store.list_entries(fpath):
        kind, instance = split_name(name)
        ftype = FunctionType.lookup(kind)
        f = Function(g, ftype, instance, type_name=kind)
        # keep the directory name as-is (it may lack an instance)
        f.name = name
        f.parse_attrs()
        g.functions.append(f)

def load_configs(g):
    cpath = join(g.path, CONFIGS_DIR)
    for name in g.store.list_entries(cpath):
        c = Config(g, name)
        c.parse_attrs()
        load_bindings(c)
        g.configs.append(c)

def match_function(g, target):
    ''' the function a link target points at (by its last path segment) '''
    fname = Path(target.rstrip('/')).name
    for f in g.functions:
        if f.name == fname:
            return f
    return None

def load_bindings(c):
    store = c.store
    for name in store.list_entries(c.path, select=store.is_link):
        target = store.read_link(join(c.path, name))
        if target is None:
            continue
        f = match_function(c.parent, target)
        if f is None:
            _logger.warning('%s/%s: link target %s is not a known function', c.name, name, target)
            continue
        c.bindings.append(Binding(c, name, f))

#!/usr/bin/python3

''' in-memory mirror of a configfs usb_gadget tree

State
 `- Gadget (usb_gadget/<name>)
     |- Function (functions/<kind>.<instance>)
     `- Config (configs/<name>)
         `- Binding (configs/<name>/<link> -> functions/<kind>.<instance>)

sibling lists are always kept in ascending name order; every mutation
is written to the store as it's made
'''

from collections import namedtuple
import logging

from cfsgadget import codec
from cfsgadget.errors import GadgetError, DuplicateError, StoreError
from cfsgadget.functions import (
    FunctionType, function_names, net_types, serial_types, phonet_types,
    default_attrs, NetAttrs, PhonetAttrs, SerialAttrs,
)
from cfsgadget.store import Store, join
from cfsgadget.tools import decode_bools, encode_bools
from cfsgadget.udc import UDC_PATH, first_udc

_logger = logging.getLogger(__name__)

LANG_US_ENG = 0x409
STRINGS_DIR = 'strings'
CONFIGS_DIR = 'configs'
FUNCTIONS_DIR = 'functions'

def lang_dir(lang):
    return '0x%x' % lang

# requested values; None leaves the configfs default alone
GadgetAttrs = namedtuple(
    'GadgetAttrs',
    'bcd_usb device_class device_subclass device_protocol max_packet_size vendor product bcd_device',
    defaults=(None,) * 8,
)
GadgetStrs = namedtuple('GadgetStrs', 'serial manufacturer product', defaults=(None,) * 3)
ConfigAttrs = namedtuple('ConfigAttrs', 'max_power bm_attrs', defaults=(None,) * 2)
ConfigStrs = namedtuple('ConfigStrs', 'configuration', defaults=(None,))
BmFlags = namedtuple('BmFlags', 'self_powered remote_wakeup')

# field, attribute file, hex width
gadget_attr_files = (
    ('bcd_usb', 'bcdUSB', 16),
    ('device_class', 'bDeviceClass', 8),
    ('device_subclass', 'bDeviceSubClass', 8),
    ('device_protocol', 'bDeviceProtocol', 8),
    ('max_packet_size', 'bMaxPacketSize0', 8),
    ('vendor', 'idVendor', 16),
    ('product', 'idProduct', 16),
    ('bcd_device', 'bcdDevice', 16),
)
gadget_str_files = (
    ('serial', 'serialnumber'),
    ('manufacturer', 'manufacturer'),
    ('product', 'product'),
)

# bmAttributes (USB 2.0 9.6.3)
BM_RESERVED = 7 # must be set
BM_SELF_POWERED = 6
BM_REMOTE_WAKEUP = 5


def insert_sorted(siblings, node):
    ''' insert node into siblings, keeping ascending name order '''
    name = node.name
    if not siblings or name < siblings[0].name:
        siblings.insert(0, node)
    elif name > siblings[-1].name:
        siblings.append(node)
    else:
        for i, cur in enumerate(siblings):
            if name > cur.name:
                continue
            siblings.insert(i, node)
            break

def find_named(siblings, name):
    for s in siblings:
        if s.name == name:
            return s
    return None


class Node():
    ''' anything with a parent; the store is shared through the root '''
    parent = None

    def owner(self):
        if self.parent is None:
            raise GadgetError('%r has been released' % self)
        return self.parent

    @property
    def store(self):
        return self.owner().store

    def __repr__(self):
        return '<%s %s>' % (type(self).__name__, self.name)


class State():
    def __init__(self, path, store=None, udc_path=UDC_PATH):
        self.path = str(path)
        self.store = store or Store()
        self.udc_path = udc_path
        self.gadgets = []

    def __repr__(self):
        return '<State %s>' % self.path

    def get_gadget(self, name):
        return find_named(self.gadgets, name)

    def create_gadget(self, name, vendor, product, attrs=None, strs=None):
        ''' create usb_gadget/<name>

        vendor, product: written as idVendor/idProduct
        attrs: GadgetAttrs; any non-None fields are written as well
        strs: GadgetStrs (U.S. English)
        the new gadget reflects what the store reports after writing
        '''
        if self.get_gadget(name) is not None:
            _logger.warning('duplicate gadget name: %s', name)
            raise DuplicateError('gadget', name)

        g = Gadget(self, name)
        gpath = g.path
        self.store.make_directory(gpath)
        try:
            g.set_vendor_id(vendor)
            g.set_product_id(product)
            if attrs is not None:
                g.set_attrs(attrs._replace(vendor=None, product=None))
            if strs is not None:
                g.set_strs(strs)
        except StoreError:
            g.parent = None
            self.store.remove_tree(gpath)
            raise

        g.parse_attrs()
        g.parse_strings()

        insert_sorted(self.gadgets, g)
        _logger.info('created gadget %s (%04x:%04x)', name, g.attrs.vendor, g.attrs.product)
        return g

    def cleanup(self):
        ''' release the whole tree (bindings, configs, functions, gadgets) '''
        while self.gadgets:
            g = self.gadgets.pop(0)
            while g.configs:
                c = g.configs.pop(0)
                while c.bindings:
                    b = c.bindings.pop(0)
                    b.target = None
                    b.parent = None
                c.parent = None
            while g.functions:
                f = g.functions.pop(0)
                f.parent = None
            g.parent = None


class Gadget(Node):
    def __init__(self, parent, name):
        self.parent = parent
        self.name = name
        self.attrs = GadgetAttrs(*([0] * len(GadgetAttrs._fields)))
        self.strs = GadgetStrs('', '', '')
        self.udc = ''
        self.functions = []
        self.configs = []

    @property
    def path(self):
        return join(self.owner().path, self.name)

    def strings_path(self, lang=LANG_US_ENG):
        return join(self.path, STRINGS_DIR, lang_dir(lang))

    # loading

    def parse_attrs(self):
        values = {}
        for field, fname, width in gadget_attr_files:
            values[field] = codec.decode_hex(self.store.read_line(self.path, '', fname))
        self.attrs = GadgetAttrs(**values)

    def parse_strings(self):
        spath = self.strings_path()
        values = {}
        for field, fname in gadget_str_files:
            values[field] = codec.decode_str(self.store.read_line(spath, '', fname))
        self.strs = GadgetStrs(**values)

    def parse_udc(self):
        self.udc = codec.decode_str(self.store.read_line(self.path, '', 'UDC')).strip()

    # lookup

    def get_function(self, name):
        return find_named(self.functions, name)

    def get_config(self, name):
        return find_named(self.configs, name)

    # mutators

    def create_function(self, ftype, instance, attrs=None):
        ''' create functions/<kind>.<instance>

        attrs: NetAttrs for network kinds; non-None dev_addr, host_addr
        and qmult are written (the rest is assigned by the kernel)
        '''
        ftype = FunctionType(ftype)
        if ftype == FunctionType.UNKNOWN:
            raise GadgetError('cannot create a function of unknown type')
        f = Function(self, ftype, instance)
        if self.get_function(f.name) is not None:
            _logger.warning('duplicate function name: %s', f.name)
            raise DuplicateError('function', f.name)

        fpath = f.path
        self.store.make_directory(fpath)
        try:
            if attrs is not None and ftype in net_types:
                if attrs.dev_addr is not None:
                    f.set_dev_addr(attrs.dev_addr)
                if attrs.host_addr is not None:
                    f.set_host_addr(attrs.host_addr)
                if attrs.qmult is not None:
                    f.set_qmult(attrs.qmult)
        except (StoreError, ValueError):
            f.parent = None
            self.store.remove_tree(fpath)
            raise

        f.parse_attrs()

        insert_sorted(self.functions, f)
        _logger.info('%s: created function %s', self.name, f.name)
        return f

    def create_config(self, name, attrs=None, strs=None):
        if self.get_config(name) is not None:
            _logger.warning('duplicate configuration name: %s', name)
            raise DuplicateError('configuration', name)

        c = Config(self, name)
        cpath = c.path
        self.store.make_directory(cpath)
        try:
            if attrs is not None:
                if attrs.max_power is not None:
                    c.set_max_power(attrs.max_power)
                if attrs.bm_attrs is not None:
                    c.set_bm_attrs(attrs.bm_attrs)
            if strs is not None and strs.configuration is not None:
                c.set_string(strs.configuration)
        except StoreError:
            c.parent = None
            self.store.remove_tree(cpath)
            raise

        c.parse_attrs()

        insert_sorted(self.configs, c)
        _logger.info('%s: created configuration %s', self.name, name)
        return c

    def _set_hex(self, field, fname, width, value):
        self.attrs = self.attrs._replace(**{field: value})
        self.store.write_line(self.path, '', fname, codec.encode_hex(value, width))

    def set_device_class(self, dclass):
        self._set_hex('device_class', 'bDeviceClass', 8, dclass)

    def set_device_subclass(self, dsubclass):
        self._set_hex('device_subclass', 'bDeviceSubClass', 8, dsubclass)

    def set_device_protocol(self, dproto):
        self._set_hex('device_protocol', 'bDeviceProtocol', 8, dproto)

    def set_max_packet_size(self, maxpacket):
        self._set_hex('max_packet_size', 'bMaxPacketSize0', 8, maxpacket)

    def set_bcd_device(self, bcddevice):
        self._set_hex('bcd_device', 'bcdDevice', 16, bcddevice)

    def set_bcd_usb(self, bcdusb):
        self._set_hex('bcd_usb', 'bcdUSB', 16, bcdusb)

    def set_vendor_id(self, vendor):
        self._set_hex('vendor', 'idVendor', 16, vendor)

    def set_product_id(self, product):
        self._set_hex('product', 'idProduct', 16, product)

    def set_attrs(self, attrs):
        for field, fname, width in gadget_attr_files:
            value = getattr(attrs, field)
            if value is not None:
                self._set_hex(field, fname, width, value)

    def _set_string(self, field, fname, value, lang):
        # only U.S. English is mirrored
        if lang == LANG_US_ENG:
            self.strs = self.strs._replace(**{field: value})
        spath = self.strings_path(lang)
        self.store.ensure_directory(spath)
        self.store.write_line(spath, '', fname, value)

    def set_serial_number(self, serno, lang=LANG_US_ENG):
        self._set_string('serial', 'serialnumber', serno, lang)

    def set_manufacturer(self, mnf, lang=LANG_US_ENG):
        self._set_string('manufacturer', 'manufacturer', mnf, lang)

    def set_product(self, prd, lang=LANG_US_ENG):
        self._set_string('product', 'product', prd, lang)

    def set_strs(self, strs, lang=LANG_US_ENG):
        for field, fname in gadget_str_files:
            value = getattr(strs, field)
            if value is not None:
                self._set_string(field, fname, value, lang)

    def enable(self, udc=None):
        ''' bind to udc (or the first available controller)
        returns the controller name, or None if there wasn't one
        '''
        if not udc:
            udc = first_udc(self.parent.udc_path)
            if udc is None:
                _logger.warning('%s: no UDC available', self.name)
                return None
        _logger.info('%s: binding to %s', self.name, udc)
        self.udc = udc
        self.store.write_line(self.path, '', 'UDC', udc)
        return udc

    def disable(self):
        _logger.info('%s: unbinding', self.name)
        self.udc = ''
        self.store.write_line(self.path, '', 'UDC', '')

    @property
    def enabled(self):
        return bool(self.udc)


class Function(Node):
    def __init__(self, parent, ftype, instance, type_name=None):
        self.parent = parent
        self.type = ftype
        self.instance = instance
        self.type_name = type_name or function_names.get(ftype, '')
        self.name = '%s.%s' % (self.type_name, instance)
        self.attrs = default_attrs(ftype)

    @property
    def path(self):
        return join(self.owner().path, FUNCTIONS_DIR, self.name)

    def _read(self, fname):
        return self.store.read_line(self.path, '', fname)

    def _read_addr(self, fname, prior):
        ''' hardware address, or prior if the file is missing/malformed '''
        text = self._read(fname)
        addr = codec.ether_aton(text)
        if addr is None:
            if codec.decode_str(text).strip():
                _logger.warning('%s: malformed %s %r; keeping previous value', self.name, fname, text)
            return prior
        return addr

    def parse_attrs(self):
        if self.type in serial_types:
            self.attrs = SerialAttrs(codec.decode_dec(self._read('port_num')))
        elif self.type in net_types:
            attrs = self.attrs
            self.attrs = NetAttrs(
                self._read_addr('dev_addr', attrs.dev_addr),
                self._read_addr('host_addr', attrs.host_addr),
                codec.decode_str(self._read('ifname')),
                codec.decode_dec(self._read('qmult')),
            )
        elif self.type in phonet_types:
            self.attrs = PhonetAttrs(codec.decode_str(self._read('ifname')))
        else:
            _logger.warning('%s: unsupported function type %r', self.name, self.type_name)

    def _check_net(self):
        if self.type not in net_types:
            raise GadgetError('%s is not a network function' % self.name)

    def set_dev_addr(self, dev_addr):
        self._check_net()
        dev_addr = codec.to_ether(dev_addr)
        self.attrs = self.attrs._replace(dev_addr=dev_addr)
        self.store.write_line(self.path, '', 'dev_addr', codec.ether_ntoa(dev_addr))

    def set_host_addr(self, host_addr):
        self._check_net()
        host_addr = codec.to_ether(host_addr)
        self.attrs = self.attrs._replace(host_addr=host_addr)
        self.store.write_line(self.path, '', 'host_addr', codec.ether_ntoa(host_addr))

    def set_qmult(self, qmult):
        self._check_net()
        self.attrs = self.attrs._replace(qmult=qmult)
        self.store.write_line(self.path, '', 'qmult', codec.encode_dec(qmult))


class Config(Node):
    def __init__(self, parent, name):
        self.parent = parent
        self.name = name
        self.max_power = 0
        self.bm_attrs = 0
        self.strs = ConfigStrs('')
        self.bindings = []

    @property
    def path(self):
        return join(self.owner().path, CONFIGS_DIR, self.name)

    def parse_attrs(self):
        self.max_power = codec.decode_dec(self.store.read_line(self.path, '', 'MaxPower'))
        self.bm_attrs = codec.decode_hex(self.store.read_line(self.path, '', 'bmAttributes'))
        spath = join(self.path, STRINGS_DIR, lang_dir(LANG_US_ENG))
        self.strs = ConfigStrs(codec.decode_str(self.store.read_line(spath, '', 'configuration')))

    def get_binding(self, name):
        return find_named(self.bindings, name)

    def get_link_binding(self, function):
        for b in self.bindings:
            if b.target is function:
                return b
        return None

    def add_function(self, name, function):
        ''' link function into this configuration as <name> '''
        if self.get_binding(name) is not None:
            _logger.warning('duplicate binding name: %s', name)
            raise DuplicateError('binding', name)
        if self.get_link_binding(function) is not None:
            _logger.warning('duplicate binding link: %s', function.name)
            raise DuplicateError('binding link', function.name)
        if function.parent is not self.parent:
            raise GadgetError('%s does not belong to %s' % (function.name, self.parent.name))

        b = Binding(self, name, function)
        self.store.make_symlink(function.path, b.path)

        insert_sorted(self.bindings, b)
        _logger.info('%s: linked %s as %s', self.name, function.name, name)
        return b

    add_binding = add_function

    def set_max_power(self, maxpower):
        self.max_power = maxpower
        self.store.write_line(self.path, '', 'MaxPower', codec.encode_dec(maxpower))

    def set_bm_attrs(self, bmattrs):
        self.bm_attrs = bmattrs
        self.store.write_line(self.path, '', 'bmAttributes', codec.encode_hex8(bmattrs))

    @property
    def bm_flags(self):
        bits = decode_bools(self.bm_attrs, 8)
        return BmFlags(bits[BM_SELF_POWERED], bits[BM_REMOTE_WAKEUP])

    def set_bm_flags(self, self_powered=False, remote_wakeup=False):
        bits = [False] * 8
        bits[BM_RESERVED] = True
        bits[BM_SELF_POWERED] = bool(self_powered)
        bits[BM_REMOTE_WAKEUP] = bool(remote_wakeup)
        self.set_bm_attrs(encode_bools(bits))

    def set_string(self, configuration, lang=LANG_US_ENG):
        if lang == LANG_US_ENG:
            self.strs = ConfigStrs(configuration)
        spath = join(self.path, STRINGS_DIR, lang_dir(lang))
        self.store.ensure_directory(spath)
        self.store.write_line(spath, '', 'configuration', configuration)


class Binding(Node):
    def __init__(self, parent, name, target):
        self.parent = parent
        self.name = name
        self.target = target

    @property
    def path(self):
        return join(self.owner().path, self.name)

    def __repr__(self):
        target = self.target.name if self.target is not None else None
        return '<Binding %s -> %s>' % (self.name, target)


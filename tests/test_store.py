import os

import pytest

from cfsgadget.errors import StoreError
from cfsgadget.store import Store, join


@pytest.fixture
def store():
    return Store()

def test_read_line_missing(store, tmp_path):
    assert store.read_line(str(tmp_path), 'g1', 'idVendor') is None

def test_write_then_read(store, tmp_path, cat):
    root = str(tmp_path)
    os.makedirs(os.path.join(root, 'g1'))
    store.write_line(root, 'g1', 'idVendor', '0x1d6b\n')
    assert cat(os.path.join(root, 'g1', 'idVendor')) == '0x1d6b\n'
    assert store.read_line(root, 'g1', 'idVendor') == '0x1d6b\n'

def test_empty_entry_addresses_container(store, tmp_path, put):
    put(tmp_path / 'UDC', 'musb-hdrc.0\n')
    assert store.read_line(str(tmp_path), '', 'UDC') == 'musb-hdrc.0\n'

def test_write_failure_raises(store, tmp_path):
    with pytest.raises(StoreError) as exc:
        store.write_line(str(tmp_path), 'missing', 'attr', 'x')
    assert exc.value.path.endswith('attr')
    assert exc.value.errno is not None

def test_make_directory(store, tmp_path):
    d = join(str(tmp_path), 'g1', 'functions', 'acm.GS0')
    store.make_directory(d)
    assert os.path.isdir(d)
    with pytest.raises(StoreError):
        store.make_directory(d)
    store.ensure_directory(d)

def test_symlinks(store, tmp_path, put):
    target = put(tmp_path / 'functions' / 'acm.GS0')
    link = str(tmp_path / 'link')
    store.make_symlink(target, link)
    assert store.is_link(link)
    assert store.read_link(link) == target
    with pytest.raises(StoreError):
        store.make_symlink(target, link)
    assert store.read_link(str(tmp_path / 'nolink')) is None

def test_list_entries(store, tmp_path, put):
    put(tmp_path / 'b')
    put(tmp_path / 'a')
    put(tmp_path / 'c', 'file')
    os.symlink(str(tmp_path / 'a'), str(tmp_path / 'l'))
    assert store.list_entries(str(tmp_path)) == ['a', 'b', 'c', 'l']
    assert store.list_entries(str(tmp_path), select=store.is_link) == ['l']
    assert store.list_entries(str(tmp_path / 'missing')) == []

def test_remove_directory(store, tmp_path, put):
    d = put(tmp_path / 'g1')
    store.remove_directory(d)
    assert not os.path.exists(d)
    # already gone; only logged
    store.remove_directory(d)

def test_remove_tree(store, tmp_path, put):
    g = tmp_path / 'g1'
    put(g / 'idVendor', '0x1d6b\n')
    put(g / 'strings' / '0x409' / 'product', 'p\n')
    put(g / 'functions' / 'acm.GS0')
    os.symlink(str(g / 'functions' / 'acm.GS0'), str(g / 'link'))
    store.remove_tree(str(g))
    assert not os.path.exists(str(g))
    assert os.path.isdir(str(tmp_path))
    # already gone; only logged
    store.remove_tree(str(g))

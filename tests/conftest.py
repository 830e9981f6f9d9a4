import os
import sys

import pytest

# Ensure the project root is in the path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

import cfsgadget

def _put(path, text=None):
    ''' create a file (or, with text=None, a directory) and its parents '''
    path = str(path)
    if text is None:
        os.makedirs(path, exist_ok=True)
        return path
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, 'w') as f:
        f.write(text)
    return path

def _cat(path):
    with open(str(path)) as f:
        return f.read()

@pytest.fixture
def put():
    return _put

@pytest.fixture
def cat():
    return _cat

@pytest.fixture
def configfs(tmp_path):
    root = os.path.join(str(tmp_path), 'config')
    os.makedirs(os.path.join(root, 'usb_gadget'))
    return root

@pytest.fixture
def gadget_root(configfs):
    return os.path.join(configfs, 'usb_gadget')

@pytest.fixture
def udc_path(tmp_path):
    path = os.path.join(str(tmp_path), 'udc')
    os.makedirs(path)
    return path

@pytest.fixture
def state(configfs, udc_path):
    s = cfsgadget.init(configfs, udc_path=udc_path)
    yield s
    cfsgadget.cleanup(s)

@pytest.fixture
def gadget(state):
    return state.create_gadget('g1', 0x1d6b, 0x0104)

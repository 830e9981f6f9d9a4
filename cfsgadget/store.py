#!/usr/bin/python3

''' thin configfs access layer

paths are addressed the way configfs lays them out:
    container/entry/attribute
(entry may be empty when the container already is the entry)
'''

import logging

from path import Path

from cfsgadget.errors import StoreError
from cfsgadget.tools import makedirs, readline, write

_logger = logging.getLogger(__name__)

def join(*parts):
    return Path(parts[0]).joinpath(*[p for p in parts[1:] if p])

class Store():
    def read_line(self, container, entry, attr):
        ''' first line of an attribute file, or None if it can't be read '''
        fname = join(container, entry, attr)
        try:
            return readline(fname)
        except FileNotFoundError:
            _logger.debug('%s: not present', fname)
        except OSError as e:
            _logger.warning('%s: unable to read (%s)', fname, e)
        return None

    def write_line(self, container, entry, attr, text):
        fname = join(container, entry, attr)
        _logger.debug('%s <- %r', fname, text)
        try:
            write(text, fname)
        except OSError as e:
            _logger.warning('%s: write failed (%s)', fname, e)
            raise StoreError(fname, e)

    def make_directory(self, path):
        try:
            makedirs(path)
        except OSError as e:
            _logger.warning('%s: mkdir failed (%s)', path, e)
            raise StoreError(path, e)

    def ensure_directory(self, path):
        ''' like make_directory, but an existing directory is fine '''
        try:
            makedirs(path, exist_ok=True)
        except OSError as e:
            _logger.warning('%s: mkdir failed (%s)', path, e)
            raise StoreError(path, e)

    def remove_directory(self, path):
        ''' undo a make_directory; failures are only logged '''
        try:
            Path(path).rmdir()
        except OSError as e:
            _logger.warning('%s: unable to remove (%s)', path, e)

    def remove_tree(self, path):
        ''' undo a partly built entry: links, attribute files and
        sub-directories go first (deepest first), then path itself

        configfs won't unlink attributes or rmdir default groups, those
        vanish along with their parent; only the final rmdir is warned about
        '''
        self._prune(Path(path))
        self.remove_directory(path)

    def _prune(self, path):
        try:
            entries = list(path.iterdir())
        except OSError as e:
            _logger.debug('%s: unable to list (%s)', path, e)
            return
        for e in entries:
            try:
                if e.islink() or not e.is_dir():
                    e.unlink()
                else:
                    self._prune(e)
                    e.rmdir()
            except OSError as err:
                _logger.debug('%s: left in place (%s)', e, err)

    def make_symlink(self, target, link):
        try:
            Path(target).symlink(link)
        except OSError as e:
            _logger.warning('%s -> %s: symlink failed (%s)', link, target, e)
            raise StoreError(link, e)

    def read_link(self, link):
        try:
            return str(Path(link).readlink())
        except OSError as e:
            _logger.warning('%s: readlink failed (%s)', link, e)
            return None

    def is_directory(self, path):
        return Path(path).is_dir()

    def is_link(self, path):
        return Path(path).islink()

    def list_entries(self, path, select=None):
        ''' entry names under path, in lexicographic order
        select: optional predicate taking the entry's full path
        '''
        try:
            entries = list(Path(path).iterdir())
        except OSError as e:
            _logger.warning('%s: unable to list (%s)', path, e)
            return []
        names = []
        for e in entries:
            if select is not None and not select(e):
                continue
            names.append(e.name)
        return sorted(names)

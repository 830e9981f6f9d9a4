''' exceptions raised by cfsgadget '''

class GadgetError(Exception):
    pass

class DuplicateError(GadgetError):
    ''' name or link target already taken within the parent '''
    def __init__(self, kind, name):
        super(DuplicateError, self).__init__('duplicate %s name: %s' % (kind, name))
        self.kind = kind
        self.name = name

class StoreError(GadgetError):
    ''' a configfs read/write/mkdir/symlink failed

    path: the store path involved
    cause: the underlying OSError (if any)
    '''
    def __init__(self, path, cause=None, msg=None):
        self.path = str(path)
        self.cause = cause
        self.errno = getattr(cause, 'errno', None)
        if msg is None:
            if cause is not None:
                msg = '%s: %s' % (self.path, getattr(cause, 'strerror', None) or cause)
            else:
                msg = self.path
        super(StoreError, self).__init__(msg)

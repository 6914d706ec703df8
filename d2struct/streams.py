import io
import logging
import os
import stat
import tempfile


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/file object to
    uniform its properties: a save file can be given as a path
    or as its raw content.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)
        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of source for a stream' % self._type.__name__)

        init_method()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.obj.close()

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self._type.__name__)

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        self.obj = open(self.obj, 'rb')

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def read_all(self):
        return self.obj.read()


class Backend(object):
    '''The storage a chunk and its fields share: a mutable buffer with
    a cursor, whose seek() returns the backend itself so that calls can
    be chained like

        backend.seek(0x0c).read(4)
    '''

    def __init__(self, data=b''):
        self.data = bytearray(data)
        self._offset = 0

    def __len__(self):
        return len(self.data)

    def __deepcopy__(self, memo):
        backend = Backend(self.data)
        backend._offset = self._offset
        return backend

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self._offset = offset

        return self

    def tell(self):
        return self._offset

    def read(self, size):
        raw = bytes(self.data[self._offset:self._offset + size])
        self._offset += len(raw)

        return raw

    def write(self, raw):
        end = self._offset + len(raw)
        if end > len(self.data):
            raise ValueError(f'writing {len(raw)} bytes at offset {self._offset} overflows the buffer ({len(self.data)} bytes)')

        self.data[self._offset:end] = raw
        self._offset = end

        return self

    def getvalue(self):
        return bytes(self.data)


def atomic_write(path, data):
    '''Write data to path using a temporary file in the same directory and a
    rename, so that either the old file remains or the new one fully replaces it.
    The mode of the file being replaced is preserved.'''
    path = os.fspath(path)
    fd, tmp_name = tempfile.mkstemp(prefix=os.path.basename(path), dir=os.path.dirname(path) or '.')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path):
            os.chmod(tmp_name, stat.S_IMODE(os.stat(path).st_mode))
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)

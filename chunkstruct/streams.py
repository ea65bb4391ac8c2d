import io
import logging


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes/path objects to
    uniform their properties: whatever we are given we end up
    with an in-memory binary file object.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj
        self.history = []

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is not something I can stream' % self._type.__name__)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __repr__(self):
        return '<%s(%s@%d)>' % (self.__class__.__name__, self._type.__name__, self.obj.tell())

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.obj = io.BytesIO(f.read())

    def init_PosixPath(self):
        self.obj = str(self.obj)
        self.init_str()

    init_WindowsPath = init_PosixPath

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_bytearray(self):
        self.obj = io.BytesIO(bytes(self.obj))

    def remaining(self):
        position = self.obj.tell()
        end = self.obj.seek(0, io.SEEK_END)
        self.obj.seek(position)

        return end - position

    def is_exhausted(self):
        return self.remaining() <= 0

    def write(self, data):
        return self.obj.write(data)

    # TODO: create contextmanager
    def save(self):
        self.history.append(self.obj.tell())

    def restore(self):
        old_seek = self.history.pop()
        self.obj.seek(old_seek)

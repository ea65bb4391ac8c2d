"""
Core module for the abstraction of a file format

"""
import logging
from typing import Tuple, List

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import ChunkstructException


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk is
    an ordered sequence of fields, declared as class attributes.

    A Chunk can contain sub-chunks, since a Chunk instance can be used as a field.

    If some data is passed with the constructor (raw bytes or a path) the chunk
    is unpacked from it.
    """

    logger = logging.getLogger(__name__)

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if source is not None:
            stream = source if isinstance(source, Stream) else Stream(source)
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def __eq__(self, other):
        if not isinstance(other, Chunk):
            return NotImplemented

        return type(self) is type(other) and self.raw == other.raw

    __hash__ = None

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    def _get_raw(self):
        return b''.join(field.raw for _, field in self.get_fields())

    def pack(self, stream=None):
        '''Encode the high-level representation into binary data: each field
        is asked to pack itself, so values depending on other fields (like
        checksums) are refreshed along the way.'''
        value = b''
        for field_name, field_instance in self.get_fields():
            self.logger.debug('packing %s.%s' % (self.__class__.__name__, field_name))
            value += field_instance.pack(stream)

        return value

    def _unpack_field(self, field_name, stream):
        self.logger.debug('unpacking %s.%s' % (self.__class__.__name__, field_name))

        try:
            getattr(self, field_name).unpack(stream)
        except ChunkstructException as e:
            e.chain.append(field_name)
            raise

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are unpacked in the order they are declared; if one of them fails
        the exception raised is propagated as is, only its chain is updated
        with the name of the field so that is possible to know where the
        failure happened.
        '''
        for field_name in self.get_ordered_fields_name():
            self._unpack_field(field_name, stream)

"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need of sub-components.
"""
import logging
import struct

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import (
    ChunkstructException,
    UnpackException,
    BadSignatureException,
)


class Field(FieldBase):
    """Base class to subclass from"""

    logger = logging.getLogger(__name__)

    def __init__(self, name=None, father=None, default=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self.name = name
        self.father = father
        self.default = default
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Returns True if this field or, while inheriting, one of its fathers
        requires the given level of compliantness.'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        return self._value

    def _set_value(self, value):
        self._value = value

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        raise NotImplementedError(f"method {self.__class__.__name__}._get_raw() not implemented")

    raw = property(
        fget=lambda self: self._get_raw(),
    )

    def read(self, stream, size):
        '''Read exactly "size" bytes from the stream.'''
        data = stream.read(size)
        if len(data) != size:
            self.logger.error('field \'%s\' wants %d bytes but only %d are available' % (self.name, size, len(data)))
            raise UnpackException()

        return data

    def _update_value(self):
        '''This is used to update the binary value before packing'''
        pass

    def pack(self, stream=None):
        '''Returns the binary representation of the field, writing it
        also into the stream if one is passed.

        This operation is not idempotent: fields depending on other fields
        update their value before being packed.'''
        self._update_value()
        raw = self.raw
        if stream is not None:
            stream.write(raw)

        return raw

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def __str__(self):
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % self.value

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _get_raw(self) -> bytes:
        return struct.pack(self.get_format(), self.value)

    def unpack(self, stream):
        raw = self.read(stream, self.size)
        self.value = struct.unpack(self.get_format(), raw)[0]


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    Its length can be fixed or a Dependency on another field: in the latter
    case setting the value writes back the new length."""

    def __init__(self, n=None, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self._n = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return len(self.value)

    @property
    def length(self):
        '''The number of bytes this field expects to find into the stream.'''
        if isinstance(self._n, Dependency):
            return self._n.resolve(self) if self.father is not None else len(self.value)

        return self._n

    def value_from_default(self):
        if self.default is not None:
            return self.default

        return b'\x00' * self._n if isinstance(self._n, int) else b''

    def _set_value(self, value) -> None:
        value = bytes(value)
        if isinstance(self._n, Dependency):
            self._n.resolve_and_set(self, len(value))
        elif len(value) != self._n:
            raise ValueError(f'you are trying to set a value with the wrong size (that is {self._n} bytes)')

        self._value = value

    def _get_size(self):
        return len(self.value)

    def _get_raw(self):
        return self.value

    def unpack(self, stream):
        length = self.length

        if not self.is_magic:
            self._value = self.read(stream, length)
            return

        data = stream.read(length)
        if data != self.default:
            self.logger.warning(f'the magic doesn\'t correspond: {data!r} instead of {self.default!r}')
            if self.is_compliant(Compliant.MAGIC):
                raise BadSignatureException(received=data)

        self._value = data


class ArrayField(Field):
    '''Un/Pack an array of Chunks: the elements are unpacked until the
    stream is exhausted.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    def __init__(self, field_cls, **kw):
        self.field_cls = field_cls

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        return list(self.default) if self.default is not None else []

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        element.father = self
        self.value.append(element)

    def pop(self, index=-1):
        element = self.value.pop(index)
        element.father = None

        return element

    def _get_raw(self):
        return b''.join(element.raw for element in self.value)

    def _get_size(self):
        return sum(element.size for element in self.value)

    def pack(self, stream=None):
        return b''.join(element.pack(stream) for element in self.value)

    def unpack(self, stream):
        self._value = []

        while not stream.is_exhausted():
            idx = len(self._value)
            self.logger.debug('unpacking element %d of \'%s\'' % (idx, self.name))

            element = self.instance_element()
            try:
                element.unpack(stream)
            except ChunkstructException as e:
                e.chain.append(idx)
                raise

            self._value.append(element)

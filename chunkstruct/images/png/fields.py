'''
Fields specific to the PNG format.

The chunk type is a 4-byte code restricted to ASCII letters where the case
of each letter (i.e. bit 5 of each byte, value 0x20) carries a property of
the chunk:

 1. ancillary bit (first byte): uppercase means critical
 2. private bit (second byte): uppercase means public
 3. reserved bit (third byte): must be uppercase
 4. safe-to-copy bit (fourth byte): lowercase means safe to copy
'''
from bitstring import Bits

from ... import fields
from ...exceptions import InvalidByteException, InvalidIdentifierException


class ChunkType(object):
    '''Immutable value representing the type of a chunk.'''

    __slots__ = ('_code',)

    SIZE = 4
    CASE_BIT = 2  # 0x20, counting from the most significant bit of the byte

    def __init__(self, code: bytes):
        code = bytes(code)
        if len(code) != self.SIZE:
            raise ValueError(f'a chunk type is {self.SIZE} bytes long, got {len(code)}')

        self._code = code

    @classmethod
    def from_str(cls, text: str) -> "ChunkType":
        '''Build the chunk type from its textual representation: only ASCII
        letters are allowed, any case.'''
        if len(text) != cls.SIZE:
            raise ValueError(f'a chunk type is {cls.SIZE} characters long, got {text!r}')

        for character in text:
            if not ('A' <= character <= 'Z' or 'a' <= character <= 'z'):
                raise InvalidByteException(byte=character)

        return cls(text.encode('ascii'))

    @classmethod
    def from_bytes(cls, code: bytes) -> "ChunkType":
        '''Build the chunk type from the raw bytes found into a file: the only
        check is on the reserved bit.'''
        chunk_type = cls(code)

        if not chunk_type.is_valid():
            raise InvalidIdentifierException(received=chunk_type.code)

        return chunk_type

    @property
    def code(self) -> bytes:
        return self._code

    def __bytes__(self):
        return self._code

    def __str__(self):
        return self._code.decode('latin1')

    def __repr__(self):
        return f'<{self.__class__.__name__}({self})>'

    def __eq__(self, other):
        if not isinstance(other, ChunkType):
            return NotImplemented

        return self._code == other._code

    def __hash__(self):
        return hash(self._code)

    def __deepcopy__(self, memo):
        return self

    def _case_bit(self, index: int) -> bool:
        '''True if the letter at the given position is lowercase.'''
        return Bits(self._code)[8 * index + self.CASE_BIT]

    def is_critical(self) -> bool:
        return not self._case_bit(0)

    def is_public(self) -> bool:
        return not self._case_bit(1)

    def is_reserved_bit_valid(self) -> bool:
        return not self._case_bit(2)

    def is_valid(self) -> bool:
        return self.is_reserved_bit_valid()

    def is_safe_to_copy(self) -> bool:
        return self._case_bit(3)


class ChunkTypeField(fields.Field):
    '''It holds a ChunkType; it can be set using the textual representation.'''

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value})>'

    def _set_value(self, value):
        if isinstance(value, str):
            value = ChunkType.from_str(value)

        if value is not None and not isinstance(value, ChunkType):
            raise ValueError(f'\'{value!r}\' is not a chunk type')

        self._value = value

    def _get_size(self):
        return ChunkType.SIZE

    def _get_raw(self) -> bytes:
        if self.value is None:
            raise ValueError(f'chunk type for field \'{self.name}\' is not set')

        return self.value.code

    def unpack(self, stream):
        self._value = ChunkType.from_bytes(self.read(stream, ChunkType.SIZE))

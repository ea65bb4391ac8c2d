'''
# Portable Network Graphics

Format created to replace patent-emcumbered GIF files.

The specification is at <http://www.libpng.org/pub/png/spec/1.2/PNG-Contents.html> and
is available a full test-suite with a lot of PNG images covering all
the possible cases at <http://www.schaik.com/pngsuite/>.

Here we are interested only in the container: an 8 bytes signature followed
by a sequence of chunks; the contents of the chunks are left as they are.
'''
from . import fields as png_fields
from ...core import Chunk
from ...enum import Compliant
from ...properties import Dependency
from ...streams import Stream
from ...common import crc
from ...exceptions import (
    UnpackException,
    LengthMismatchException,
    BadChecksumException,
    NotFoundException,
    InvalidEncodingException,
)
from ... import fields


SIGNATURE = b'\x89\x50\x4e\x47\x0d\x0a\x1a\x0a'


class PNGHeader(Chunk):
    magic = fields.StringField(8, default=SIGNATURE, is_magic=True)


class PNGChunk(Chunk):
    '''This is the main data structure of the format: the 4 fields represent
    a chunk into the file. Each field is intended big-endian.

    A chunk is defined as critical or ancillary depending on the case of the
    starting letter of the type field.

    The crc field is network-byte-order CRC-32 computed over the chunk type and chunk data, but not the length.

    # Critical chunks

     1. IHDR: contains image's width, height, bit depth, color type, compression method, filter method and interlace method
     2. PLTE: contains the palette data
     3. IDAT: contains the actual image data (compressed)
     4. IEND: is the terminator chunk
    '''
    OVERHEAD = 12  # length + type + crc

    length = fields.StructField('I', endianess=fields.Endianess.BIG_ENDIAN)
    type   = png_fields.ChunkTypeField()
    data   = fields.StringField(Dependency('.length'), default=b'')
    crc    = crc.CRCField(['type', 'data'], endianess=fields.Endianess.BIG_ENDIAN)  # network byte order

    @classmethod
    def new(cls, chunk_type, data, **kwargs):
        '''Build a chunk from its type (a ChunkType or its textual form) and its data,
        the length and the crc are derived from them.'''
        chunk = cls(**kwargs)
        chunk.type.value = chunk_type
        chunk.data.value = data
        chunk.crc.update()

        return chunk

    @classmethod
    def decode(cls, record, **kwargs):
        '''Build a chunk from the bytes of a single record.'''
        chunk = cls(**kwargs)
        chunk.unpack_record(record)

        return chunk

    def __str__(self):
        return '%s: %d bytes, crc %08x' % (self.type.value, self.length.value, self.crc.value)

    def unpack(self, stream):
        '''Reading from a stream containing other chunks the record extends
        as far as its length field indicates.'''
        stream.save()
        try:
            self._unpack_field('length', stream)
        finally:
            stream.restore()

        self.unpack_record(stream.read(self.length.value + self.OVERHEAD))

    def unpack_record(self, record):
        '''The record is unpacked taking as data everything between the type
        and the last four bytes, whatever the length field says: if the two
        disagree the length is corrected (unless Compliant.LENGTH is requested).

        The crc must match the one calculated from type and data.'''
        if len(record) < self.OVERHEAD:
            self.logger.error('a record of %d bytes is too short to be a chunk' % len(record))
            raise UnpackException()

        stream = Stream(record)

        self._unpack_field('length', stream)
        self._unpack_field('type', stream)
        payload = stream.read(len(record) - self.OVERHEAD)
        self._unpack_field('crc', stream)

        declared = self.length.value
        if declared != len(payload):
            self.logger.warning('lengths mismatch: declared %d, actual %d' % (declared, len(payload)))
            if self.is_compliant(Compliant.LENGTH):
                raise LengthMismatchException(declared=declared, actual=len(payload), chain=['length'])

        self.data.value = payload  # this fixes the length too

        try:
            self.crc.verify()
        except BadChecksumException as e:
            e.chain.append('crc')
            raise

    def encode(self):
        '''The bytes of the record, the inverse of decode().'''
        return self.pack()

    def data_as_string(self):
        try:
            return self.data.value.decode('utf-8')
        except UnicodeDecodeError as e:
            raise InvalidEncodingException(reason=str(e)) from e

    def is_critical(self):
        return self.type.value.is_critical()

    def is_public(self):
        return self.type.value.is_public()

    def is_safe_to_copy(self):
        return self.type.value.is_safe_to_copy()


class PNGFile(Chunk):
    '''The whole file: the signature and then the chunks until the end of the data.

    The order of the chunks is preserved and more than one chunk can have
    the same type: look-up and removal act on the first one found.'''
    header = PNGHeader()
    chunks = fields.ArrayField(PNGChunk())

    def __init__(self, source=None, **kwargs):
        kwargs.setdefault('compliant', Compliant.MAGIC)
        super().__init__(source, **kwargs)

    def encode(self):
        return self.pack()

    def append_chunk(self, chunk):
        self.chunks.append(chunk)

    def _index_of(self, name):
        name = str(name)
        for idx, chunk in enumerate(self.chunks):
            if str(chunk.type.value) == name:
                return idx

        raise NotFoundException(name=name)

    def chunk_by_type(self, name):
        return self.chunks[self._index_of(name)]

    def remove_first_chunk(self, name):
        return self.chunks.pop(self._index_of(name))

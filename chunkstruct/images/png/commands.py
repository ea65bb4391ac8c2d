'''
Operations used by the command line: each one loads a PNG file from a path,
does its job on the chunks and, when something changed, writes the file back.
'''
import logging

from . import PNGFile, PNGChunk
from ...exceptions import InvalidEncodingException, InvalidIdentifierException


logger = logging.getLogger(__name__)


def load(file_path):
    logger.debug(f'loading PNG from \'{file_path}\'')
    return PNGFile(str(file_path))


def save(png, file_path):
    data = png.pack()
    logger.debug(f'writing {len(data)} bytes to \'{file_path}\'')

    with open(file_path, 'wb') as f:
        f.write(data)


def encode(file_path, chunk_type, message, out_path=None):
    '''Hide the message into a new chunk appended at the end of the file.

    The chunk type must have the reserved bit clear, otherwise the file
    written couldn't be read back.'''
    png = load(file_path)

    chunk = PNGChunk.new(chunk_type, message.encode('utf-8'))
    if not chunk.type.value.is_valid():
        raise InvalidIdentifierException(received=chunk.type.value.code)

    png.append_chunk(chunk)

    save(png, out_path or file_path)

    return chunk


def decode(file_path, chunk_type):
    '''Return the message contained into the first chunk with the given type.'''
    png = load(file_path)

    return png.chunk_by_type(chunk_type).data_as_string()


def remove(file_path, chunk_type):
    png = load(file_path)

    chunk = png.remove_first_chunk(chunk_type)
    logger.info(f'removed chunk {chunk}')

    save(png, file_path)

    return chunk


def print_chunks(file_path):
    png = load(file_path)

    return [f'[{idx:02d}] {chunk}' for idx, chunk in enumerate(png.chunks)]


def describe_payload(chunk):
    '''The payload as text when it's UTF-8, its bytes representation otherwise.'''
    try:
        return repr(chunk.data_as_string())
    except InvalidEncodingException:
        logger.debug(f'payload of {chunk} is not text')
        return repr(chunk.data.value)

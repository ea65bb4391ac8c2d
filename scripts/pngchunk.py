#!/usr/bin/env python3
'''
Hide, read back and remove messages stored into chunks of a PNG file.

 $ pngchunk.py encode image.png ruSt "this is a secret" [out.png]
 $ pngchunk.py decode image.png ruSt
 $ pngchunk.py remove image.png ruSt
 $ pngchunk.py print image.png
'''
import logging
import os
import sys

from chunkstruct.exceptions import ChunkstructException
from chunkstruct.images.png import commands


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} encode <png file path> <chunk type> <message> [<output path>]
       {progname} decode <png file path> <chunk type>
       {progname} remove <png file path> <chunk type>
       {progname} print  <png file path>

The chunk type is made of 4 ASCII letters and the third one must be uppercase.''')
    sys.exit(1)


def main(progname, command, args):
    if command == 'encode' and len(args) in (3, 4):
        chunk = commands.encode(*args)
        print(f'encoded {chunk}')
    elif command == 'decode' and len(args) == 2:
        print(commands.decode(*args))
    elif command == 'remove' and len(args) == 2:
        chunk = commands.remove(*args)
        print(f'removed {chunk}: {commands.describe_payload(chunk)}')
    elif command == 'print' and len(args) == 1:
        print('\n'.join(commands.print_chunks(*args)))
    else:
        usage(progname)


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    try:
        main(sys.argv[0], sys.argv[1], sys.argv[2:])
    except (ChunkstructException, ValueError, OSError) as e:
        logger.debug('failed', exc_info=True)
        print(f'error: {e}', file=sys.stderr)
        sys.exit(1)

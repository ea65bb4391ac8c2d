import runpy
import sys
from pathlib import Path

import pytest

from chunkstruct.exceptions import NotFoundException, InvalidByteException, InvalidIdentifierException
from chunkstruct.images.png import PNGChunk, PNGFile, commands


SCRIPT = Path(__file__).parent.parent / 'scripts' / 'pngchunk.py'


def run_script(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', [str(SCRIPT), *args])
    runpy.run_path(str(SCRIPT), run_name='__main__')


def test_encode_decode(png_path):
    chunk = commands.encode(png_path, 'ruSt', 'this is a secret')

    assert str(chunk.type.value) == 'ruSt'
    assert commands.decode(png_path, 'ruSt') == 'this is a secret'

    png = PNGFile(str(png_path))

    assert str(png.chunks[-1].type.value) == 'ruSt'


def test_encode_out_path(png_path, png_bytes, tmp_path):
    out_path = tmp_path / 'out.png'

    commands.encode(png_path, 'ruSt', 'elsewhere', out_path=out_path)

    assert png_path.read_bytes() == png_bytes
    assert commands.decode(out_path, 'ruSt') == 'elsewhere'


def test_encode_invalid_type(png_path, png_bytes):
    with pytest.raises(InvalidByteException):
        commands.encode(png_path, 'ru5t', 'nope')

    assert png_path.read_bytes() == png_bytes


def test_encode_reserved_bit_set(png_path, png_bytes):
    '''A lowercase third letter would make the file unreadable.'''
    with pytest.raises(InvalidIdentifierException) as exc:
        commands.encode(png_path, 'Rust', 'secret')

    assert exc.value.received == b'Rust'
    assert png_path.read_bytes() == png_bytes

    # the file is still readable
    assert commands.print_chunks(png_path)


def test_remove(png_path, png_bytes):
    commands.encode(png_path, 'ruSt', 'this is a secret')

    chunk = commands.remove(png_path, 'ruSt')

    assert chunk.data_as_string() == 'this is a secret'
    assert png_path.read_bytes() == png_bytes

    with pytest.raises(NotFoundException):
        commands.decode(png_path, 'ruSt')


def test_print_chunks(png_path):
    commands.encode(png_path, 'ruSt', 'hello')

    lines = commands.print_chunks(png_path)

    assert lines[0].startswith('[00] IHDR: 13 bytes')
    assert lines[-1].startswith(f'[{len(lines) - 1:02d}] ruSt: 5 bytes')


def test_describe_payload():
    assert commands.describe_payload(PNGChunk.new('ruSt', b'hello')) == "'hello'"
    assert commands.describe_payload(PNGChunk.new('biNy', b'\xff\xfe')) == "b'\\xff\\xfe'"


def test_script_remove_binary_payload(monkeypatch, capsys, png_path, png_bytes):
    png = PNGFile(str(png_path))
    png.append_chunk(PNGChunk.new('biNy', b'\xff\xfe'))
    png_path.write_bytes(png.pack())

    run_script(monkeypatch, 'remove', str(png_path), 'biNy')

    out = capsys.readouterr().out
    assert out.startswith('removed biNy: 2 bytes')
    assert "b'\\xff\\xfe'" in out
    assert png_path.read_bytes() == png_bytes


def test_script_error_exit_status(monkeypatch, capsys, png_path):
    with pytest.raises(SystemExit) as exc:
        run_script(monkeypatch, 'decode', str(png_path), 'ruSt')

    assert exc.value.code == 1
    assert capsys.readouterr().err.startswith('error:')

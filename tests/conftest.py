import io

import pytest


@pytest.fixture
def png_bytes():
    '''A real PNG file, as written by Pillow.'''
    from PIL import Image

    image = Image.new('RGB', (5, 5), color='red')
    buffer = io.BytesIO()
    image.save(buffer, format='PNG')

    return buffer.getvalue()


@pytest.fixture
def png_path(tmp_path, png_bytes):
    path = tmp_path / 'red.png'
    path.write_bytes(png_bytes)

    return path

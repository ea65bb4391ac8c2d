import pytest

from chunkstruct.enum import Compliant
from chunkstruct.exceptions import UnpackException, BadSignatureException
from chunkstruct.fields import StructField, StringField, ArrayField
from chunkstruct.meta import Endianess
from chunkstruct.streams import Stream


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\xfe\xca\x00\x00'


def test_structfield_big_endian():
    field = StructField('I', default=0xcafe, endianess=Endianess.BIG_ENDIAN)

    assert field.raw == b'\x00\x00\xca\xfe'

    field.unpack(Stream(b'\x01\x02\x03\x04'))

    assert field.value == 0x01020304
    assert str(field) == '0x01020304'


def test_structfield_short_stream():
    field = StructField('I')

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x01\x02'))


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = bytes(range(0x10))

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_needs_size():
    with pytest.raises(ValueError):
        StringField()


def test_stringfield_magic():
    field = StringField(4, default=b'MAGC', is_magic=True, compliant=Compliant.MAGIC)

    with pytest.raises(BadSignatureException) as exc:
        field.unpack(Stream(b'ABCD'))

    assert exc.value.received == b'ABCD'

    # without compliantness the mismatch is tolerated
    field = StringField(4, default=b'MAGC', is_magic=True)
    field.unpack(Stream(b'ABCD'))

    assert field.value == b'ABCD'


def test_arrayfield():
    array = ArrayField(StructField('I'))

    array.unpack(Stream(
        b'\x01\x00\x00\x00'
        b'\x02\x00\x00\x00'
        b'\x03\x00\x00\x00'
    ))

    assert len(array) == 3
    assert [_.value for _ in array] == [1, 2, 3]

    # check that the elements are not duplicated
    assert array[0] is not array[1]
    assert array[0].father is array

    assert array.raw == b'\x01\x00\x00\x00\x02\x00\x00\x00\x03\x00\x00\x00'

    array.pop()

    assert len(array) == 2


def test_arrayfield_until_exhausted():
    array = ArrayField(StructField('H'))

    array.unpack(Stream(b'\x01\x00\x02\x00'))

    assert [_.value for _ in array] == [1, 2]


def test_arrayfield_failure_has_index():
    array = ArrayField(StructField('H'))

    with pytest.raises(UnpackException) as exc:
        array.unpack(Stream(b'\x01\x00\x02'))

    assert exc.value.chain == [1]


def test_arrayfield_append_pop():
    array = ArrayField(StructField('H'))

    first = StructField('H', default=1)
    second = StructField('H', default=2)

    array.append(first)
    array.append(second)

    assert first.father is array
    assert array.pack() == b'\x01\x00\x02\x00'

    assert array.pop(0) is first
    assert first.father is None
    assert [_.value for _ in array] == [2]

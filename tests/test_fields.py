from enum import Enum, auto

import pytest

from d2struct.enum import Compliant
from d2struct.exceptions import ContractException, UnpackException
from d2struct.fields import StructField, StringField
from d2struct.meta import Endianess


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


def test_structfield_set_raw():
    field = StructField('I')

    field.raw = b'\x01\x02\x03\x04'
    assert field.value == 0x04030201

    with pytest.raises(ContractException):
        field.raw = b'\x01\x02'


def test_structfield_big_endian():
    field = StructField('H', endianess=Endianess.BIG_ENDIAN)

    field.value = 0x1234

    assert field.raw == b'\x12\x34'
    assert str(field) == '0x1234'


def test_structfield_out_of_range():
    field = StructField('B')

    with pytest.raises(ContractException):
        field.value = 0x100

    with pytest.raises(ValueError):
        field.value = -1


def test_structfield_enum():
    class DummyEnum(Enum):
        NONE = 0
        FIRST = auto()
        SECOND = auto()

    field = StructField('I', enum=DummyEnum, compliant=Compliant.ENUM, offset=0)

    assert field.value == DummyEnum.NONE

    field.value = DummyEnum.SECOND

    assert field.value == DummyEnum.SECOND
    assert field.raw == b'\x02\x00\x00\x00'

    field.raw = b'\x04\x00\x00\x00'
    assert field.value is None
    assert field.integer == 4

    with pytest.raises(UnpackException):
        field.unpack()


def test_structfield_enum_not_compliant(caplog):
    class DummyEnum(Enum):
        NONE = 0

    field = StructField('B', enum=DummyEnum, compliant=Compliant.NONE, offset=0)
    field.raw = b'\x07'

    field.unpack()

    assert 'doesn\'t have element with value 0x7' in caplog.text


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field) == 0x10
    assert field.raw == b'\x00' * field.size

    with pytest.raises(ValueError):
        field.value = b'kebab'

    data = bytes(range(0x10))

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_unpack_without_offset():
    field = StringField(4, name='data')

    with pytest.raises(UnpackException) as e:
        field.unpack()

    assert e.value.chain == ['data']

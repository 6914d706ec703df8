import struct

import pytest

from d2struct.common.checksum import ChecksumField
from d2struct.core import Chunk
from d2struct.enum import Compliant
from d2struct.exceptions import ChunkUnpackException, MagicException
from d2struct.fields import StructField, StringField


class Dummy(Chunk):
    magic = StructField('I', offset=0x00, default=0xcafebabe, is_magic=True)
    count = StructField('H', offset=0x04)
    label = StringField(4, offset=0x08)
    crc   = ChecksumField(offset=0x0c)


DUMMY = struct.pack('<IH2x4sI', 0xcafebabe, 3, b'miao', 0)


def test_chunk():
    """Check that building a Chunk from fields behaves correctly."""
    dummy = Dummy(DUMMY)

    assert dummy.get_ordered_fields_name() == ['magic', 'count', 'label', 'crc']

    assert dummy.magic.value == 0xcafebabe
    assert dummy.magic.father is dummy
    assert dummy.count.value == 3
    assert dummy.label.value == b'miao'

    assert dummy.size == len(DUMMY)
    assert dummy.raw == DUMMY

    assert dummy.layout == {
        'magic': (0x00, 4),
        'count': (0x04, 2),
        'label': (0x08, 4),
        'crc': (0x0c, 4),
    }


def test_chunk_fields_are_per_instance():
    first = Dummy(DUMMY)
    second = Dummy(DUMMY)

    first.count.value = 10

    assert first.count is not second.count
    assert second.count.value == 3
    assert first.raw[4:6] == b'\x0a\x00'


def test_chunk_set_through_descriptor():
    dummy = Dummy(DUMMY)

    dummy.count = 0x42

    assert dummy.count.value == 0x42


def test_chunk_inheritance():
    class Son(Dummy):
        extra = StructField('B', offset=0x10)

    son = Son(DUMMY + b'\x2a')

    assert son.get_ordered_fields_name() == ['magic', 'count', 'label', 'crc', 'extra']
    assert son.extra.value == 0x2a
    assert son.count.value == 3


def test_chunk_pack_updates_checksum():
    dummy = Dummy(DUMMY)

    raw = dummy.pack()

    assert dummy.crc.value != 0
    assert dummy.crc.is_valid()
    assert raw[:0x0c] == DUMMY[:0x0c]
    assert struct.unpack('<I', raw[0x0c:])[0] == dummy.crc.calculate()


def test_chunk_truncated():
    with pytest.raises(ChunkUnpackException) as e:
        Dummy(DUMMY[:10])

    assert e.value.chain == ['label']
    assert str(e.value).startswith('label: ')


def test_chunk_magic():
    data = b'\x00' * 4 + DUMMY[4:]

    assert Dummy(data).magic.value == 0

    with pytest.raises(MagicException) as e:
        Dummy(data, compliant=Compliant.MAGIC)

    assert e.value.chain == ['magic']


@pytest.mark.parametrize('field_name', ['name', 'offset', 'father', 'size', 'raw', 'pack'])
def test_chunk_field_clashing_with_attribute(field_name):
    with pytest.raises(AttributeError) as e:
        type(Chunk)('Clash', (Chunk,), {field_name: StructField('I', offset=0x00)})

    assert field_name in str(e.value)


def test_chunk_field_redeclared_in_subclass():
    class Son(Dummy):
        count = StructField('I', offset=0x04)

    assert Son(DUMMY).count.value == 3


def test_chunk_str():
    assert str(Dummy(DUMMY)).splitlines() == [
        'magic: <StructField(0xcafebabe)>',
        'count: <StructField(0x3)>',
        "label: <StringField(b'miao')>",
        'crc: <ChecksumField(0x0)>',
    ]

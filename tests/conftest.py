"""
Shared fixtures: synthetic save files built field by field.
"""
import struct

import pytest
from bitstring import BitArray, Bits

from d2struct.d2s import D2S_MAGIC, STATS_OFFSET, AttributeKind


# (kind, width, value) in the order they are read, that is from the tail of the section
DEFAULT_ATTRIBUTES = [
    (AttributeKind.STRENGTH, 10, 30),
    (AttributeKind.ENERGY, 10, 10),
    (AttributeKind.DEXTERITY, 10, 20),
    (AttributeKind.VITALITY, 10, 25),
    (AttributeKind.HIT_POINTS, 21, 14336),
    (AttributeKind.MAX_HEALTH, 21, 14336),
    (AttributeKind.MANA, 21, 2560),
    (AttributeKind.MAX_MANA, 21, 2560),
    (AttributeKind.STAMINA, 21, 23552),
    (AttributeKind.MAX_STAMINA, 21, 23552),
    (AttributeKind.LEVEL, 7, 30),
    (AttributeKind.EXPERIENCE, 32, 1000000),
    (AttributeKind.GOLD, 25, 1234),
    (AttributeKind.GOLD_STASH, 25, 50000),
]

DEFAULT_SKILLS = bytes(range(30))


def _build_block(attributes, head=''):
    '''Encode the attributes the way they are stored: the first one read sits at
    the tail of the logical bit sequence, which is the file bytes reversed.'''
    sequence = BitArray()
    for kind, width, value in attributes:
        tag = kind.value if isinstance(kind, AttributeKind) else kind
        sequence.prepend(Bits(uint=value, length=width) + Bits(uint=tag, length=9))

    if head:
        sequence.prepend(Bits(bin=head))

    padding = -len(sequence) % 8
    if padding:
        sequence.prepend(Bits(bin='0' * padding))

    return bytes(reversed(sequence.bytes))


def _build_save(attributes=None, block=None, skills=DEFAULT_SKILLS, magic=D2S_MAGIC,
                character_class=4, level=30, trailer=b'JM\x00\x00'):
    if block is None:
        block = _build_block(DEFAULT_ATTRIBUTES if attributes is None else attributes)

    data = bytearray(STATS_OFFSET)
    struct.pack_into('<II', data, 0x00, magic, 96)
    data[0x28] = character_class
    data[0x2b] = level
    data[765:767] = b'gf'

    data += block + b'if' + skills + trailer
    struct.pack_into('<I', data, 0x08, len(data))

    return bytes(data)


@pytest.fixture()
def default_attributes():
    return list(DEFAULT_ATTRIBUTES)


@pytest.fixture()
def build_block():
    return _build_block


@pytest.fixture()
def build_save():
    return _build_save


@pytest.fixture()
def save_data():
    return _build_save()


@pytest.fixture()
def save_path(tmp_path, save_data):
    path = tmp_path / 'Paul.d2s'
    path.write_bytes(save_data)

    return path

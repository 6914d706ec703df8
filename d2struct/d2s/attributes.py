'''
# Character attributes

The attributes (strength, gold, experience, ...) are stored right after the
fixed part of the save as a bit-packed list of (tag, value) couples. Using the
logical bit sequence of the section (see d2struct.bits) the list has to be read
backward from its tail:

    ... | value N | tag N | ... | value 1 | tag 1 |
                                                  ^ start here

Each tag is 9 bits wide and tells which attribute follows and so how many bits
its value takes. The list ends with the stash gold: whatever comes before it is
never interpreted.

Since the length of the values depends on the tags, the position of each value
is remembered while parsing and reused as it is when writing back: only the bits
of the values change, tags and anything not understood are left untouched.
'''
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .. import bits as bitseq
from ..exceptions import ContractException, UnpackException, UnrecoverableException
from .enum import AttributeKind


logger = logging.getLogger(__name__)

TAG_WIDTH = 9


@dataclass(frozen=True)
class AttributeDefinition:
    kind: AttributeKind
    width: int

    @property
    def tag(self) -> int:
        return self.kind.value

    def fits(self, value) -> bool:
        return isinstance(value, int) and not isinstance(value, bool) and 0 <= value < (1 << self.width)


ATTRIBUTES = (
    AttributeDefinition(AttributeKind.STRENGTH, 10),
    AttributeDefinition(AttributeKind.ENERGY, 10),
    AttributeDefinition(AttributeKind.DEXTERITY, 10),
    AttributeDefinition(AttributeKind.VITALITY, 10),
    AttributeDefinition(AttributeKind.NEW_POINTS, 10),
    AttributeDefinition(AttributeKind.NEW_SKILLS, 8),
    AttributeDefinition(AttributeKind.HIT_POINTS, 21),
    AttributeDefinition(AttributeKind.MAX_HEALTH, 21),
    AttributeDefinition(AttributeKind.MANA, 21),
    AttributeDefinition(AttributeKind.MAX_MANA, 21),
    AttributeDefinition(AttributeKind.STAMINA, 21),
    AttributeDefinition(AttributeKind.MAX_STAMINA, 21),
    AttributeDefinition(AttributeKind.LEVEL, 7),
    AttributeDefinition(AttributeKind.EXPERIENCE, 32),
    AttributeDefinition(AttributeKind.GOLD, 25),
    AttributeDefinition(AttributeKind.GOLD_STASH, 25),
)

# the parsing stops as soon as this attribute is read
TERMINAL_KIND = AttributeKind.GOLD_STASH


@dataclass
class AttributeRecord:
    definition: AttributeDefinition
    value: int = 0
    offset: int = 0  # position of the value in the logical bit sequence
    present: bool = False

    @property
    def kind(self) -> AttributeKind:
        return self.definition.kind

    @property
    def width(self) -> int:
        return self.definition.width


class AttributeBlock(object):
    """All the attributes of a character, one record per kind, in catalog order."""

    def __init__(self, definitions=ATTRIBUTES, terminal=TERMINAL_KIND):
        self.definitions = tuple(definitions)
        self.terminal = terminal
        self._by_tag = {_.tag: _ for _ in self.definitions}
        self.records: Dict[AttributeKind, AttributeRecord] = self._new_records()

    @classmethod
    def load(cls, data: bytes, **kwargs) -> "AttributeBlock":
        block = cls(**kwargs)
        block.unpack(data)

        return block

    def _new_records(self) -> Dict[AttributeKind, AttributeRecord]:
        return {_.kind: AttributeRecord(_) for _ in self.definitions}

    def __repr__(self):
        values = ', '.join(f'{_.kind.label}={_.value}' for _ in self)
        return f'<{self.__class__.__name__}({values})>'

    def __iter__(self) -> Iterator[AttributeRecord]:
        '''Iterate over the attributes present in the file.'''
        return (_ for _ in self.records.values() if _.present)

    def __contains__(self, kind) -> bool:
        record = self.records.get(kind)
        return record is not None and record.present

    def __getitem__(self, kind) -> AttributeRecord:
        if isinstance(kind, str):
            try:
                kind = AttributeKind[kind.upper()]
            except KeyError:
                raise ContractException(message=f'unknown attribute \'{kind}\'')

        record = self.records.get(kind)
        if record is None:
            raise ContractException(message=f'unknown attribute {kind!r}')

        return record

    def present(self) -> List[AttributeRecord]:
        return list(self)

    def get(self, kind) -> Optional[int]:
        '''Value of the attribute or None if the file doesn't have it.'''
        record = self[kind]
        return record.value if record.present else None

    def set(self, kind, value: int) -> None:
        '''Change the value in memory only: use pack() to encode it.'''
        record = self[kind]

        if not record.present:
            raise ContractException(message=f'attribute {record.kind.label} is not present in the file')

        if not record.definition.fits(value):
            raise ContractException(
                message=f'{value!r} doesn\'t fit the {record.width} bits of attribute {record.kind.label}')

        record.value = value

    def unpack(self, data: bytes) -> "AttributeBlock":
        bits = bitseq.encode(data)
        records = self._new_records()

        cursor = len(bits)
        while cursor >= TAG_WIDTH:
            cursor -= TAG_WIDTH
            tag = bitseq.read_uint(bits, cursor, TAG_WIDTH)

            definition = self._by_tag.get(tag)
            if definition is None:
                raise UnrecoverableException(message=f'found unknown attribute tag {tag} at bit {cursor}')

            if cursor < definition.width:
                raise UnpackException(
                    message=f'attribute {definition.kind.label} at bit {cursor} needs {definition.width} bits, '
                            f'only {cursor} left')

            cursor -= definition.width

            record = records[definition.kind]
            if record.present:
                logger.warning(f'attribute {definition.kind.label} found twice, keeping the last one')

            record.value = bitseq.read_uint(bits, cursor, definition.width)
            record.offset = cursor
            record.present = True

            logger.debug(f'found attribute {definition.kind.label}={record.value} at bit {cursor}')

            if definition.kind is self.terminal:
                break

        # nothing is kept from a failed parsing
        self.records = records

        return self

    def pack(self, data: bytes) -> bytes:
        '''Encode the present attributes over the original bytes of the section
        so that whatever was not parsed is preserved.'''
        bits = bitseq.encode(data)

        for record in self:
            if record.offset + record.width > len(bits):
                raise ContractException(
                    message=f'attribute {record.kind.label} is outside the {len(data)} bytes given')

            bitseq.write_uint(bits, record.offset, record.width, record.value)

        return bitseq.decode(bits)

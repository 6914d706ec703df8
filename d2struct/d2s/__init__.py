'''
# Character save file (.d2s)

The file has a fixed structure up to the attributes section, after that the
data is of variable length and the sections are found looking for their
two-byte headers.

    .------------------------------------.
    | 0x000  magic (0xaa55aa55)          |
    | 0x004  version                     |
    | 0x008  file size                   |
    | 0x00c  checksum                    |
    | 0x028  character class             |
    | 0x02b  level                       |
    |  ...                               |
    | 0x2ff  attributes (bit-packed)     |
    |  ...   'if' + 30 skill levels      |
    |  ...   items, not decoded          |
    '------------------------------------'

All the integers are little endian. The checksum covers the whole file and must
be recomputed after any change, save() does that.
'''
import copy
from pathlib import Path

from ..core import Chunk
from .. import fields
from ..enum import Compliant
from ..common.checksum import ChecksumField
from ..exceptions import ContractException
from ..streams import Backend, atomic_write
from .attributes import AttributeBlock, AttributeRecord
from .enum import AttributeKind, CharacterClass
from .utils import SECTION_MARKER, find_section


D2S_MAGIC = 0xaa55aa55
STATS_OFFSET = 767
N_SKILLS = 30


class D2SFile(Chunk):
    magic           = fields.StructField('I', default=D2S_MAGIC, offset=0x00, is_magic=True)
    version         = fields.StructField('I', offset=0x04)
    length          = fields.StructField('I', offset=0x08)
    checksum        = ChecksumField(offset=0x0c)
    character_class = fields.StructField('B', enum=CharacterClass, offset=0x28)
    level           = fields.StructField('B', offset=0x2b)
    skill_levels    = fields.StringField(N_SKILLS)  # offset known once the section is found

    reserved = Chunk.reserved + ('attributes',)

    def __init__(self, source=None, compliant=Compliant.NONE, **kwargs):
        self.attributes = AttributeBlock()
        self._skills_offset = None
        super().__init__(source, compliant=compliant, **kwargs)

    @classmethod
    def load(cls, path, **kwargs) -> "D2SFile":
        return cls(Path(path), **kwargs)

    @property
    def stats_offset(self) -> int:
        return STATS_OFFSET

    @property
    def skills_offset(self) -> int:
        '''Offset of the skills section, that is where the attributes end.'''
        return self._skills_offset

    def unpack(self, stream=None):
        '''Locate the sections, parse the attributes and check the header of the
        new data: the instance is updated only if all of them succeed.'''
        backend = self.get_backend()
        if stream is not None:
            backend = Backend(stream.read_all())
            self.logger.debug(f'read {len(backend)} bytes from {stream!r}')

        data = backend.data
        skills_offset = find_section(data, STATS_OFFSET)
        attributes = AttributeBlock.load(data[STATS_OFFSET:skills_offset])

        previous = self._backend, self.skill_levels.offset
        self._backend = backend
        self.skill_levels.offset = skills_offset + len(SECTION_MARKER)
        try:
            super().unpack()
        except Exception:
            self._backend, self.skill_levels.offset = previous
            raise

        self.attributes = attributes
        self._skills_offset = skills_offset

    def save(self, path) -> None:
        '''Write the file with an updated checksum, either completely or not at all.'''
        raw = self.pack()
        self.logger.debug(f'saving {len(raw)} bytes with checksum 0x{self.checksum.value:08x} to {path}')
        atomic_write(Path(path), raw)

    def copy(self) -> "D2SFile":
        return copy.deepcopy(self)

    def file_size(self) -> int:
        return len(self.get_backend())

    def file_checksum(self) -> int:
        return self.checksum.calculate()

    def get_attribute(self, kind):
        return self.attributes.get(kind)

    def set_attribute(self, kind, value: int) -> None:
        '''Change an attribute and encode it back in the buffer.'''
        self.attributes.set(kind, value)

        data = self.get_backend().data
        data[STATS_OFFSET:self._skills_offset] = self.attributes.pack(data[STATS_OFFSET:self._skills_offset])

    def skills(self):
        return list(self.skill_levels.value)

    def set_skill(self, skill_id: int, value: int) -> None:
        '''Sets the level (usually 0..99) of the skill with the given id (0..29)'''
        if not isinstance(skill_id, int) or isinstance(skill_id, bool) or not 0 <= skill_id < N_SKILLS:
            raise ContractException(chain=['skill_levels'], message=f'skill id {skill_id!r} is not in [0, {N_SKILLS})')

        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 0xff:
            raise ContractException(chain=['skill_levels'], message=f'skill level {value!r} doesn\'t fit a byte')

        levels = bytearray(self.skill_levels.value)
        levels[skill_id] = value
        self.skill_levels.value = levels


__all__ = [
    'AttributeBlock',
    'AttributeKind',
    'AttributeRecord',
    'CharacterClass',
    'D2SFile',
    'D2S_MAGIC',
    'N_SKILLS',
    'STATS_OFFSET',
]

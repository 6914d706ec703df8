"""
Core module for the abstraction of a file format

"""
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream, Backend
from .exceptions import (
    ChunkUnpackException,
    UnpackException,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: a Chunk owns
    the buffer and its fields are views at fixed offsets into it.

    The fields are declared as class attributes, like

        class Header(Chunk):
            magic   = fields.StructField('I', offset=0x00, default=0xcafe, is_magic=True)
            version = fields.StructField('I', offset=0x04)

    and each instance gets its own copy of them bound to its buffer.
    """

    def __init__(self, source=None, **kwargs):
        super().__init__(**kwargs)
        self._backend = Backend()

        # we can unpack if some data is passed with the constructor
        if source is not None:
            with Stream(source) as stream:
                self.logger.debug('unpacking \'%s\' from %r' % (self.__class__.__name__, stream))
                self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    def _get_size(self):
        return len(self.get_backend())

    def _get_raw(self) -> bytes:
        return self.get_backend().getvalue()

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def pack(self) -> bytes:
        '''Update the fields whose value depends on the others (checksums)
        and return the encoded chunk.'''
        for field_name, field_instance in self.get_fields():
            self.logger.debug('packing %s.%s' % (self.__class__.__name__, field_name))
            field_instance._update_value()

        return self.raw

    def unpack(self, stream=None):
        '''Take the binary data and check that each field makes sense
        at its offset.

        If no stream is passed the data already in the backend is used.
        '''
        if stream is not None:
            self._backend = Backend(stream.read_all())

        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %s' % (self.__class__.__name__, field_name, field.offset))

            try:
                field.unpack()
            except (UnpackException, ChunkUnpackException) as e:
                chain = e.chain if isinstance(e, ChunkUnpackException) else []
                chain.append(field_name)
                raise ChunkUnpackException(chain=chain, message=e.message) from e

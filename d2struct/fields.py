"""
A Field is "fundamental" datatype from the format point of view: something living
at a known offset of the buffer shared with its father, directly readable and writable.
"""
import logging
import struct

from .enum import Compliant
from .meta import FieldBase, Endianess
from .streams import Backend
from .exceptions import ContractException, UnpackException, MagicException


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic
        self._backend = None

    def __str__(self):
        return str(self.value)

    def get_backend(self) -> Backend:
        """This is the backend used by the field for storage operations: the one of
        the father if any, otherwise a private zeroed buffer big enough for the field."""
        if self.father is not None:
            return self.father.get_backend()

        if self._backend is None:
            self._backend = Backend(b'\x00' * (self.get_offset() + self.size))

        return self._backend

    def get_offset(self) -> int:
        return self.offset if self.offset is not None else 0

    def _chain(self):
        return [self.name] if self.name else []

    def is_compliant(self, level):
        '''Returns True if this field, or a father it inherits from, requires the given level'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_value(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_value() not implemented")

    def _set_value(self, value):
        raise NotImplementedError(f"method {self.__class__.__name__}._set_value() not implemented")

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        return self.get_backend().seek(self.get_offset()).read(self.size)

    def _set_raw(self, raw: bytes) -> None:
        if len(raw) != self.size:
            raise ContractException(chain=self._chain(),
                                    message=f'raw value must be {self.size} bytes, not {len(raw)}')

        self.get_backend().seek(self.get_offset()).write(raw)

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def _update_value(self):
        '''This is used to update the binary value before packing'''
        pass

    def unpack(self):
        '''Check the field can be read from the backend; subclasses add the
        checks specific to their kind of data.'''
        if self.offset is None:
            raise UnpackException(chain=self._chain(), message='offset is not defined')

        end = self.offset + self.size
        available = len(self.get_backend())
        if end > available:
            raise UnpackException(chain=self._chain(),
                                  message=f'needs bytes up to offset {end} but the data is {available} bytes long')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __repr__(self):
        if not self.enum:
            return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

        return f'<{self.__class__.__name__}({self.value!r})>'

    def __str__(self):
        width = self.size * 2  # we want to be as large as possible
        formatter = '0x%%0%dx' % width
        return formatter % self.integer

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    @property
    def integer(self) -> int:
        '''The value as stored, without the enum conversion.'''
        raw = self._get_raw()
        try:
            return struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            raise UnpackException(chain=self._chain(), message=str(e))

    def _get_value(self):
        value = self.integer
        if not self.enum:
            return value

        try:
            return self.enum(value)
        except ValueError:
            return None

    def _set_value(self, value) -> None:
        if self.enum and isinstance(value, self.enum):
            value = value.value

        try:
            raw = struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ContractException(chain=self._chain(), message=str(e))

        self._set_raw(raw)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _unpack_enum(self, value: int) -> None:
        try:
            self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise UnpackException(chain=self._chain(),
                                      message=f'{self.enum.__name__} has no element with value 0x{value:x}')

            self.logger.warning(f'enum {self.enum!r} doesn\'t have element with value 0x{value:x} in it')

    def unpack(self):
        super().unpack()

        value = self.integer
        if self.enum:
            self._unpack_enum(value)

        if self.is_magic and value != self.default:
            self.logger.warning(f'the magic doesn\'t correspond: 0x{value:08x} instead of 0x{self.default:08x}')
            if self.is_compliant(Compliant.MAGIC):
                raise MagicException(chain=self._chain(), message=f'unexpected magic 0x{value:08x}')


class StringField(Field):
    """Represent a contiguous chunk of bytes."""

    def __init__(self, n, **kw):
        self.length = n
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    def _get_size(self):
        return self.length

    def _get_value(self):
        return self._get_raw()

    def _set_value(self, value) -> None:
        if len(value) != self.length:
            raise ContractException(chain=self._chain(),
                                    message=f'you are trying to set a value with the wrong size (that is {self.length} bytes)')

        self._set_raw(bytes(value))

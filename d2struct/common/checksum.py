'''
We are implementing fields to handle the checksum of the whole file.
'''

from .. import fields


MASK_32 = 0xffffffff


def rotate_add_checksum(data: bytes) -> int:
    '''The accumulator starts with the first byte, then for each of the
    following bytes it is rotated left by one bit and the byte is added,
    everything modulo 2**32.'''
    checksum = 0
    for value in data:
        checksum = ((checksum << 1) | (checksum >> 31)) & MASK_32
        checksum = (checksum + value) & MASK_32

    return checksum


class ChecksumField(fields.StructField):
    """32-bit checksum of all the data of the root chunk, computed as if
    this field contained zero.

    See rotate_add_checksum() for the algorithm.
    """

    def __init__(self, *args, **kwargs):
        super().__init__('I', *args, **kwargs)

    def calculate(self) -> int:
        data = bytearray(self.get_backend().getvalue())
        offset = self.get_offset()
        data[offset:offset + self.size] = bytes(self.size)

        return rotate_add_checksum(data)

    def is_valid(self) -> bool:
        return self.value == self.calculate()

    def _update_value(self):
        self.value = self.calculate()

"""
Bit-level view of a byte range.

The attribute block of a save file is read starting from its end: the bytes are
taken from the highest address down to the lowest and each one contributes its
bits most-significant first. So for the bytes

    offset:  0         1
    value:   0x01      0x80

the logical bit sequence is

    10000000 00000001

where position 0 is the MSB of the last byte and the final position is the LSB
of the first one. Values inside the sequence are unsigned, MSB first.
"""
from bitstring import BitArray, Bits

from .exceptions import UnpackException


def encode(data: bytes) -> BitArray:
    '''Build the logical bit sequence of the given bytes.'''
    return BitArray(bytes(reversed(data)))


def decode(bits: Bits) -> bytes:
    '''Inverse of encode(): the first 8 bits are the last byte and so on.'''
    if len(bits) % 8:
        raise UnpackException(message=f'bit sequence of length {len(bits)} is not byte aligned')

    return bytes(reversed(bits.bytes))


def read_uint(bits: Bits, offset: int, width: int) -> int:
    if offset < 0 or offset + width > len(bits):
        raise UnpackException(message=f'span [{offset}, {offset + width}) outside a sequence of {len(bits)} bits')

    return bits[offset:offset + width].uint


def write_uint(bits: BitArray, offset: int, width: int, value: int) -> None:
    '''Overwrite in place the span [offset, offset + width) with value,
    left padded with zeros.'''
    if offset < 0 or offset + width > len(bits):
        raise UnpackException(message=f'span [{offset}, {offset + width}) outside a sequence of {len(bits)} bits')

    bits[offset:offset + width] = Bits(uint=value, length=width)

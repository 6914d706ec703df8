"""
# d2struct: character save files for humans.

A save file is a binary buffer with a fixed header followed by sections of
variable length. Here it is described as a Chunk, whose fields are views at
known offsets of a shared buffer, so that two operations are possible:

 1. unpack(): read the binary data, check each field makes sense and build a
    high-level representation of the variable parts (the attributes).

 2. pack(): update the fields depending on the rest of the data (the checksum)
    and return the binary data, byte for byte the original one except for what
    was changed.

Editing never moves data around: an attribute is rewritten in the very same bits
it was read from.
"""
__version__ = '0.0.1'

import logging

from ..exceptions import SectionNotFoundException


logger = logging.getLogger(__name__)

# start of the skills section, that is the end of the attributes one
SECTION_MARKER = b'if'


def find_section(data, start, marker=SECTION_MARKER):
    '''Return the offset of the first occurrence of marker at or after start.

    The save has a fixed structure up to the attributes section, after that
    the data is of variable length and the only way to find where the next
    section begins is to look for its header.'''
    offset = bytes(data).find(marker, start)
    if offset < 0:
        raise SectionNotFoundException(
            message=f'section marker {marker!r} not found after offset {start}, invalid file format?')

    logger.debug(f'section {marker!r} found at offset {offset}')

    return offset

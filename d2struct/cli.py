import argparse
import logging
import os
import sys

from . import __version__
from .d2s import D2S_MAGIC, D2SFile
from .exceptions import D2StructException


logger = logging.getLogger(__name__)


def dump_file_stats(d2s):
    print(f'''File size:     {d2s.file_size()}
Size:          {d2s.length.value}
Header:        0x{d2s.magic.value:08x}, expected: 0x{D2S_MAGIC:08x}
Version:       {d2s.version.value}
Checksum:      0x{d2s.checksum.value:08x}
File checksum: 0x{d2s.file_checksum():08x}''')


def dump_character_stats(d2s):
    print(f'Level:         {d2s.level.value}')
    character_class = d2s.character_class.value
    if character_class is not None:
        print(f'Class:         {character_class.label}')
    for record in d2s.attributes:
        print(f'{record.kind.label + ":":14} {record.value}')
    print(f'Skills: {d2s.skills()}')


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog='d2sinfo', description='Print the content of a character save file')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('input', metavar='INPUT', help='Input d2s file to use')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)

    try:
        d2s = D2SFile.load(args.input)
    except (D2StructException, OSError) as e:
        logger.debug('failed to load %s', args.input, exc_info=True)
        print(f'error: {args.input}: {e}', file=sys.stderr)
        return 1

    dump_file_stats(d2s)
    dump_character_stats(d2s)

    return 0

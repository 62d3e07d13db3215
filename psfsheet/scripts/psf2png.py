"""
Draw PC Screen Font to PNG glyph sheet
(c) 2019--2024 Rob Hagemans, licence: https://opensource.org/licenses/MIT
"""

import sys
import argparse

import psfsheet
from psfsheet.plumbing import wrap_main


def get_parser():
    parser = argparse.ArgumentParser(
        description='Draw the glyphs of a PSF font to a PNG image, 16 per row.'
    )
    parser.add_argument('infile', help='PSF file to read')
    parser.add_argument('outfile', help='PNG file to write')
    parser.add_argument(
        '--quiet', action='store_true', default=False,
        help='do not print the header and unicode table'
    )
    parser.add_argument(
        '--debug', action='store_true', default=False,
        help='enable debugging output'
    )
    parser.add_argument(
        '--version', action='version', version=f'psfsheet v{psfsheet.__version__}'
    )
    return parser


def main(argv=None):
    args = get_parser().parse_args(argv)
    report = None if args.quiet else print
    with wrap_main(args.debug):
        psfsheet.convert(args.infile, args.outfile, report=report)


if __name__ == '__main__':
    sys.exit(main())

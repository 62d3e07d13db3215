"""
psfsheet.storage.psf - PC Screen Font format

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from psfsheet.base.binary import ceildiv
from psfsheet.base.struct import little_endian as le
from psfsheet.base import (
    TruncatedHeader, GlyphDataTooSmall, UnexpectedEndOfTable,
    InvalidCodepointEncoding, ShortGlyphRead,
)


# PSF formats:
# https://www.win.tue.nl/~aeb/linux/kbd/font-formats-1.html

_PSF1_MAGIC = b'\x36\x04'
_PSF2_MAGIC = b'\x72\xb5\x4a\x86'

# PSF2 header, magic included
_PSF2_HEADER = le.Struct(
    magic='uint32',
    version='uint32',
    headersize='uint32',
    flags='uint32',
    length='uint32',
    charsize='uint32',
    height='uint32',
    width='uint32',
)

# flags field
_PSF2_HAS_UNICODE_TABLE = 0x01

# UTF-8 separator
_PSF2_SEPARATOR = b'\xFF'


class PSFHeader:
    """Decoded PSF2 header."""

    def __init__(self, props):
        self._props = props

    def __getattr__(self, attr):
        if attr.startswith('_'):
            raise AttributeError(attr)
        return getattr(self._props, attr)

    def __eq__(self, other):
        return isinstance(other, PSFHeader) and vars(self._props) == vars(other._props)

    def __repr__(self):
        return f'{type(self).__name__}({self._props!r})'

    def __str__(self):
        return (
            f'<Magic: 0x{self.magic:08x}, Version: {self.version}, '
            f'Header: {self.headersize}, Flags: 0x{self.flags:08x}, '
            f'Glyphs: {self.length}, Bytes per glyph: {self.charsize}, '
            f'Size: {self.width}x{self.height} >'
        )

    def __bytes__(self):
        return bytes(self._props)

    @classmethod
    def create(cls, **kwargs):
        """Create a header from field values; magic and header size default to PSF2."""
        kwargs.setdefault('magic', int.from_bytes(_PSF2_MAGIC, 'little'))
        kwargs.setdefault('headersize', _PSF2_HEADER.size)
        return cls(_PSF2_HEADER(**kwargs))

    @property
    def has_unicode_table(self):
        return bool(self.flags & _PSF2_HAS_UNICODE_TABLE)

    @property
    def table_offset(self):
        """Offset of the Unicode table, right after the glyph bitmaps."""
        return self.headersize + self.charsize * self.length

    @property
    def row_bytes(self):
        """Bytes used per pixel row in the glyph bitmap."""
        return ceildiv(self.width, 8)


def read_header(cursor):
    """Read the fixed-size PSF2 header at the current position."""
    data = cursor.read_exact(_PSF2_HEADER.size, TruncatedHeader, 'PSF header')
    header = PSFHeader(_PSF2_HEADER.from_bytes(data))
    magic = data[:len(_PSF2_MAGIC)]
    if magic[:len(_PSF1_MAGIC)] == _PSF1_MAGIC:
        logging.warning(
            'File has PSF v1 magic; decoding as PSF v2 will likely fail.'
        )
    elif magic != _PSF2_MAGIC:
        logging.warning(
            'Unexpected magic bytes %s; expected %s.', magic, _PSF2_MAGIC
        )
    logging.info('PSF properties:')
    for name, value in vars(header._props).items():
        logging.info('    %s: %s', name, value)
    charsize = header.height * header.row_bytes
    if header.charsize != charsize:
        logging.warning(
            'Inconsistent char size in PSF header: %d, expected %d.',
            header.charsize, charsize
        )
    return header


def validate_geometry(header):
    """Check that the glyph bitmaps can hold the glyph size."""
    # floor division: a trailing partial byte is not required
    if header.charsize < (header.width * header.height) // 8:
        raise GlyphDataTooSmall(
            f'Glyph data too small: {header.charsize} bytes per glyph '
            f'for {header.width}x{header.height} pixels.'
        )
    return header


def check_glyph_data(cursor, header):
    """Check that the stream holds all glyph bitmaps the header promises."""
    available = cursor.size()
    if available < header.table_offset:
        raise ShortGlyphRead(
            f'Glyph data truncated: {header.length} glyphs of '
            f'{header.charsize} bytes from offset {header.headersize} '
            f'need {header.table_offset} bytes, file has {available}.'
        )
    return header


def read_table_entry(cursor):
    """Read the bytes of one Unicode table entry, up to its separator."""
    return cursor.read_until(
        _PSF2_SEPARATOR, UnexpectedEndOfTable, 'Unicode table entry'
    )


def decode_codepoints(raw):
    """Decode UTF-8 table entry to a tuple of single code points."""
    try:
        return tuple(bytes(raw).decode('utf-8'))
    except UnicodeDecodeError as e:
        raise InvalidCodepointEncoding(
            f'Failed to decode UTF-8 in Unicode table '
            f'({e.reason} at byte {e.start}): {bytes(raw).hex(" ")}',
            raw
        ) from e


def read_unicode_table(cursor, header):
    """Read the Unicode table following the glyph bitmaps."""
    cursor.seek(header.table_offset)
    table = []
    for index in range(header.length):
        raw = read_table_entry(cursor)
        try:
            table.append(decode_codepoints(raw))
        except InvalidCodepointEncoding as e:
            raise InvalidCodepointEncoding(f'Glyph {index}: {e}', e.data) from e
    return tuple(table)


def read_glyph_bitmap(cursor, header, index=0):
    """Read the bitmap of one glyph at the current position."""
    try:
        return cursor.read_exact(header.charsize, ShortGlyphRead, 'glyph data')
    except ShortGlyphRead as e:
        raise ShortGlyphRead(f'Glyph {index}: {e}') from e


def iter_glyph_bitmaps(cursor, header):
    """Read glyph bitmaps in index order, from the start of the glyph data."""
    # the table reader, if used, has left us past the bitmaps
    cursor.seek(header.headersize)
    for index in range(header.length):
        yield read_glyph_bitmap(cursor, header, index)


def load_psf(cursor, on_header=None):
    """
    Read header and Unicode table of a PSF file.

    Returns the header and the glyph map, which is None if the file has
    no Unicode table. Glyph bitmaps are read separately through
    `iter_glyph_bitmaps`.
    on_header: callable receiving the header before it is checked
    """
    header = read_header(cursor)
    if on_header:
        on_header(header)
    validate_geometry(header)
    check_glyph_data(cursor, header)
    if header.has_unicode_table:
        glyph_map = read_unicode_table(cursor, header)
    else:
        glyph_map = None
    return header, glyph_map

"""
psfsheet test suite
psf decoder tests
"""

import io
import unittest

from psfsheet.base import (
    TruncatedHeader, GlyphDataTooSmall, UnexpectedEndOfTable,
    InvalidCodepointEncoding, ShortGlyphRead, FileFormatError,
)
from psfsheet.base.struct import little_endian as le, StructError
from psfsheet.storage import (
    PSFHeader, ByteCursor, read_header, validate_geometry, read_table_entry,
    decode_codepoints, read_unicode_table, iter_glyph_bitmaps, load_psf,
)
from .base import BaseTester, make_psf, cursor_on, BOX


class TestCursor(BaseTester):

    def test_read_exact(self):
        """Read exact number of bytes and advance."""
        cursor = cursor_on(b'abcdef')
        self.assertEqual(cursor.read_exact(4), b'abcd')
        self.assertEqual(cursor.tell(), 4)

    def test_read_exact_short(self):
        """Short read raises the requested error."""
        cursor = cursor_on(b'abc')
        with self.assertRaises(ShortGlyphRead):
            cursor.read_exact(4, ShortGlyphRead)

    def test_seek(self):
        """Seek to absolute offsets, back and forth."""
        cursor = cursor_on(b'abcdef')
        cursor.seek(4)
        self.assertEqual(cursor.read_exact(2), b'ef')
        cursor.seek(1)
        self.assertEqual(cursor.tell(), 1)
        self.assertEqual(cursor.read_exact(1), b'b')

    def test_read_until(self):
        """Scanner stops at and consumes the separator."""
        cursor = cursor_on(b'ab\xffcd\xff')
        self.assertEqual(cursor.read_until(b'\xff'), b'ab')
        self.assertEqual(cursor.tell(), 3)
        self.assertEqual(cursor.read_until(b'\xff'), b'cd')

    def test_size(self):
        """Size is the stream length and leaves the position alone."""
        cursor = cursor_on(b'abcdef')
        cursor.seek(2)
        self.assertEqual(cursor.size(), 6)
        self.assertEqual(cursor.tell(), 2)

    def test_read_until_end(self):
        """Scanner raises if no separator before end of stream."""
        cursor = cursor_on(b'abc')
        with self.assertRaises(UnexpectedEndOfTable):
            cursor.read_until(b'\xff', UnexpectedEndOfTable)


class TestStruct(BaseTester):

    def test_little_endian_fields(self):
        """Fields decode as consecutive little-endian 32-bit integers."""
        record = le.Struct(first='uint32', second='uint32')
        value = record.from_bytes(b'\x01\0\0\0\x02\x01\0\0')
        self.assertEqual(record.size, 8)
        self.assertEqual((value.first, value.second), (1, 0x0102))
        self.assertEqual(bytes(value), b'\x01\0\0\0\x02\x01\0\0')

    def test_short_buffer(self):
        """Decoding from too few bytes fails."""
        record = le.Struct(first='uint32')
        with self.assertRaises(StructError):
            record.from_bytes(b'\x01\0')

    def test_unknown_field_type(self):
        """Only 32-bit unsigned fields are defined."""
        with self.assertRaises(ValueError):
            le.Struct(first='uint16')


class TestHeader(BaseTester):

    def test_read_header(self):
        """Decode all header fields."""
        data = make_psf([BOX] * 3, table=[b'A', b'B', b''])
        header = read_header(cursor_on(data))
        self.assertEqual(header.magic, 0x864ab572)
        self.assertEqual(header.version, 0)
        self.assertEqual(header.headersize, 32)
        self.assertEqual(header.flags, 1)
        self.assertEqual(header.length, 3)
        self.assertEqual(header.charsize, 8)
        self.assertEqual(header.height, 8)
        self.assertEqual(header.width, 8)
        self.assertTrue(header.has_unicode_table)
        self.assertEqual(header.table_offset, 32 + 3*8)

    def test_header_little_endian(self):
        """Header fields are little-endian."""
        data = make_psf([b'\0' * 0x0102], width=0x10, height=0x81, charsize=0x0102)
        header = read_header(cursor_on(data))
        self.assertEqual(data[20:24], b'\x02\x01\0\0')
        self.assertEqual(header.charsize, 0x0102)
        self.assertEqual(header.height, 0x81)

    def test_header_summary(self):
        """Summary string lists the header fields."""
        header = read_header(cursor_on(make_psf([BOX])))
        self.assertEqual(
            str(header),
            '<Magic: 0x864ab572, Version: 0, Header: 32, Flags: 0x00000000, '
            'Glyphs: 1, Bytes per glyph: 8, Size: 8x8 >'
        )

    def test_truncated_header(self):
        """Fewer than 32 bytes fails."""
        data = make_psf([BOX])[:31]
        with self.assertRaises(TruncatedHeader):
            read_header(cursor_on(data))

    def test_empty_file(self):
        """An empty file has a truncated header."""
        with self.assertRaises(TruncatedHeader):
            read_header(cursor_on(b''))

    def test_bad_magic_accepted(self):
        """Unknown magic is reported but not rejected."""
        data = make_psf([BOX], magic=0x12345678)
        with self.assertLogs(level='WARNING'):
            header = read_header(cursor_on(data))
        self.assertEqual(header.magic, 0x12345678)
        self.assertEqual(header.length, 1)

    def test_inconsistent_charsize_accepted(self):
        """Oversized char size is reported but kept."""
        data = make_psf([BOX + b'\0\0'], charsize=10)
        with self.assertLogs(level='WARNING'):
            header = read_header(cursor_on(data))
        self.assertEqual(header.charsize, 10)

    def test_create_roundtrip(self):
        """A created header reads back equal."""
        header = PSFHeader.create(length=2, charsize=16, height=16, width=8, flags=1)
        self.assertEqual(read_header(cursor_on(bytes(header))), header)


class TestGeometry(BaseTester):

    def _header(self, width, height, charsize):
        return PSFHeader.create(
            length=1, charsize=charsize, height=height, width=width
        )

    def test_reject_too_small(self):
        """8x8 glyphs don't fit in 7 bytes."""
        with self.assertRaises(GlyphDataTooSmall):
            validate_geometry(self._header(8, 8, 7))

    def test_accept_exact(self):
        """8x8 glyphs fit in 8 bytes."""
        validate_geometry(self._header(8, 8, 8))

    def test_accept_larger(self):
        """Extra bytes per glyph are allowed."""
        validate_geometry(self._header(8, 8, 9))

    def test_floor_division(self):
        """The check uses floor division on the pixel count."""
        # 12*3 = 36 bits, 36 // 8 = 4 bytes passes although 5 would be needed
        validate_geometry(self._header(12, 3, 4))
        with self.assertRaises(GlyphDataTooSmall):
            validate_geometry(self._header(12, 3, 3))

    def test_load_rejects(self):
        """Loading stops at the geometry check, before the table."""
        data = make_psf([BOX[:7]], charsize=7, table=[b'\xc0'])
        with self.assertRaises(GlyphDataTooSmall):
            load_psf(cursor_on(data))


class TestUnicodeTable(BaseTester):

    def test_single_ascii(self):
        """Entry 41 FF is 'A'."""
        cursor = cursor_on(b'\x41\xff')
        self.assertEqual(decode_codepoints(read_table_entry(cursor)), ('A',))

    def test_empty_entry(self):
        """Entry FF is empty."""
        cursor = cursor_on(b'\xff')
        self.assertEqual(decode_codepoints(read_table_entry(cursor)), ())

    def test_multibyte(self):
        """Entries hold code points of 1 to 4 bytes."""
        raw = 'aé€😀'.encode('utf-8')
        cursor = cursor_on(raw + b'\xff')
        self.assertEqual(
            decode_codepoints(read_table_entry(cursor)),
            ('a', 'é', '€', '😀')
        )

    def test_invalid_leading_byte(self):
        """Entry C0 FF is not valid UTF-8."""
        cursor = cursor_on(b'\xc0\xff')
        with self.assertRaises(InvalidCodepointEncoding) as cm:
            decode_codepoints(read_table_entry(cursor))
        self.assertEqual(cm.exception.data, b'\xc0')
        self.assertIn('c0', str(cm.exception))

    def test_invalid_is_format_error(self):
        """Decoding errors are file format errors."""
        with self.assertRaises(FileFormatError):
            decode_codepoints(b'A\xe2\x82')

    def test_unexpected_end(self):
        """Table that ends without separator fails."""
        data = make_psf([BOX, BOX], table=[b'A']) + b'B'
        with self.assertRaises(UnexpectedEndOfTable):
            load_psf(cursor_on(data))

    def test_missing_table(self):
        """Flag set but no table at all."""
        data = make_psf([BOX], flags=1)
        with self.assertRaises(UnexpectedEndOfTable):
            load_psf(cursor_on(data))

    def test_read_table(self):
        """Table is read from after the bitmaps, one entry per glyph."""
        data = make_psf([BOX] * 3, table=[b'A', b'', 'ßẞ'.encode('utf-8')])
        cursor = cursor_on(data)
        header = read_header(cursor)
        table = read_unicode_table(cursor, header)
        self.assertEqual(table, (('A',), (), ('ß', 'ẞ')))
        self.assertEqual(cursor.tell(), len(data))

    def test_error_names_glyph(self):
        """Decoding error message gives the glyph index."""
        data = make_psf([BOX] * 2, table=[b'A', b'\xc0'])
        with self.assertRaises(InvalidCodepointEncoding) as cm:
            load_psf(cursor_on(data))
        self.assertIn('Glyph 1', str(cm.exception))
        self.assertEqual(cm.exception.data, b'\xc0')

    def test_flag_bit(self):
        """Only bit 0 of the flags selects the table."""
        data = make_psf([BOX], table=[b'A'], flags=3)
        _, glyph_map = load_psf(cursor_on(data))
        self.assertEqual(glyph_map, (('A',),))
        data = make_psf([BOX], flags=2)
        _, glyph_map = load_psf(cursor_on(data))
        self.assertIsNone(glyph_map)


class TestBitmaps(BaseTester):

    def test_rewind_after_table(self):
        """Bitmaps are read from the header size after the table was read."""
        glyphs = [BOX, bytes(8), bytes(range(8))]
        data = make_psf(glyphs, table=[b'A', b'B', b'C'])
        cursor = cursor_on(data)
        header, glyph_map = load_psf(cursor)
        self.assertEqual(cursor.tell(), len(data))
        self.assertEqual(list(iter_glyph_bitmaps(cursor, header)), glyphs)

    def test_seek_without_table(self):
        """Bitmaps start at the header size even if the cursor moved."""
        glyphs = [BOX, bytes(range(8))]
        data = make_psf(glyphs)
        cursor = cursor_on(data)
        header, glyph_map = load_psf(cursor)
        self.assertIsNone(glyph_map)
        cursor.seek(3)
        self.assertEqual(list(iter_glyph_bitmaps(cursor, header)), glyphs)

    def test_header_padding(self):
        """Header size beyond the fixed header is skipped."""
        data = make_psf([BOX], headersize=40, table=[b'A'])
        cursor = cursor_on(data)
        header, glyph_map = load_psf(cursor)
        self.assertEqual(glyph_map, (('A',),))
        self.assertEqual(list(iter_glyph_bitmaps(cursor, header)), [BOX])

    def test_short_read(self):
        """Last glyph one byte short is rejected before any glyph is read."""
        data = make_psf([BOX, BOX])[:-1]
        with self.assertRaises(ShortGlyphRead) as cm:
            load_psf(cursor_on(data))
        self.assertIn('need 48 bytes, file has 47', str(cm.exception))

    def test_short_read_per_glyph(self):
        """Reading a glyph past the end fails instead of padding."""
        data = make_psf([BOX, BOX])[:-1]
        cursor = cursor_on(data)
        header = read_header(cursor)
        bitmaps = iter_glyph_bitmaps(cursor, header)
        self.assertEqual(next(bitmaps), BOX)
        with self.assertRaises(ShortGlyphRead) as cm:
            next(bitmaps)
        self.assertIn('Glyph 1', str(cm.exception))
        self.assertIn('expected 8 bytes, got 7', str(cm.exception))

    def test_huge_glyph_count(self):
        """A glyph count far beyond the file size fails on the size check."""
        data = make_psf([BOX])
        data = data[:16] + (2**28).to_bytes(4, 'little') + data[20:]
        cursor = cursor_on(data)
        with self.assertRaises(ShortGlyphRead) as cm:
            load_psf(cursor)
        self.assertIn(f'need {32 + 8 * 2**28} bytes', str(cm.exception))
        self.assertIn(f'file has {len(data)}', str(cm.exception))

    def test_huge_glyph_size(self):
        """A glyph size far beyond the file size fails on the size check."""
        data = make_psf(
            [BOX], width=65535, height=65535, charsize=0x20000000
        )
        with self.assertLogs(level='WARNING'):
            with self.assertRaises(ShortGlyphRead) as cm:
                load_psf(cursor_on(data))
        self.assertIn(f'need {32 + 0x20000000} bytes', str(cm.exception))

    def test_size_check_before_table(self):
        """Missing bitmaps are reported even if the table is unreadable."""
        data = make_psf([BOX, BOX], table=[b'A', b'B'])[:40]
        with self.assertRaises(ShortGlyphRead):
            load_psf(cursor_on(data))


if __name__ == '__main__':
    unittest.main()

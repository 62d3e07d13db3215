"""
psfsheet.storage - read PSF files and write images

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .streams import Stream, ByteCursor
from .psf import (
    PSFHeader, read_header, validate_geometry, read_table_entry,
    check_glyph_data, decode_codepoints, read_unicode_table, read_glyph_bitmap,
    iter_glyph_bitmaps, load_psf,
)
from .image import save_png, canvas_to_image

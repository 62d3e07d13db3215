"""
psfsheet - render PC Screen Font files to glyph sheets

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

from .constants import VERSION as __version__
from .base import (
    PSFSheetError, FileFormatError, OpenFailure, EncodeFailure,
    TruncatedHeader, GlyphDataTooSmall, UnexpectedEndOfTable,
    InvalidCodepointEncoding, ShortGlyphRead,
)
from .storage import PSFHeader, load_psf, save_png
from .render import render_sheet, compute_canvas_size, Canvas
from .convert import convert

"""
psfsheet.render.sheet - draw all glyphs of a font onto a sheet

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .canvas import (
    Canvas, compute_canvas_size, paint_background, draw_glyph, EMPTY_COLOUR
)


def render_sheet(header, glyph_map, bitmaps):
    """
    Draw glyph bitmaps in index order onto a new canvas.

    header: PSF header
    glyph_map: tuple of code point sequences per glyph, or None if no unicode table
    bitmaps: iterable of glyph bitmaps, consumed in order
    """
    width, height = compute_canvas_size(header)
    logging.debug('Creating %dx%d canvas.', width, height)
    canvas = paint_background(Canvas(width, height), EMPTY_COLOUR)
    has_mapping = glyph_map is not None
    count = 0
    for index, bitmap in zip(range(header.length), bitmaps):
        unmapped = has_mapping and not glyph_map[index]
        draw_glyph(
            canvas, index, bitmap, header,
            has_mapping=has_mapping, unmapped=unmapped,
        )
        count += 1
    logging.debug('Drew %d glyphs.', count)
    return canvas

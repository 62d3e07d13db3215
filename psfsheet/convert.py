"""
psfsheet.convert - convert PSF font to glyph sheet image

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from .storage import Stream, ByteCursor, load_psf, iter_glyph_bitmaps, save_png
from .render import render_sheet, glyph_table_lines


def convert(infile, outfile, *, report=None):
    """
    Render all glyphs of a PSF font to a PNG glyph sheet.

    infile: path or binary stream with the PSF font
    outfile: path or binary stream for the image
    report: callable receiving the header summary and the glyph table lines
    Returns the PSF header.
    """
    if report:
        on_header = lambda _header: report(f'Header: {_header}')
    else:
        on_header = None
    with Stream(infile, 'r') as instream:
        cursor = ByteCursor(instream)
        header, glyph_map = load_psf(cursor, on_header=on_header)
        if report:
            for line in glyph_table_lines(header, glyph_map):
                report(line)
        canvas = render_sheet(
            header, glyph_map, iter_glyph_bitmaps(cursor, header)
        )
    # only create the output once the whole sheet has been rendered
    with Stream(outfile, 'w') as outstream:
        save_png(canvas, outstream)
    logging.debug('Wrote %r.', canvas)
    return header

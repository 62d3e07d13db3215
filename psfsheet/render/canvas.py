"""
psfsheet.render.canvas - RGBA glyph sheet canvas

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from psfsheet.base.binary import ceildiv, bytes_to_bits
from psfsheet.base import GlyphDataTooSmall


GLYPHS_PER_ROW = 16

# background of the sheet and of glyphs with no unicode mapping
EMPTY_COLOUR = (0xF0, 0xC0, 0xC0, 0xFF)
# background of glyphs with a mapping
KNOWN_COLOUR = (0xF0, 0xF0, 0xF0, 0xFF)
INK_COLOUR = (0x10, 0x10, 0x10, 0xFF)


class Canvas:
    """Mutable RGBA pixel grid."""

    def __init__(self, width, height, pixels=None):
        self.width = width
        self.height = height
        if pixels is None:
            pixels = bytearray(width * height * 4)
        elif len(pixels) != width * height * 4:
            raise ValueError(
                f'Pixel buffer of {len(pixels)} bytes does not fit '
                f'{width}x{height} RGBA canvas.'
            )
        self.pixels = bytearray(pixels)

    @classmethod
    def blank(cls, width, height, colour=EMPTY_COLOUR):
        """Create a canvas filled with one colour."""
        canvas = cls(width, height)
        canvas.fill(colour)
        return canvas

    def __repr__(self):
        return f'<{type(self).__name__} {self.width}x{self.height}>'

    def fill(self, colour):
        """Paint the whole canvas."""
        self.pixels[:] = bytes(colour) * (self.width * self.height)

    def set_pixel(self, x, y, colour):
        """Set pixel at (x, y), with y counting down from the top."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f'Pixel ({x}, {y}) outside {self.width}x{self.height} canvas.')
        offset = (y * self.width + x) * 4
        self.pixels[offset:offset+4] = bytes(colour)

    def get_pixel(self, x, y):
        """Get RGBA tuple at (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f'Pixel ({x}, {y}) outside {self.width}x{self.height} canvas.')
        offset = (y * self.width + x) * 4
        return tuple(self.pixels[offset:offset+4])


def compute_canvas_size(header):
    """Size in pixels of the sheet for all glyphs, 16 per row."""
    rows = ceildiv(header.length, GLYPHS_PER_ROW)
    width = 1 + GLYPHS_PER_ROW * (header.width + 1)
    height = 1 + rows * (header.height + 1)
    return width, height


def paint_background(canvas, colour=EMPTY_COLOUR):
    """Fill canvas with base colour."""
    canvas.fill(colour)
    return canvas


def cell_origin(index, header):
    """Top-left pixel of glyph cell; cells are separated and framed by one pixel."""
    x = (index % GLYPHS_PER_ROW) * (header.width + 1) + 1
    y = (index // GLYPHS_PER_ROW) * (header.height + 1) + 1
    return x, y


def draw_glyph(canvas, index, bitmap, header, has_mapping=False, unmapped=False):
    """
    Draw glyph bitmap into its cell.

    has_mapping: the font has a unicode table
    unmapped: the table entry for this glyph is empty
    """
    if has_mapping and unmapped:
        paper = EMPTY_COLOUR
    else:
        paper = KNOWN_COLOUR
    row_bytes = header.row_bytes
    if len(bitmap) < row_bytes * header.height:
        raise GlyphDataTooSmall(
            f'Glyph {index}: {len(bitmap)} bytes of bitmap data, '
            f'need {row_bytes * header.height} for {header.height} rows '
            f'of {header.width} pixels.'
        )
    x_offset, y_offset = cell_origin(index, header)
    for y in range(header.height):
        row = bitmap[y*row_bytes : (y+1)*row_bytes]
        for x, bit in enumerate(bytes_to_bits(row, header.width)):
            canvas.set_pixel(
                x_offset + x, y_offset + y, INK_COLOUR if bit else paper
            )
    return canvas

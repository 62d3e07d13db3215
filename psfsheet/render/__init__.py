"""
psfsheet.render - render glyph sheets

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .canvas import (
    Canvas, compute_canvas_size, paint_background, draw_glyph, cell_origin,
    GLYPHS_PER_ROW, EMPTY_COLOUR, KNOWN_COLOUR, INK_COLOUR,
)
from .sheet import render_sheet
from .table import glyph_table_lines, display_map

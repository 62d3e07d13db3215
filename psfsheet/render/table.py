"""
psfsheet.render.table - text listing of the unicode table

(c) 2020--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import unicodedata


def is_printable(char):
    """Check if a char should be printed - nothing ambiguous or unrepresentable in there."""
    # keep everything but Other (C), Separator/Line (Zl), Separator/Paragraph (Zp)
    category = unicodedata.category(char)
    return not category.startswith('C') and category not in ('Zl', 'Zp')


def format_char(char):
    """Show char as itself or, if not printable, as U+ code."""
    if is_printable(char):
        return char
    return f'U+{ord(char):04X}'


def display_map(header, glyph_map):
    """Glyph map to show; identity mapping if the font has no unicode table."""
    if glyph_map is not None:
        return glyph_map
    # indices beyond the unicode range have no identity char
    return tuple(
        (chr(_index),) if _index <= 0x10ffff else ()
        for _index in range(header.length)
    )


def glyph_table_lines(header, glyph_map):
    """Generate one line per mapped glyph: index and its code points."""
    for index, chars in enumerate(display_map(header, glyph_map)):
        if not chars:
            continue
        yield f'0x{index:03x}: ' + ' '.join(format_char(_c) for _c in chars)

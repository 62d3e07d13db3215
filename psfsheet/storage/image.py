"""
psfsheet.storage.image - write glyph sheets to image files

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import logging

from psfsheet.base import safe_import, EncodeFailure
Image = safe_import('PIL.Image')


DEFAULT_IMAGE_FORMAT = 'png'


def canvas_to_image(canvas):
    """Convert RGBA canvas to PIL image."""
    if not Image:
        raise ImportError('Rendering to image requires PIL module.')
    return Image.frombytes(
        'RGBA', (canvas.width, canvas.height), bytes(canvas.pixels)
    )


def save_png(canvas, outstream, format=DEFAULT_IMAGE_FORMAT):
    """Encode canvas as a lossless image on a binary stream."""
    img = canvas_to_image(canvas)
    logging.debug(
        'Encoding %dx%d image as %s.', canvas.width, canvas.height, format
    )
    try:
        img.save(outstream, format=format.upper())
    except (OSError, ValueError) as e:
        raise EncodeFailure(f'Failed to write {format} image: {e}') from e

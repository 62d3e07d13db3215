"""
psfsheet.base.errors - exception classes

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""


class PSFSheetError(Exception):
    """Base class for errors that abort a conversion."""


class FileFormatError(PSFSheetError):
    """Incorrect file format."""


class OpenFailure(PSFSheetError):
    """Input or output file could not be opened."""


class EncodeFailure(PSFSheetError):
    """Output image could not be written."""


class TruncatedHeader(FileFormatError):
    """Fewer bytes than the fixed header size."""


class GlyphDataTooSmall(FileFormatError):
    """Bytes per glyph too few for the glyph size."""


class UnexpectedEndOfTable(FileFormatError):
    """Unicode table ended before the separator of a glyph entry."""


class ShortGlyphRead(FileFormatError):
    """Fewer bytes than expected for a glyph bitmap."""


class InvalidCodepointEncoding(FileFormatError):
    """Ill-formed UTF-8 in the Unicode table."""

    def __init__(self, message, data=b''):
        super().__init__(message)
        self.data = bytes(data)

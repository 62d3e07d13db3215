"""
psfsheet.storage.streams - file stream tools

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import io
import logging
from pathlib import Path

from ..base import OpenFailure


def get_name(stream):
    """Get stream name, if available."""
    try:
        return str(stream.name)
    except AttributeError:
        # not all streams have one (e.g. BytesIO)
        return ''


class Stream:
    """Manage file resource."""

    def __init__(self, file, mode):
        """
        Ensure file is a binary stream, open if necessary.
            file: stream, string or path-like object
            mode: 'r' or 'w'
        """
        if not file:
            raise ValueError('No file name, path or stream provided.')
        self.mode = mode[:1]
        if isinstance(file, (str, Path)):
            self._stream = self._open_path(file, self.mode)
            self._owned = True
            self.name = str(file)
        else:
            # don't close externally provided stream
            self._stream = file
            self._owned = False
            self.name = get_name(file)
        if self.mode == 'r' and not self._stream.seekable():
            # we need streams to be seekable - drain to buffer
            # note you can only do this once on the input stream!
            logging.debug('Reading unseekable stream %s into memory.', self.name)
            unseekable = self._stream
            self._stream = io.BytesIO(unseekable.read())
            if self._owned:
                unseekable.close()
                self._owned = False
        self.closed = False

    @staticmethod
    def _open_path(file, mode):
        """Open a raw binary stream on the filesystem."""
        logging.debug("Opening file `%s` for mode '%s'.", file, mode)
        try:
            return io.open(Path(file), mode + 'b')
        except OSError as e:
            action = 'open' if mode == 'r' else 'create'
            raise OpenFailure(f'Failed to {action} `{file}`: {e}') from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        """Ensure stream is closed."""
        self.close()

    def __repr__(self):
        """String representation."""
        return (
            f"<{type(self).__name__} name='{self.name}' mode='{self.mode}'"
            f"{' [closed]' if self.closed else ''}>"
        )

    def __getattr__(self, attr):
        """Delegate undefined attributes to wrapped stream."""
        if attr.startswith('_'):
            raise AttributeError(attr)
        return getattr(self._stream, attr)

    def close(self):
        """Close the stream if we opened it."""
        if self.closed:
            return
        logging.debug('Closing %r.', self)
        if self._owned:
            self._stream.close()
        else:
            self._stream.flush()
        self.closed = True


class ByteCursor:
    """
    Explicit read position over a seekable binary stream.

    All reads go through `read_exact` or `read_until`, so a short read is
    always reported as an error instead of yielding fewer bytes.
    """

    def __init__(self, stream):
        self._stream = stream
        self.name = get_name(stream)

    def __repr__(self):
        return f"<{type(self).__name__} name='{self.name}' at {self.tell()}>"

    def tell(self):
        """Current absolute position."""
        return self._stream.tell()

    def size(self):
        """Total length of the stream; the position is left unchanged."""
        position = self._stream.tell()
        end = self._stream.seek(0, io.SEEK_END)
        self._stream.seek(position, io.SEEK_SET)
        return end

    def seek(self, offset):
        """Move to absolute position `offset`."""
        if offset < 0:
            raise ValueError(f'Cannot seek to negative offset {offset}.')
        logging.debug('Seeking %s to offset %d.', self.name or 'stream', offset)
        return self._stream.seek(offset, io.SEEK_SET)

    def read_exact(self, size, error=EOFError, what='data'):
        """Read exactly `size` bytes; raise `error` if fewer are available."""
        position = self.tell()
        data = self._stream.read(size)
        if len(data) < size:
            raise error(
                f'Failed to read {what} at offset {position}: '
                f'expected {size} bytes, got {len(data)}.'
            )
        return data

    def read_until(self, sentinel, error=EOFError, what='data'):
        """
        Read single bytes until `sentinel` is found.
        Returns the bytes before the sentinel; the sentinel is consumed.
        """
        sentinel = bytes(sentinel)
        position = self.tell()
        data = bytearray()
        while True:
            byte = self._stream.read(1)
            if not byte:
                raise error(
                    f'Failed to read {what} at offset {position}: '
                    f'end of data after {len(data)} bytes without separator '
                    f'{sentinel.hex()}.'
                )
            if byte == sentinel:
                return bytes(data)
            data += byte

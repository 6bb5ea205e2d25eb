# Author: PB & Claude
# Maintainer: PB
# Original date: 2026.10.18
# License: (c) HRDAG, 2026, GPL-2 or newer
#
# ------
# rsync-itemize/src/rsync_itemize/stream.py

"""Line source over rsync standard output.

Accepts a string, bytes, a text or binary stream, or any iterable of lines,
and hands out one line at a time with the line terminator removed.
"""

import io
from typing import IO, Final, Iterable, Iterator, Union


LineInput = Union[str, bytes, IO[str], IO[bytes], Iterable[str], Iterable[bytes]]


class LineSource:
    """Sequential reader of text lines."""

    DEFAULT_ENCODING: Final = "utf-8"
    # rsync prints file names as raw bytes; they need not be valid UTF-8
    DEFAULT_ERRORS: Final = "replace"

    def __init__(self, source: LineInput, encoding: str = DEFAULT_ENCODING,
                 errors: str = DEFAULT_ERRORS):
        self.encoding = encoding
        self.errors = errors
        self._lines = self._iter_raw(source)
        self._exhausted = False

    @classmethod
    def from_input(cls, source: "LineSource | LineInput") -> "LineSource":
        """Return `source` unchanged if it already is a LineSource."""
        if isinstance(source, LineSource):
            return source
        return cls(source)

    def _iter_raw(self, source: LineInput) -> Iterator[str | bytes]:
        if isinstance(source, str):
            return iter(io.StringIO(source))
        if isinstance(source, (bytes, bytearray)):
            return iter(io.BytesIO(bytes(source)))
        if hasattr(source, "readline"):
            return iter(source.readline, self._sentinel_for(source))
        try:
            return iter(source)
        except TypeError:
            raise TypeError(
                f"Cannot read lines from {type(source).__name__}"
            ) from None

    @staticmethod
    def _sentinel_for(stream) -> str | bytes:
        if isinstance(stream, io.TextIOBase):
            return ""
        if isinstance(stream, (io.RawIOBase, io.BufferedIOBase)):
            return b""
        # Unknown file-like object: check its mode, default to text
        mode = getattr(stream, "mode", "")
        return b"" if "b" in mode else ""

    def read_line(self) -> str | None:
        """Return the next line without its terminator, or None at end."""
        if self._exhausted:
            return None
        try:
            raw = next(self._lines)
        except StopIteration:
            self._exhausted = True
            return None

        if isinstance(raw, (bytes, bytearray)):
            line = bytes(raw).decode(self.encoding, self.errors)
        else:
            line = raw

        if line.endswith("\n"):
            line = line[:-1]
            if line.endswith("\r"):
                line = line[:-1]
        return line

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.read_line()
            if line is None:
                return
            yield line

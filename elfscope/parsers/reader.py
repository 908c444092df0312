"""
Byte Reader
============

Seekable, read-only access to one input file, handing out fixed-size
byte windows on demand.

Operating-system failures (open, seek, read) surface as
:class:`~elfscope.core.errors.IOFailure`; short windows surface as the
error class chosen by the caller, so that each parsing stage reports
truncation in its own terms.
"""

from __future__ import annotations

import io
import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator, Optional

from elfscope.core.errors import ElfError, IOFailure, TruncatedFile


class ByteReader:
    """Random-access reader over a binary stream.

    The stream's read cursor is the only mutable state; a reader must not
    be shared between threads.

    Usage::

        with ByteReader.open("/bin/ls") as reader:
            ident = reader.read_exact(0, 16)
    """

    def __init__(self, stream: BinaryIO, name: str = "<stream>") -> None:
        self._stream = stream
        self._name = name
        try:
            self._size = stream.seek(0, os.SEEK_END)
            stream.seek(0)
        except OSError as exc:
            raise IOFailure(f"cannot seek: {exc}") from exc

    @classmethod
    @contextmanager
    def open(cls, path: str | Path) -> Iterator[ByteReader]:
        """Open *path* read-only and close it when the block exits."""
        try:
            fh = open(path, "rb")
        except OSError as exc:
            raise IOFailure(str(exc.strerror or exc)) from exc
        with fh:
            yield cls(fh, str(path))

    @classmethod
    def from_bytes(cls, data: bytes, name: str = "<memory>") -> ByteReader:
        """Reader over an in-memory image."""
        return cls(io.BytesIO(data), name)

    # ------------------------------------------------------------------ #
    #  Properties
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        """Total length of the underlying file in bytes."""
        return self._size

    # ------------------------------------------------------------------ #
    #  Reads
    # ------------------------------------------------------------------ #

    def read_at(self, offset: int, size: int) -> bytes:
        """Read up to *size* bytes at *offset*; fewer at end of file."""
        if size <= 0 or offset >= self._size:
            return b""
        # clamp to end of file; declared sizes come from the file itself
        size = min(size, self._size - offset)
        try:
            self._stream.seek(offset)
            return self._stream.read(size)
        except OSError as exc:
            raise IOFailure(
                f"read of {size} bytes at {offset:#x} failed: {exc}"
            ) from exc

    def read_exact(
        self,
        offset: int,
        size: int,
        error: type[ElfError] = TruncatedFile,
        what: str = "data",
    ) -> bytes:
        """Read exactly *size* bytes at *offset*.

        Raises:
            ElfError: An instance of *error* when the file ends early.
        """
        data = self.read_at(offset, size)
        if len(data) != size:
            raise error(
                f"{what} needs {size} bytes at offset "
                f"{offset:#x}, only {len(data)} available"
            )
        return data

    def read_until(
        self,
        offset: int,
        terminator: bytes = b"\x00",
        limit: int = 128,
    ) -> Optional[bytes]:
        """Read from *offset* up to (not including) *terminator*.

        Returns:
            The bytes before the terminator, or ``None`` when no terminator
            occurs within *limit* bytes or before end of file.
        """
        window = self.read_at(offset, limit)
        end = window.find(terminator)
        if end == -1:
            return None
        return window[:end]

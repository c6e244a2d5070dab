"""Streaming reader for FASTA and FASTQ records."""

from __future__ import annotations

import gzip
import os
import re
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import IO

_CHUNK = 16384
_GZIP_MAGIC = b"\x1f\x8b"
_SPACE = re.compile(rb"[ \t\n\v\f\r]")
_NEWLINE = re.compile(rb"\n")
_HEADER_CHARS = (ord(">"), ord("@"))
_SEQ_STOP = (ord(">"), ord("+"), ord("@"))
_LF = ord("\n")
_CR = ord("\r")
_EOF = -1


@dataclass(frozen=True)
class FastxRecord:
    """One sequence record; ``qual`` is ``None`` for FASTA records."""

    name: str
    comment: str
    seq: str
    qual: str | None = None


class TruncatedQualityError(ValueError):
    """Raised when a FASTQ quality string is missing or of the wrong length."""


class _ByteStream:
    """Buffered byte source with single-byte and delimited reads."""

    def __init__(self, stream: IO) -> None:
        self._stream = stream
        self.reset()

    def reset(self) -> None:
        self._buf = b""
        self._pos = 0
        self._eof = False

    def _refill(self) -> bool:
        if self._eof:
            return False
        chunk = self._stream.read(_CHUNK)
        if isinstance(chunk, str):
            chunk = chunk.encode("latin-1")
        if not chunk:
            self._eof = True
            return False
        self._buf, self._pos = chunk, 0
        return True

    def _available(self) -> bool:
        return self._pos < len(self._buf) or self._refill()

    def getc(self) -> int:
        if not self._available():
            return _EOF
        c = self._buf[self._pos]
        self._pos += 1
        return c

    def get_until(self, pattern: re.Pattern) -> tuple[bytes, int] | None:
        """Read up to the next delimiter matched by ``pattern``.

        Returns the bytes before the delimiter and the delimiter (0 at end of
        input), or ``None`` when no input is left at all.
        """
        if not self._available():
            return None
        parts: list[bytes] = []
        while self._available():
            match = pattern.search(self._buf, self._pos)
            if match:
                parts.append(self._buf[self._pos : match.start()])
                self._pos = match.start() + 1
                return b"".join(parts), self._buf[match.start()]
            parts.append(self._buf[self._pos :])
            self._pos = len(self._buf)
        return b"".join(parts), 0


def _strip_cr(data: bytearray) -> None:
    if len(data) > 1 and data[-1] == _CR:
        del data[-1]


def _text(data: bytes | bytearray) -> str:
    return bytes(data).decode("latin-1")


class FastxReader:
    """Reads FASTA and FASTQ records, mixed freely, from a stream.

    By default sequence lines are taken whole and a trailing carriage return
    is removed from each line. With ``printable_only`` only printable,
    non-space characters are kept in sequences and only characters 33 to 127
    in quality strings.
    """

    def __init__(self, stream: IO, printable_only: bool = False) -> None:
        self._stream = stream
        self._source = _ByteStream(stream)
        self._printable_only = printable_only
        self._last_char = 0

    def __iter__(self) -> Iterator[FastxRecord]:
        while (record := self.read()) is not None:
            yield record

    def rewind(self) -> None:
        """Return to the start of the stream and forget any buffered input."""
        if self._stream.seekable():
            self._stream.seek(0)
        self._source.reset()
        self._last_char = 0

    def read(self) -> FastxRecord | None:
        """Return the next record, or ``None`` at the end of the input.

        Raises :class:`TruncatedQualityError` when a FASTQ record has no
        quality string or one whose length differs from the sequence.
        """
        src = self._source
        if self._last_char == 0:
            c = src.getc()
            while c != _EOF and c not in _HEADER_CHARS:
                c = src.getc()
            if c == _EOF:
                return None
            self._last_char = c

        head = src.get_until(_SPACE)
        if head is None:
            return None
        name, delimiter = head
        comment = self._read_comment(delimiter)
        seq, c = self._read_sequence()
        if c in _HEADER_CHARS:
            self._last_char = c
        if c != ord("+"):
            return FastxRecord(_text(name), comment, _text(seq))

        c = src.getc()
        while c != _EOF and c != _LF:
            c = src.getc()
        if c == _EOF:
            raise TruncatedQualityError(f"record {_text(name)!r} has no quality string")
        qual = self._read_quality(len(seq))
        self._last_char = 0
        if len(qual) != len(seq):
            raise TruncatedQualityError(
                f"record {_text(name)!r}: quality length {len(qual)} "
                f"differs from sequence length {len(seq)}"
            )
        return FastxRecord(_text(name), comment, _text(seq), _text(qual))

    def _read_comment(self, delimiter: int) -> str:
        if delimiter == _LF:
            return ""
        line = self._source.get_until(_NEWLINE)
        if line is None:
            return ""
        comment = bytearray(line[0])
        if not self._printable_only:
            _strip_cr(comment)
        return _text(comment)

    def _read_sequence(self) -> tuple[bytearray, int]:
        src = self._source
        seq = bytearray()
        c = src.getc()
        while c != _EOF and c not in _SEQ_STOP:
            if self._printable_only:
                if 33 <= c <= 126:
                    seq.append(c)
            elif c != _LF:
                seq.append(c)
                rest = src.get_until(_NEWLINE)
                if rest is not None:
                    seq.extend(rest[0])
                _strip_cr(seq)
            c = src.getc()
        return seq, c

    def _read_quality(self, seq_len: int) -> bytearray:
        src = self._source
        qual = bytearray()
        if self._printable_only:
            while True:
                c = src.getc()
                if c == _EOF or len(qual) >= seq_len:
                    break
                if 33 <= c <= 127:
                    qual.append(c)
            return qual
        while True:
            line = src.get_until(_NEWLINE)
            if line is None:
                break
            qual.extend(line[0])
            _strip_cr(qual)
            if len(qual) >= seq_len:
                break
        return qual


@contextmanager
def open_fastx(
    path: str | os.PathLike, printable_only: bool = False
) -> Iterator[FastxReader]:
    """Open a plain or gzip-compressed FASTA/FASTQ file for reading."""
    with open(path, "rb") as probe:
        compressed = probe.read(2) == _GZIP_MAGIC
    opener = gzip.open if compressed else open
    with opener(path, "rb") as handle:
        yield FastxReader(handle, printable_only)
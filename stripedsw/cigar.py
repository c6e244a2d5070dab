"""Encoding of CIGAR operations in the 32-bit BAM layout."""

from __future__ import annotations

from collections.abc import Iterable

_OPS = "MIDNSHP=X"
_OP_CODES = {letter: code for code, letter in enumerate(_OPS)}
_UINT32 = 0xFFFFFFFF


def to_cigar_int(length: int, op_letter: str) -> int:
    """Pack a length and an operation letter into one CIGAR integer.

    The high 28 bits hold the length, the low 4 bits the operation code.
    Unknown letters are encoded as ``M``.
    """
    op_code = _OP_CODES.get(op_letter, 0)
    return ((length << 4) | op_code) & _UINT32


def cigar_int_to_op(cigar_int: int) -> str:
    """Return the operation letter of a packed CIGAR integer."""
    code = cigar_int & 0xF
    if code >= len(_OPS):
        return "M"
    return _OPS[code]


def cigar_int_to_len(cigar_int: int) -> int:
    """Return the length of a packed CIGAR integer."""
    return (cigar_int & _UINT32) >> 4


def cigar_to_string(cigar: Iterable[int]) -> str:
    """Render packed CIGAR integers as a CIGAR string such as ``3M1I2M``."""
    return "".join(f"{cigar_int_to_len(c)}{cigar_int_to_op(c)}" for c in cigar)
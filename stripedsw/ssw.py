"""Striped Smith-Waterman alignment: scores, positions and CIGAR."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from .banded import banded_sw
from .cigar import cigar_int_to_len, cigar_int_to_op, cigar_to_string
from .scan import AlignmentEnd, score_bias, sw_scan

_BYTE_OVERFLOW = 255
_BYTE_TERMINATE = 0xFF
_WORD_TERMINATE = 0xFFFF
_MIN_MASK_LEN = 15


class ProfileError(RuntimeError):
    """Raised when the query profile cannot produce a correct alignment."""


@dataclass(frozen=True)
class _QueryProfile:
    read: tuple[int, ...]
    mat: tuple[int, ...]
    n: int
    bias: int
    byte: bool
    word: bool


@dataclass
class SswAlignment:
    """Result of :func:`ssw_align`; all positions are 0-based.

    ``ref_begin1`` and ``read_begin1`` are -1 when the begin position was not
    computed; ``cigar`` is empty when the path was not computed.
    """

    score1: int = 0
    score2: int = 0
    ref_begin1: int = -1
    ref_end1: int = 0
    read_begin1: int = -1
    read_end1: int = 0
    ref_end2: int = 0
    cigar: list[int] = field(default_factory=list)

    @property
    def cigar_string(self) -> str:
        """The CIGAR rendered as text, such as ``9M1I5M``."""
        return cigar_to_string(self.cigar)


def ssw_init(
    read: Sequence[int], mat: Sequence[int], n: int, score_size: int = 2
) -> _QueryProfile:
    """Prepare a query profile for ``read`` against the ``n`` by ``n`` matrix.

    ``score_size`` is 0 when the best score is surely below 255 (byte scan),
    1 when it is surely not (word scan), and 2 when unknown (both).
    """
    if score_size not in (0, 1, 2):
        raise ValueError("score_size must be 0, 1 or 2")
    if not read:
        raise ValueError("read must not be empty")
    if len(mat) < n * n:
        raise ValueError("score matrix must hold n * n entries")
    if any(not 0 <= code < n for code in read):
        raise ValueError("sequence codes must lie in range(n)")
    byte = score_size in (0, 2)
    return _QueryProfile(
        read=tuple(read),
        mat=tuple(mat[: n * n]),
        n=n,
        bias=score_bias(mat[: n * n]) if byte else 0,
        byte=byte,
        word=score_size in (1, 2),
    )


def _scan(profile, ref, read, gap_open, gap_extend, word, reverse, terminate, mask_len):
    return sw_scan(
        ref,
        read,
        profile.mat,
        profile.n,
        gap_open,
        gap_extend,
        reverse=reverse,
        terminate=terminate,
        mask_len=mask_len,
        word=word,
    )


def _best_ends(profile, ref, gap_open, gap_extend, mask_len):
    """Locate the best and sub-optimal ends, choosing byte or word scan."""
    read = profile.read
    if profile.byte:
        best, second = _scan(
            profile, ref, read, gap_open, gap_extend, False, False, _BYTE_TERMINATE, mask_len
        )
        if best.score != _BYTE_OVERFLOW:
            return best, second, False
        if not profile.word:
            raise ProfileError(
                "score overflow: initialise the profile with score_size 2 "
                "for correct results"
            )
    best, second = _scan(
        profile, ref, read, gap_open, gap_extend, True, False, _WORD_TERMINATE, mask_len
    )
    return best, second, True


def ssw_align(
    profile: _QueryProfile,
    ref: Sequence[int],
    gap_open: int,
    gap_extend: int,
    flag: int,
    filters: int = 0,
    filterd: int = 0,
    mask_len: int = 0,
) -> SswAlignment:
    """Align ``ref`` against the query profile.

    ``flag`` bits: 8 always report begin and CIGAR; 2 report the CIGAR when
    the score is at least ``filters``; 4 report it when both spans are at most
    ``filterd``; any non-zero flag reports the begin position. The
    sub-optimal result is given only when ``mask_len`` is at least 15.
    """
    best, second, word = _best_ends(profile, ref, gap_open, gap_extend, mask_len)
    result = SswAlignment(score1=best.score, ref_end1=best.ref, read_end1=best.read)
    if mask_len >= _MIN_MASK_LEN:
        result.score2, result.ref_end2 = second.score, second.ref
    else:
        result.score2, result.ref_end2 = 0, -1

    if flag == 0 or (flag == 2 and result.score1 < filters):
        return result

    read_reverse = profile.read[: result.read_end1 + 1][::-1]
    begin: AlignmentEnd
    begin, _ = _scan(
        profile,
        ref[: result.ref_end1 + 1],
        read_reverse,
        gap_open,
        gap_extend,
        word,
        True,
        result.score1,
        mask_len,
    )
    result.ref_begin1 = begin.ref
    result.read_begin1 = result.read_end1 - begin.read

    ref_span = result.ref_end1 - result.ref_begin1
    read_span = result.read_end1 - result.read_begin1
    if (
        (flag & 7) == 0
        or (flag & 2 and result.score1 < filters)
        or (flag & 4 and (ref_span > filterd or read_span > filterd))
    ):
        return result

    ref_part = ref[max(result.ref_begin1, 0) : result.ref_end1 + 1]
    read_part = profile.read[result.read_begin1 : result.read_end1 + 1]
    band_width = abs(len(ref_part) - len(read_part)) + 1
    result.cigar = banded_sw(
        ref_part,
        read_part,
        result.score1,
        gap_open,
        gap_extend,
        band_width,
        profile.mat,
        profile.n,
    )
    return result


def cigar_spans(cigar: Sequence[int]) -> tuple[int, int]:
    """Return the numbers of reference and read bases a CIGAR consumes."""
    ref_bases = read_bases = 0
    for item in cigar:
        op, length = cigar_int_to_op(item), cigar_int_to_len(item)
        if op in "MDN=X":
            ref_bases += length
        if op in "MIS=X":
            read_bases += length
    return ref_bases, read_bases
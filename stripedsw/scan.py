"""Striped Smith-Waterman scan that finds the best alignment end.

The scan reproduces the 16-lane byte and 8-lane word striped layouts,
including their saturating arithmetic, so scores, end positions and the
sub-optimal score are the same as those of the vectorised algorithm.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from itertools import chain

_BYTE_LANES = 16
_WORD_LANES = 8
_BYTE_MAX = 255


@dataclass(frozen=True)
class AlignmentEnd:
    """Score and 0-based end positions of an alignment."""

    score: int
    ref: int
    read: int


def score_bias(mat: Sequence[int]) -> int:
    """Return the bias that shifts the smallest matrix score to zero."""
    return abs(min(min(mat, default=0), 0))


@dataclass(frozen=True)
class Profile:
    """Striped query profile: ``rows[code][segment]`` is a tuple of lanes."""

    lanes: int
    seg_len: int
    read_len: int
    bias: int
    rows: tuple[tuple[tuple[int, ...], ...], ...]

    @classmethod
    def build(
        cls, read: Sequence[int], mat: Sequence[int], n: int, word: bool = False
    ) -> Profile:
        """Build the byte (biased) or word profile of ``read`` against ``mat``."""
        lanes = _WORD_LANES if word else _BYTE_LANES
        read_len = len(read)
        seg_len = (read_len + lanes - 1) // lanes
        bias = 0 if word else score_bias(mat[: n * n])
        pad = 0 if word else bias

        def cell(nt: int, pos: int) -> int:
            if pos >= read_len:
                return pad
            value = mat[nt * n + read[pos]] + bias
            return value if word else value & 0xFF

        rows = tuple(
            tuple(
                tuple(cell(nt, seg + lane * seg_len) for lane in range(lanes))
                for seg in range(seg_len)
            )
            for nt in range(n)
        )
        return cls(lanes, seg_len, read_len, bias, rows)


def _shift(vec: tuple[int, ...]) -> tuple[int, ...]:
    return (0,) + vec[:-1]


def _sat16(x: int) -> int:
    return max(-0x8000, min(0x7FFF, x))


def _subs_u16(a: int, b: int) -> int:
    r = max((a & 0xFFFF) - (b & 0xFFFF), 0)
    return r - 0x10000 if r >= 0x8000 else r


def _end_read(h_max: list[tuple[int, ...]], best: int, seg_len: int, read_len: int) -> int:
    end_read = read_len - 1
    for seg, vec in enumerate(h_max):
        for lane, value in enumerate(vec):
            if value == best:
                end_read = min(end_read, seg + lane * seg_len)
    return end_read


def _second_best(max_column: list[int], before: int, after_start: int) -> AlignmentEnd:
    score, ref = 0, 0
    for i in chain(range(before), range(after_start, len(max_column))):
        if max_column[i] > score:
            score, ref = max_column[i], i
    return AlignmentEnd(score, ref, 0)


def _scan_byte(ref, profile, gap_open, gap_extend, reverse, terminate, mask_len):
    seg_len, bias = profile.seg_len, profile.bias
    zero = (0,) * profile.lanes
    ref_len = len(ref)
    h_store = [zero] * seg_len
    h_load = [zero] * seg_len
    e_vec = [zero] * seg_len
    h_max = [zero] * seg_len
    max_column = [0] * ref_len
    best, end_ref = 0, -1
    max_score = max_mark = zero

    order = range(ref_len - 1, -1, -1) if reverse else range(ref_len)
    for i in order:
        v_f = v_max_col = zero
        v_h = _shift(h_store[-1])
        row = profile.rows[ref[i]]
        h_load, h_store = h_store, h_load

        for j in range(seg_len):
            v_h = tuple(max(min(h + p, _BYTE_MAX) - bias, 0) for h, p in zip(v_h, row[j]))
            e = e_vec[j]
            v_h = tuple(map(max, v_h, e, v_f))
            v_max_col = tuple(map(max, v_max_col, v_h))
            h_store[j] = v_h
            v_h = tuple(max(h - gap_open, 0) for h in v_h)
            e_vec[j] = tuple(max(x - gap_extend, 0, h) for x, h in zip(e, v_h))
            v_f = tuple(max(f - gap_extend, 0, h) for f, h in zip(v_f, v_h))
            v_h = h_load[j]

        j = 0
        v_h = h_store[0]
        v_f = _shift(v_f)
        while any(f > max(h - gap_open, 0) for f, h in zip(v_f, v_h)):
            v_h = tuple(map(max, v_h, v_f))
            v_max_col = tuple(map(max, v_max_col, v_h))
            h_store[j] = v_h
            v_f = tuple(max(f - gap_extend, 0) for f in v_f)
            j += 1
            if j >= seg_len:
                j = 0
                v_f = _shift(v_f)
            v_h = h_store[j]

        max_score = tuple(map(max, max_score, v_max_col))
        if max_mark != max_score:
            max_mark = max_score
            temp = max(max_score)
            if temp > best:
                best = temp
                if best + bias >= _BYTE_MAX:
                    break
                end_ref = i
                h_max = list(h_store)

        max_column[i] = max(v_max_col)
        if max_column[i] == terminate:
            break

    end_read = _end_read(h_max, best, seg_len, profile.read_len)
    score = _BYTE_MAX if best + bias >= _BYTE_MAX else best
    first = AlignmentEnd(score, end_ref, end_read)
    before = max(end_ref - mask_len, 0)
    after = min(end_ref + mask_len, ref_len) + 1
    return first, _second_best(max_column, before, after)


def _scan_word(ref, profile, gap_open, gap_extend, reverse, terminate, mask_len):
    seg_len = profile.seg_len
    zero = (0,) * profile.lanes
    ref_len = len(ref)
    h_store = [zero] * seg_len
    h_load = [zero] * seg_len
    e_vec = [zero] * seg_len
    h_max = [zero] * seg_len
    max_column = [0] * ref_len
    best, end_ref = 0, 0
    max_score = max_mark = zero

    order = range(ref_len - 1, -1, -1) if reverse else range(ref_len)
    for i in order:
        v_f = v_max_col = zero
        v_h = _shift(h_store[-1])
        row = profile.rows[ref[i]]
        h_load, h_store = h_store, h_load

        for j in range(seg_len):
            v_h = tuple(_sat16(h + p) for h, p in zip(v_h, row[j]))
            e = e_vec[j]
            v_h = tuple(map(max, v_h, e, v_f))
            v_max_col = tuple(map(max, v_max_col, v_h))
            h_store[j] = v_h
            v_h = tuple(_subs_u16(h, gap_open) for h in v_h)
            e_vec[j] = tuple(max(_subs_u16(x, gap_extend), h) for x, h in zip(e, v_h))
            v_f = tuple(max(_subs_u16(f, gap_extend), h) for f, h in zip(v_f, v_h))
            v_h = h_load[j]

        settled = False
        for _ in range(profile.lanes):
            v_f = _shift(v_f)
            for j in range(seg_len):
                v_h = tuple(map(max, h_store[j], v_f))
                h_store[j] = v_h
                v_h = tuple(_subs_u16(h, gap_open) for h in v_h)
                v_f = tuple(_subs_u16(f, gap_extend) for f in v_f)
                if not any(f > h for f, h in zip(v_f, v_h)):
                    settled = True
                    break
            if settled:
                break

        max_score = tuple(map(max, max_score, v_max_col))
        if max_mark != max_score:
            max_mark = max_score
            temp = max(max_score)
            if temp > best:
                best = temp
                end_ref = i
                h_max = list(h_store)

        max_column[i] = max(v_max_col)
        if max_column[i] == terminate:
            break

    end_read = _end_read(h_max, best, seg_len, profile.read_len)
    first = AlignmentEnd(best, end_ref, end_read)
    before = max(end_ref - mask_len, 0)
    after = min(end_ref + mask_len, ref_len)
    return first, _second_best(max_column, before, after)


def sw_scan(
    ref: Sequence[int],
    read: Sequence[int],
    mat: Sequence[int],
    n: int,
    gap_open: int,
    gap_extend: int,
    reverse: bool = False,
    terminate: int | None = None,
    mask_len: int = 0,
    word: bool = False,
) -> tuple[AlignmentEnd, AlignmentEnd]:
    """Scan ``ref`` against ``read`` and return the best and sub-optimal ends.

    Sequences are integer codes indexing the ``n`` by ``n`` matrix ``mat``.
    With ``reverse`` the reference is processed from its last position to its
    first. The scan stops early after a column whose maximum equals
    ``terminate``. The byte scan reports a score of 255 on overflow. The
    sub-optimal end is searched outside ``mask_len`` positions of the best.
    """
    if not read:
        raise ValueError("read must not be empty")
    if len(mat) < n * n:
        raise ValueError("score matrix must hold n * n entries")
    for name, gap in (("gap_open", gap_open), ("gap_extend", gap_extend)):
        if not 0 <= gap <= _BYTE_MAX:
            raise ValueError(f"{name} must be between 0 and 255")
    if any(not 0 <= code < n for code in chain(read, ref)):
        raise ValueError("sequence codes must lie in range(n)")

    profile = Profile.build(read, mat, n, word=word)
    scan = _scan_word if word else _scan_byte
    return scan(ref, profile, gap_open, gap_extend, reverse, terminate, mask_len)
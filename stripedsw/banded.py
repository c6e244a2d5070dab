"""Banded global alignment that recovers the CIGAR of a located alignment."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from .cigar import to_cigar_int

_log = logging.getLogger(__name__)

# Direction codes stored for each cell of the band.
_DIAGONAL = 1
_E_EXTEND = 2
_E_OPEN = 3
_F_EXTEND = 4
_F_OPEN = 5

# Slots inside one cell of a direction row.
_SLOT_E = 0
_SLOT_F = 1
_SLOT_H = 2


class TraceBackError(RuntimeError):
    """Raised when the trace back leaves the computed band."""


def _band_offset(band_width: int, i: int) -> int:
    return max(i - band_width, 0)


def _validate(ref, read, gap_open, gap_extend, band_width, mat, n) -> None:
    if band_width < 0:
        raise ValueError("band_width must not be negative")
    if gap_open < 0 or gap_extend < 0:
        raise ValueError("gap penalties must not be negative")
    if len(mat) < n * n:
        raise ValueError("score matrix must hold n * n entries")
    if any(not 0 <= code < n for seq in (ref, read) for code in seq):
        raise ValueError("sequence codes must lie in range(n)")


def _fill(
    ref: Sequence[int],
    read: Sequence[int],
    gap_open: int,
    gap_extend: int,
    band_width: int,
    mat: Sequence[int],
    n: int,
) -> tuple[int, list[list[int]]]:
    """Fill the band and return the best score and the direction rows."""
    ref_len, read_len = len(ref), len(read)
    width = band_width * 2 + 3
    width_d = band_width * 2 + 1
    h_b = [0] * width
    e_b = [0] * width
    h_c = [0] * width
    directions = [[0] * (width_d * 3) for _ in range(read_len)]
    best = 0

    for i in range(read_len):
        beg = max(0, i - band_width)
        end = min(ref_len - 1, i + band_width)
        edge = min(end + 1, width - 1)
        f = 0
        h_b[0] = e_b[0] = h_b[edge] = e_b[edge] = h_c[0] = 0
        row = directions[i]
        x_cur = _band_offset(band_width, i)
        x_prev = _band_offset(band_width, i - 1)
        u = 0

        for j in range(beg, end + 1):
            u = j - x_cur + 1
            e = j - x_prev + 1
            b = j - x_cur
            d = j - x_prev
            cell = (j - x_cur) * 3
            de, df, dh = cell + _SLOT_E, cell + _SLOT_F, cell + _SLOT_H

            open_e = -gap_open if i == 0 else h_b[e] - gap_open
            ext_e = -gap_extend if i == 0 else e_b[e] - gap_extend
            e_b[u] = max(open_e, ext_e)
            row[de] = _E_OPEN if open_e > ext_e else _E_EXTEND

            open_f = h_c[b] - gap_open
            ext_f = f - gap_extend
            f = max(open_f, ext_f)
            row[df] = _F_OPEN if open_f > ext_f else _F_EXTEND

            e1 = max(e_b[u], 0)
            f1 = max(f, 0)
            gap_best = max(e1, f1)
            diag = h_b[d] + mat[ref[j] * n + read[i]]
            h_c[u] = max(gap_best, diag)
            best = max(best, h_c[u])

            if gap_best <= diag:
                row[dh] = _DIAGONAL
            else:
                row[dh] = row[de] if e1 > f1 else row[df]

        h_b[1 : u + 1] = h_c[1 : u + 1]

    return best, directions


def _trace_back(
    directions: list[list[int]], band_width: int, read_len: int, ref_len: int
) -> list[int]:
    """Walk the direction rows from the last cell and build the CIGAR."""
    i, j = read_len - 1, ref_len - 1
    count = 0
    op = prev_op = "M"
    slot = _SLOT_H
    reversed_cigar: list[int] = []

    while i > 0:
        index = (j - _band_offset(band_width, i)) * 3 + slot
        row = directions[i]
        code = row[index] if j >= 0 and 0 <= index < len(row) else 0
        if code == _DIAGONAL:
            i, j, slot, op = i - 1, j - 1, _SLOT_H, "M"
        elif code == _E_EXTEND:
            i, slot, op = i - 1, _SLOT_E, "I"
        elif code == _E_OPEN:
            i, slot, op = i - 1, _SLOT_H, "I"
        elif code == _F_EXTEND:
            j, slot, op = j - 1, _SLOT_F, "D"
        elif code == _F_OPEN:
            j, slot, op = j - 1, _SLOT_H, "D"
        else:
            raise TraceBackError(f"trace back error at read {i}, reference {j}")

        if op == prev_op:
            count += 1
        else:
            reversed_cigar.append(to_cigar_int(count, prev_op))
            prev_op = op
            count = 1

    if op == "M":
        reversed_cigar.append(to_cigar_int(count + 1, op))
    else:
        reversed_cigar.append(to_cigar_int(count, op))
        reversed_cigar.append(to_cigar_int(1, "M"))

    return reversed_cigar[::-1]


def banded_sw(
    ref: Sequence[int],
    read: Sequence[int],
    score: int,
    gap_open: int,
    gap_extend: int,
    band_width: int,
    mat: Sequence[int],
    n: int,
) -> list[int]:
    """Return the packed CIGAR of the alignment of ``read`` against ``ref``.

    The band is doubled until the best score in it reaches ``score``; the
    trace back then runs in the last band that was not needed. Raises
    ``ValueError`` when even the full matrix does not reach ``score``.
    """
    _validate(ref, read, gap_open, gap_extend, band_width, mat, n)
    full_band = max(len(ref), len(read))
    while True:
        _log.debug("Bandwidth: %d", band_width)
        best, directions = _fill(ref, read, gap_open, gap_extend, band_width, mat, n)
        band_width *= 2
        if best >= score:
            break
        if band_width // 2 >= full_band:
            raise ValueError("Alignment score and position are not consensus.")
        if band_width == 0:
            band_width = 1
    band_width //= 2
    return _trace_back(directions, band_width, len(read), len(ref))


def banded_sw_standalone(
    ref: Sequence[int],
    read: Sequence[int],
    gap_open: int,
    gap_extend: int,
    band_width: int,
    mat: Sequence[int],
    n: int,
) -> list[int]:
    """Return the packed CIGAR of a single banded alignment of fixed width."""
    _validate(ref, read, gap_open, gap_extend, band_width, mat, n)
    _, directions = _fill(ref, read, gap_open, gap_extend, band_width, mat, n)
    return _trace_back(directions, band_width, len(read), len(ref))
"""Alignment of a fixed read to a fixed reference, printed BLAST-like."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from .cigar import cigar_int_to_len, cigar_int_to_op
from .ssw import SswAlignment, ssw_align, ssw_init

_LINE_WIDTH = 60


def _nt_table() -> tuple[int, ...]:
    table = [4] * 128
    for letter, code in (("A", 0), ("C", 1), ("G", 2), ("T", 3), ("U", 0)):
        table[ord(letter)] = table[ord(letter.lower())] = code
    return tuple(table)


NT_TABLE = _nt_table()

_REF = "CAGCCTTTCTGACCCGGAAATCAAAATAGGCACAACAAA"
_READ = "CTGAGCCGGTAAATC"


def format_pairwise(
    alignment: SswAlignment, ref_seq: str, read_seq: str, table: Sequence[int]
) -> str:
    """Render the scores, positions and a 60-column pairwise view."""
    parts = [
        f"optimal_alignment_score: {alignment.score1}\t"
        f"sub-optimal_alignment_score: {alignment.score2}\t"
    ]
    if alignment.ref_begin1 + 1:
        parts.append(f"target_begin: {alignment.ref_begin1 + 1}\t")
    parts.append(f"target_end: {alignment.ref_end1 + 1}\t")
    if alignment.read_begin1 + 1:
        parts.append(f"query_begin: {alignment.read_begin1 + 1}\t")
    parts.append(f"query_end: {alignment.read_end1 + 1}\n\n")

    columns = [
        cigar_int_to_op(item)
        for item in alignment.cigar
        for _ in range(cigar_int_to_len(item))
    ]
    q, p = alignment.ref_begin1, alignment.read_begin1
    for start in range(0, len(columns), _LINE_WIDTH):
        chunk = columns[start : start + _LINE_WIDTH]
        top, mid, bottom = [], [], []
        q0, p0 = q, p
        for op in chunk:
            if op == "M":
                top.append(ref_seq[q])
                bottom.append(read_seq[p])
                same = table[ord(ref_seq[q])] == table[ord(read_seq[p])]
                mid.append("|" if same else "*")
                q += 1
                p += 1
            elif op == "I":
                top.append("-")
                bottom.append(read_seq[p])
                mid.append("*")
                p += 1
            else:
                top.append(ref_seq[q])
                bottom.append("-")
                mid.append("*")
                q += 1
        parts.append(
            f"Target: {q0 + 1:8d}    {''.join(top)}    {q}\n"
            f"                    {''.join(mid)}\n"
            f"Query:  {p0 + 1:8d}    {''.join(bottom)}    {p}\n\n"
        )
    return "".join(parts)


def main(argv: Sequence[str] | None = None) -> int:
    """Align the built-in example pair and print the result."""
    parser = argparse.ArgumentParser(
        prog="stripedsw-demo",
        description="Align a fixed read to a fixed reference and print the result.",
    )
    parser.parse_args(argv)

    match, mismatch, gap_open, gap_extend = 2, 2, 3, 1
    mat = [
        0 if 4 in (row, col) else (match if row == col else -mismatch)
        for row in range(5)
        for col in range(5)
    ]
    read_codes = [NT_TABLE[ord(c)] for c in _READ]
    ref_codes = [NT_TABLE[ord(c)] for c in _REF]
    profile = ssw_init(read_codes, mat, 5, 2)
    result = ssw_align(profile, ref_codes, gap_open, gap_extend, 1, 0, 0, len(_READ))
    sys.stdout.write(format_pairwise(result, _REF, _READ, NT_TABLE))
    return 0


if __name__ == "__main__":
    sys.exit(main())
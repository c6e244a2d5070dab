# stripedsw

Local sequence alignment with the striped Smith-Waterman algorithm.
Given a query (read) and a target (reference) sequence, both encoded as
integer codes into a square substitution matrix, it finds the best local
alignment score, the sub-optimal score, the begin and end positions on both
sequences, and a CIGAR describing the alignment path. It is written in pure
Python with no dependencies.

## Installation

```
pip install .
```

For running the test suite:

```
pip install .[test]
pytest
```

## Aligning sequences

`stripedsw.ssw` holds the main routines:

- `ssw_init(read, mat, n, score_size)` prepares a query profile for the
  encoded `read` against the `n` by `n` matrix `mat`. `score_size` is 0 when
  the best score is surely below 255, 1 when it is surely not, and 2 when
  unknown.
- `ssw_align(profile, ref, gap_open, gap_extend, flag, filters, filterd, mask_len)`
  returns an `SswAlignment` with `score1`, `score2`, `ref_begin1`,
  `ref_end1`, `read_begin1`, `read_end1`, `ref_end2`, the packed `cigar`
  and its text form `cigar_string`. All positions are 0-based.

With `flag` 0 only the scores and end positions are computed. Any non-zero
`flag` also computes the begin positions. The CIGAR is then computed when
one of the low three bits of `flag` is set, unless bit 2 is set and the score
is below `filters`, or bit 4 is set and either span exceeds `filterd`. The
sub-optimal score is reported only when `mask_len` is at least 15.
`ProfileError` is raised when a byte-only profile (`score_size` 0)
overflows.

```python
from stripedsw.demo import NT_TABLE, format_pairwise
from stripedsw.ssw import ssw_align, ssw_init

ref_seq = "CAGCCTTTCTGACCCGGAAATCAAAATAGGCACAACAAA"
read_seq = "CTGAGCCGGTAAATC"

# A, C, G, T score 2 on a match and -2 on a mismatch; N (code 4) scores 0.
mat = [0 if 4 in (r, c) else (2 if r == c else -2) for r in range(5) for c in range(5)]
read = [NT_TABLE[ord(c)] for c in read_seq]
ref = [NT_TABLE[ord(c)] for c in ref_seq]

profile = ssw_init(read, mat, 5, 2)
result = ssw_align(profile, ref, 3, 1, 1, 0, 0, len(read))

print(result.score1, result.cigar_string)
print(format_pairwise(result, ref_seq, read_seq, NT_TABLE))
```

`ssw.cigar_spans(cigar)` returns the numbers of reference and read bases a
CIGAR consumes.

## Building blocks

- `stripedsw.scan.sw_scan(...)` runs the striped scan alone and returns the
  best and sub-optimal `AlignmentEnd`; `score_bias(mat)` and
  `Profile.build(...)` give the biased striped profile it works on.
- `stripedsw.banded.banded_sw(...)` and `banded_sw_standalone(...)` run the
  banded global alignment that recovers the CIGAR of a located alignment;
  `TraceBackError` is raised when the trace back leaves the band.
- `stripedsw.cigar` converts between CIGAR operations and their packed
  integer form: `to_cigar_int`, `cigar_int_to_op`, `cigar_int_to_len` and
  `cigar_to_string`.
- `stripedsw.timing.Timer` measures elapsed seconds with `start()` and
  `elapsed()`.

## Reading FASTA and FASTQ

```python
from stripedsw.fastx import open_fastx

with open_fastx("reads.fastq") as reader:
    for record in reader:
        print(record.name, len(record.seq), record.qual)
```

`open_fastx` reads plain and gzip-compressed files; `FastxReader` works on
any open binary or text stream and can be rewound with `rewind()`. Records
are `FastxRecord` values with `name`, `comment`, `seq` and `qual` (`None` for
FASTA). A FASTQ record whose quality string is missing or of a different
length than its sequence raises `TruncatedQualityError`. With
`printable_only=True` only printable, non-space characters are kept in
sequences.

## Command line

```
ssw-example
```

aligns a fixed read against a fixed reference and prints the scores,
positions and a BLAST-like pairwise view.

## What is not included

The package has no command for aligning the records of FASTA/FASTQ files
against each other, and writes no SAM output. There is no higher-level
aligner that takes character strings directly, soft-clips unaligned query
ends or counts mismatches: sequences must be encoded to integer codes by the
caller, as in the example above.
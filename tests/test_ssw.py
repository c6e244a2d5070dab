import pytest

from stripedsw.cigar import to_cigar_int
from stripedsw.ssw import ProfileError, cigar_spans, ssw_align, ssw_init

CODES = {"A": 0, "C": 1, "G": 2, "T": 3, "N": 4}
REF = "CAGCCTTTCTGACCCGGAAATCAAAATAGGCACAACAAA"
READ = "CTGAGCCGGTAAATC"


def encode(seq):
    return [CODES[c] for c in seq]


def matrix(match=2, mismatch=2):
    return [
        0 if 4 in (i, j) else (match if i == j else -mismatch)
        for i in range(5)
        for j in range(5)
    ]


def align(flag=1, score_size=2, mask_len=15, filters=0, filterd=0, ref=REF, read=READ):
    profile = ssw_init(encode(read), matrix(), 5, score_size)
    return ssw_align(profile, encode(ref), 3, 1, flag, filters, filterd, mask_len)


def test_worked_example():
    result = align()
    assert result.score1 == 21
    assert result.ref_begin1 == 8
    assert result.cigar_string == "9M1I5M"
    assert result.read_end1 - result.read_begin1 + 1 == len(READ)


def test_cigar_covers_located_spans():
    result = align()
    ref_bases, read_bases = cigar_spans(result.cigar)
    assert ref_bases == result.ref_end1 - result.ref_begin1 + 1
    assert read_bases == result.read_end1 - result.read_begin1 + 1


def test_flag_zero_gives_only_ends():
    full = align(flag=1)
    ends = align(flag=0)
    assert ends.ref_begin1 == -1
    assert ends.read_begin1 == -1
    assert ends.cigar == []
    assert (ends.score1, ends.ref_end1, ends.read_end1) == (
        full.score1,
        full.ref_end1,
        full.read_end1,
    )


def test_short_mask_drops_suboptimal():
    result = align(mask_len=10)
    assert result.score2 == 0
    assert result.ref_end2 == -1


def test_suboptimal_below_optimal():
    result = align(mask_len=15)
    assert result.score2 < result.score1
    assert abs(result.ref_end2 - result.ref_end1) > 15 or result.score2 == 0


def test_word_and_byte_profiles_agree():
    byte = align(score_size=0)
    word = align(score_size=1)
    assert (byte.score1, byte.ref_begin1, byte.ref_end1) == (
        word.score1,
        word.ref_begin1,
        word.ref_end1,
    )
    assert (byte.read_begin1, byte.read_end1, byte.cigar) == (
        word.read_begin1,
        word.read_end1,
        word.cigar,
    )


def test_byte_overflow_needs_word_profile():
    read = "A" * 130
    ref = "C" * 5 + read + "C" * 5
    with pytest.raises(ProfileError):
        align(score_size=0, ref=ref, read=read)
    result = align(score_size=2, ref=ref, read=read)
    assert result.score1 == 2 * len(read)
    assert result.ref_begin1 == ref.index(read)
    assert result.cigar == [to_cigar_int(len(read), "M")]


def test_score_filter_withholds_cigar():
    high = align(flag=2, filters=1000)
    assert high.ref_begin1 == -1
    assert high.cigar == []
    low = align(flag=2, filters=0)
    assert low.cigar == align(flag=1).cigar


def test_distance_filter_withholds_cigar():
    result = align(flag=4, filterd=1)
    assert result.cigar == []
    assert result.ref_begin1 == align(flag=1).ref_begin1


def test_invalid_score_size():
    with pytest.raises(ValueError):
        ssw_init(encode(READ), matrix(), 5, 3)


def test_invalid_codes():
    with pytest.raises(ValueError):
        ssw_init([0, 7], matrix(), 5, 2)


def test_empty_read_rejected():
    with pytest.raises(ValueError):
        ssw_init([], matrix(), 5, 2)
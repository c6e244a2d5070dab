import pytest

from stripedsw.cigar import (
    cigar_int_to_len,
    cigar_int_to_op,
    cigar_to_string,
    to_cigar_int,
)


@pytest.mark.parametrize("op", list("MIDNSHP=X"))
def test_round_trip_every_operation(op):
    packed = to_cigar_int(7, op)
    assert cigar_int_to_op(packed) == op
    assert cigar_int_to_len(packed) == 7


def test_bam_layout_for_insertion():
    assert to_cigar_int(1, "I") == 0x11


def test_match_has_code_zero():
    assert to_cigar_int(5, "M") == 5 << 4


def test_unknown_letter_encodes_as_match():
    assert to_cigar_int(3, "Q") == to_cigar_int(3, "M")


def test_unknown_code_decodes_as_match():
    assert cigar_int_to_op(0xF) == "M"
    assert cigar_int_to_op((4 << 4) | 9) == "M"


def test_length_is_truncated_to_32_bits():
    packed = to_cigar_int(1 << 28, "D")
    assert packed <= 0xFFFFFFFF
    assert cigar_int_to_op(packed) == "D"
    assert cigar_int_to_len(packed) == 0


def test_cigar_to_string():
    cigar = [to_cigar_int(3, "M"), to_cigar_int(1, "I"), to_cigar_int(2, "M")]
    assert cigar_to_string(cigar) == "3M1I2M"


def test_cigar_to_string_empty():
    assert cigar_to_string([]) == ""
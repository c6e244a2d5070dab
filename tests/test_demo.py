from stripedsw.cigar import to_cigar_int
from stripedsw.demo import NT_TABLE, format_pairwise, main
from stripedsw.ssw import SswAlignment, ssw_align, ssw_init

REF = "CAGCCTTTCTGACCCGGAAATCAAAATAGGCACAACAAA"
READ = "CTGAGCCGGTAAATC"


def example_alignment():
    mat = [
        0 if 4 in (i, j) else (2 if i == j else -2) for i in range(5) for j in range(5)
    ]
    profile = ssw_init([NT_TABLE[ord(c)] for c in READ], mat, 5, 2)
    return ssw_align(profile, [NT_TABLE[ord(c)] for c in REF], 3, 1, 1, 0, 0, 15)


def test_example_header():
    aln = example_alignment()
    text = format_pairwise(aln, REF, READ, NT_TABLE)
    assert text.startswith("optimal_alignment_score: 21\t")
    assert f"target_begin: {aln.ref_begin1 + 1}\t" in text
    assert f"query_end: {aln.read_end1 + 1}\n\n" in text


def test_example_rows_reproduce_sequences():
    aln = example_alignment()
    lines = format_pairwise(aln, REF, READ, NT_TABLE).split("\n")
    target = next(line for line in lines if line.startswith("Target:"))
    index = lines.index(target)
    middle = lines[index + 1].strip()
    query = lines[index + 2]
    top = target.split()[2]
    bottom = query.split()[2]
    assert top.replace("-", "") == REF[aln.ref_begin1 : aln.ref_end1 + 1]
    assert bottom.replace("-", "") == READ[aln.read_begin1 : aln.read_end1 + 1]
    assert len(top) == len(middle) == len(bottom)
    assert int(target.split()[-1]) == aln.ref_end1 + 1


def test_small_block_layout():
    aln = SswAlignment(
        score1=2, ref_begin1=0, ref_end1=2, read_begin1=0, read_end1=2,
        cigar=[to_cigar_int(3, "M")],
    )
    text = format_pairwise(aln, "ACG", "ACT", NT_TABLE)
    block = text.split("\n\n", 1)[1]
    assert block == (
        "Target:        1    ACG    3\n"
        "                    ||*\n"
        "Query:         1    ACT    3\n\n"
    )


def test_long_alignment_wraps_at_sixty():
    seq = "ACGT" * 20
    aln = SswAlignment(
        score1=len(seq), ref_begin1=0, ref_end1=len(seq) - 1,
        read_begin1=0, read_end1=len(seq) - 1,
        cigar=[to_cigar_int(len(seq), "M")],
    )
    text = format_pairwise(aln, seq, seq, NT_TABLE)
    assert text.count("Target:") == 2
    assert f"Target: {61:8d}    {seq[60:]}    {len(seq)}" in text


def test_missing_begin_positions_are_omitted():
    aln = SswAlignment(score1=5, ref_end1=4, read_end1=3)
    text = format_pairwise(aln, REF, READ, NT_TABLE)
    assert "target_begin" not in text
    assert "query_begin" not in text
    assert text.endswith("query_end: 4\n\n")


def test_main_prints_example(capsys):
    assert main([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("optimal_alignment_score:")
    assert out.count("Target:") == 1
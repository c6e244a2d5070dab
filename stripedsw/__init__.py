"""Striped Smith-Waterman local sequence alignment, CIGAR handling and FASTA/FASTQ reading."""

__version__ = "0.1.5"

__all__ = ["banded", "cigar", "demo", "fastx", "scan", "ssw", "timing"]
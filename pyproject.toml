[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stripedsw"
version = "0.1.5"
description = "Striped Smith-Waterman local sequence alignment with CIGAR output and FASTA/FASTQ reading"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "smith-waterman",
    "sequence alignment",
    "bioinformatics",
    "cigar",
    "fasta",
    "fastq",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ssw-example = "stripedsw.demo:main"

[tool.hatch.build.targets.wheel]
packages = ["stripedsw"]

[tool.hatch.build.targets.sdist]
include = ["stripedsw", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

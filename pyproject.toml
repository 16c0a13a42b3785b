[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polydna"
version = "0.1.0"
description = "DNA sequence utilities: transforms, IUPAC variants, seqhash identifiers, codon tables, codon optimization and synthesis fixing."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "dna",
    "bioinformatics",
    "synthetic biology",
    "codon optimization",
    "seqhash",
    "blake3",
    "sequence",
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

[tool.hatch.build.targets.wheel]
packages = ["polydna"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

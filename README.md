# polydna

Tools for working with DNA, RNA and protein sequences in plain Python, with
no runtime dependencies.

## Modules

- **`polydna.transform`**: `reverse_complement`, `complement`, `reverse` and
  `complement_base` for IUPAC nucleotide letters in upper and lower case.
  `complement_base` returns a space for an unknown letter.
- **`polydna.variants`**: `all_variants_iupac` expands a sequence with
  ambiguous IUPAC bases into every concrete sequence it can stand for. It
  raises `ValueError` for a letter that is not an IUPAC nucleotide code.
- **`polydna.seqhash`**: `hash_sequence` builds a stable identifier such as
  `v1_DLD_<hex digest>`. The middle tag gives the sequence type (`D`, `R`,
  `P`), whether it is circular (`C`) or linear (`L`), and whether it is double
  (`D`) or single (`S`) stranded. Circular sequences are rotated to their
  least rotation, and double-stranded ones are compared with their reverse
  complement, so any rotation and either strand give the same hash. RNA is
  hashed as DNA, with `U` read as `T`. `SequenceType` lists the accepted
  types. `rotate_sequence` and `least_rotation` give the canonical rotation.
  `blake3_256` is the pure-Python BLAKE3 digest the hash is built on.
- **`polydna.codon`**: `Codon`, `AminoAcid` and `CodonTable` dataclasses. The
  module also provides:
  - `get_codon_table(n)` for NCBI genetic code number `n`.
  - `generate_codon_table` to build a table from NCBI-style strings.
  - `codon_frequency` to count in-frame codons.
  - `CodonTable.optimize_table` to return a copy weighted by codon usage in
    a sequence.
  - `parse_codon_json`, `read_codon_json` and `write_codon_json` for JSON
    input and output.
  - `compromise_codon_table` and `add_codon_table` to combine two tables.
- **`polydna.optimize`**:
  - `translate` turns DNA into protein. It ignores case, and it skips
    unknown codons and a trailing partial codon.
  - `optimize` back-translates a protein, choosing codons at random in
    proportion to their weights. It leaves out codons that make up 10% or
    less of an amino acid's usage. Passing `seed` makes the result
    reproducible.
  - `build_choosers` and `CodonChooser` expose the weighted choice.
- **`polydna.fix`**:
  - `fix_cds` swaps in synonymous codons, preferring the most heavily
    weighted ones, until no problem finder reports anything. It returns the
    fixed sequence and a list of `Change` records.
  - Problem finders are callables that take a sequence and yield
    `DnaSuggestion`s. `remove_sequence`, `remove_repeat` and
    `gc_content_fixer` build them, and `find_problems` runs a list of them.
  - `fix_cds_simple` runs `fix_cds` with default finders. They remove 8-base
    A or G homopolymers, the sequences you list (and their reverse
    complements), 18-base repeats, and GC content above 80% or below 20%.

## Installation

```
pip install polydna
```

The package needs Python 3.10 or newer.

## Examples

```python
from polydna.transform import reverse_complement
from polydna.seqhash import SequenceType, hash_sequence
from polydna.codon import get_codon_table
from polydna.optimize import translate, optimize
from polydna.fix import fix_cds_simple

reverse_complement("GATTACA")            # 'TGTAATC'

hash_sequence("ATGC", SequenceType.DNA, circular=False, double_stranded=True)
# 'v1_DLD_f4028f93e08c5c23cbb8daa189b0a9802b378f1a1c919dcbcf1608a615f46350'

table = get_codon_table(11)
translate("ATGGCTAGCAAATAA", table)      # 'MASK*'

dna = optimize("MASK*", table, seed=10)  # same seed, same result
fixed, changes = fix_cds_simple(dna, table, ["GGTCTC"])
```

A table weighted with `optimize_table` gives weight 0 to every codon that is
absent from the sample sequence. `optimize` needs every amino acid in the
table to keep at least one codon with positive weight. If one does not,
building the choosers raises `CodonTableError`.

## Errors

Invalid input raises an exception instead of returning an error value:

- `SeqhashError` for an unknown sequence type, a letter outside the allowed
  alphabet, or a double-stranded protein.
- `CodonTableError` for an unknown NCBI table number, malformed JSON, a
  cut-off outside 0–1, or codons missing from the second table of a
  compromise.
- `EmptyCodonTableError`, `EmptySequenceError` and `InvalidAminoAcidError`
  for translation and optimization.
- `FixError` for an incomplete CDS, an incomplete codon table, an invalid
  bias, or a problem that cannot be fixed.

## What it does not do

- There is no command-line program. Everything is used from Python.
- It does not read sequence files such as GenBank or FASTA. Sequences are
  passed in as strings, and the only file format handled is the codon table
  JSON.

## Running the tests

```
pip install -e ".[test]"
pytest
```
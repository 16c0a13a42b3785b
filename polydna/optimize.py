"""Translation of coding sequences and weighted codon optimisation."""

from __future__ import annotations

import random
from bisect import bisect_left
from collections.abc import Iterable
from itertools import accumulate

from polydna.codon import CodonTable, CodonTableError

__all__ = [
    "EmptyCodonTableError",
    "EmptySequenceError",
    "InvalidAminoAcidError",
    "CodonChooser",
    "build_choosers",
    "translate",
    "optimize",
]

_CODON_LENGTH = 3
# Codons used for less than this share of an amino acid are never picked.
_RARE_CODON_SHARE = 0.10


class EmptyCodonTableError(ValueError):
    """Raised when an operation is given an empty codon table."""

    def __init__(self) -> None:
        super().__init__("empty codon table")


class EmptySequenceError(ValueError):
    """Raised when an operation is given an empty sequence."""


class InvalidAminoAcidError(ValueError):
    """Raised when a protein sequence holds an amino acid missing from the table."""

    def __init__(self, amino_acid: str) -> None:
        self.amino_acid = amino_acid
        super().__init__(f"amino acid {amino_acid!r} is missing from codon table")


class CodonChooser:
    """Picks codon triplets at random in proportion to their weights."""

    def __init__(self, choices: Iterable[tuple[str, int]]) -> None:
        usable = [(item, weight) for item, weight in choices if weight > 0]
        if not usable:
            raise CodonTableError("zero choices with weight >= 1")
        self.items = [item for item, _ in usable]
        self.totals = list(accumulate(weight for _, weight in usable))

    def pick(self, rng: random.Random) -> str:
        """Return one item, chosen with probability proportional to its weight."""
        point = rng.randrange(self.totals[-1]) + 1
        return self.items[bisect_left(self.totals, point)]


def build_choosers(table: CodonTable) -> dict[str, CodonChooser]:
    """Return a chooser for each amino acid of ``table``.

    Codons that make up no more than ten percent of an amino acid's usage
    are left out. Raises CodonTableError if an amino acid is left with no
    codon of positive weight.
    """
    choosers: dict[str, CodonChooser] = {}
    for amino_acid in table.amino_acids:
        total = sum(codon.weight for codon in amino_acid.codons)
        choices = []
        if total > 0:
            choices = [
                (codon.triplet, codon.weight)
                for codon in amino_acid.codons
                if codon.weight / total > _RARE_CODON_SHARE
            ]
        try:
            choosers[amino_acid.letter] = CodonChooser(choices)
        except CodonTableError as error:
            raise CodonTableError(
                f"cannot build codon chooser for {amino_acid.letter!r}: {error}"
            ) from error
    return choosers


def translate(sequence: str, table: CodonTable) -> str:
    """Translate a nucleotide sequence into an amino acid sequence.

    Codons missing from the table translate to nothing; a trailing partial
    codon is ignored.
    """
    if table.is_empty():
        raise EmptyCodonTableError()
    if not sequence:
        raise EmptySequenceError("empty sequence string")
    lookup = table.translation_table()
    return "".join(
        lookup.get(sequence[start : start + _CODON_LENGTH].upper(), "")
        for start in range(0, len(sequence) - _CODON_LENGTH + 1, _CODON_LENGTH)
    )


def optimize(amino_acids: str, table: CodonTable, seed: int | None = None) -> str:
    """Return a nucleotide sequence encoding ``amino_acids`` using weighted codons.

    The same ``seed`` always gives the same result; without one the choice
    is unpredictable.
    """
    if table.is_empty():
        raise EmptyCodonTableError()
    if not amino_acids:
        raise EmptySequenceError("empty amino acid string")
    rng = random.Random(seed)
    choosers = build_choosers(table)
    codons = []
    for amino_acid in amino_acids:
        chooser = choosers.get(amino_acid)
        if chooser is None:
            raise InvalidAminoAcidError(amino_acid)
        codons.append(chooser.pick(rng))
    return "".join(codons)
"""Codon tables: NCBI genetic codes, codon weighting, JSON I/O and merging."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Union

__all__ = [
    "Codon",
    "AminoAcid",
    "CodonTable",
    "CodonTableError",
    "codon_frequency",
    "generate_codon_table",
    "get_codon_table",
    "parse_codon_json",
    "read_codon_json",
    "write_codon_json",
    "compromise_codon_table",
    "add_codon_table",
]

_CODON_LENGTH = 3


class CodonTableError(ValueError):
    """Raised when a codon table cannot be built, read or combined."""


@dataclass
class Codon:
    """A codon triplet and its usage weight."""

    triplet: str
    weight: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"triplet": self.triplet, "weight": self.weight}


@dataclass
class AminoAcid:
    """An amino acid letter and the codons that encode it."""

    letter: str
    codons: list[Codon] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"letter": self.letter, "codons": [c.to_dict() for c in self.codons]}


@dataclass
class CodonTable:
    """Mapping between codons and amino acids, with start and stop codons."""

    start_codons: list[str] = field(default_factory=list)
    stop_codons: list[str] = field(default_factory=list)
    amino_acids: list[AminoAcid] = field(default_factory=list)

    def is_empty(self) -> bool:
        """Return True if the table has no start codons, stop codons or amino acids."""
        return not (self.start_codons or self.stop_codons or self.amino_acids)

    def translation_table(self) -> dict[str, str]:
        """Return a mapping of codon triplet to amino acid letter."""
        return {
            codon.triplet: amino_acid.letter
            for amino_acid in self.amino_acids
            for codon in amino_acid.codons
        }

    def optimize_table(self, sequence: str) -> CodonTable:
        """Return a copy weighted by codon frequency in ``sequence``."""
        frequencies = codon_frequency(sequence.upper())
        return CodonTable(
            start_codons=list(self.start_codons),
            stop_codons=list(self.stop_codons),
            amino_acids=[
                AminoAcid(
                    amino_acid.letter,
                    [Codon(c.triplet, frequencies.get(c.triplet, 0)) for c in amino_acid.codons],
                )
                for amino_acid in self.amino_acids
            ],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the table as a JSON-ready dictionary."""
        return {
            "start_codons": list(self.start_codons),
            "stop_codons": list(self.stop_codons),
            "amino_acids": [aa.to_dict() for aa in self.amino_acids],
        }


def codon_frequency(sequence: str) -> dict[str, int]:
    """Count each complete codon of ``sequence`` read in frame from the start."""
    return dict(
        Counter(
            sequence[start : start + _CODON_LENGTH]
            for start in range(0, len(sequence) - _CODON_LENGTH + 1, _CODON_LENGTH)
        )
    )


_BASE1 = "TTTTTTTTTTTTTTTTCCCCCCCCCCCCCCCCAAAAAAAAAAAAAAAAGGGGGGGGGGGGGGGG"
_BASE2 = "TTTTCCCCAAAAGGGGTTTTCCCCAAAAGGGGTTTTCCCCAAAAGGGGTTTTCCCCAAAAGGGG"
_BASE3 = "TCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAGTCAG"


def generate_codon_table(amino_acids: str, starts: str) -> CodonTable:
    """Build a codon table from NCBI-style amino acid and start strings."""
    by_letter: dict[str, list[Codon]] = {}
    start_codons: list[str] = []
    stop_codons: list[str] = []
    for letter, start, b1, b2, b3 in zip(amino_acids, starts, _BASE1, _BASE2, _BASE3):
        triplet = b1 + b2 + b3
        by_letter.setdefault(letter, []).append(Codon(triplet, 1))
        if start == "M":
            start_codons.append(triplet)
        elif start == "*":
            stop_codons.append(triplet)
    return CodonTable(
        start_codons,
        stop_codons,
        [AminoAcid(letter, codons) for letter, codons in by_letter.items()],
    )


_NCBI_TABLES: dict[int, tuple[str, str]] = {
    1: ("FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "---M------**--*----M---------------M----------------------------"),
    2: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSS**VVVVAAAADDEEGGGG", "----------**--------------------MMMM----------**---M------------"),
    3: ("FFLLSSSSYY**CCWWTTTTPPPPHHQQRRRRIIMMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**----------------------MM---------------M------------"),
    4: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--MM------**-------M------------MMMM---------------M------------"),
    5: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSSSVVVVAAAADDEEGGGG", "---M------**--------------------MMMM---------------M------------"),
    6: ("FFLLSSSSYYQQCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    9: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG", "----------**-----------------------M---------------M------------"),
    10: ("FFLLSSSSYY**CCCWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**-----------------------M----------------------------"),
    11: ("FFLLSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "---M------**--*----M------------MMMM---------------M------------"),
    12: ("FFLLSSSSYY**CC*WLLLSPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**--*----M---------------M----------------------------"),
    13: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNKKSSGGVVVVAAAADDEEGGGG", "---M------**----------------------MM---------------M------------"),
    14: ("FFLLSSSSYYY*CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNNKSSSSVVVVAAAADDEEGGGG", "-----------*-----------------------M----------------------------"),
    16: ("FFLLSSSSYY*LCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------*---*--------------------M----------------------------"),
    21: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIMMTTTTNNNKSSSSVVVVAAAADDEEGGGG", "----------**-----------------------M---------------M------------"),
    22: ("FFLLSS*SYY*LCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "------*---*---*--------------------M----------------------------"),
    23: ("FF*LSSSSYY**CC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--*-------**--*-----------------M--M---------------M------------"),
    24: ("FFLLSSSSYY**CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSSKVVVVAAAADDEEGGGG", "---M------**-------M---------------M---------------M------------"),
    25: ("FFLLSSSSYY**CCGWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "---M------**-----------------------M---------------M------------"),
    26: ("FFLLSSSSYY**CC*WLLLAPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**--*----M---------------M----------------------------"),
    27: ("FFLLSSSSYYQQCCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    28: ("FFLLSSSSYYQQCCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**--*--------------------M----------------------------"),
    29: ("FFLLSSSSYYYYCC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    30: ("FFLLSSSSYYEECC*WLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "--------------*--------------------M----------------------------"),
    31: ("FFLLSSSSYYEECCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSRRVVVVAAAADDEEGGGG", "----------**-----------------------M----------------------------"),
    33: ("FFLLSSSSYYY*CCWWLLLLPPPPHHQQRRRRIIIMTTTTNNKKSSSKVVVVAAAADDEEGGGG", "---M-------*-------M---------------M---------------M------------"),
}


def get_codon_table(index: int) -> CodonTable:
    """Return a fresh copy of the NCBI genetic code numbered ``index``."""
    try:
        amino_acids, starts = _NCBI_TABLES[index]
    except KeyError:
        raise CodonTableError(f"no NCBI codon table numbered {index}") from None
    return generate_codon_table(amino_acids, starts)


def _table_from_dict(data: Any) -> CodonTable:
    if not isinstance(data, dict):
        raise CodonTableError("codon table JSON must be an object")
    try:
        return CodonTable(
            start_codons=list(data.get("start_codons") or []),
            stop_codons=list(data.get("stop_codons") or []),
            amino_acids=[
                AminoAcid(
                    aa["letter"],
                    [Codon(c["triplet"], int(c["weight"])) for c in aa.get("codons") or []],
                )
                for aa in data.get("amino_acids") or []
            ],
        )
    except (KeyError, TypeError, ValueError) as error:
        raise CodonTableError(f"malformed codon table JSON: {error}") from error


def parse_codon_json(data: Union[str, bytes]) -> CodonTable:
    """Parse a codon table from JSON text."""
    try:
        decoded = json.loads(data)
    except json.JSONDecodeError as error:
        raise CodonTableError(f"invalid codon table JSON: {error}") from error
    return _table_from_dict(decoded)


def read_codon_json(path: Union[str, PathLike]) -> CodonTable:
    """Read a codon table from a JSON file."""
    return parse_codon_json(Path(path).read_bytes())


def write_codon_json(table: CodonTable, path: Union[str, PathLike]) -> None:
    """Write a codon table to a JSON file."""
    Path(path).write_text(json.dumps(table.to_dict(), indent=1), encoding="utf-8")


def _share(weight: int, total: int) -> int | None:
    """Weight as parts per ten thousand of ``total``; None when total is zero."""
    if total == 0:
        return None
    return int(weight / total * 10000)


def compromise_codon_table(first: CodonTable, second: CodonTable, cut_off: float) -> CodonTable:
    """Return a table that weights both tables' codon usage equally.

    Codons whose share in either table is below ``cut_off`` get weight 0.
    """
    if cut_off < 0:
        raise CodonTableError("cut off too low, cannot be less than 0")
    if cut_off > 1:
        raise CodonTableError("cut off too high, cannot be greater than 1")

    cut_off_weight = int(10000 * cut_off)
    amino_acids: list[AminoAcid] = []
    for first_aa in first.amino_acids:
        second_weights = {
            codon.triplet: codon.weight
            for second_aa in second.amino_acids
            if second_aa.letter == first_aa.letter
            for codon in second_aa.codons
        }
        missing = [c.triplet for c in first_aa.codons if c.triplet not in second_weights]
        if missing:
            raise CodonTableError(
                f"codons {', '.join(missing)} for {first_aa.letter} missing from second table"
            )
        first_total = sum(c.weight for c in first_aa.codons)
        second_total = sum(second_weights[c.triplet] for c in first_aa.codons)

        codons = []
        for codon in first_aa.codons:
            first_share = _share(codon.weight, first_total)
            second_share = _share(second_weights[codon.triplet], second_total)
            if (
                first_share is None
                or second_share is None
                or first_share < cut_off_weight
                or second_share < cut_off_weight
            ):
                weight = 0
            else:
                weight = int((first_share + second_share) / 2)
            codons.append(Codon(codon.triplet, weight))
        amino_acids.append(AminoAcid(first_aa.letter, codons))

    return CodonTable(list(first.start_codons), list(first.stop_codons), amino_acids)


def add_codon_table(first: CodonTable, second: CodonTable) -> CodonTable:
    """Return a table whose codon weights are the sums of both tables'."""
    second_codons = [codon for aa in second.amino_acids for codon in aa.codons]
    amino_acids = [
        AminoAcid(
            first_aa.letter,
            [
                Codon(codon.triplet, codon.weight + other.weight)
                for codon in first_aa.codons
                for other in second_codons
                if other.triplet == codon.triplet
            ],
        )
        for first_aa in first.amino_acids
    ]
    return CodonTable(list(first.start_codons), list(first.stop_codons), amino_acids)
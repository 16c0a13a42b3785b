"""Expansion of ambiguous IUPAC nucleotide sequences into concrete variants."""

from itertools import product

_IUPAC = {
    "G": "G",
    "A": "A",
    "T": "T",
    "C": "C",
    "R": "GA",
    "Y": "TC",
    "M": "AC",
    "K": "GT",
    "S": "GC",
    "W": "AT",
    "H": "ACT",
    "B": "GTC",
    "V": "GCA",
    "D": "GAT",
    "N": "GATC",
}


def all_variants_iupac(sequence: str) -> list[str]:
    """Return every unambiguous sequence that ``sequence`` can stand for.

    Raises ValueError if the sequence holds a character that is not an
    IUPAC nucleotide code.
    """
    choices = []
    for char in sequence.upper():
        options = _IUPAC.get(char)
        if options is None:
            raise ValueError(f"Error:{char} is not a supported IUPAC character")
        choices.append(options)
    return ["".join(variant) for variant in product(*choices)]
"""Reverse, complement and reverse-complement of nucleotide sequences."""

_COMPLEMENTS = {
    "A": "T",
    "B": "V",
    "C": "G",
    "D": "H",
    "G": "C",
    "H": "D",
    "K": "M",
    "M": "K",
    "N": "N",
    "R": "Y",
    "S": "S",
    "T": "A",
    "U": "A",
    "V": "B",
    "W": "W",
    "Y": "R",
}
_COMPLEMENTS.update({base.lower(): pair.lower() for base, pair in list(_COMPLEMENTS.items())})

# Characters with no known complement become NUL in whole-sequence transforms.
_UNKNOWN = "\x00"


def complement(sequence: str) -> str:
    """Return the complement of ``sequence`` (A<->T, C<->G and IUPAC codes)."""
    return "".join(_COMPLEMENTS.get(base, _UNKNOWN) for base in sequence)


def reverse(sequence: str) -> str:
    """Return ``sequence`` reversed."""
    return sequence[::-1]


def reverse_complement(sequence: str) -> str:
    """Return the reverse of the complement of ``sequence``."""
    return "".join(_COMPLEMENTS.get(base, _UNKNOWN) for base in reversed(sequence))


def complement_base(base: str) -> str:
    """Return the complement of a single base, or a space if it is unknown."""
    return _COMPLEMENTS.get(base, " ")
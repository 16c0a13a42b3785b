"""DNA sequence transforms, IUPAC variants, seqhash identifiers, codon tables, codon optimization and synthesis fixing."""

__version__ = "0.1.0"
__all__ = ["transform", "variants", "seqhash", "codon", "optimize", "fix"]
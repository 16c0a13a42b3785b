import random

import pytest

from polydna.codon import AminoAcid, Codon, CodonTable, CodonTableError, get_codon_table
from polydna.optimize import (
    CodonChooser,
    EmptyCodonTableError,
    EmptySequenceError,
    InvalidAminoAcidError,
    build_choosers,
    optimize,
    translate,
)

GFP_TRANSLATION = (
    "MASKGEELFTGVVPILVELDGDVNGHKFSVSGEGEGDATYGKLTLKFICTTGKLPVPWPTLVTTFSYGVQCFSRYPDHMKRHDFFKSAMPEGYVQERTISFKDDGNYKTRAEVKFEGDTLVNRIELKGIDFKEDGNILGHKLEYNYNSHNVYITADKQKNGIKANFKIRHNIEDGSVQLADHYQQNTPIGDGPVLLPDNHYLSTQSALSKDPNEKRDHMVLLEFVTAAGITHGMDELYK*"
)
GFP_DNA = (
    "ATGGCTAGCAAAGGAGAAGAACTTTTCACTGGAGTTGTCCCAATTCTTGTTGAATTAGATGGTGATGTTAATGGGCACAAATTTTCTGTCAGTGGAGAGGGTGAAGGTGATGCTACATACGGAAAGCTTACCCTTAAATTTATTTGCACTACTGGAAAACTACCTGTTCCATGGCCAACACTTGTCACTACTTTCTCTTATGGTGTTCAATGCTTTTCCCGTTATCCGGATCATATGAAACGGCATGACTTTTTCAAGAGTGCCATGCCCGAAGGTTATGTACAGGAACGCACTATATCTTTCAAAGATGACGGGAACTACAAGACGCGTGCTGAAGTCAAGTTTGAAGGTGATACCCTTGTTAATCGTATCGAGTTAAAAGGTATTGATTTTAAAGAAGATGGAAACATTCTCGGACACAAACTCGAGTACAACTATAACTCACACAATGTATACATCACGGCAGACAAACAAAAGAATGGAATCAAAGCTAACTTCAAAATTCGCCACAACATTGAAGATGGATCCGTTCAACTAGCAGACCATTATCAACAAAATACTCCAATTGGCGATGGCCCTGTCCTTTTACCAGACAACCATTACCTGTCGACACAATCTGCCCTTTCGAAAGATCCCAACGAAAAGCGTGACCACATGGTCCTTCTTGAGTTTGTAACTGCTGCTGGGATTACACATGGCATGGATGAGCTCTACAAATAA"
)


def _weighted_table():
    return get_codon_table(11).optimize_table(GFP_DNA)


def test_translation():
    assert translate(GFP_DNA, get_codon_table(11)) == GFP_TRANSLATION


def test_translation_mixed_case():
    mixed = GFP_DNA[:43].lower() + GFP_DNA[43:]
    assert mixed.startswith("atggctagcaaaggagaagaacttttcactggagttgtcccaaTTCTTG")
    assert translate(mixed, get_codon_table(11)) == GFP_TRANSLATION


def test_translation_lower_case():
    assert translate(GFP_DNA.lower(), get_codon_table(11)) == GFP_TRANSLATION


def test_translation_errors_on_empty_codon_table():
    with pytest.raises(EmptyCodonTableError, match="empty codon table"):
        translate("A", CodonTable())


def test_translation_errors_on_empty_sequence():
    with pytest.raises(EmptySequenceError, match="empty sequence string"):
        translate("", get_codon_table(1))


def test_translation_ignores_partial_codon():
    assert translate("ATGAA", get_codon_table(11)) == "M"


def test_translation_of_unknown_codon_is_empty():
    assert translate("NNNATG", get_codon_table(11)) == "M"


def test_optimize_round_trips_through_translation():
    table = _weighted_table()
    optimized = optimize(GFP_TRANSLATION, table)
    assert len(optimized) == 3 * len(GFP_TRANSLATION)
    assert translate(optimized, table) == GFP_TRANSLATION


def test_optimize_same_seed():
    table = _weighted_table()
    first = optimize(GFP_TRANSLATION, table, 10)
    second = optimize(GFP_TRANSLATION, table, 10)
    assert len(first) == 3 * len(GFP_TRANSLATION)
    assert translate(first, table) == GFP_TRANSLATION
    assert first == second


def test_optimize_different_seed():
    table = _weighted_table()
    assert optimize(GFP_TRANSLATION, table, 1) != optimize(GFP_TRANSLATION, table, 2)


def test_optimize_errors_on_empty_codon_table():
    with pytest.raises(EmptyCodonTableError):
        optimize("A", CodonTable())


def test_optimize_errors_on_empty_amino_acid_string():
    with pytest.raises(EmptySequenceError, match="empty amino acid string"):
        optimize("", get_codon_table(1))


def test_optimize_errors_on_invalid_amino_acid():
    with pytest.raises(InvalidAminoAcidError) as excinfo:
        optimize("TOP", get_codon_table(1))
    assert str(excinfo.value) == "amino acid 'O' is missing from codon table"
    assert excinfo.value.amino_acid == "O"


def test_optimize_errors_on_broken_chooser():
    table = CodonTable(
        start_codons=["ATG"],
        amino_acids=[AminoAcid("M", [Codon("ATG", 0)])],
    )
    with pytest.raises(CodonTableError):
        optimize("M", table)


def test_rare_codons_are_never_chosen():
    table = CodonTable(
        amino_acids=[AminoAcid("A", [Codon("GCT", 95), Codon("GCC", 5)])],
    )
    assert optimize("A" * 50, table, 3) == "GCT" * 50


def test_build_choosers_covers_every_amino_acid():
    table = _weighted_table()
    choosers = build_choosers(table)
    assert set(choosers) == {aa.letter for aa in table.amino_acids}


def test_chooser_picks_only_positive_weights():
    chooser = CodonChooser([("AAA", 0), ("AAG", 7)])
    rng = random.Random(0)
    assert {chooser.pick(rng) for _ in range(20)} == {"AAG"}


def test_chooser_without_weights_raises():
    with pytest.raises(CodonTableError):
        CodonChooser([("AAA", 0)])


def test_chooser_picks_all_weighted_items():
    chooser = CodonChooser([("AAA", 1), ("AAG", 1)])
    rng = random.Random(5)
    assert {chooser.pick(rng) for _ in range(200)} == {"AAA", "AAG"}
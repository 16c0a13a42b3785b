import pytest

from polydna.variants import all_variants_iupac

MENDEL_VARIANTS = (
    "ATGGAGAATGATGAGCTG ATGGAGAATGATGAGCTA ATGGAGAATGATGAGCTT ATGGAGAATGATGAGCTC "
    "ATGGAGAATGATGAACTG ATGGAGAATGATGAACTA ATGGAGAATGATGAACTT ATGGAGAATGATGAACTC "
    "ATGGAGAATGACGAGCTG ATGGAGAATGACGAGCTA ATGGAGAATGACGAGCTT ATGGAGAATGACGAGCTC "
    "ATGGAGAATGACGAACTG ATGGAGAATGACGAACTA ATGGAGAATGACGAACTT ATGGAGAATGACGAACTC "
    "ATGGAGAACGATGAGCTG ATGGAGAACGATGAGCTA ATGGAGAACGATGAGCTT ATGGAGAACGATGAGCTC "
    "ATGGAGAACGATGAACTG ATGGAGAACGATGAACTA ATGGAGAACGATGAACTT ATGGAGAACGATGAACTC "
    "ATGGAGAACGACGAGCTG ATGGAGAACGACGAGCTA ATGGAGAACGACGAGCTT ATGGAGAACGACGAGCTC "
    "ATGGAGAACGACGAACTG ATGGAGAACGACGAACTA ATGGAGAACGACGAACTT ATGGAGAACGACGAACTC "
    "ATGGAAAATGATGAGCTG ATGGAAAATGATGAGCTA ATGGAAAATGATGAGCTT ATGGAAAATGATGAGCTC "
    "ATGGAAAATGATGAACTG ATGGAAAATGATGAACTA ATGGAAAATGATGAACTT ATGGAAAATGATGAACTC "
    "ATGGAAAATGACGAGCTG ATGGAAAATGACGAGCTA ATGGAAAATGACGAGCTT ATGGAAAATGACGAGCTC "
    "ATGGAAAATGACGAACTG ATGGAAAATGACGAACTA ATGGAAAATGACGAACTT ATGGAAAATGACGAACTC "
    "ATGGAAAACGATGAGCTG ATGGAAAACGATGAGCTA ATGGAAAACGATGAGCTT ATGGAAAACGATGAGCTC "
    "ATGGAAAACGATGAACTG ATGGAAAACGATGAACTA ATGGAAAACGATGAACTT ATGGAAAACGATGAACTC "
    "ATGGAAAACGACGAGCTG ATGGAAAACGACGAGCTA ATGGAAAACGACGAGCTT ATGGAAAACGACGAGCTC "
    "ATGGAAAACGACGAACTG ATGGAAAACGACGAACTA ATGGAAAACGACGAACTT ATGGAAAACGACGAACTC"
).split()


def test_iupac_n():
    assert sorted(all_variants_iupac("ATN")) == sorted(["ATG", "ATA", "ATT", "ATC"])


def test_iupac_error():
    with pytest.raises(ValueError, match="X is not a supported IUPAC character"):
        all_variants_iupac("ATX")


def test_mendel_example_order():
    assert all_variants_iupac("ATGGARAAYGAYGARCTN") == MENDEL_VARIANTS


def test_mendel_error_example():
    with pytest.raises(ValueError):
        all_variants_iupac("ATGGARAAYGAYGARXYZ")


def test_single_position_order():
    assert all_variants_iupac("N") == ["G", "A", "T", "C"]


def test_two_positions_order():
    assert all_variants_iupac("RS") == ["GG", "GC", "AG", "AC"]


def test_lowercase_input_is_uppercased():
    assert all_variants_iupac("aty") == ["ATT", "ATC"]


def test_unambiguous_sequence_has_single_variant():
    assert all_variants_iupac("GATTACA") == ["GATTACA"]


def test_empty_sequence():
    assert all_variants_iupac("") == [""]


def test_variant_count_is_product_of_choices():
    assert len(all_variants_iupac("NNHB")) == 4 * 4 * 3 * 3
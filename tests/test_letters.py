import pytest
from rfcmx.engine.letters import OBSCENE_WORDS, first_internal_vowel, is_obscene, letter_code


def test_both_surnames():
    assert letter_code("JUAN", "PEREZ", "GARCIA") == "PEGJ"
    assert letter_code("JOSE", "HERNANDEZ", "RODRIGUEZ") == "HERJ"


def test_missing_maternal_surname():
    assert letter_code("JUAN", "PEREZ", "") == "PEJU"


def test_missing_paternal_surname():
    assert letter_code("JUAN", "", "GARCIA") == "GAJU"


def test_short_paternal_surname():
    assert letter_code("ANA", "NG", "LOPEZ") == "NLAN"
    assert letter_code("A", "B", "C") == "BCAX"


def test_missing_positions_use_sentinel():
    assert letter_code("A", "PEREZ", "") == "PEAX"
    assert letter_code("", "PEREZ", "") == "PEXX"


def test_internal_vowel():
    assert first_internal_vowel("PEREZ") == "E"
    assert first_internal_vowel("ARRIAGA") == "I"
    assert first_internal_vowel("SCHMIDT") == "I"
    assert first_internal_vowel("GRYNSZPAN") == "A"
    assert first_internal_vowel("KRZ") == "X"


def test_no_internal_vowel_gives_x():
    assert letter_code("LUIS", "KRZ", "LOPEZ") == "KXLL"


def test_punctuation_is_not_a_letter():
    assert letter_code("J.", "PEREZ", "") == "PEJX"


def test_obscene_code_gets_trailing_x():
    # P + U + T + O would spell a blocklisted word.
    assert letter_code("OFELIA", "PUERTA", "TAPIA") == "PUTX"
    assert letter_code("ARMANDO", "BUEY", "ESTRADA") == "BUEA"


@pytest.mark.parametrize("word", sorted(OBSCENE_WORDS))
def test_every_blocklisted_word_is_four_letters(word):
    assert len(word) == 4 and word.isalpha()
    assert is_obscene(word)
    assert not is_obscene(word[:3] + "X")


def test_ampersand_is_not_a_letter():
    assert letter_code("JUAN", "&", "GARCIA") == "GAJU"
    assert letter_code("ANA", "M&M", "LOPEZ") == "MLAN"

import pytest

from b64inspect.codec import PADDING, classify
from b64inspect.codec.symbols import STANDARD_ALPHABET, URLSAFE_ALPHABET


def test_standard_alphabet_maps_to_position():
    for value, char in enumerate(STANDARD_ALPHABET):
        assert classify(ord(char)).value == value


def test_urlsafe_characters_share_values_with_standard_ones():
    assert classify(ord("-")).value == classify(ord("+")).value == 62
    assert classify(ord("_")).value == classify(ord("/")).value == 63
    for value, char in enumerate(URLSAFE_ALPHABET):
        assert classify(ord(char)).value == value


def test_padding_is_classified_as_marker():
    symbol = classify(ord("="))
    assert symbol.value == PADDING
    assert symbol.is_padding


@pytest.mark.parametrize("char", [b"\n", b"\r", b" ", b"\t", b"*", b".", b"\x00", b"\xff"])
def test_noise_bytes_are_not_symbols(char):
    assert classify(char[0]) is None


def test_case_sensitivity():
    assert classify(ord("A")).value == 0
    assert classify(ord("a")).value == 26
    assert classify(ord("9")).value == 61

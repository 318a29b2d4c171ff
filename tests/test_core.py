"""Tests for the prime table, character mapper, encoder and binary projector."""

import itertools
import logging
import sys

import pytest

from godelpixels import (
    EncodeResult,
    EncoderConfig,
    GodelEncoder,
    PrimeTable,
    char_value,
    default_prime_table,
    encode,
    generate_primes,
    to_binary,
    to_decimal,
    validate_text,
)
from godelpixels.errors import (
    EmptyInput,
    EncodeError,
    InputTooLong,
    InvalidCharacter,
    PrimeTableExhausted,
)

SYMBOLS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


class TestGeneratePrimes:
    """Test trial-division prime generation."""

    def test_first_ten(self):
        """First ten primes, ascending from 2."""
        assert generate_primes(10) == [2, 3, 5, 7, 11, 13, 17, 19, 23, 29]

    def test_zero_and_negative_counts(self):
        """Non-positive counts give an empty list instead of looping."""
        assert generate_primes(0) == []
        assert generate_primes(-3) == []

    def test_thousandth_prime(self):
        """The 1000th prime is 7919."""
        assert generate_primes(1000)[-1] == 7919


class TestPrimeTable:
    """Test the immutable prime table."""

    def test_nth_is_one_based(self):
        """nth(1) is 2, indexing is 0-based."""
        table = PrimeTable(5)
        assert table.nth(1) == 2
        assert table.nth(5) == 11
        assert table[0] == 2
        assert len(table) == 5

    def test_nth_out_of_range(self):
        """Positions outside the table raise IndexError."""
        table = PrimeTable(3)
        with pytest.raises(IndexError):
            table.nth(4)
        with pytest.raises(IndexError):
            table.nth(0)

    def test_primes_are_a_tuple(self):
        """The table cannot be mutated through its primes."""
        assert isinstance(PrimeTable(4).primes, tuple)

    def test_default_table_is_shared(self):
        """The default table is built once and reused."""
        assert default_prime_table() is default_prime_table()
        assert len(default_prime_table()) == 1000


class TestCharValue:
    """Test the character mapper."""

    def test_letters(self):
        """A=1 ... Z=26, case-insensitive."""
        assert char_value("A") == 1
        assert char_value("a") == 1
        assert char_value("Z") == 26
        assert char_value("m") == char_value("M") == 13

    def test_digits(self):
        """0=27 ... 9=36."""
        assert char_value("0") == 27
        assert char_value("9") == 36

    def test_shift_wraps(self):
        """Shifting 36 by one wraps to 1, not 37."""
        assert char_value("9", 1) == 1
        assert char_value("A", 1) == 2

    def test_negative_shift_stays_in_range(self):
        """Negative shifts rotate backwards and stay in [1, 36]."""
        assert char_value("A", -1) == 36
        assert char_value("B", -37) == 1

    def test_shift_is_bijection(self):
        """Shift s followed by shift (36 - s) mod 36 restores every value."""
        for shift in range(-40, 80, 7):
            shifted = [char_value(symbol, shift) for symbol in SYMBOLS]
            assert sorted(shifted) == list(range(1, 37))
            undo = (36 - shift) % 36
            for symbol, value in zip(SYMBOLS, shifted):
                assert char_value(SYMBOLS[value - 1], undo) == char_value(symbol)

    @pytest.mark.parametrize("symbol", ["!", " ", "é", "٣", "", "AB"])
    def test_invalid_symbols(self, symbol):
        """Anything but a single ASCII letter or digit is rejected."""
        with pytest.raises(InvalidCharacter):
            char_value(symbol)


class TestValidateText:
    """Test input validation order and categories."""

    def test_empty(self):
        """Empty and None inputs raise EmptyInput."""
        with pytest.raises(EmptyInput, match="Please enter some text"):
            validate_text("")
        with pytest.raises(EmptyInput):
            validate_text(None)

    def test_invalid_characters_are_reported(self):
        """The offending characters are recorded once each."""
        with pytest.raises(InvalidCharacter, match="Only letters") as info:
            validate_text("ab!!?")
        assert info.value.characters == "!?"
        assert info.value.code == "invalid_character"

    def test_trailing_newline_rejected(self):
        """A trailing newline is not alphanumeric."""
        with pytest.raises(InvalidCharacter):
            validate_text("AB\n")

    def test_too_long(self):
        """101 characters exceed the default maximum of 100."""
        with pytest.raises(InputTooLong, match="Maximum 100"):
            validate_text("A" * 101)
        assert validate_text("A" * 100) == "A" * 100

    def test_errors_are_value_errors(self):
        """All categories share the EncodeError / ValueError base."""
        for exc in (EmptyInput, InvalidCharacter, InputTooLong, PrimeTableExhausted):
            assert issubclass(exc, EncodeError)
            assert issubclass(exc, ValueError)


class TestGodelEncoder:
    """Test Gödel number computation."""

    def test_single_letter(self):
        """'A' encodes to 2^1 = 2."""
        result = encode("A")
        assert result.number == 2
        assert result.binary == "10"

    def test_single_digit(self):
        """'9' encodes to 2^36."""
        assert encode("9").number == 2 ** 36

    def test_two_letters(self):
        """'AB' encodes to 2^1 * 3^2 = 18."""
        result = encode("AB")
        assert result.number == 18
        assert result.binary == "10010"
        assert result.decimal == "18"

    def test_breakdown_preserves_order(self):
        """Breakdown positions start at 1 and follow the input."""
        result = encode("Hi9")
        assert [t.position for t in result.breakdown] == [1, 2, 3]
        assert [t.char for t in result.breakdown] == ["H", "i", "9"]
        assert [t.prime for t in result.breakdown] == [2, 3, 5]
        assert [t.exponent for t in result.breakdown] == [8, 9, 36]
        assert result.breakdown[2].term == 5 ** 36

    def test_shift_changes_exponents(self):
        """The shift applies to every character."""
        result = encode("9A", shift=1)
        assert [t.exponent for t in result.breakdown] == [1, 2]
        assert result.number == 2 * 3 ** 2
        assert result.shift == 1

    def test_recompute_matches_number(self):
        """Multiplying the breakdown terms reproduces the number exactly."""
        for text in ("A", "Godel1931", "Z" * 50, "9" * 100):
            result = encode(text, shift=5)
            assert result.recompute() == result.number

    def test_distinct_texts_never_collide(self):
        """Unique factorization: different texts give different numbers."""
        texts = ["".join(p) for n in (1, 2) for p in itertools.product("AZ09b", repeat=n)]
        texts = sorted({t.upper() for t in texts})
        numbers = {encode(t).number for t in texts}
        assert len(numbers) == len(texts)

    def test_case_insensitive(self):
        """Upper and lower case letters encode the same number."""
        assert encode("hello").number == encode("HELLO").number

    def test_max_length_input_is_exact(self):
        """A 100-character input is computed without approximation."""
        result = encode("9" * 100)
        expected = 1
        for prime in generate_primes(100):
            expected *= prime ** 36
        assert result.number == expected
        assert result.number.bit_length() > 10000

    def test_invalid_input_computes_nothing(self):
        """'ab!' is rejected with InvalidCharacter."""
        with pytest.raises(InvalidCharacter):
            encode("ab!", shift=3)

    def test_length_checked_before_prime_table(self):
        """Too-long input is reported as InputTooLong even with a tiny table."""
        encoder = GodelEncoder(primes=PrimeTable(1))
        with pytest.raises(InputTooLong):
            encoder.encode("A" * 101)

    def test_prime_table_exhausted(self):
        """Inputs longer than the prime table raise PrimeTableExhausted."""
        encoder = GodelEncoder(EncoderConfig(max_length=10, prime_count=3))
        with pytest.raises(PrimeTableExhausted, match="needs 4 primes but only 3"):
            encoder.encode("ABCD")
        assert encoder.encode("ABC").number == 2 * 3 ** 2 * 5 ** 3

    def test_custom_max_length(self):
        """max_length is configurable."""
        encoder = GodelEncoder(EncoderConfig(max_length=3))
        with pytest.raises(InputTooLong, match="Maximum 3"):
            encoder.encode("ABCD")

    def test_invalid_config(self):
        """Non-positive limits are rejected up front."""
        with pytest.raises(ValueError, match="max_length"):
            GodelEncoder(EncoderConfig(max_length=0))
        with pytest.raises(ValueError, match="prime_count"):
            GodelEncoder(EncoderConfig(prime_count=0))

    def test_result_type(self):
        """encode() returns an EncodeResult."""
        assert isinstance(encode("A"), EncodeResult)

    def test_logs_at_debug(self, caplog):
        """Encoding logs its size at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="godelpixels.core"):
            encode("AB")
        assert "Encoded 2 characters" in caplog.text


class TestToDecimal:
    """Test exact decimal rendering of large Gödel numbers."""

    def test_small(self):
        """Small numbers match str()."""
        assert to_decimal(18) == "18"
        assert to_decimal(0) == "0"

    def test_beyond_interpreter_digit_limit(self):
        """Numbers past 4300 digits render in full."""
        assert to_decimal(10 ** 5000) == "1" + "0" * 5000

    def test_digit_limit_restored(self):
        """The interpreter's digit limit is unchanged afterwards."""
        if not hasattr(sys, "get_int_max_str_digits"):
            pytest.skip("no int-to-str digit limit on this interpreter")
        before = sys.get_int_max_str_digits()
        to_decimal(10 ** 5000)
        assert sys.get_int_max_str_digits() == before

    def test_max_length_decimal(self):
        """A 100-character input has thousands of exact decimal digits."""
        result = encode("9" * 100)
        decimal = result.decimal
        assert len(decimal) > 4300
        assert decimal[0] != "0"
        assert int(decimal[-6:]) == result.number % 10 ** 6


class TestToBinary:
    """Test the binary projector."""

    def test_no_leading_zero(self):
        """Binary of a positive number always starts with '1'."""
        for n in (1, 2, 18, 2 ** 36, encode("ZZZZ").number):
            bits = to_binary(n)
            assert bits[0] == "1"
            assert int(bits, 2) == n

    def test_power_of_two(self):
        """2^36 is a one followed by 36 zeros."""
        assert to_binary(2 ** 36) == "1" + "0" * 36

    def test_zero(self):
        """Zero is '0'."""
        assert to_binary(0) == "0"

    def test_negative_raises(self):
        """Negative numbers are rejected."""
        with pytest.raises(ValueError):
            to_binary(-1)

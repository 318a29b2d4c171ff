"""
Core Gödel encoder: text to a single arbitrary-precision integer.

Key properties:
- Each position i is keyed by the i-th prime, each character by its value 1-36
- The Gödel number is the exact product of prime^value over all positions
- Unique factorization means distinct per-position values never collide
- Python ints are arbitrary precision, so no step is ever approximated
"""

import logging
import re
import sys
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .errors import EmptyInput, InputTooLong, InvalidCharacter, PrimeTableExhausted
from .primes import DEFAULT_PRIME_COUNT, PrimeTable, default_prime_table

logger = logging.getLogger(__name__)

ALPHABET_SIZE = 36
DEFAULT_MAX_LENGTH = 100

_VALID_TEXT = re.compile(r"[A-Za-z0-9]+")
_INVALID_CHAR = re.compile(r"[^A-Za-z0-9]")


# ═══════════════════════════════════════════════════════════
# Character mapper
# ═══════════════════════════════════════════════════════════


def char_value(symbol: str, shift: int = 0) -> int:
    """Map one alphanumeric symbol to its value in [1, 36].

    Letters are case-insensitive, A=1 ... Z=26. Digits follow, 0=27 ... 9=36.
    A nonzero ``shift`` rotates the value cyclically over the 36-symbol
    alphabet, so the result always stays in [1, 36], negative shifts included.

    Args:
        symbol: A single character.
        shift: Cyclic rotation applied to the base value.

    Returns:
        Integer value in [1, 36].

    Raises:
        InvalidCharacter: If ``symbol`` is not a single ASCII letter or digit.
    """
    if len(symbol) != 1 or not _VALID_TEXT.fullmatch(symbol):
        raise InvalidCharacter(symbol)

    if symbol.isdigit():
        value = ord(symbol) - ord("0") + 27
    else:
        value = ord(symbol.upper()) - ord("A") + 1

    if shift:
        value = (value - 1 + shift) % ALPHABET_SIZE + 1
    return value


# ═══════════════════════════════════════════════════════════
# Binary projector
# ═══════════════════════════════════════════════════════════


def to_binary(number: int) -> str:
    """Base-2 digits of a non-negative integer, most significant bit first."""
    if number < 0:
        raise ValueError("number must be non-negative")
    return format(number, "b")


def to_decimal(number: int) -> str:
    """Exact base-10 digits of an integer of any size.

    Python 3.11+ caps int-to-str conversion at 4300 digits; the cap is lifted
    for the duration of the conversion and restored afterwards.
    """
    if not hasattr(sys, "set_int_max_str_digits"):
        return str(number)
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        return str(number)
    finally:
        sys.set_int_max_str_digits(previous)


# ═══════════════════════════════════════════════════════════
# Encoder
# ═══════════════════════════════════════════════════════════


@dataclass
class EncoderConfig:
    """Configuration for the Gödel encoder."""

    max_length: int = DEFAULT_MAX_LENGTH
    """Longest accepted input. Default: 100 characters."""

    prime_count: int = DEFAULT_PRIME_COUNT
    """Size of the prime table. Default: 1000 primes."""


@dataclass(frozen=True)
class EncodingTerm:
    """One step of the breakdown: ``char`` at ``position`` contributes ``prime ** exponent``."""

    position: int
    char: str
    prime: int
    exponent: int
    term: int

    def to_dict(self) -> dict:
        """Decimal-string form used by the request API."""
        return {
            "position": self.position,
            "char": self.char,
            "primeDecimal": to_decimal(self.prime),
            "exponent": self.exponent,
            "termDecimal": to_decimal(self.term),
        }


@dataclass(frozen=True)
class EncodeResult:
    """Gödel number plus the ordered breakdown it was assembled from."""

    number: int
    breakdown: Tuple[EncodingTerm, ...]
    text: str
    shift: int = 0

    @property
    def binary(self) -> str:
        """Binary expansion of the Gödel number."""
        return to_binary(self.number)

    @property
    def decimal(self) -> str:
        """Decimal expansion of the Gödel number."""
        return to_decimal(self.number)

    def recompute(self) -> int:
        """Multiply the breakdown terms back together."""
        product = 1
        for item in self.breakdown:
            product *= item.term
        return product


def validate_text(text: Optional[str], max_length: int = DEFAULT_MAX_LENGTH) -> str:
    """Check text against the input contract and return it unchanged.

    Checks run in order: empty, invalid characters, length.

    Raises:
        EmptyInput: If text is empty or None.
        InvalidCharacter: If any character is outside [A-Za-z0-9].
        InputTooLong: If text is longer than ``max_length``.
    """
    if not text:
        raise EmptyInput()
    if not _VALID_TEXT.fullmatch(text):
        raise InvalidCharacter(_INVALID_CHAR.findall(text))
    if len(text) > max_length:
        raise InputTooLong(len(text), max_length)
    return text


class GodelEncoder:
    """
    Encodes alphanumeric text as a Gödel number.

    Example:
        >>> encoder = GodelEncoder()
        >>> encoder.encode("AB").number
        18
    """

    def __init__(self, config: Optional[EncoderConfig] = None, primes: Optional[PrimeTable] = None):
        """
        Initialize the encoder.

        Args:
            config: EncoderConfig object. Uses defaults if None.
            primes: Prime table to key positions with. Defaults to the shared
                process-wide table of ``config.prime_count`` primes.
        """
        self.config = config or EncoderConfig()
        self._validate_config()
        self.primes = primes if primes is not None else default_prime_table(self.config.prime_count)

    def _validate_config(self) -> None:
        if self.config.max_length < 1:
            raise ValueError("max_length must be >= 1")
        if self.config.prime_count < 1:
            raise ValueError("prime_count must be >= 1")

    def encode(self, text: str, shift: int = 0) -> EncodeResult:
        """
        Compute the Gödel number of ``text``.

        Args:
            text: Alphanumeric input, at most ``config.max_length`` characters.
            shift: Cyclic shift applied to every character value.

        Returns:
            EncodeResult with the product and its per-character breakdown.

        Raises:
            EmptyInput, InvalidCharacter, InputTooLong: On invalid input.
            PrimeTableExhausted: If text has more characters than there are primes.
        """
        validate_text(text, self.config.max_length)
        if len(text) > len(self.primes):
            raise PrimeTableExhausted(len(text), len(self.primes))

        number = 1
        breakdown: List[EncodingTerm] = []
        for index, char in enumerate(text):
            prime = self.primes[index]
            exponent = char_value(char, shift)
            term = prime ** exponent
            number *= term
            breakdown.append(EncodingTerm(index + 1, char, prime, exponent, term))

        logger.debug(
            "Encoded %d characters (shift=%d) into a %d-bit number",
            len(text),
            shift,
            number.bit_length(),
        )
        return EncodeResult(number=number, breakdown=tuple(breakdown), text=text, shift=shift)


def encode(text: str, shift: int = 0) -> EncodeResult:
    """Encode with the default configuration and shared prime table."""
    return GodelEncoder().encode(text, shift)

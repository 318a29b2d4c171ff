"""
Error categories reported back to callers of the encoder.

Every category is a ``ValueError`` so callers that only care about "bad
input" can catch one type, while ``code`` lets a presentation layer pick
its own wording.
"""

from typing import Iterable


class EncodeError(ValueError):
    """Base class for all recoverable input errors."""

    code = "encode_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Serialize to the ``{"code", "message"}`` shape used by the API layer."""
        return {"code": self.code, "message": self.message}


class EmptyInput(EncodeError):
    code = "empty_input"

    def __init__(self):
        super().__init__("Please enter some text.")


class InvalidCharacter(EncodeError):
    code = "invalid_character"

    def __init__(self, characters: Iterable[str] = ()):
        self.characters = "".join(dict.fromkeys(characters))
        message = "Invalid characters! Only letters (A-Z, a-z) and numbers (0-9) are allowed."
        if self.characters:
            message = "{} Found: {!r}".format(message, self.characters)
        super().__init__(message)


class InputTooLong(EncodeError):
    code = "input_too_long"

    def __init__(self, length: int, max_length: int):
        self.length = length
        self.max_length = max_length
        super().__init__(
            "Text too long! Maximum {} characters (got {}).".format(max_length, length)
        )


class PrimeTableExhausted(EncodeError):
    """Input needs more positions than the prime table holds."""

    code = "prime_table_exhausted"

    def __init__(self, length: int, table_size: int):
        self.length = length
        self.table_size = table_size
        super().__init__(
            "Text needs {} primes but only {} were generated.".format(length, table_size)
        )

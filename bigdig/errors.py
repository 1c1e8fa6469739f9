"""Exception types for the bigdig arithmetic engine.

Every failure the engine can report is a ``BigDigError``. Each concrete type
also derives from the builtin exception a Python caller would expect for the
same condition (``ZeroDivisionError`` for a zero divisor, ``ValueError`` for a
malformed literal, ...), so callers may catch either.
"""

from __future__ import annotations

from enum import Enum, unique


class BigDigError(Exception):
    """Base class for all errors raised by bigdig."""


class ConfigError(BigDigError, ValueError):
    """Raised when a configuration source holds an invalid value."""


class DivisionByZeroError(BigDigError, ZeroDivisionError):
    """Raised on division or remainder by a zero magnitude."""


class ShiftOverflowError(BigDigError, ValueError):
    """Raised for negative shift amounts or shifts past the representable bit range."""


class InvalidRadixError(BigDigError, ValueError):
    """Raised when a radix outside ``[2, 36]`` is requested."""

    def __init__(self, radix: int) -> None:
        self.radix = radix
        super().__init__(f"radix must be in [2, 36], got {radix!r}")


@unique
class ParseErrorKind(Enum):
    EMPTY = "empty"
    INVALID_DIGIT = "invalid_digit"
    DANGLING_SIGN = "dangling_sign"
    NEGATIVE_UNSIGNED = "negative_unsigned"


class ParseBigIntError(BigDigError, ValueError):
    """Raised when a textual literal cannot be parsed. Carries no partial result."""

    def __init__(self, kind: ParseErrorKind, detail: str = "") -> None:
        self.kind = kind
        message = f"cannot parse integer: {kind.value}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnderflowError(BigDigError, ArithmeticError):
    """Raised when an unsigned subtraction would go below zero."""


class NoInverseError(BigDigError, ArithmeticError):
    """Raised when a modular inverse does not exist (gcd(a, m) != 1)."""


class PrimeGenerationError(BigDigError, RuntimeError):
    """Raised when random prime generation exhausts its attempt budget."""

    def __init__(self, bit_length: int, attempts: int) -> None:
        self.bit_length = bit_length
        self.attempts = attempts
        super().__init__(f"no {bit_length}-bit prime found after {attempts} candidates")


class CanonicalFormError(BigDigError, ValueError):
    """Raised when digits or a serialized value violate the canonical form."""


class EncodingOverflowError(BigDigError, OverflowError):
    """Raised when a value does not fit the requested fixed byte width."""

from __future__ import annotations

import pytest

from bigdig.errors import (
    BigDigError,
    CanonicalFormError,
    ConfigError,
    DivisionByZeroError,
    EncodingOverflowError,
    InvalidRadixError,
    NoInverseError,
    ParseBigIntError,
    ParseErrorKind,
    PrimeGenerationError,
    ShiftOverflowError,
    UnderflowError,
)


@pytest.mark.parametrize(
    "exc, builtin",
    [
        (ConfigError("x"), ValueError),
        (DivisionByZeroError("x"), ZeroDivisionError),
        (ShiftOverflowError("x"), ValueError),
        (InvalidRadixError(40), ValueError),
        (ParseBigIntError(ParseErrorKind.EMPTY), ValueError),
        (UnderflowError("x"), ArithmeticError),
        (NoInverseError("x"), ArithmeticError),
        (PrimeGenerationError(64, 10), RuntimeError),
        (CanonicalFormError("x"), ValueError),
        (EncodingOverflowError("x"), OverflowError),
    ],
)
def test_errors_share_base_and_builtin(exc: BigDigError, builtin: type) -> None:
    assert isinstance(exc, BigDigError)
    assert isinstance(exc, builtin)


def test_error_payloads() -> None:
    assert InvalidRadixError(40).radix == 40
    err = ParseBigIntError(ParseErrorKind.INVALID_DIGIT, "'x' at position 0")
    assert err.kind is ParseErrorKind.INVALID_DIGIT
    assert str(err) == "cannot parse integer: invalid_digit ('x' at position 0)"
    gen = PrimeGenerationError(128, 5)
    assert (gen.bit_length, gen.attempts) == (128, 5)

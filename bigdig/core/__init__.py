"""
Digit-vector arithmetic core: magnitudes, signed integers and their encodings.
"""

from ..errors import (
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
from .algorithms import KARATSUBA_THRESHOLD, DigitKernel, kernel_for
from .biguint import BigUint
from .bigint import BigInt, Sign
from .convert import from_str_radix, to_str_radix
from .zeroize import Zeroizing

__all__ = [
    "BigDigError",
    "CanonicalFormError",
    "ConfigError",
    "DivisionByZeroError",
    "EncodingOverflowError",
    "InvalidRadixError",
    "NoInverseError",
    "ParseBigIntError",
    "ParseErrorKind",
    "PrimeGenerationError",
    "ShiftOverflowError",
    "UnderflowError",
    "KARATSUBA_THRESHOLD",
    "DigitKernel",
    "kernel_for",
    "BigUint",
    "BigInt",
    "Sign",
    "from_str_radix",
    "to_str_radix",
    "Zeroizing",
]

"""
Random big integers drawn from a caller-supplied source.

bigdig never creates or seeds a generator of its own. Every function takes a
`RandomSource`: anything with ``getrandbits(k)``, which covers `random.Random`
(reproducible, for tests) and `secrets.SystemRandom` (for key material).

Digits are drawn 32 bits at a time from the low end, so a seeded source yields
the same values whichever digit width the process is configured with.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from ..core.algorithms import Digits, trim
from ..core.bigint import BigInt
from ..core.biguint import KERNEL, BigUint


@runtime_checkable
class RandomSource(Protocol):
    def getrandbits(self, k: int, /) -> int: ...


def _require_source(rng: object) -> RandomSource:
    if not isinstance(rng, RandomSource):
        raise TypeError("rng must provide getrandbits(k)")
    return rng


def random_digits(rng: RandomSource, bit_size: int) -> Digits:
    """`bit_size` uniformly random bits as a canonical digit list."""
    if bit_size < 0:
        raise ValueError("bit size must be non-negative")
    words, rem = divmod(bit_size, 32)
    chunks = [rng.getrandbits(32) for _ in range(words)]
    if rem:
        chunks.append(rng.getrandbits(rem))
    if KERNEL.bits == 32:
        return trim(chunks)
    out: Digits = []
    for i in range(0, len(chunks), 2):
        lo = chunks[i]
        hi = chunks[i + 1] if i + 1 < len(chunks) else 0
        out.append(lo | (hi << 32))
    return trim(out)


def gen_biguint(rng: RandomSource, bit_size: int) -> BigUint:
    """Uniform value in ``[0, 2**bit_size)``."""
    return BigUint._wrap(random_digits(_require_source(rng), bit_size))


def gen_bigint(rng: RandomSource, bit_size: int) -> BigInt:
    """Uniform magnitude below ``2**bit_size`` with a random sign.

    Zero would otherwise come up twice as often as any other value (it has no
    sign to pick), so half of the zero draws are rejected.
    """
    rng = _require_source(rng)
    while True:
        mag = random_digits(rng, bit_size)
        if not mag:
            if rng.getrandbits(1):
                continue
            return BigInt.zero()
        return BigInt._wrap(bool(rng.getrandbits(1)), mag)


def below_digits(rng: RandomSource, bound: Digits) -> Digits:
    """Uniform value in ``[0, bound)`` by rejection sampling."""
    if not bound:
        raise ValueError("bound must be positive")
    bits = KERNEL.bit_length(bound)
    while True:
        n = random_digits(rng, bits)
        if KERNEL.cmp(n, bound) < 0:
            return n


def gen_biguint_below(rng: RandomSource, bound: BigUint | int) -> BigUint:
    return BigUint._wrap(below_digits(_require_source(rng), BigUint(bound)._digits))


def gen_biguint_range(rng: RandomSource, lbound: BigUint | int, ubound: BigUint | int) -> BigUint:
    """Uniform value in ``[lbound, ubound)``."""
    lbound, ubound = BigUint(lbound), BigUint(ubound)
    if lbound >= ubound:
        raise ValueError("lower bound must be below upper bound")
    if lbound.is_zero():
        return gen_biguint_below(rng, ubound)
    return lbound + gen_biguint_below(rng, ubound - lbound)


def gen_bigint_range(rng: RandomSource, lbound: BigInt | int, ubound: BigInt | int) -> BigInt:
    """Uniform value in ``[lbound, ubound)``."""
    lbound, ubound = BigInt(lbound), BigInt(ubound)
    if lbound >= ubound:
        raise ValueError("lower bound must be below upper bound")
    delta = (ubound - lbound).magnitude
    return lbound + gen_biguint_below(rng, delta)


@dataclass(frozen=True)
class RandomBits:
    """Distribution of values with at most `bits` random bits."""

    bits: int

    def __post_init__(self) -> None:
        if self.bits < 0:
            raise ValueError("bits must be non-negative")

    def sample_biguint(self, rng: RandomSource) -> BigUint:
        return gen_biguint(rng, self.bits)

    def sample_bigint(self, rng: RandomSource) -> BigInt:
        return gen_bigint(rng, self.bits)


@dataclass(frozen=True)
class UniformBigUint:
    """Uniform distribution over ``[low, high)``."""

    low: BigUint
    high: BigUint

    def __post_init__(self) -> None:
        if self.low >= self.high:
            raise ValueError("low must be below high")

    @classmethod
    def inclusive(cls, low: BigUint | int, high: BigUint | int) -> UniformBigUint:
        return cls(BigUint(low), BigUint(high) + 1)

    def sample(self, rng: RandomSource) -> BigUint:
        return gen_biguint_range(rng, self.low, self.high)


@dataclass(frozen=True)
class UniformBigInt:
    """Uniform distribution over ``[low, high)``."""

    low: BigInt
    high: BigInt

    def __post_init__(self) -> None:
        if self.low >= self.high:
            raise ValueError("low must be below high")

    @classmethod
    def inclusive(cls, low: BigInt | int, high: BigInt | int) -> UniformBigInt:
        return cls(BigInt(low), BigInt(high) + 1)

    def sample(self, rng: RandomSource) -> BigInt:
        return gen_bigint_range(rng, self.low, self.high)

"""
Scoped wiping of secret values.

Python gives no guarantee that freed memory is overwritten, and ints are
immutable, so bigdig keeps digits in a private list that `zeroize()` can
overwrite. `Zeroizing` ties that wipe to a ``with`` block::

    with Zeroizing(random_prime(rng, 1024)) as p:
        ...
    # p is now zero

This is opt-in. Values that were derived from the secret (products, quotients,
encodings) are separate objects and must be wiped by the caller as well.
"""

from __future__ import annotations

from typing import Generic, Protocol, TypeVar


class SupportsZeroize(Protocol):
    def zeroize(self) -> None: ...


T = TypeVar("T", bound=SupportsZeroize)


class Zeroizing(Generic[T]):
    """Context manager that flags `value` as secret and zeroizes it on exit."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        if not callable(getattr(value, "zeroize", None)):
            raise TypeError(f"{type(value).__name__} does not support zeroize()")
        self.value = value

    def __enter__(self) -> T:
        return self.value

    def __exit__(self, exc_type, exc, tb) -> None:
        self.value.zeroize()


def zeroize_all(*values: SupportsZeroize) -> None:
    for v in values:
        v.zeroize()

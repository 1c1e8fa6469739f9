"""Integer powers and floor roots over digit lists."""

from __future__ import annotations

from .algorithms import DigitKernel, Digits


def pow_digits(k: DigitKernel, a: Digits, exp: int) -> Digits:
    """``a ** exp`` by left-to-right square-and-multiply."""
    if exp < 0:
        raise ValueError("exponent must be non-negative")
    if exp == 0:
        return [1]
    if not a:
        return []
    if a == [1]:
        return [1]
    result = list(a)
    for i in range(exp.bit_length() - 2, -1, -1):
        result = k.sqr(result)
        if (exp >> i) & 1:
            result = k.mul(result, a)
    return result


def nth_root_digits(k: DigitKernel, a: Digits, n: int) -> Digits:
    """Floor of the `n`-th root of `a`, by Newton's iteration from above."""
    if n <= 0:
        raise ValueError("root degree must be positive")
    if n == 1 or not a:
        return list(a)
    bl = k.bit_length(a)
    if bl <= n:
        # 1 <= a < 2**n
        return [1]

    n_digits = k.from_int(n)
    n_minus_one = k.from_int(n - 1)
    # 2**ceil(bl / n) is strictly above the root.
    x = k.shl_bits([1], -(-bl // n))
    while True:
        q, _ = k.div_rem(a, pow_digits(k, x, n - 1))
        y, _ = k.div_rem(k.add(k.mul(x, n_minus_one), q), n_digits)
        if k.cmp(y, x) >= 0:
            return x
        x = y


def sqrt_digits(k: DigitKernel, a: Digits) -> Digits:
    return nth_root_digits(k, a, 2)

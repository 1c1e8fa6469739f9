"""
Probabilistic primality testing.

`is_probably_prime` runs, in order:

1. trial division by the small-prime table (a definite answer for most inputs),
2. Miller-Rabin with base 2 and then `rounds` further witnesses,
3. the "almost extra strong" Lucas test (Baillie OEIS method C), unless disabled.

Base 2 plus the Lucas test is the Baillie-PSW test, for which no counterexample
is known. The extra Miller-Rabin rounds bound the error by ``4**-rounds`` on
their own. Witnesses come from the caller's `rng` when one is given; otherwise
they are the odd primes of the small-prime table in increasing order, so the
result is reproducible and no generator is seeded behind the caller's back.
"""

from __future__ import annotations

from ..config import get_config
from ..core.algorithms import Digits
from ..core.bigint import BigInt, Sign
from ..core.biguint import KERNEL, BigUint
from ..modular.gcd import jacobi
from ..modular.modpow import plain_modpow_digits
from ..modular.monty import Montgomery
from .bigrand import RandomSource, below_digits
from .tables import SMALL_PRIME_LIMIT, odd_small_primes, small_prime_set, small_primes

_TRIAL_SQUARE = SMALL_PRIME_LIMIT * SMALL_PRIME_LIMIT

# Give up looking for (D / n) = -1 past this P; only squares get that far.
_MAX_LUCAS_P = 10_000


def _as_biguint(n: BigUint | BigInt | int) -> BigUint | None:
    """Magnitude of a non-negative candidate, None for negative ones."""
    if isinstance(n, BigUint):
        return n
    value = BigInt(n)
    if value.sign is Sign.NEGATIVE:
        return None
    return value.magnitude


def trial_division(n: BigUint) -> bool | None:
    """Definite verdict from the small-prime table, or None when undecided."""
    if n < SMALL_PRIME_LIMIT:
        return int(n) in small_prime_set()
    digits = n._digits
    for p in small_primes():
        if KERNEL.rem_digit(digits, p) == 0:
            return False
    if n < _TRIAL_SQUARE:
        return True
    return None


def _modpow_digits(mont: Montgomery | None, base: Digits, exp: Digits, n: Digits) -> Digits:
    if mont is not None:
        return mont.pow_digits(base, exp)
    return plain_modpow_digits(base, exp, n)


def probably_prime_miller_rabin(
    n: BigUint,
    rounds: int,
    *,
    force2: bool = True,
    rng: RandomSource | None = None,
) -> bool:
    """
    Miller-Rabin test of odd ``n > 3``.

    Checks base 2 when `force2` is set, then `rounds` more witnesses in ``[2, n-2]``.
    """
    k = KERNEL
    nd = n._digits
    nm1 = k.sub(nd, [1])
    s = k.trailing_zeros(nm1) or 0
    d = k.shr_bits(nm1, s)
    nm3 = k.sub(nd, [3])
    mont = Montgomery(n) if get_config().montgomery else None

    bases: list[Digits] = [[2]] if force2 else []
    if rng is None:
        fixed = odd_small_primes()
        if rounds > len(fixed):
            raise ValueError(f"at most {len(fixed)} deterministic rounds are available; pass an rng for more")
        bases.extend([p] for p in fixed[:rounds])
    else:
        bases.extend(k.add(below_digits(rng, nm3), [2]) for _ in range(rounds))

    for a in bases:
        if k.cmp(a, nm1) >= 0:
            continue
        y = _modpow_digits(mont, a, d, nd)
        if y == [1] or y == nm1:
            continue
        for _ in range(s - 1):
            y = k.div_rem(k.sqr(y), nd)[1]
            if y == nm1:
                break
            if y == [1]:
                return False
        else:
            return False
    return True


def probably_prime_lucas(n: BigUint) -> bool:
    """
    "Almost extra strong" Lucas probable-prime test.

    Chooses ``Q = 1`` and the smallest ``P >= 3`` with ``D = P*P - 4`` and
    Jacobi ``(D / n) = -1``, then checks ``V(s) = ±2`` or ``V(2^t s) = 0`` for
    ``n + 1 = 2^r s``. ``U(s) = 0`` is recovered from ``V(s)`` and ``V(s+1)``
    without computing the U sequence.
    """
    if n.is_zero() or n.is_one():
        return False
    if n.is_even():
        return n == 2

    nn = BigInt(n)
    p = 3
    while True:
        if p > _MAX_LUCAS_P:
            raise RuntimeError(f"cannot find (D/n) = -1 for {n}")
        j = jacobi(p * p - 4, nn)
        if j == -1:
            break
        if j == 0:
            # D = (p-2)(p+2) shares a factor with n; it can only be p+2.
            return n == p + 2
        if p == 40:
            # Squares never reach (D/n) = -1.
            root = n.sqrt()
            if root * root == n:
                return False
        p += 1

    s = n + 1
    r = s.trailing_zeros() or 0
    s = s >> r
    nm2 = n - 2
    big_p = BigUint(p)

    # V(0) = 2, V(1) = P, V(2k) = V(k)^2 - 2, V(2k+1) = V(k) V(k+1) - P.
    vk = BigUint(2)
    vk1 = BigUint(p)
    for i in range(s.bits(), -1, -1):
        if s.bit(i):
            vk = (vk * vk1 + n - big_p) % n
            vk1 = (vk1 * vk1 + nm2) % n
        else:
            vk1 = (vk * vk1 + n - big_p) % n
            vk = (vk * vk + nm2) % n

    if vk == 2 or vk == nm2:
        # U(s) = D^-1 (2 V(s+1) - P V(s)), so U(s) = 0 iff P V(s) = 2 V(s+1) (mod n).
        t1 = vk * big_p
        t2 = vk1 << 1
        if t1 < t2:
            t1, t2 = t2, t1
        if ((t1 - t2) % n).is_zero():
            return True

    for _ in range(r - 1):
        if vk.is_zero():
            return True
        # V = 2 is a fixed point of V -> V^2 - 2; zero can no longer appear.
        if vk == 2:
            return False
        vk = (vk * vk + nm2) % n
    return False


def is_probably_prime(
    n: BigUint | BigInt | int,
    rounds: int | None = None,
    *,
    rng: RandomSource | None = None,
    lucas: bool | None = None,
) -> bool:
    """
    True when `n` is prime with error probability at most ``4**-rounds``.

    `rounds` defaults to the configured `prime_rounds`; `lucas` defaults to the
    configured `lucas` flag. Negative numbers, 0 and 1 are not prime.
    """
    cfg = get_config()
    rounds = cfg.prime_rounds if rounds is None else rounds
    lucas = cfg.lucas if lucas is None else lucas
    if rounds < 0:
        raise ValueError("rounds must be non-negative")

    value = _as_biguint(n)
    if value is None:
        return False
    verdict = trial_division(value)
    if verdict is not None:
        return verdict

    if not probably_prime_miller_rabin(value, rounds, force2=True, rng=rng):
        return False
    if lucas and not probably_prime_lucas(value):
        return False
    return True

"""
Integer square root kernel.

Newton's method over integers only: no float intermediate ever appears, so the
result is bit-exact on every platform and for arbitrarily large inputs.
"""

from __future__ import annotations


def isqrt(n: int) -> int:
    """
    Return floor(sqrt(n)) for a non-negative int.

    Iteration:
        y0 = (n + 1) // 2
        x <- y; y <- (x + n // x) // 2   while y < x

    The sequence is strictly decreasing until it reaches floor(sqrt(n)), so the
    loop terminates in O(log n) steps. n = 0 and n = 1 return immediately from
    the seed (y0 == n), so `n // x` never divides by zero.
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError("n must be an int")
    if n < 0:
        raise ValueError(f"n must be non-negative: {n}")
    if n < 2:
        return n

    x = n
    y = (x + 1) // 2
    while y < x:
        x = y
        y = (x + n // x) // 2
    return x

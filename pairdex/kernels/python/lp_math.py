"""
Liquidity share math kernel.

Pure functions with explicit rounding rules. Every division floors, and each
floor is placed so that rounding loss lands on the pool (i.e. on the remaining
liquidity providers), never on the ledger's solvency:

- genesis: shares = floor(sqrt(amount_a * amount_b))
- mint:    shares = min(floor(amount_a * T / Ra), floor(amount_b * T / Rb))
- burn:    out_x  = floor(shares * Rx / T)

There is no minimum-liquidity lock: the creator of a pool receives every
genesis share.
"""

from __future__ import annotations

from dataclasses import dataclass

from .isqrt import isqrt


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class MintSharesResult:
    shares_from_a: int
    shares_from_b: int
    shares_minted: int
    new_reserve_a: int
    new_reserve_b: int
    new_total_shares: int


@dataclass(frozen=True)
class BurnSharesResult:
    amount_a_out: int
    amount_b_out: int
    new_reserve_a: int
    new_reserve_b: int
    new_total_shares: int


def genesis_shares(*, amount_a: int, amount_b: int) -> int:
    """
    Shares issued when a pool is first funded (geometric mean, floor).

    May return 0 for dust deposits; callers must reject that.
    """
    _require_int("amount_a", amount_a)
    _require_int("amount_b", amount_b)
    if amount_a < 0 or amount_b < 0:
        raise ValueError("initial amounts must be non-negative")
    return isqrt(amount_a * amount_b)


def mint_shares(
    *,
    reserve_a: int,
    reserve_b: int,
    total_shares: int,
    amount_a: int,
    amount_b: int,
) -> MintSharesResult:
    """
    Shares minted for a deposit into a funded pool.

    The scarcer side (relative to the current ratio) binds. Both amounts are
    added to the reserves in full; the excess of the non-binding side is not
    refunded.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_shares", total_shares),
        ("amount_a", amount_a),
        ("amount_b", amount_b),
    ):
        _require_int(name, v)

    if reserve_a <= 0 or reserve_b <= 0:
        raise ValueError("reserves must be positive")
    if total_shares <= 0:
        raise ValueError("total_shares must be positive")
    if amount_a < 0 or amount_b < 0:
        raise ValueError("deposit amounts must be non-negative")

    shares_from_a = (amount_a * total_shares) // reserve_a
    shares_from_b = (amount_b * total_shares) // reserve_b
    minted = min(shares_from_a, shares_from_b)

    return MintSharesResult(
        shares_from_a=shares_from_a,
        shares_from_b=shares_from_b,
        shares_minted=minted,
        new_reserve_a=reserve_a + amount_a,
        new_reserve_b=reserve_b + amount_b,
        new_total_shares=total_shares + minted,
    )


def redeemable_amounts(*, shares: int, reserve_a: int, reserve_b: int, total_shares: int) -> tuple[int, int]:
    """Pro-rata claim of `shares` on both reserves (floor); (0, 0) when the pool has no shares."""
    for name, v in (
        ("shares", shares),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_shares", total_shares),
    ):
        _require_int(name, v)
    if shares < 0 or reserve_a < 0 or reserve_b < 0 or total_shares < 0:
        raise ValueError("inputs must be non-negative")
    if total_shares == 0:
        return 0, 0
    return (shares * reserve_a) // total_shares, (shares * reserve_b) // total_shares


def burn_shares(*, shares: int, reserve_a: int, reserve_b: int, total_shares: int) -> BurnSharesResult:
    """
    Burn shares for the underlying assets (floor rounding).
    """
    for name, v in (
        ("shares", shares),
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("total_shares", total_shares),
    ):
        _require_int(name, v)

    if shares <= 0:
        raise ValueError("shares must be positive")
    if total_shares <= 0:
        raise ValueError("total_shares must be positive")
    if shares > total_shares:
        raise ValueError("cannot burn more than total_shares")

    amount_a_out, amount_b_out = redeemable_amounts(
        shares=shares,
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        total_shares=total_shares,
    )
    if amount_a_out > reserve_a or amount_b_out > reserve_b:
        raise AssertionError("burn output exceeds reserves")

    return BurnSharesResult(
        amount_a_out=amount_a_out,
        amount_b_out=amount_b_out,
        new_reserve_a=reserve_a - amount_a_out,
        new_reserve_b=reserve_b - amount_b_out,
        new_total_shares=total_shares - shares,
    )

"""
CPMM swap pricing kernel.

Semantics:
- Fee is charged on the gross input with floor rounding on the *post-fee*
  amount: `after_fee = floor(amount_in * (10_000 - fee_bps) / 10_000)`,
  so the fee itself rounds up in favor of the pool.
- Pricing uses `after_fee` only; the full `amount_in` enters the reserve, so
  the fee stays with liquidity providers.
- `amount_out = floor(after_fee * reserve_out / (reserve_in + after_fee))`.

For reserve_in > 0 the output is strictly less than reserve_out, because
`after_fee / (reserve_in + after_fee) < 1`. The kernel still checks it.

The same function prices both executed swaps and read-only simulations, so a
preview and an execution against identical reserves always agree.
"""

from __future__ import annotations

from dataclasses import dataclass


BPS_DENOM = 10_000


def _require_int(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")


@dataclass(frozen=True)
class SwapQuote:
    amount_in: int
    amount_in_after_fee: int
    fee: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int


def compute_amount_after_fee(*, amount_in: int, fee_bps: int) -> int:
    """
    Compute `floor(amount_in * (10_000 - fee_bps) / 10_000)`.
    """
    _require_int("amount_in", amount_in)
    _require_int("fee_bps", fee_bps)
    if amount_in < 0:
        raise ValueError("amount_in must be non-negative")
    if not (0 <= fee_bps < BPS_DENOM):
        raise ValueError(f"fee_bps must be in [0, {BPS_DENOM})")
    return (amount_in * (BPS_DENOM - fee_bps)) // BPS_DENOM


def price_swap(*, reserve_in: int, reserve_out: int, amount_in: int, fee_bps: int) -> SwapQuote:
    """
    Exact-in quote plus post-swap reserves.

    A zero `amount_out` is a valid quote here; whether it may execute is the
    caller's decision.
    """
    for name, v in (
        ("reserve_in", reserve_in),
        ("reserve_out", reserve_out),
        ("amount_in", amount_in),
        ("fee_bps", fee_bps),
    ):
        _require_int(name, v)

    if reserve_in <= 0 or reserve_out <= 0:
        raise ValueError("cannot price against an empty reserve")
    if amount_in <= 0:
        raise ValueError("amount_in must be positive")

    after_fee = compute_amount_after_fee(amount_in=amount_in, fee_bps=fee_bps)
    fee = amount_in - after_fee

    amount_out = (after_fee * reserve_out) // (reserve_in + after_fee)
    if amount_out >= reserve_out:
        raise AssertionError("amount_out must stay below reserve_out")

    return SwapQuote(
        amount_in=amount_in,
        amount_in_after_fee=after_fee,
        fee=fee,
        amount_out=amount_out,
        new_reserve_in=reserve_in + amount_in,
        new_reserve_out=reserve_out - amount_out,
    )


def marginal_price_bps(*, reserve_in: int, reserve_out: int) -> int:
    """Marginal price of the input asset in output units, scaled by 10_000 (floor)."""
    _require_int("reserve_in", reserve_in)
    _require_int("reserve_out", reserve_out)
    if reserve_in <= 0 or reserve_out < 0:
        raise ValueError("reserve_in must be positive and reserve_out non-negative")
    return (reserve_out * BPS_DENOM) // reserve_in


def price_impact_bps(
    *,
    reserve_in: int,
    reserve_out: int,
    new_reserve_in: int,
    new_reserve_out: int,
) -> int:
    """
    Unsigned relative change of the marginal price, in basis points (floor).

    Returns 0 when the pre-trade price truncates to zero.
    """
    before = marginal_price_bps(reserve_in=reserve_in, reserve_out=reserve_out)
    after = marginal_price_bps(reserve_in=new_reserve_in, reserve_out=new_reserve_out)
    if before == 0:
        return 0
    return (abs(before - after) * BPS_DENOM) // before


def format_price_impact(impact_bps: int) -> str:
    """Render basis points as a percentage string, e.g. 125 -> "1.25%"."""
    _require_int("impact_bps", impact_bps)
    if impact_bps < 0:
        raise ValueError("impact_bps must be non-negative")
    whole, frac = divmod(impact_bps, 100)
    if frac == 0:
        return f"{whole}%"
    return f"{whole}.{frac:02d}".rstrip("0") + "%"

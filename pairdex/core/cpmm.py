"""
Constant Product Market Maker (CPMM) swap transition.

Algorithm Design:
- Type: Fixed-Point Integer Arithmetic / Deterministic Rounding
- Time Complexity: O(1) per swap operation
- Invariant: After each swap, x' * y' >= x * y (the fee stays in the pool)

`quote_swap` is the single pricing path shared by `swap` and the read-only
simulation query, so a preview and an execution on the same reserves agree.
"""

from dataclasses import replace
from typing import Tuple

from ..errors import InsufficientFunds, InvalidTokenPair, SlippageExceeded, ZeroAmount
from ..kernels.python.cpmm_swap import SwapQuote, price_swap
from ..state.assets import TokenRef
from ..state.balances import Amount
from ..state.pools import Pool
from .liquidity import require_amount


def quote_swap(pool: Pool, token_in: TokenRef, amount_in: Amount, fee_rate: int) -> SwapQuote:
    """
    Price selling `amount_in` of `token_in` into `pool` without mutating it.

    Rounding:
        after_fee  = floor(amount_in * (10_000 - fee_rate) / 10_000)
        fee        = amount_in - after_fee
        amount_out = floor(after_fee * reserve_out / (reserve_in + after_fee))

    Raises:
        ZeroAmount: If `amount_in` is zero
        InvalidTokenPair: If `token_in` is not one of the pool's tokens
        InsufficientFunds: If the pool holds nothing to trade against
    """
    require_amount("amount_in", amount_in)
    if amount_in == 0:
        raise ZeroAmount()
    if not pool.key.contains(token_in):
        raise InvalidTokenPair(f"Token {token_in.id} not in pool {pool.key}")

    reserve_in, reserve_out = pool.oriented_reserves(token_in)
    if reserve_in == 0 or reserve_out == 0:
        raise InsufficientFunds("Pool has no liquidity")

    return price_swap(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        amount_in=amount_in,
        fee_bps=fee_rate,
    )


def swap(
    pool: Pool,
    token_in: TokenRef,
    amount_in: Amount,
    min_amount_out: Amount,
    fee_rate: int,
) -> Tuple[Pool, SwapQuote]:
    """
    Execute an exact-in swap against `pool`.

    Post-swap reserves:
        reserve_in  += amount_in   (full amount, fee included)
        reserve_out -= amount_out
    `total_shares` is unchanged.

    Returns:
        Tuple of (Pool, SwapQuote)

    Raises:
        SlippageExceeded: If the output is below `min_amount_out`
    """
    require_amount("min_amount_out", min_amount_out)
    quote = quote_swap(pool, token_in, amount_in, fee_rate)

    if quote.amount_out < min_amount_out:
        raise SlippageExceeded()

    k_before = pool.get_constant_product()
    if token_in.id == pool.token_a.id:
        next_pool = replace(pool, reserve_a=quote.new_reserve_in, reserve_b=quote.new_reserve_out)
    else:
        next_pool = replace(pool, reserve_b=quote.new_reserve_in, reserve_a=quote.new_reserve_out)

    # Verify invariant: with the fee retained, k must not decrease.
    if next_pool.get_constant_product() < k_before:
        raise AssertionError(
            f"Invariant violation: new_k ({next_pool.get_constant_product()}) < old_k ({k_before})"
        )

    return next_pool, quote

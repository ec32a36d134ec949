"""
Liquidity management transitions: create pool, add/remove liquidity.

Each function is pure: it checks every precondition and computes the complete
post-state before returning, and it never touches a store. Amounts are in
canonical pair order (token_a, token_b).
"""

from dataclasses import replace
from typing import Tuple

from ..errors import InsufficientFunds, MinLiquidityNotMet, SlippageExceeded, ZeroAmount
from ..kernels.python.lp_math import burn_shares, genesis_shares, mint_shares
from ..state.assets import PairKey
from ..state.balances import Amount
from ..state.pools import Pool


def require_amount(name: str, value: Amount) -> None:
    """Reject non-int and negative amounts at the public boundary."""
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")


def create_pool(key: PairKey, amount_a: Amount, amount_b: Amount) -> Tuple[Pool, Amount]:
    """
    Fund a new pool.

    Shares issued:
        shares = floor(sqrt(amount_a * amount_b))

    All shares go to the creator. There is no locked minimum liquidity, so the
    first depositor owns 100% of the pool.

    Returns:
        Tuple of (Pool, initial_shares)

    Raises:
        ZeroAmount: If either amount is zero
        MinLiquidityNotMet: If the geometric mean truncates to zero
    """
    require_amount("amount_a", amount_a)
    require_amount("amount_b", amount_b)
    if amount_a == 0 or amount_b == 0:
        raise ZeroAmount()

    shares = genesis_shares(amount_a=amount_a, amount_b=amount_b)
    if shares == 0:
        raise MinLiquidityNotMet()

    pool = Pool(
        token_a=key.token_a,
        token_b=key.token_b,
        reserve_a=amount_a,
        reserve_b=amount_b,
        total_shares=shares,
    )
    return pool, shares


def add_liquidity(
    pool: Pool,
    amount_a: Amount,
    amount_b: Amount,
    min_shares: Amount,
) -> Tuple[Pool, Amount]:
    """
    Deposit into a funded pool.

    Shares minted:
        shares = min(floor(amount_a * T / Ra), floor(amount_b * T / Rb))

    Rounding: both candidates floor, then the smaller wins, so the depositor
    bears all rounding and ratio loss. The full amounts enter the reserves,
    including the excess of the non-binding side; pricing the call so that
    excess is small is the caller's job. `min_shares` is the only floor: a
    deposit that mints nothing succeeds when `min_shares` is zero.

    Returns:
        Tuple of (Pool, shares_minted)

    Raises:
        MinLiquidityNotMet: If the pool is drained or the minted shares fall
            below `min_shares`
    """
    require_amount("amount_a", amount_a)
    require_amount("amount_b", amount_b)
    require_amount("min_shares", min_shares)

    # A drained pool has no ratio to deposit against.
    if pool.total_shares == 0 or pool.reserve_a == 0 or pool.reserve_b == 0:
        raise MinLiquidityNotMet("Pool has no liquidity to deposit against")

    res = mint_shares(
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_shares=pool.total_shares,
        amount_a=amount_a,
        amount_b=amount_b,
    )
    minted = res.shares_minted
    if minted < min_shares:
        raise MinLiquidityNotMet()

    next_pool = replace(
        pool,
        reserve_a=res.new_reserve_a,
        reserve_b=res.new_reserve_b,
        total_shares=res.new_total_shares,
    )
    return next_pool, minted


def remove_liquidity(
    pool: Pool,
    held_shares: Amount,
    shares: Amount,
    min_a: Amount,
    min_b: Amount,
) -> Tuple[Pool, Amount, Amount]:
    """
    Burn shares for the underlying reserves.

    Outputs:
        amount_a = floor(shares * Ra / T)
        amount_b = floor(shares * Rb / T)

    Rounding: floors never over-pay; the remainder stays with the remaining
    providers. Burning every outstanding share returns the full reserves and
    leaves a (0, 0, 0) pool. Burning zero shares pays (0, 0) and leaves the
    pool unchanged.

    Returns:
        Tuple of (Pool, amount_a, amount_b)

    Raises:
        InsufficientFunds: If `shares` exceeds `held_shares`
        SlippageExceeded: If either output is below its minimum
    """
    require_amount("held_shares", held_shares)
    require_amount("shares", shares)
    require_amount("min_a", min_a)
    require_amount("min_b", min_b)
    if shares > held_shares or shares > pool.total_shares:
        raise InsufficientFunds()
    if shares == 0:
        if min_a > 0 or min_b > 0:
            raise SlippageExceeded()
        return pool, 0, 0

    res = burn_shares(
        shares=shares,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_shares=pool.total_shares,
    )
    if res.amount_a_out < min_a or res.amount_b_out < min_b:
        raise SlippageExceeded()

    next_pool = replace(
        pool,
        reserve_a=res.new_reserve_a,
        reserve_b=res.new_reserve_b,
        total_shares=res.new_total_shares,
    )
    return next_pool, res.amount_a_out, res.amount_b_out

"""
Read-only projections over the pool and position ledgers.

Nothing here writes to a store. Pool and position lookups resolve raw token
strings through the same canonical pair key the mutating operations use.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..errors import PoolNotFound
from ..kernels.python.cpmm_swap import format_price_impact, price_impact_bps
from ..kernels.python.lp_math import redeemable_amounts
from ..state.assets import PairKey, TokenLike, pair_key, resolve_token
from ..state.balances import Amount, Owner
from ..state.lp import PositionStore
from ..state.pools import Pool, PoolStore
from .config import DexConfig
from .cpmm import quote_swap


DEFAULT_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 30


@dataclass(frozen=True)
class ConfigInfo:
    admin: str
    fee_rate: int


@dataclass(frozen=True)
class PoolInfo:
    token_a: str
    token_b: str
    reserve_a: Amount
    reserve_b: Amount
    total_shares: Amount


@dataclass(frozen=True)
class PositionInfo:
    shares: Amount
    share_a: Amount
    share_b: Amount


@dataclass(frozen=True)
class SimulationInfo:
    amount_out: Amount
    fee: Amount
    price_impact_bps: int
    # Percentage string, e.g. "1.25%".
    price_impact: str


def pool_info(pool: Pool) -> PoolInfo:
    return PoolInfo(
        token_a=pool.token_a.id,
        token_b=pool.token_b.id,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_shares=pool.total_shares,
    )


def load_pool(pools: PoolStore, key: PairKey) -> Pool:
    pool = pools.get(key)
    if pool is None:
        raise PoolNotFound()
    return pool


def get_config(config: DexConfig) -> ConfigInfo:
    return ConfigInfo(admin=config.admin, fee_rate=config.fee_rate)


def get_pool(pools: PoolStore, config: DexConfig, x: TokenLike, y: TokenLike) -> PoolInfo:
    key = pair_key(x, y, config.native_denoms)
    return pool_info(load_pool(pools, key))


def list_pools(
    pools: PoolStore,
    config: DexConfig,
    start_after: Optional[Union[PairKey, Tuple[TokenLike, TokenLike]]] = None,
    limit: Optional[int] = None,
) -> List[PoolInfo]:
    """
    One page of pools in ascending pair-key order.

    `start_after` is exclusive. `limit` defaults to 10 and is capped at 30.
    """
    if limit is None:
        limit = DEFAULT_PAGE_LIMIT
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise TypeError("limit must be an int")
    if limit < 0:
        raise ValueError(f"limit must be non-negative: {limit}")
    limit = min(limit, MAX_PAGE_LIMIT)

    bound: Optional[PairKey] = None
    if isinstance(start_after, PairKey):
        bound = start_after
    elif start_after is not None:
        bound = pair_key(start_after[0], start_after[1], config.native_denoms)

    page: List[PoolInfo] = []
    if limit == 0:
        return page
    for pool in pools.range(bound):
        page.append(pool_info(pool))
        if len(page) >= limit:
            break
    return page


def get_position(
    pools: PoolStore,
    positions: PositionStore,
    config: DexConfig,
    owner: Owner,
    x: TokenLike,
    y: TokenLike,
) -> PositionInfo:
    """Held shares plus what they would redeem right now (floor; zero for a drained pool)."""
    key = pair_key(x, y, config.native_denoms)
    pool = load_pool(pools, key)
    shares = positions.get(owner, key).shares
    share_a, share_b = redeemable_amounts(
        shares=shares,
        reserve_a=pool.reserve_a,
        reserve_b=pool.reserve_b,
        total_shares=pool.total_shares,
    )
    return PositionInfo(shares=shares, share_a=share_a, share_b=share_b)


def simulate_swap(
    pools: PoolStore,
    config: DexConfig,
    token_in: TokenLike,
    token_out: TokenLike,
    amount_in: Amount,
) -> SimulationInfo:
    """
    Price a swap against current reserves without executing it.

    Price impact compares the marginal price before the trade with the
    marginal price implied by the would-be post-trade reserves, unsigned.
    """
    key = pair_key(token_in, token_out, config.native_denoms)
    pool = load_pool(pools, key)
    tin = resolve_token(token_in, config.native_denoms)

    quote = quote_swap(pool, tin, amount_in, config.fee_rate)
    reserve_in, reserve_out = pool.oriented_reserves(tin)
    impact = price_impact_bps(
        reserve_in=reserve_in,
        reserve_out=reserve_out,
        new_reserve_in=quote.new_reserve_in,
        new_reserve_out=quote.new_reserve_out,
    )
    return SimulationInfo(
        amount_out=quote.amount_out,
        fee=quote.fee,
        price_impact_bps=impact,
        price_impact=format_price_impact(impact),
    )

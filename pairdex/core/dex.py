"""
Ledger orchestration (imperative shell around the pure transitions).

Each mutating operation:
- resolves the caller's pair to its canonical key,
- loads the pool and position records,
- runs one pure transition that checks every precondition and computes the
  complete post-state,
- checks attached funds and builds transfer obligations,
- and only then writes the pool and position together.

A rejected operation raises a `DexError` before any write, so the pool and
position stores can never disagree on a pair's total shares.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from ..errors import DexError, InvalidTokenPair, PoolAlreadyExists, Unauthorized, ZeroAmount
from ..state.assets import PairKey, TokenLike, TokenRef, pair_key, resolve_token
from ..state.balances import Amount, AttachedFunds, Owner
from ..state.lp import LiquidityPosition, PositionStore
from ..state.pools import Pool, PoolStore
from . import cpmm, liquidity, queries
from .config import DexConfig
from .transfers import Transfer, deposit_transfers, payout_transfers


logger = logging.getLogger(__name__)

FundsLike = Union[AttachedFunds, Mapping[str, Amount], None]


@dataclass(frozen=True)
class OperationResult:
    """Committed post-state plus the transfers the host must execute."""

    pool: Pool
    position: Optional[LiquidityPosition]
    transfers: Tuple[Transfer, ...] = ()
    attributes: Dict[str, Any] = field(default_factory=dict)


def _as_funds(funds: FundsLike) -> AttachedFunds:
    if isinstance(funds, AttachedFunds):
        return funds
    return AttachedFunds(funds)


class DexLedger:
    """
    Pool ledger + position ledger, jointly consistent.

    The host must serialize calls per pair; the ledger itself does no locking.
    """

    def __init__(self, pools: PoolStore, positions: PositionStore, config: DexConfig) -> None:
        self.pools = pools
        self.positions = positions
        self.config = config

    # -- helpers ---------------------------------------------------------

    def _resolve(self, raw: TokenLike) -> TokenRef:
        return resolve_token(raw, self.config.native_denoms)

    def _oriented(self, key: PairKey, first: TokenRef, amount_first: Amount, amount_second: Amount) -> Tuple[Amount, Amount]:
        """Map call-order amounts onto canonical (token_a, token_b) order."""
        if first.id == key.token_a.id:
            return amount_first, amount_second
        return amount_second, amount_first

    def _commit(self, pool: Pool, position: Optional[LiquidityPosition]) -> None:
        self.pools.put(pool)
        if position is not None:
            self.positions.put(position)

    @staticmethod
    def require_owner(sender: Owner, owner: Owner) -> None:
        """Only the owner may act on its own position."""
        if sender != owner:
            raise Unauthorized()

    # -- mutating operations ---------------------------------------------

    def create_pool(
        self,
        sender: Owner,
        token_x: TokenLike,
        token_y: TokenLike,
        initial_x: Amount,
        initial_y: Amount,
        funds: FundsLike = None,
    ) -> OperationResult:
        """Create and fund the pool for (token_x, token_y); the sender gets every initial share."""
        try:
            liquidity.require_amount("initial_x", initial_x)
            liquidity.require_amount("initial_y", initial_y)
            if initial_x == 0 or initial_y == 0:
                raise ZeroAmount()
            tx, ty = self._resolve(token_x), self._resolve(token_y)
            if tx.id == ty.id:
                raise InvalidTokenPair()
            key = pair_key(tx, ty)
            if self.pools.has(key):
                raise PoolAlreadyExists()

            amount_a, amount_b = self._oriented(key, tx, initial_x, initial_y)
            pool, shares = liquidity.create_pool(key, amount_a, amount_b)
            position = LiquidityPosition(owner=sender, pair=key, shares=shares)
            transfers = deposit_transfers(
                sender,
                [(key.token_a, amount_a), (key.token_b, amount_b)],
                _as_funds(funds),
            )
        except DexError as exc:
            logger.debug("create_pool rejected: %s (%s)", exc.code, exc.message)
            raise

        self._commit(pool, position)
        logger.info("create_pool %s shares=%d sender=%s", key, shares, sender)
        return OperationResult(
            pool=pool,
            position=position,
            transfers=tuple(transfers),
            attributes={
                "method": "create_pool",
                "token_a": key.token_a.id,
                "token_b": key.token_b.id,
                "initial_a": amount_a,
                "initial_b": amount_b,
                "liquidity": shares,
            },
        )

    def add_liquidity(
        self,
        sender: Owner,
        token_x: TokenLike,
        token_y: TokenLike,
        amount_x: Amount,
        amount_y: Amount,
        min_shares: Amount = 0,
        funds: FundsLike = None,
    ) -> OperationResult:
        """Deposit both assets; mints shares at the scarcer side's ratio."""
        try:
            tx = self._resolve(token_x)
            key = pair_key(tx, token_y, self.config.native_denoms)
            pool = queries.load_pool(self.pools, key)
            amount_a, amount_b = self._oriented(key, tx, amount_x, amount_y)

            next_pool, minted = liquidity.add_liquidity(pool, amount_a, amount_b, min_shares)
            held = self.positions.get(sender, key)
            position = LiquidityPosition(owner=sender, pair=key, shares=held.shares + minted)
            transfers = deposit_transfers(
                sender,
                [(key.token_a, amount_a), (key.token_b, amount_b)],
                _as_funds(funds),
            )
        except DexError as exc:
            logger.debug("add_liquidity rejected: %s (%s)", exc.code, exc.message)
            raise

        self._commit(next_pool, position)
        logger.info("add_liquidity %s minted=%d sender=%s", key, minted, sender)
        return OperationResult(
            pool=next_pool,
            position=position,
            transfers=tuple(transfers),
            attributes={
                "method": "add_liquidity",
                "amount_a": amount_a,
                "amount_b": amount_b,
                "liquidity": minted,
            },
        )

    def remove_liquidity(
        self,
        sender: Owner,
        token_x: TokenLike,
        token_y: TokenLike,
        shares: Amount,
        min_x: Amount = 0,
        min_y: Amount = 0,
        owner: Optional[Owner] = None,
    ) -> OperationResult:
        """Burn `shares` of the sender's position; the sender is paid both assets."""
        try:
            if owner is not None:
                self.require_owner(sender, owner)
            tx = self._resolve(token_x)
            key = pair_key(tx, token_y, self.config.native_denoms)
            pool = queries.load_pool(self.pools, key)
            min_a, min_b = self._oriented(key, tx, min_x, min_y)

            held = self.positions.get(sender, key)
            next_pool, amount_a, amount_b = liquidity.remove_liquidity(
                pool, held.shares, shares, min_a, min_b
            )
            position = LiquidityPosition(owner=sender, pair=key, shares=held.shares - shares)
            transfers = payout_transfers(sender, [(key.token_a, amount_a), (key.token_b, amount_b)])
        except DexError as exc:
            logger.debug("remove_liquidity rejected: %s (%s)", exc.code, exc.message)
            raise

        self._commit(next_pool, position)
        logger.info(
            "remove_liquidity %s shares=%d out=(%d, %d) sender=%s",
            key, shares, amount_a, amount_b, sender,
        )
        return OperationResult(
            pool=next_pool,
            position=position,
            transfers=tuple(transfers),
            attributes={
                "method": "remove_liquidity",
                "amount_a": amount_a,
                "amount_b": amount_b,
            },
        )

    def swap(
        self,
        sender: Owner,
        token_in: TokenLike,
        token_out: TokenLike,
        amount_in: Amount,
        min_amount_out: Amount = 0,
        funds: FundsLike = None,
    ) -> OperationResult:
        """Sell exactly `amount_in` of `token_in` for `token_out` at the current fee rate."""
        try:
            liquidity.require_amount("amount_in", amount_in)
            if amount_in == 0:
                raise ZeroAmount()
            tin = self._resolve(token_in)
            key = pair_key(tin, token_out, self.config.native_denoms)
            pool = queries.load_pool(self.pools, key)

            next_pool, quote = cpmm.swap(pool, tin, amount_in, min_amount_out, self.config.fee_rate)
            tout = key.other(tin)
            transfers = deposit_transfers(sender, [(tin, amount_in)], _as_funds(funds))
            transfers += payout_transfers(sender, [(tout, quote.amount_out)])
        except DexError as exc:
            logger.debug("swap rejected: %s (%s)", exc.code, exc.message)
            raise

        self._commit(next_pool, None)
        logger.info(
            "swap %s in=%d %s out=%d %s fee=%d sender=%s",
            key, amount_in, tin.id, quote.amount_out, tout.id, quote.fee, sender,
        )
        return OperationResult(
            pool=next_pool,
            position=None,
            transfers=tuple(transfers),
            attributes={
                "method": "swap",
                "token_in": tin.id,
                "token_out": tout.id,
                "amount_in": amount_in,
                "amount_out": quote.amount_out,
                "fee": quote.fee,
            },
        )

    # -- queries ---------------------------------------------------------

    def get_config(self) -> queries.ConfigInfo:
        return queries.get_config(self.config)

    def get_pool(self, token_x: TokenLike, token_y: TokenLike) -> queries.PoolInfo:
        return queries.get_pool(self.pools, self.config, token_x, token_y)

    def list_pools(
        self,
        start_after: Optional[Union[PairKey, Tuple[TokenLike, TokenLike]]] = None,
        limit: Optional[int] = None,
    ) -> list[queries.PoolInfo]:
        return queries.list_pools(self.pools, self.config, start_after, limit)

    def get_position(self, owner: Owner, token_x: TokenLike, token_y: TokenLike) -> queries.PositionInfo:
        return queries.get_position(self.pools, self.positions, self.config, owner, token_x, token_y)

    def simulate_swap(self, token_in: TokenLike, token_out: TokenLike, amount_in: Amount) -> queries.SimulationInfo:
        return queries.simulate_swap(self.pools, self.config, token_in, token_out, amount_in)

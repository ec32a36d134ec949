"""
Liquidity position ledger.

Shares are scoped per canonical pair and tracked separately from pool records.
The two ledgers agree through one invariant: for every pair, the sum of all
position shares equals the pool's `total_shares`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Protocol, Tuple

from .assets import PairKey
from .balances import Amount, Owner


@dataclass(frozen=True)
class LiquidityPosition:
    """One account's claim on one pool. A zero-share position is the same as none."""

    owner: Owner
    pair: PairKey
    shares: Amount = 0

    def __post_init__(self) -> None:
        if not isinstance(self.owner, str) or not self.owner:
            raise ValueError("owner must be a non-empty string")
        if not isinstance(self.shares, int) or isinstance(self.shares, bool):
            raise TypeError("shares must be an int")
        if self.shares < 0:
            raise ValueError(f"Position shares cannot be negative: {self.shares}")


class PositionStore(Protocol):
    """Key-value access to positions by (owner, pair)."""

    def get(self, owner: Owner, pair: PairKey) -> LiquidityPosition: ...

    def put(self, position: LiquidityPosition) -> None: ...

    def total_for_pair(self, pair: PairKey) -> Amount: ...


class InMemoryPositionStore:
    """
    Deterministic share table mapping (owner, pair) -> shares.

    Notes:
    - Shares are always non-negative.
    - Zero balances are omitted to keep the table sparse; `get` on an absent
      key returns a zero-share position.
    """

    def __init__(self) -> None:
        self._shares: Dict[Tuple[Owner, Tuple[str, str]], Amount] = {}

    def get(self, owner: Owner, pair: PairKey) -> LiquidityPosition:
        """Get the position for (owner, pair). Zero shares if not found."""
        shares = self._shares.get((owner, pair.as_tuple()), 0)
        return LiquidityPosition(owner=owner, pair=pair, shares=shares)

    def put(self, position: LiquidityPosition) -> None:
        """Store a position; zero-share positions are dropped."""
        k = (position.owner, position.pair.as_tuple())
        if position.shares == 0:
            self._shares.pop(k, None)
        else:
            self._shares[k] = position.shares

    def total_for_pair(self, pair: PairKey) -> Amount:
        """Sum of all shares held against `pair`."""
        target = pair.as_tuple()
        return sum(amount for (_, p), amount in self._shares.items() if p == target)

    def positions_for_pair(self, pair: PairKey) -> Iterator[LiquidityPosition]:
        """Yield non-zero positions on `pair`, ordered by owner."""
        target = pair.as_tuple()
        for (owner, p) in sorted(k for k in self._shares if k[1] == target):
            yield LiquidityPosition(owner=owner, pair=pair, shares=self._shares[(owner, p)])

    def verify_non_negative(self) -> bool:
        """Verify all stored shares are non-negative."""
        return all(amount >= 0 for amount in self._shares.values())

    def __len__(self) -> int:
        return len(self._shares)

    def __repr__(self) -> str:
        return f"InMemoryPositionStore({len(self._shares)} entries)"

"""
Pool records and the pool ledger store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Protocol

from .assets import PairKey, TokenRef
from .balances import Amount


@dataclass(frozen=True)
class Pool:
    """
    Reserve state of one trading pair.

    Attributes:
        token_a: First token of the canonical pair (smaller id)
        token_b: Second token
        reserve_a: Ledger-held balance of token_a
        reserve_b: Ledger-held balance of token_b
        total_shares: Sum of all outstanding liquidity shares
    """
    token_a: TokenRef
    token_b: TokenRef
    reserve_a: Amount
    reserve_b: Amount
    total_shares: Amount

    def __post_init__(self) -> None:
        """Validate pool state invariants."""
        if self.token_a.id >= self.token_b.id:
            raise ValueError(
                f"Tokens must be in canonical order: {self.token_a.id} < {self.token_b.id}"
            )

        for name, v in (
            ("reserve_a", self.reserve_a),
            ("reserve_b", self.reserve_b),
            ("total_shares", self.total_shares),
        ):
            if not isinstance(v, int) or isinstance(v, bool):
                raise TypeError(f"{name} must be an int")
            if v < 0:
                raise ValueError(f"{name} must be non-negative: {v}")

        # Outstanding shares always have a non-degenerate product to redeem against.
        if self.total_shares > 0 and (self.reserve_a == 0 or self.reserve_b == 0):
            raise ValueError(
                f"Pool with shares must have positive reserves: ({self.reserve_a}, {self.reserve_b})"
            )

    @property
    def key(self) -> PairKey:
        return PairKey(token_a=self.token_a, token_b=self.token_b)

    @property
    def is_drained(self) -> bool:
        return self.total_shares == 0

    def get_reserve(self, token: TokenRef) -> Amount:
        """
        Get reserve for a specific token.

        Raises:
            ValueError: If token is not in this pool
        """
        if token.id == self.token_a.id:
            return self.reserve_a
        elif token.id == self.token_b.id:
            return self.reserve_b
        else:
            raise ValueError(f"Token {token.id} not in pool {self.key}")

    def oriented_reserves(self, token_in: TokenRef) -> tuple[Amount, Amount]:
        """(reserve_in, reserve_out) for a trade that sells `token_in`."""
        if token_in.id == self.token_a.id:
            return self.reserve_a, self.reserve_b
        return self.reserve_b, self.reserve_a

    def get_constant_product(self) -> int:
        """k = reserve_a * reserve_b."""
        return self.reserve_a * self.reserve_b

    def __repr__(self) -> str:
        return (
            f"Pool({self.token_a.id}/{self.token_b.id}, "
            f"reserves=({self.reserve_a}, {self.reserve_b}), "
            f"total_shares={self.total_shares})"
        )


class PoolStore(Protocol):
    """Key-value access to pool records by canonical pair key."""

    def get(self, key: PairKey) -> Optional[Pool]: ...

    def has(self, key: PairKey) -> bool: ...

    def put(self, pool: Pool) -> None: ...

    def range(self, start_after: Optional[PairKey] = None) -> Iterator[Pool]: ...


class InMemoryPoolStore:
    """
    Dict-backed pool store.

    Iteration order is always the sorted pair-key order, never dict insertion
    order.
    """

    def __init__(self) -> None:
        self._pools: Dict[tuple[str, str], Pool] = {}

    def get(self, key: PairKey) -> Optional[Pool]:
        return self._pools.get(key.as_tuple())

    def has(self, key: PairKey) -> bool:
        return key.as_tuple() in self._pools

    def put(self, pool: Pool) -> None:
        self._pools[pool.key.as_tuple()] = pool

    def range(self, start_after: Optional[PairKey] = None) -> Iterator[Pool]:
        """Yield pools in ascending key order, strictly after `start_after`."""
        bound = start_after.as_tuple() if start_after is not None else None
        for k in sorted(self._pools):
            if bound is not None and k <= bound:
                continue
            yield self._pools[k]

    def __len__(self) -> int:
        return len(self._pools)

    def __repr__(self) -> str:
        return f"InMemoryPoolStore({len(self._pools)} pools)"

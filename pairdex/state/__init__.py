"""
State management for the pairdex ledger
"""

from .assets import PairKey, TokenKind, TokenRef, pair_key, resolve_token
from .balances import AttachedFunds
from .lp import InMemoryPositionStore, LiquidityPosition, PositionStore
from .pools import InMemoryPoolStore, Pool, PoolStore

__all__ = [
    "PairKey",
    "TokenKind",
    "TokenRef",
    "pair_key",
    "resolve_token",
    "AttachedFunds",
    "InMemoryPositionStore",
    "LiquidityPosition",
    "PositionStore",
    "InMemoryPoolStore",
    "Pool",
    "PoolStore",
]

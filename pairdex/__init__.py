"""
pairdex: integer-only constant-product AMM ledger.

Typical wiring:

    from pairdex import DexConfig, DexLedger, InMemoryPoolStore, InMemoryPositionStore

    ledger = DexLedger(InMemoryPoolStore(), InMemoryPositionStore(), DexConfig(admin="admin", fee_rate=30))
    ledger.create_pool("alice", "uatom", "cw20:usdc", 1_000, 4_000, funds={"uatom": 1_000})
"""

from .core import DexConfig, DexLedger, OperationResult, load_config
from .errors import (
    DexError,
    InsufficientFunds,
    InvalidTokenPair,
    MinLiquidityNotMet,
    PoolAlreadyExists,
    PoolNotFound,
    SlippageExceeded,
    Unauthorized,
    ZeroAmount,
)
from .state import InMemoryPoolStore, InMemoryPositionStore, PairKey, TokenRef, pair_key

__version__ = "0.1.0"

__all__ = [
    "DexConfig",
    "DexLedger",
    "OperationResult",
    "load_config",
    "DexError",
    "InsufficientFunds",
    "InvalidTokenPair",
    "MinLiquidityNotMet",
    "PoolAlreadyExists",
    "PoolNotFound",
    "SlippageExceeded",
    "Unauthorized",
    "ZeroAmount",
    "InMemoryPoolStore",
    "InMemoryPositionStore",
    "PairKey",
    "TokenRef",
    "pair_key",
]

"""
Core ledger transitions, configuration and queries
"""

from .config import DexConfig, load_config
from .cpmm import quote_swap, swap
from .dex import DexLedger, OperationResult
from .liquidity import add_liquidity, create_pool, remove_liquidity
from .queries import ConfigInfo, PoolInfo, PositionInfo, SimulationInfo
from .transfers import Transfer, TransferDirection

__all__ = [
    "DexConfig",
    "load_config",
    "quote_swap",
    "swap",
    "DexLedger",
    "OperationResult",
    "add_liquidity",
    "create_pool",
    "remove_liquidity",
    "ConfigInfo",
    "PoolInfo",
    "PositionInfo",
    "SimulationInfo",
    "Transfer",
    "TransferDirection",
]

"""Exception types raised by the ledger.

Every kind is a caller or state precondition violation, never a transient
fault, so none of them is retryable. Each is raised before any store write,
which leaves pools and positions exactly as they were.

``code`` is the stable kind name hosts can surface verbatim.
"""

from __future__ import annotations


class DexError(Exception):
    """Base class for ledger rejections."""

    code = "DexError"
    default_message = "DEX operation rejected"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(DexError):
    code = "Unauthorized"
    default_message = "Unauthorized"


class InsufficientFunds(DexError):
    """Held shares or attached funds do not cover the request."""

    code = "InsufficientFunds"
    default_message = "Insufficient funds"


class PoolNotFound(DexError):
    code = "PoolNotFound"
    default_message = "Pool not found"


class PoolAlreadyExists(DexError):
    code = "PoolAlreadyExists"
    default_message = "Pool already exists"


class SlippageExceeded(DexError):
    """Computed output is below the caller's minimum."""

    code = "SlippageExceeded"
    default_message = "Slippage tolerance exceeded"


class MinLiquidityNotMet(DexError):
    """Genesis shares truncated to zero, or minted shares fell below the floor."""

    code = "MinLiquidityNotMet"
    default_message = "Minimum liquidity not met"


class ZeroAmount(DexError):
    code = "ZeroAmount"
    default_message = "Zero amount not allowed"


class InvalidTokenPair(DexError):
    code = "InvalidTokenPair"
    default_message = "Invalid token pair"

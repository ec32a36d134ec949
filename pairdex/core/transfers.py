"""
Value-transfer obligations.

The ledger never moves value. Each mutating operation returns the transfers the
host must execute atomically with persisting the updated records.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Sequence, Tuple

from ..errors import InsufficientFunds
from ..state.assets import TokenRef
from ..state.balances import Amount, AttachedFunds, Owner


class TransferDirection(Enum):
    # Pull from the account into ledger custody (contract tokens only).
    COLLECT = "collect"
    # Send from ledger custody to the account.
    PAY = "pay"


@dataclass(frozen=True)
class Transfer:
    direction: TransferDirection
    token: TokenRef
    account: Owner
    amount: Amount

    def __post_init__(self) -> None:
        if not isinstance(self.amount, int) or isinstance(self.amount, bool):
            raise TypeError("amount must be an int")
        if self.amount <= 0:
            raise ValueError(f"transfer amount must be positive: {self.amount}")


def deposit_transfers(
    account: Owner,
    legs: Sequence[Tuple[TokenRef, Amount]],
    funds: AttachedFunds,
) -> List[Transfer]:
    """
    Obligations for depositing `legs` into custody.

    Native legs must already be covered by the attached funds; contract legs
    become COLLECT obligations.

    Raises:
        InsufficientFunds: If attached native funds do not cover the native legs
    """
    required: Dict[str, Amount] = {}
    out: List[Transfer] = []
    for token, amount in legs:
        if amount <= 0:
            continue
        if token.is_native:
            required[token.id] = required.get(token.id, 0) + amount
        else:
            out.append(Transfer(TransferDirection.COLLECT, token, account, amount))
    if not funds.covers(required):
        raise InsufficientFunds()
    return out


def payout_transfers(account: Owner, legs: Sequence[Tuple[TokenRef, Amount]]) -> List[Transfer]:
    """PAY obligations for `legs`; zero amounts are skipped."""
    return [Transfer(TransferDirection.PAY, token, account, amount) for token, amount in legs if amount > 0]

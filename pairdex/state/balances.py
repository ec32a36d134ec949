"""
Scalar type aliases and attached-funds tracking.

`AttachedFunds` mirrors what a host received alongside a request: native
denomination coins only. Contract tokens are never attached; they are pulled
through `COLLECT` transfer obligations instead.
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple, Union


# Type aliases
Owner = str  # Authenticated account identifier
Amount = int  # Non-negative integer (arbitrary precision)


class AttachedFunds:
    """
    Native coins attached to one request, keyed by denomination.

    Repeated entries for a denomination are summed.
    """

    def __init__(
        self,
        coins: Optional[Union[Mapping[str, Amount], Iterable[Tuple[str, Amount]]]] = None,
    ) -> None:
        self._coins: Dict[str, Amount] = {}
        items = coins.items() if isinstance(coins, Mapping) else (coins or ())
        for denom, amount in items:
            if not isinstance(denom, str) or not denom:
                raise ValueError("denom must be a non-empty string")
            if not isinstance(amount, int) or isinstance(amount, bool):
                raise TypeError("amount must be an int")
            if amount < 0:
                raise ValueError(f"Attached amount cannot be negative: {amount}")
            if amount:
                self._coins[denom] = self._coins.get(denom, 0) + amount

    def get(self, denom: str) -> Amount:
        """Attached amount for `denom`. Returns 0 if not attached."""
        return self._coins.get(denom, 0)

    def covers(self, required: Mapping[str, Amount]) -> bool:
        """True if every required denomination is attached in at least that amount."""
        return all(self.get(denom) >= amount for denom, amount in required.items())

    def as_dict(self) -> Dict[str, Amount]:
        return dict(self._coins)

    def __repr__(self) -> str:
        return f"AttachedFunds({len(self._coins)} denoms)"

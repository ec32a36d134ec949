"""
Asset identity and canonical pair keys.

A raw token string is resolved once, at the boundary, into a `TokenRef` that
says whether it is a native-ledger denomination or a contract address. Inside
the core only `TokenRef` values flow; nothing re-compares against a sentinel
denomination string.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Tuple, Union

from ..errors import InvalidTokenPair


DEFAULT_NATIVE_DENOMS: Tuple[str, ...] = ("uatom",)


class TokenKind(Enum):
    NATIVE = "native"
    CONTRACT = "contract"


@dataclass(frozen=True, order=True)
class TokenRef:
    """
    Tagged asset identifier.

    Ordering, equality and hashing use `id` only, so the canonical pair order
    is the lexicographic order of the raw identifiers.
    """

    id: str
    kind: TokenKind = field(default=TokenKind.CONTRACT, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.id, str) or not self.id:
            raise InvalidTokenPair("token identifier must be a non-empty string")
        if not isinstance(self.kind, TokenKind):
            raise TypeError("kind must be a TokenKind")

    @property
    def is_native(self) -> bool:
        return self.kind is TokenKind.NATIVE

    def __str__(self) -> str:
        return self.id


TokenLike = Union[TokenRef, str]


def resolve_token(raw: TokenLike, native_denoms: Iterable[str] = DEFAULT_NATIVE_DENOMS) -> TokenRef:
    """
    Resolve a raw identifier into a `TokenRef` tagged against `native_denoms`.

    A `TokenRef` input is re-tagged from its id; the caller's kind is ignored.
    """
    if isinstance(raw, TokenRef):
        raw = raw.id
    if not isinstance(raw, str) or not raw:
        raise InvalidTokenPair("token identifier must be a non-empty string")
    kind = TokenKind.NATIVE if raw in tuple(native_denoms) else TokenKind.CONTRACT
    return TokenRef(id=raw, kind=kind)


@dataclass(frozen=True, order=True)
class PairKey:
    """Two distinct tokens in canonical order (`token_a.id < token_b.id`)."""

    token_a: TokenRef
    token_b: TokenRef

    def __post_init__(self) -> None:
        if self.token_a.id == self.token_b.id:
            raise InvalidTokenPair()
        if self.token_a.id > self.token_b.id:
            raise ValueError(
                f"Tokens must be in canonical order: {self.token_a.id} < {self.token_b.id}"
            )

    def contains(self, token: TokenRef) -> bool:
        return token.id in (self.token_a.id, self.token_b.id)

    def other(self, token: TokenRef) -> TokenRef:
        """Return the counter-asset of `token` within this pair."""
        if token.id == self.token_a.id:
            return self.token_b
        if token.id == self.token_b.id:
            return self.token_a
        raise InvalidTokenPair(f"Token {token.id} not in pair {self}")

    def as_tuple(self) -> Tuple[str, str]:
        return self.token_a.id, self.token_b.id

    def __str__(self) -> str:
        return f"{self.token_a.id}/{self.token_b.id}"


def pair_key(
    x: TokenLike,
    y: TokenLike,
    native_denoms: Iterable[str] = DEFAULT_NATIVE_DENOMS,
) -> PairKey:
    """
    Canonical key for an unordered pair, independent of argument order.

    Raises InvalidTokenPair when both sides name the same asset.
    """
    denoms = tuple(native_denoms)
    a = resolve_token(x, denoms)
    b = resolve_token(y, denoms)
    if a.id == b.id:
        raise InvalidTokenPair()
    if a.id < b.id:
        return PairKey(token_a=a, token_b=b)
    return PairKey(token_a=b, token_b=a)

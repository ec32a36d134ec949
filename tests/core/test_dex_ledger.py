# [TESTER] v1

from __future__ import annotations

import logging

import pytest

from pairdex import DexConfig, DexLedger, InMemoryPoolStore, InMemoryPositionStore
from pairdex.core.transfers import TransferDirection
from pairdex.errors import (
    InsufficientFunds,
    InvalidTokenPair,
    MinLiquidityNotMet,
    PoolAlreadyExists,
    PoolNotFound,
    SlippageExceeded,
    Unauthorized,
    ZeroAmount,
)
from pairdex.state import TokenKind, TokenRef, pair_key


ALICE = "cosmos1alice"
BOB = "cosmos1bob"


def _ledger(fee_rate: int = 30) -> DexLedger:
    return DexLedger(InMemoryPoolStore(), InMemoryPositionStore(), DexConfig(admin="cosmos1admin", fee_rate=fee_rate))


def _assert_conserved(ledger: DexLedger, x: str, y: str) -> None:
    key = pair_key(x, y)
    pool = ledger.pools.get(key)
    assert pool is not None
    assert ledger.positions.total_for_pair(key) == pool.total_shares


def test_end_to_end_create_add_swap_drain() -> None:
    ledger = _ledger()

    res = ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)
    assert res.position is not None and res.position.shares == 2000
    assert res.attributes["liquidity"] == 2000
    _assert_conserved(ledger, "tokA", "tokB")

    res = ledger.add_liquidity(ALICE, "tokA", "tokB", 100, 400, 1)
    assert res.attributes["liquidity"] == 200
    assert (res.pool.reserve_a, res.pool.reserve_b, res.pool.total_shares) == (1100, 4400, 2200)
    _assert_conserved(ledger, "tokA", "tokB")

    res = ledger.swap(BOB, "tokA", "tokB", 110, 0)
    assert (res.attributes["amount_out"], res.attributes["fee"]) == (396, 1)
    assert (res.pool.reserve_a, res.pool.reserve_b) == (1210, 4004)

    res = ledger.remove_liquidity(ALICE, "tokA", "tokB", 2200, 0, 0)
    assert (res.attributes["amount_a"], res.attributes["amount_b"]) == (1210, 4004)
    assert (res.pool.reserve_a, res.pool.reserve_b, res.pool.total_shares) == (0, 0, 0)
    assert ledger.get_position(ALICE, "tokA", "tokB").shares == 0
    _assert_conserved(ledger, "tokA", "tokB")

    # A drained pool still exists and blocks re-creation.
    with pytest.raises(PoolAlreadyExists):
        ledger.create_pool(ALICE, "tokB", "tokA", 10, 10)


def test_create_pool_maps_amounts_to_canonical_order() -> None:
    ledger = _ledger()
    res = ledger.create_pool(ALICE, "tokB", "tokA", 4000, 1000)
    assert res.pool.token_a.id == "tokA"
    assert (res.pool.reserve_a, res.pool.reserve_b) == (1000, 4000)


def test_create_pool_error_precedence() -> None:
    ledger = _ledger()
    with pytest.raises(ZeroAmount):
        ledger.create_pool(ALICE, "tokA", "tokA", 0, 10)
    with pytest.raises(InvalidTokenPair):
        ledger.create_pool(ALICE, "tokA", "tokA", 10, 10)
    ledger.create_pool(ALICE, "tokA", "tokB", 10, 10)
    with pytest.raises(PoolAlreadyExists):
        ledger.create_pool(BOB, "tokB", "tokA", 10, 10)


def test_create_pool_collects_contract_tokens_and_checks_native_funds() -> None:
    ledger = _ledger()
    with pytest.raises(InsufficientFunds):
        ledger.create_pool(ALICE, "uatom", "cosmos1usdc", 1000, 4000, funds={"uatom": 999})
    assert ledger.list_pools() == []

    res = ledger.create_pool(ALICE, "uatom", "cosmos1usdc", 1000, 4000, funds={"uatom": 1000})
    assert len(res.transfers) == 1
    t = res.transfers[0]
    assert t.direction is TransferDirection.COLLECT
    assert (t.token.id, t.account, t.amount) == ("cosmos1usdc", ALICE, 4000)


def test_swap_pays_output_and_collects_input() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "uatom", "cosmos1usdc", 1000, 4000, funds={"uatom": 1000})

    res = ledger.swap(BOB, "cosmos1usdc", "uatom", 400, 1)
    directions = [(t.direction, t.token.id, t.amount) for t in res.transfers]
    assert directions[0] == (TransferDirection.COLLECT, "cosmos1usdc", 400)
    assert directions[1][0] is TransferDirection.PAY
    assert directions[1][1] == "uatom"

    with pytest.raises(InsufficientFunds):
        ledger.swap(BOB, "uatom", "cosmos1usdc", 100, 1, funds={})


def test_remove_liquidity_pays_both_assets() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)
    res = ledger.remove_liquidity(ALICE, "tokA", "tokB", 500)
    assert [(t.direction, t.token.id, t.amount) for t in res.transfers] == [
        (TransferDirection.PAY, "tokA", 250),
        (TransferDirection.PAY, "tokB", 1000),
    ]


def test_remove_liquidity_minimums_follow_call_order() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)
    # Call order (tokB, tokA): min_x applies to tokB.
    ledger.remove_liquidity(ALICE, "tokB", "tokA", 500, 1000, 250)
    with pytest.raises(SlippageExceeded):
        ledger.remove_liquidity(ALICE, "tokB", "tokA", 500, 0, 251)


def test_remove_more_than_held_fails_without_mutation() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)
    ledger.add_liquidity(BOB, "tokA", "tokB", 100, 400, 1)

    with pytest.raises(InsufficientFunds):
        ledger.remove_liquidity(BOB, "tokA", "tokB", 201)

    info = ledger.get_pool("tokA", "tokB")
    assert (info.reserve_a, info.reserve_b, info.total_shares) == (1100, 4400, 2200)
    assert ledger.get_position(BOB, "tokA", "tokB").shares == 200


def test_remove_for_another_owner_is_unauthorized() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)
    with pytest.raises(Unauthorized):
        ledger.remove_liquidity(BOB, "tokA", "tokB", 1, owner=ALICE)


def test_operations_on_missing_pool() -> None:
    ledger = _ledger()
    with pytest.raises(PoolNotFound):
        ledger.add_liquidity(ALICE, "tokA", "tokB", 1, 1)
    with pytest.raises(PoolNotFound):
        ledger.remove_liquidity(ALICE, "tokA", "tokB", 1)
    with pytest.raises(PoolNotFound):
        ledger.swap(ALICE, "tokA", "tokB", 1)
    with pytest.raises(ZeroAmount):
        ledger.swap(ALICE, "tokA", "tokB", 0)


def test_failed_add_liquidity_writes_nothing() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)
    with pytest.raises(MinLiquidityNotMet):
        ledger.add_liquidity(BOB, "tokA", "tokB", 100, 400, 201)
    assert ledger.get_pool("tokA", "tokB").total_shares == 2000
    assert ledger.get_position(BOB, "tokA", "tokB").shares == 0


def test_fee_rate_is_read_at_swap_time() -> None:
    pools, positions = InMemoryPoolStore(), InMemoryPositionStore()
    DexLedger(pools, positions, DexConfig(fee_rate=0)).create_pool(ALICE, "tokA", "tokB", 1000, 1000)

    no_fee = DexLedger(pools, positions, DexConfig(fee_rate=0)).simulate_swap("tokA", "tokB", 100)
    high_fee = DexLedger(pools, positions, DexConfig(fee_rate=5000)).simulate_swap("tokA", "tokB", 100)
    assert no_fee.fee == 0
    assert high_fee.fee == 50
    assert high_fee.amount_out < no_fee.amount_out


def test_ledger_logs_commits_and_rejections(caplog: pytest.LogCaptureFixture) -> None:
    ledger = _ledger()
    with caplog.at_level(logging.DEBUG, logger="pairdex.core.dex"):
        ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)
        with pytest.raises(PoolAlreadyExists):
            ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)

    messages = [r.getMessage() for r in caplog.records]
    assert any(m.startswith("create_pool tokA/tokB shares=2000") for m in messages)
    assert any("rejected: PoolAlreadyExists" in m for m in messages)


def test_zero_output_swap_matches_simulation() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)

    sim = ledger.simulate_swap("tokB", "tokA", 1)
    res = ledger.swap(BOB, "tokB", "tokA", 1, 0)
    assert (sim.amount_out, sim.fee) == (0, 1)
    assert (res.attributes["amount_out"], res.attributes["fee"]) == (0, 1)
    # Only the input is collected; nothing is paid out.
    assert [(t.direction, t.token.id, t.amount) for t in res.transfers] == [
        (TransferDirection.COLLECT, "tokB", 1),
    ]
    assert (res.pool.reserve_a, res.pool.reserve_b) == (1000, 4001)


def test_add_liquidity_with_zero_side_succeeds_and_mints_nothing() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)

    res = ledger.add_liquidity(BOB, "tokA", "tokB", 0, 400, 0)
    assert res.attributes["liquidity"] == 0
    assert (res.pool.reserve_a, res.pool.reserve_b, res.pool.total_shares) == (1000, 4400, 2000)
    assert [(t.direction, t.token.id, t.amount) for t in res.transfers] == [
        (TransferDirection.COLLECT, "tokB", 400),
    ]
    assert ledger.get_position(BOB, "tokA", "tokB").shares == 0
    _assert_conserved(ledger, "tokA", "tokB")


def test_remove_zero_shares_pays_nothing() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "tokA", "tokB", 1000, 4000)

    res = ledger.remove_liquidity(ALICE, "tokA", "tokB", 0)
    assert res.transfers == ()
    assert (res.attributes["amount_a"], res.attributes["amount_b"]) == (0, 0)
    assert ledger.get_position(ALICE, "tokA", "tokB").shares == 2000


def test_native_kind_comes_from_config_not_caller() -> None:
    ledger = _ledger()
    ledger.create_pool(ALICE, "uatom", "cosmos1usdc", 1000, 4000, funds={"uatom": 1000})

    mislabeled = TokenRef("uatom", TokenKind.CONTRACT)
    with pytest.raises(InsufficientFunds):
        ledger.swap(BOB, mislabeled, "cosmos1usdc", 100, 0)

    res = ledger.swap(BOB, mislabeled, "cosmos1usdc", 100, 0, funds={"uatom": 100})
    assert all(t.direction is TransferDirection.PAY for t in res.transfers)

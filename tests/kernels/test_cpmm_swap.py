# [TESTER] v1

from __future__ import annotations

import pytest

from pairdex.kernels.python.cpmm_swap import (
    compute_amount_after_fee,
    format_price_impact,
    marginal_price_bps,
    price_impact_bps,
    price_swap,
)


def test_price_swap_reference_trade() -> None:
    # 110 in at 0.3% against (1100, 4400).
    q = price_swap(reserve_in=1100, reserve_out=4400, amount_in=110, fee_bps=30)
    assert q.amount_in_after_fee == 109
    assert q.fee == 1
    assert q.amount_out == 396
    assert (q.new_reserve_in, q.new_reserve_out) == (1210, 4004)


def test_fee_rounds_in_favor_of_pool() -> None:
    # 9 * 9970 / 10000 = 8.973 -> 8 after fee, so the fee is 1 not 0.027.
    assert compute_amount_after_fee(amount_in=9, fee_bps=30) == 8
    assert compute_amount_after_fee(amount_in=10_000, fee_bps=30) == 9_970
    assert compute_amount_after_fee(amount_in=10_000, fee_bps=0) == 10_000


def test_zero_fee_output_matches_constant_product() -> None:
    q = price_swap(reserve_in=1000, reserve_out=1000, amount_in=1000, fee_bps=0)
    assert q.fee == 0
    assert q.amount_out == 500


def test_dust_input_quotes_zero_output() -> None:
    q = price_swap(reserve_in=1000, reserve_out=4000, amount_in=1, fee_bps=30)
    assert q.amount_in_after_fee == 0
    assert q.fee == 1
    assert q.amount_out == 0


def test_output_never_reaches_reserve_out() -> None:
    q = price_swap(reserve_in=1, reserve_out=10, amount_in=10**30, fee_bps=0)
    assert q.amount_out == 9
    assert q.new_reserve_out == 1


def test_output_is_monotone_in_input() -> None:
    prev = -1
    for amount_in in range(1, 3000, 7):
        out = price_swap(reserve_in=1100, reserve_out=4400, amount_in=amount_in, fee_bps=30).amount_out
        assert out >= prev
        assert out < 4400
        prev = out


def test_price_swap_rejects_invalid_inputs() -> None:
    with pytest.raises(ValueError):
        price_swap(reserve_in=0, reserve_out=10, amount_in=1, fee_bps=0)
    with pytest.raises(ValueError):
        price_swap(reserve_in=10, reserve_out=10, amount_in=0, fee_bps=0)
    with pytest.raises(ValueError):
        price_swap(reserve_in=10, reserve_out=10, amount_in=1, fee_bps=10_000)
    with pytest.raises(TypeError):
        price_swap(reserve_in=10, reserve_out=10, amount_in=1.5, fee_bps=0)  # type: ignore[arg-type]


def test_price_impact_reference_trade() -> None:
    assert marginal_price_bps(reserve_in=1100, reserve_out=4400) == 40_000
    assert marginal_price_bps(reserve_in=1210, reserve_out=4004) == 33_090
    impact = price_impact_bps(reserve_in=1100, reserve_out=4400, new_reserve_in=1210, new_reserve_out=4004)
    assert impact == 1727


def test_price_impact_is_zero_when_price_truncates_to_zero() -> None:
    assert price_impact_bps(reserve_in=10**9, reserve_out=1, new_reserve_in=10**9 + 5, new_reserve_out=1) == 0


@pytest.mark.parametrize(
    "bps,expected",
    [(0, "0%"), (5, "0.05%"), (10, "0.1%"), (100, "1%"), (150, "1.5%"), (1727, "17.27%"), (10_000, "100%")],
)
def test_format_price_impact(bps: int, expected: str) -> None:
    assert format_price_impact(bps) == expected

# [TESTER] v1

from __future__ import annotations

import pytest

from cpswap.core import (
    NullEventSink,
    add_liquidity,
    get_price,
    init_pool,
    quote_add_liquidity,
    quote_remove_liquidity,
    quote_swap_a_for_b,
    quote_swap_b_for_a,
    remove_liquidity,
    swap_a_for_b,
    swap_b_for_a,
)
from cpswap.errors import DegeneratePoolError, InvalidShareAmountError
from cpswap.state import TokenSupply, TxContext, create_lp_authority

ASSET_A = "0x" + "11" * 32
ASSET_B = "0x" + "22" * 32
SENDER = "0x" + "bb" * 48
SINK = NullEventSink()


def _setup(amount_a: int = 1000, amount_b: int = 2000):
    ctx = TxContext(sender=SENDER)
    supply_a = TokenSupply(asset=ASSET_A, authority_id=ctx.fresh_id())
    supply_b = TokenSupply(asset=ASSET_B, authority_id=ctx.fresh_id())
    authority = create_lp_authority(ASSET_A, ASSET_B, ctx)
    pool, lp = init_pool(supply_a.mint(amount_a, ctx), supply_b.mint(amount_b, ctx), authority, ctx, sink=SINK)
    return pool, lp, authority, supply_a, supply_b, ctx


def test_price_is_integer_ratio() -> None:
    pool, *_ = _setup()
    assert get_price(pool) == 2
    assert get_price(pool.snapshot()) == 2

    pool, *_ = _setup(2000, 1000)
    assert get_price(pool) == 0


def test_price_of_drained_pool_is_zero() -> None:
    pool, lp, authority, _, _, ctx = _setup()
    remove_liquidity(pool, lp, authority, ctx, sink=SINK)
    assert get_price(pool) == 0


def test_swap_quotes_match_execution() -> None:
    pool, _, _, supply_a, supply_b, ctx = _setup()
    assert quote_swap_a_for_b(pool, 100) == 181
    assert quote_swap_b_for_a(pool, 200) == 90

    quoted = quote_swap_a_for_b(pool, 250)
    assert swap_a_for_b(pool, supply_a.mint(250, ctx), ctx, sink=SINK).value() == quoted

    quoted = quote_swap_b_for_a(pool, 999)
    assert swap_b_for_a(pool, supply_b.mint(999, ctx), ctx, sink=SINK).value() == quoted


def test_liquidity_quotes_match_execution() -> None:
    pool, _, authority, supply_a, supply_b, ctx = _setup()
    assert quote_add_liquidity(pool, 100, 300) == 100_000

    lp = add_liquidity(pool, supply_a.mint(100, ctx), supply_b.mint(300, ctx), authority, ctx, sink=SINK)
    assert lp.value() == 100_000

    assert quote_remove_liquidity(pool, 100_000) == (100, 209)
    out_a, out_b = remove_liquidity(pool, lp, authority, ctx, sink=SINK)
    assert (out_a.value(), out_b.value()) == (100, 209)


def test_quotes_do_not_mutate() -> None:
    pool, *_ = _setup()
    before = pool.snapshot()
    quote_swap_a_for_b(pool, 100)
    quote_swap_b_for_a(pool, 100)
    quote_add_liquidity(pool, 100, 100)
    quote_remove_liquidity(pool, 1000)
    get_price(pool)
    assert pool.snapshot() == before


def test_quotes_surface_the_same_errors_as_operations() -> None:
    pool, lp, authority, _, _, ctx = _setup()
    with pytest.raises(InvalidShareAmountError):
        quote_remove_liquidity(pool, pool.lp_supply + 1)

    remove_liquidity(pool, lp, authority, ctx, sink=SINK)
    with pytest.raises(DegeneratePoolError):
        quote_swap_a_for_b(pool, 10)
    assert quote_add_liquidity(pool, 10, 10) == 0

"""
Swap engine: exact-in swaps against the constant-product curve.

Both directions share one implementation; only the roles of the reserves flip.
"""

from __future__ import annotations

import logging

from ..errors import AssetMismatchError
from ..state.balances import Balance
from ..state.context import TxContext
from ..state.pools import Pool
from .cpmm import swap_exact_in
from .events import DEFAULT_SINK, EventSink, SwapDirection, SwapEvent

logger = logging.getLogger(__name__)


def _swap(pool: Pool, coin_in: Balance, ctx: TxContext, direction: SwapDirection, sink: EventSink) -> Balance:
    with pool.exclusive():
        if direction is SwapDirection.A_TO_B:
            asset_in, reserve_in, reserve_out = pool.asset_a, pool.reserve_a, pool.reserve_b
        else:
            asset_in, reserve_in, reserve_out = pool.asset_b, pool.reserve_b, pool.reserve_a
        if coin_in.asset != asset_in:
            raise AssetMismatchError(f"expected {asset_in} for {direction.value}, got {coin_in.asset}")

        amount_in = coin_in.value()
        amount_out, (new_reserve_in, new_reserve_out) = swap_exact_in(reserve_in, reserve_out, amount_in)

        if direction is SwapDirection.A_TO_B:
            pool.join_a(coin_in)
            coin_out = pool.take_b(amount_out, ctx)
        else:
            pool.join_b(coin_in)
            coin_out = pool.take_a(amount_out, ctx)

        logger.debug(
            "swap pool=%s direction=%s amount_in=%d amount_out=%d reserves_in_out=(%d, %d)",
            pool.pool_id[:18],
            direction.value,
            amount_in,
            amount_out,
            new_reserve_in,
            new_reserve_out,
        )
        sink.emit(
            SwapEvent(
                pool_id=pool.pool_id,
                sender=ctx.sender,
                direction=direction,
                amount_in=amount_in,
                amount_out=amount_out,
            )
        )
    return coin_out


def swap_a_for_b(pool: Pool, coin_a: Balance, ctx: TxContext, *, sink: EventSink = DEFAULT_SINK) -> Balance:
    """
    Sell all of `coin_a` for asset B.

        amount_out = floor(amount_in * 997 * reserve_b / (reserve_a * 1000 + amount_in * 997))

    The full input (fee included) joins reserve A.

    Raises:
        AssetMismatchError: If coin_a is not asset A
        DegeneratePoolError: If either reserve is empty
        InsufficientReserveError: If the output would drain reserve B
        ArithmeticOverflowError: If reserve A would exceed u64
    """
    return _swap(pool, coin_a, ctx, SwapDirection.A_TO_B, sink)


def swap_b_for_a(pool: Pool, coin_b: Balance, ctx: TxContext, *, sink: EventSink = DEFAULT_SINK) -> Balance:
    """Mirror of `swap_a_for_b`: sell all of `coin_b` for asset A."""
    return _swap(pool, coin_b, ctx, SwapDirection.B_TO_A, sink)

"""
Liquidity management operations: bootstrap a pool, add/remove liquidity.
"""

from __future__ import annotations

import logging
from typing import Tuple

from ..errors import AssetMismatchError, AuthorityMismatchError
from ..kernels.python.lp_math_v1 import bootstrap, burn_liquidity, mint_liquidity
from ..state.balances import Balance, require_u64, zero
from ..state.context import TxContext
from ..state.lp import LPMintAuthority
from ..state.pools import Pool, compute_pool_id
from .events import DEFAULT_SINK, EventSink, LiquidityAction, LiquidityEvent

logger = logging.getLogger(__name__)


def _require_authority(pool: Pool, authority: LPMintAuthority) -> None:
    if authority.asset != pool.lp_asset or authority.authority_id != pool.authority_id:
        raise AuthorityMismatchError(
            f"authority {authority.authority_id[:18]} does not govern pool {pool.pool_id[:18]}"
        )


def _require_pair(pool: Pool, coin_a: Balance, coin_b: Balance) -> None:
    if coin_a.asset != pool.asset_a:
        raise AssetMismatchError(f"expected {pool.asset_a} for side A, got {coin_a.asset}")
    if coin_b.asset != pool.asset_b:
        raise AssetMismatchError(f"expected {pool.asset_b} for side B, got {coin_b.asset}")


def init_pool(
    coin_a: Balance,
    coin_b: Balance,
    authority: LPMintAuthority,
    ctx: TxContext,
    *,
    sink: EventSink = DEFAULT_SINK,
) -> Tuple[Pool, Balance]:
    """
    Create a new pool from the caller's full A and B handles.

    Pool ID is deterministic:
        pool_id = H("CpSwapPool" || asset_a || asset_b || authority_id)

    LP minting for the first deposit is fixed:
        lp = INITIAL_LP  (independent of the deposit sizes)

    Both handles are consumed.

    Args:
        coin_a: Initial deposit of asset A
        coin_b: Initial deposit of asset B
        authority: Fresh LP minting authority for the (A, B) pair
        ctx: Execution context for the new pool and LP handle

    Returns:
        Tuple of (pool, lp_handle)

    Raises:
        AuthorityMismatchError: If the authority belongs to another pair or already minted
        DegeneratePoolError: If either deposit is zero
    """
    if authority.pair != (coin_a.asset, coin_b.asset):
        raise AuthorityMismatchError(
            f"authority pair {authority.pair} does not match deposits ({coin_a.asset}, {coin_b.asset})"
        )
    if authority.total_supply != 0:
        raise AuthorityMismatchError("authority has already minted shares for another pool")

    res = bootstrap(amount_a=coin_a.value(), amount_b=coin_b.value())

    # Validated with empty reserves; the deposits are only consumed once the pool exists.
    pool = Pool(
        pool_id=compute_pool_id(coin_a.asset, coin_b.asset, authority.authority_id),
        reserve_a=zero(coin_a.asset, ctx),
        reserve_b=zero(coin_b.asset, ctx),
        lp_asset=authority.asset,
        authority_id=authority.authority_id,
    )
    with pool.exclusive():
        pool.join_a(coin_a)
        pool.join_b(coin_b)
        lp = authority.mint(res.lp_minted, ctx)
        pool.lp_supply = res.lp_supply
        logger.debug(
            "init_pool pool=%s reserves=(%d, %d) lp_supply=%d",
            pool.pool_id[:18],
            res.reserve_a,
            res.reserve_b,
            res.lp_supply,
        )
        sink.emit(
            LiquidityEvent(
                pool_id=pool.pool_id,
                sender=ctx.sender,
                action=LiquidityAction.INIT,
                lp_amount=res.lp_minted,
            )
        )
    return pool, lp


def add_liquidity(
    pool: Pool,
    coin_a: Balance,
    coin_b: Balance,
    authority: LPMintAuthority,
    ctx: TxContext,
    *,
    sink: EventSink = DEFAULT_SINK,
) -> Balance:
    """
    Deposit both handles in full and mint proportional LP shares.

    LP minted:
        lp = min(floor(amount_a * lp_supply / reserve_a),
                 floor(amount_b * lp_supply / reserve_b))

    The side that implies more shares is not refunded; its excess stays with the pool.
    A deposit into a pool with an empty reserve mints 0 shares.

    Returns:
        Handle of the minted LP shares (possibly empty)

    Raises:
        AssetMismatchError: If a handle carries the wrong asset
        AuthorityMismatchError: If the authority does not govern this pool
        ArithmeticOverflowError: If a reserve or the LP supply would exceed u64
    """
    with pool.exclusive():
        _require_pair(pool, coin_a, coin_b)
        _require_authority(pool, authority)

        res = mint_liquidity(
            reserve_a=pool.reserve_a,
            reserve_b=pool.reserve_b,
            lp_supply=pool.lp_supply,
            amount_a=coin_a.value(),
            amount_b=coin_b.value(),
        )
        require_u64("total_supply", authority.total_supply + res.lp_minted)

        if res.empty_reserve:
            logger.warning(
                "add_liquidity into empty reserve mints no shares: pool=%s deposit=(%d, %d)",
                pool.pool_id[:18],
                coin_a.value(),
                coin_b.value(),
            )

        pool.join_a(coin_a)
        pool.join_b(coin_b)
        lp = authority.mint(res.lp_minted, ctx)
        pool.lp_supply = res.new_lp_supply

        logger.debug(
            "add_liquidity pool=%s lp_minted=%d lp_from=(%d, %d) lp_supply=%d",
            pool.pool_id[:18],
            res.lp_minted,
            res.lp_from_a,
            res.lp_from_b,
            res.new_lp_supply,
        )
        sink.emit(
            LiquidityEvent(
                pool_id=pool.pool_id,
                sender=ctx.sender,
                action=LiquidityAction.ADD,
                lp_amount=res.lp_minted,
            )
        )
    return lp


def remove_liquidity(
    pool: Pool,
    lp_coin: Balance,
    authority: LPMintAuthority,
    ctx: TxContext,
    *,
    sink: EventSink = DEFAULT_SINK,
) -> Tuple[Balance, Balance]:
    """
    Burn `lp_coin` and pay out its proportional slice of both reserves.

    Outputs:
        amount_a_out = floor(reserve_a * lp_amount / lp_supply)
        amount_b_out = floor(reserve_b * lp_amount / lp_supply)

    Rounding dust stays in the pool.

    Returns:
        Tuple of (handle_a, handle_b)

    Raises:
        AssetMismatchError: If lp_coin is not this pool's LP asset
        AuthorityMismatchError: If the authority does not govern this pool
        InvalidShareAmountError: If lp_amount exceeds the LP supply
    """
    with pool.exclusive():
        _require_authority(pool, authority)
        if lp_coin.asset != pool.lp_asset:
            raise AssetMismatchError(f"expected LP asset {pool.lp_asset}, got {lp_coin.asset}")

        lp_amount = lp_coin.value()
        res = burn_liquidity(
            reserve_a=pool.reserve_a,
            reserve_b=pool.reserve_b,
            lp_supply=pool.lp_supply,
            lp_amount=lp_amount,
        )

        authority.burn(lp_coin)
        out_a = pool.take_a(res.amount_a_out, ctx)
        out_b = pool.take_b(res.amount_b_out, ctx)
        pool.lp_supply = res.new_lp_supply

        logger.debug(
            "remove_liquidity pool=%s lp_burned=%d out=(%d, %d) lp_supply=%d",
            pool.pool_id[:18],
            lp_amount,
            res.amount_a_out,
            res.amount_b_out,
            res.new_lp_supply,
        )
        sink.emit(
            LiquidityEvent(
                pool_id=pool.pool_id,
                sender=ctx.sender,
                action=LiquidityAction.REMOVE,
                lp_amount=lp_amount,
            )
        )
    return out_a, out_b

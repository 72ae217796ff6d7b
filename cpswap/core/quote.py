"""
Quote engine: read-only previews of pool operations.

Every function works on one consistent snapshot and uses the same formulas as the
mutating operations, so a quote taken under `pool.exclusive()` matches what the
operation will do. Nothing here mutates the pool.
"""

from __future__ import annotations

from typing import Tuple, Union

from ..state.balances import Amount
from ..state.pools import Pool, PoolSnapshot
from .cpmm import compute_lp_burn, compute_lp_mint, compute_price, swap_exact_in

PoolLike = Union[Pool, PoolSnapshot]


def _snapshot(pool: PoolLike) -> PoolSnapshot:
    if isinstance(pool, PoolSnapshot):
        return pool
    return pool.snapshot()


def get_price(pool: PoolLike) -> Amount:
    """Spot price floor(reserve_b / reserve_a); 0 for an empty pool. Never fails."""
    snap = _snapshot(pool)
    return compute_price(snap.reserve_a, snap.reserve_b)


def quote_swap_a_for_b(pool: PoolLike, amount_in: Amount) -> Amount:
    """Output of `swap_a_for_b(amount_in)` against the current reserves."""
    snap = _snapshot(pool)
    amount_out, _ = swap_exact_in(snap.reserve_a, snap.reserve_b, amount_in)
    return amount_out


def quote_swap_b_for_a(pool: PoolLike, amount_in: Amount) -> Amount:
    """Output of `swap_b_for_a(amount_in)` against the current reserves."""
    snap = _snapshot(pool)
    amount_out, _ = swap_exact_in(snap.reserve_b, snap.reserve_a, amount_in)
    return amount_out


def quote_add_liquidity(pool: PoolLike, amount_a: Amount, amount_b: Amount) -> Amount:
    """LP shares `add_liquidity(amount_a, amount_b)` would mint."""
    snap = _snapshot(pool)
    return compute_lp_mint(snap.reserve_a, snap.reserve_b, amount_a, amount_b, snap.lp_supply)


def quote_remove_liquidity(pool: PoolLike, lp_amount: Amount) -> Tuple[Amount, Amount]:
    """(amount_a, amount_b) `remove_liquidity` would pay out for `lp_amount` shares."""
    snap = _snapshot(pool)
    return compute_lp_burn(lp_amount, snap.reserve_a, snap.reserve_b, snap.lp_supply)

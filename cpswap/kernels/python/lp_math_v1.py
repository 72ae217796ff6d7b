"""
Liquidity math kernel (v1 semantics).

This module mirrors `cpswap/kernels/dex/cpmm_pool_v1.yaml`:
- bootstrap mints a fixed `INITIAL_LP`, independent of the deposit,
- later deposits mint `min(lp1, lp2)` and keep the whole deposit (no refund),
- a deposit into an empty reserve mints nothing,
- burns pay out floor-proportional shares of both reserves.

It is written as a small set of pure functions with explicit rounding rules.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import (
    ArithmeticOverflowError,
    DegeneratePoolError,
    InsufficientReserveError,
    InvalidShareAmountError,
)


INITIAL_LP = 1_000_000
U64_MAX = (1 << 64) - 1


def _require_u64(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    if value > U64_MAX:
        raise ArithmeticOverflowError(name, value)


@dataclass(frozen=True)
class BootstrapResult:
    lp_minted: int
    reserve_a: int
    reserve_b: int
    lp_supply: int


@dataclass(frozen=True)
class MintLiquidityResult:
    lp_minted: int
    lp_from_a: int
    lp_from_b: int
    empty_reserve: bool
    new_reserve_a: int
    new_reserve_b: int
    new_lp_supply: int


@dataclass(frozen=True)
class BurnLiquidityResult:
    amount_a_out: int
    amount_b_out: int
    new_reserve_a: int
    new_reserve_b: int
    new_lp_supply: int


def bootstrap(*, amount_a: int, amount_b: int, initial_lp: int = INITIAL_LP) -> BootstrapResult:
    """
    First deposit: reserves take the full amounts and exactly `initial_lp` shares exist.

    Raises:
        DegeneratePoolError: If either amount is zero (the pool would start with
            shares outstanding against an empty reserve)
    """
    _require_u64("amount_a", amount_a)
    _require_u64("amount_b", amount_b)
    _require_u64("initial_lp", initial_lp)
    if amount_a == 0 or amount_b == 0:
        raise DegeneratePoolError(f"bootstrap deposits must be positive: ({amount_a}, {amount_b})")
    if initial_lp == 0:
        raise ValueError("initial_lp must be positive")
    return BootstrapResult(
        lp_minted=initial_lp,
        reserve_a=amount_a,
        reserve_b=amount_b,
        lp_supply=initial_lp,
    )


def mint_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
    amount_a: int,
    amount_b: int,
) -> MintLiquidityResult:
    """
    Proportional deposit.

        lp_from_a = floor(amount_a * lp_supply / reserve_a)
        lp_from_b = floor(amount_b * lp_supply / reserve_b)
        lp_minted = min(lp_from_a, lp_from_b)      (0 if either reserve is empty)

    Both full amounts are added to the reserves.
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("lp_supply", lp_supply),
        ("amount_a", amount_a),
        ("amount_b", amount_b),
    ):
        _require_u64(name, v)

    empty_reserve = reserve_a == 0 or reserve_b == 0
    if empty_reserve:
        lp_from_a = 0
        lp_from_b = 0
    else:
        lp_from_a = (amount_a * lp_supply) // reserve_a
        lp_from_b = (amount_b * lp_supply) // reserve_b
    lp_minted = min(lp_from_a, lp_from_b)

    new_reserve_a = reserve_a + amount_a
    new_reserve_b = reserve_b + amount_b
    new_lp_supply = lp_supply + lp_minted
    _require_u64("new_reserve_a", new_reserve_a)
    _require_u64("new_reserve_b", new_reserve_b)
    _require_u64("new_lp_supply", new_lp_supply)

    return MintLiquidityResult(
        lp_minted=lp_minted,
        lp_from_a=lp_from_a,
        lp_from_b=lp_from_b,
        empty_reserve=empty_reserve,
        new_reserve_a=new_reserve_a,
        new_reserve_b=new_reserve_b,
        new_lp_supply=new_lp_supply,
    )


def burn_liquidity(
    *,
    reserve_a: int,
    reserve_b: int,
    lp_supply: int,
    lp_amount: int,
) -> BurnLiquidityResult:
    """
    Proportional withdrawal.

        amount_a_out = floor(reserve_a * lp_amount / lp_supply)
        amount_b_out = floor(reserve_b * lp_amount / lp_supply)

    Raises:
        InvalidShareAmountError: If lp_amount > lp_supply or nothing is outstanding
        InsufficientReserveError: If an output exceeds its reserve
    """
    for name, v in (
        ("reserve_a", reserve_a),
        ("reserve_b", reserve_b),
        ("lp_supply", lp_supply),
        ("lp_amount", lp_amount),
    ):
        _require_u64(name, v)

    if lp_supply == 0:
        raise InvalidShareAmountError("no lp shares are outstanding")
    if lp_amount > lp_supply:
        raise InvalidShareAmountError(f"cannot burn more LP than supply: {lp_amount} > {lp_supply}")

    amount_a_out = (reserve_a * lp_amount) // lp_supply
    amount_b_out = (reserve_b * lp_amount) // lp_supply
    if amount_a_out > reserve_a or amount_b_out > reserve_b:
        raise InsufficientReserveError(
            f"outputs ({amount_a_out}, {amount_b_out}) exceed reserves ({reserve_a}, {reserve_b})"
        )

    return BurnLiquidityResult(
        amount_a_out=amount_a_out,
        amount_b_out=amount_b_out,
        new_reserve_a=reserve_a - amount_a_out,
        new_reserve_b=reserve_b - amount_b_out,
        new_lp_supply=lp_supply - lp_amount,
    )

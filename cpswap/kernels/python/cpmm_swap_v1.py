"""
CPMM swap kernel (v1 semantics).

This implements the semantics described in `cpswap/kernels/dex/cpmm_pool_v1.yaml`:
- A fixed 0.3% fee: 997/1000 of the input counts toward pricing.
- The full input (fee included) stays in the pool.
- Output is rounded down.

Intermediate products are exact Python ints, so `amount_in_with_fee * reserve_out`
never wraps; only values written back to reserves are range-checked against u64.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...errors import ArithmeticOverflowError, CpSwapError, DegeneratePoolError, InsufficientReserveError


FEE_NUMERATOR = 997
FEE_DENOMINATOR = 1000
U64_MAX = (1 << 64) - 1


def _require_u64(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    if value > U64_MAX:
        raise ArithmeticOverflowError(name, value)


@dataclass(frozen=True)
class SwapResult:
    amount_in: int
    amount_in_with_fee: int
    amount_out: int
    new_reserve_in: int
    new_reserve_out: int
    k_before: int
    k_after: int


def get_amount_out(*, amount_in: int, reserve_in: int, reserve_out: int) -> int:
    """
    amount_out = floor(amount_in * 997 * reserve_out / (reserve_in * 1000 + amount_in * 997))

    Returns 0 when the denominator is zero (empty input against an empty reserve).
    """
    for name, v in (("amount_in", amount_in), ("reserve_in", reserve_in), ("reserve_out", reserve_out)):
        _require_u64(name, v)

    amount_in_with_fee = amount_in * FEE_NUMERATOR
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * FEE_DENOMINATOR + amount_in_with_fee
    if denominator == 0:
        return 0
    return numerator // denominator


def swap(*, reserve_in: int, reserve_out: int, amount_in: int) -> SwapResult:
    """
    Swap quote + post-state.

    Raises:
        DegeneratePoolError: If either reserve is empty
        InsufficientReserveError: If amount_out >= reserve_out
        ArithmeticOverflowError: If reserve_in + amount_in exceeds u64
        CpSwapError: If the post-swap constant product is below k_before
    """
    for name, v in (("reserve_in", reserve_in), ("reserve_out", reserve_out), ("amount_in", amount_in)):
        _require_u64(name, v)

    if reserve_in == 0 or reserve_out == 0:
        raise DegeneratePoolError(f"cannot swap against an empty reserve: ({reserve_in}, {reserve_out})")

    k_before = reserve_in * reserve_out

    amount_in_with_fee = amount_in * FEE_NUMERATOR
    amount_out = get_amount_out(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)
    if amount_out >= reserve_out:
        raise InsufficientReserveError(
            f"amount_out ({amount_out}) >= reserve_out ({reserve_out})"
        )

    new_reserve_in = reserve_in + amount_in
    _require_u64("new_reserve_in", new_reserve_in)
    new_reserve_out = reserve_out - amount_out

    k_after = new_reserve_in * new_reserve_out
    if k_after < k_before:
        raise CpSwapError(f"invariant violation: k_after ({k_after}) < k_before ({k_before})")

    return SwapResult(
        amount_in=amount_in,
        amount_in_with_fee=amount_in_with_fee,
        amount_out=amount_out,
        new_reserve_in=new_reserve_in,
        new_reserve_out=new_reserve_out,
        k_before=k_before,
        k_after=k_after,
    )

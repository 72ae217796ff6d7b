"""
Constant Product Market Maker (CPMM) algorithm implementation.

This module exposes the pool math with the deterministic rounding rules every
operation relies on.

Algorithm Design:
- Type: Integer Arithmetic / Floor Rounding
- Time Complexity: O(1) per operation
- Space Complexity: O(1) auxiliary
- Invariant: After each swap, x' * y' >= x * y (the fee stays in the pool)
"""

from typing import Tuple

from ..state.balances import Amount
from ..kernels.python.cpmm_swap_v1 import FEE_DENOMINATOR, FEE_NUMERATOR
from ..kernels.python.cpmm_swap_v1 import get_amount_out as _kernel_get_amount_out_v1
from ..kernels.python.cpmm_swap_v1 import swap as _kernel_swap_v1
from ..kernels.python.lp_math_v1 import INITIAL_LP
from ..kernels.python.lp_math_v1 import burn_liquidity as _kernel_burn_liquidity_v1
from ..kernels.python.lp_math_v1 import mint_liquidity as _kernel_mint_liquidity_v1


def compute_price(reserve_a: Amount, reserve_b: Amount) -> Amount:
    """
    Approximate spot price of A in units of B: floor(reserve_b / reserve_a).

    Returns 0 when reserve_a is empty. No fee adjustment.
    """
    if reserve_a < 0 or reserve_b < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve_a}, {reserve_b})")
    if reserve_a == 0:
        return 0
    return reserve_b // reserve_a


def get_amount_out(amount_in: Amount, reserve_in: Amount, reserve_out: Amount) -> Amount:
    """
    Output for `amount_in`, before any reserve guard:

        amount_out = floor(amount_in * 997 * reserve_out / (reserve_in * 1000 + amount_in * 997))
    """
    return _kernel_get_amount_out_v1(amount_in=amount_in, reserve_in=reserve_in, reserve_out=reserve_out)


def swap_exact_in(
    reserve_in: Amount,
    reserve_out: Amount,
    amount_in: Amount,
) -> Tuple[Amount, Tuple[Amount, Amount]]:
    """
    Compute output amount and post-swap reserves.

    Post-swap reserves:
        new_reserve_in = reserve_in + amount_in  (fee stays in pool)
        new_reserve_out = reserve_out - amount_out

    Invariant: new_reserve_in * new_reserve_out >= reserve_in * reserve_out

    Args:
        reserve_in: Current reserve of input asset
        reserve_out: Current reserve of output asset
        amount_in: Exact input amount

    Returns:
        Tuple of (amount_out, (new_reserve_in, new_reserve_out))

    Raises:
        DegeneratePoolError: If either reserve is empty
        InsufficientReserveError: If the output would drain reserve_out
        ArithmeticOverflowError: If new_reserve_in exceeds u64
    """
    res = _kernel_swap_v1(reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount_in)
    return res.amount_out, (res.new_reserve_in, res.new_reserve_out)


def compute_lp_mint(
    reserve_a: Amount,
    reserve_b: Amount,
    amount_a: Amount,
    amount_b: Amount,
    lp_supply: Amount,
) -> Amount:
    """
    Compute LP shares to mint for a deposit into an existing pool.

        lp = min(floor(amount_a * lp_supply / reserve_a), floor(amount_b * lp_supply / reserve_b))

    A deposit into an empty reserve mints 0.

    Args:
        reserve_a: Current reserve of asset A
        reserve_b: Current reserve of asset B
        amount_a: Amount of asset A being deposited
        amount_b: Amount of asset B being deposited
        lp_supply: Current LP share supply

    Returns:
        Amount of LP shares to mint
    """
    res = _kernel_mint_liquidity_v1(
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        lp_supply=lp_supply,
        amount_a=amount_a,
        amount_b=amount_b,
    )
    return res.lp_minted


def compute_lp_burn(
    lp_amount: Amount,
    reserve_a: Amount,
    reserve_b: Amount,
    lp_supply: Amount,
) -> Tuple[Amount, Amount]:
    """
    Compute asset amounts returned for burning `lp_amount` shares.

    Formula:
        amount_a = floor(reserve_a * lp_amount / lp_supply)
        amount_b = floor(reserve_b * lp_amount / lp_supply)

    Raises:
        InvalidShareAmountError: If lp_amount exceeds lp_supply
    """
    res = _kernel_burn_liquidity_v1(
        reserve_a=reserve_a,
        reserve_b=reserve_b,
        lp_supply=lp_supply,
        lp_amount=lp_amount,
    )
    return res.amount_a_out, res.amount_b_out


__all__ = [
    "FEE_NUMERATOR",
    "FEE_DENOMINATOR",
    "INITIAL_LP",
    "compute_price",
    "get_amount_out",
    "swap_exact_in",
    "compute_lp_mint",
    "compute_lp_burn",
]

"""
Core pool algorithms
"""

from .cpmm import (
    FEE_DENOMINATOR,
    FEE_NUMERATOR,
    INITIAL_LP,
    compute_lp_burn,
    compute_lp_mint,
    compute_price,
    get_amount_out,
    swap_exact_in,
)
from .events import (
    EventSink,
    LiquidityAction,
    LiquidityEvent,
    LoggingEventSink,
    NullEventSink,
    RecordingEventSink,
    SwapDirection,
    SwapEvent,
)
from .liquidity import add_liquidity, init_pool, remove_liquidity
from .quote import (
    get_price,
    quote_add_liquidity,
    quote_remove_liquidity,
    quote_swap_a_for_b,
    quote_swap_b_for_a,
)
from .swap import swap_a_for_b, swap_b_for_a

__all__ = [
    "FEE_DENOMINATOR",
    "FEE_NUMERATOR",
    "INITIAL_LP",
    "compute_lp_burn",
    "compute_lp_mint",
    "compute_price",
    "get_amount_out",
    "swap_exact_in",
    "EventSink",
    "LiquidityAction",
    "LiquidityEvent",
    "LoggingEventSink",
    "NullEventSink",
    "RecordingEventSink",
    "SwapDirection",
    "SwapEvent",
    "add_liquidity",
    "init_pool",
    "remove_liquidity",
    "get_price",
    "quote_add_liquidity",
    "quote_remove_liquidity",
    "quote_swap_a_for_b",
    "quote_swap_b_for_a",
    "swap_a_for_b",
    "swap_b_for_a",
]

"""
State management for cpswap pools
"""

from .balances import Balance, TokenSupply, U64_MAX, destroy_zero, merge, split, zero
from .context import TxContext
from .lp import LPMintAuthority, create_lp_authority, lp_asset_id
from .pools import Pool, PoolSnapshot, compute_pool_id

__all__ = [
    "Balance",
    "TokenSupply",
    "U64_MAX",
    "destroy_zero",
    "merge",
    "split",
    "zero",
    "TxContext",
    "LPMintAuthority",
    "create_lp_authority",
    "lp_asset_id",
    "Pool",
    "PoolSnapshot",
    "compute_pool_id",
]

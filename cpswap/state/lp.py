"""
LP share token for cpswap pools.

LP shares are an ordinary asset kind whose id is derived from the pool's asset pair.
They are minted and burned only through an `LPMintAuthority`, which the caller holds
and presents to every liquidity operation.
"""

from __future__ import annotations

import hashlib

from .balances import AssetId, TokenSupply
from .context import TxContext


def lp_asset_id(asset_a: AssetId, asset_b: AssetId) -> AssetId:
    """
    Deterministic LP asset id for a pair:

        lp_asset = H("CpSwapLP" || asset_a || asset_b)
    """
    if asset_a == asset_b:
        raise ValueError(f"pool assets must differ: {asset_a}")
    data = b"CpSwapLP" + asset_a.encode("utf-8") + asset_b.encode("utf-8")
    return "0x" + hashlib.sha256(data).hexdigest()


class LPMintAuthority(TokenSupply):
    """Minting authority for the LP shares of one (asset_a, asset_b) pair."""

    def __init__(self, *, asset_a: AssetId, asset_b: AssetId, authority_id: str) -> None:
        super().__init__(asset=lp_asset_id(asset_a, asset_b), authority_id=authority_id)
        self._asset_a = asset_a
        self._asset_b = asset_b

    @property
    def pair(self) -> tuple[AssetId, AssetId]:
        return self._asset_a, self._asset_b

    def __repr__(self) -> str:
        return (
            f"LPMintAuthority(pair=({self._asset_a[:8]}..., {self._asset_b[:8]}...), "
            f"total_supply={self.total_supply})"
        )


def create_lp_authority(asset_a: AssetId, asset_b: AssetId, ctx: TxContext) -> LPMintAuthority:
    """Create the LP minting authority for a new pair, with a fresh authority id."""
    return LPMintAuthority(asset_a=asset_a, asset_b=asset_b, authority_id=ctx.fresh_id())

"""
Pool state for constant-product pools.

A `Pool` owns two reserve handles and tracks the outstanding LP supply. All mutation
happens inside `Pool.exclusive()`; readers take a `PoolSnapshot`, which is always a
consistent view of the three numeric fields.
"""

from __future__ import annotations

import hashlib
import threading
from contextlib import contextmanager
from dataclasses import asdict, dataclass
from typing import Any, Iterator, List, Mapping

from .balances import AssetId, Amount, Balance, merge, require_u64, split
from .context import ObjectId, TxContext


def compute_pool_id(asset_a: AssetId, asset_b: AssetId, authority_id: ObjectId) -> str:
    """
    Deterministically compute a pool_id:

        pool_id = H("CpSwapPool" || asset_a || asset_b || authority_id)
    """
    if asset_a == asset_b:
        raise ValueError(f"pool assets must differ: {asset_a}")
    if not isinstance(authority_id, str) or not authority_id:
        raise ValueError("authority_id must be a non-empty string")

    pool_id_data = (
        b"CpSwapPool"
        + asset_a.encode("utf-8")
        + asset_b.encode("utf-8")
        + authority_id.encode("utf-8")
    )
    return "0x" + hashlib.sha256(pool_id_data).hexdigest()


@dataclass(frozen=True)
class PoolSnapshot:
    """
    Immutable view of a pool at one instant.

    Attributes:
        pool_id: Pool identifier (hex string)
        asset_a: Asset held in reserve A
        asset_b: Asset held in reserve B
        lp_asset: Asset id of the pool's LP shares
        reserve_a: Reserve amount of asset_a
        reserve_b: Reserve amount of asset_b
        lp_supply: Outstanding LP shares
    """

    pool_id: str
    asset_a: AssetId
    asset_b: AssetId
    lp_asset: AssetId
    reserve_a: Amount
    reserve_b: Amount
    lp_supply: Amount

    def __post_init__(self) -> None:
        require_u64("reserve_a", self.reserve_a)
        require_u64("reserve_b", self.reserve_b)
        require_u64("lp_supply", self.lp_supply)

    @property
    def is_initialized(self) -> bool:
        return self.lp_supply > 0

    def constant_product(self) -> int:
        """k = reserve_a * reserve_b (exact, may exceed u64)."""
        return self.reserve_a * self.reserve_b

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, obj: Mapping[str, Any]) -> "PoolSnapshot":
        missing = [name for name in cls.__dataclass_fields__ if name not in obj]
        if missing:
            raise ValueError(f"pool snapshot missing fields: {', '.join(sorted(missing))}")
        return cls(**{name: obj[name] for name in cls.__dataclass_fields__})


class Pool:
    """
    Mutable pool state.

    Reserves are held as `Balance` handles so that value can only enter through
    `join_*` and leave through `take_*`. Callers mutating the pool must hold
    `exclusive()` for the whole operation.
    """

    def __init__(
        self,
        *,
        pool_id: str,
        reserve_a: Balance,
        reserve_b: Balance,
        lp_asset: AssetId,
        authority_id: ObjectId,
        lp_supply: Amount = 0,
    ) -> None:
        if reserve_a.asset == reserve_b.asset:
            raise ValueError(f"pool assets must differ: {reserve_a.asset}")
        if lp_asset in (reserve_a.asset, reserve_b.asset):
            raise ValueError("lp_asset must differ from both reserve assets")
        # Touch both handles so consumed handles are rejected up front.
        reserve_a.value()
        reserve_b.value()

        self._pool_id = pool_id
        self._asset_a = reserve_a.asset
        self._asset_b = reserve_b.asset
        self._reserve_a = reserve_a
        self._reserve_b = reserve_b
        self._lp_asset = lp_asset
        self._authority_id = authority_id
        self._lp_supply = require_u64("lp_supply", lp_supply)
        self._lock = threading.RLock()

    @property
    def pool_id(self) -> str:
        return self._pool_id

    @property
    def asset_a(self) -> AssetId:
        return self._asset_a

    @property
    def asset_b(self) -> AssetId:
        return self._asset_b

    @property
    def lp_asset(self) -> AssetId:
        return self._lp_asset

    @property
    def authority_id(self) -> ObjectId:
        return self._authority_id

    @property
    def reserve_a(self) -> Amount:
        with self._lock:
            return self._reserve_a.value()

    @property
    def reserve_b(self) -> Amount:
        with self._lock:
            return self._reserve_b.value()

    @property
    def lp_supply(self) -> Amount:
        with self._lock:
            return self._lp_supply

    @lp_supply.setter
    def lp_supply(self, value: Amount) -> None:
        with self._lock:
            self._lp_supply = require_u64("lp_supply", value)

    @contextmanager
    def exclusive(self) -> Iterator["Pool"]:
        """Hold the pool lock; no other operation observes intermediate state."""
        with self._lock:
            yield self

    def snapshot(self) -> PoolSnapshot:
        with self._lock:
            return PoolSnapshot(
                pool_id=self._pool_id,
                asset_a=self.asset_a,
                asset_b=self.asset_b,
                lp_asset=self._lp_asset,
                reserve_a=self.reserve_a,
                reserve_b=self.reserve_b,
                lp_supply=self._lp_supply,
            )

    def join_a(self, handle: Balance) -> None:
        with self._lock:
            merge(self._reserve_a, handle)

    def join_b(self, handle: Balance) -> None:
        with self._lock:
            merge(self._reserve_b, handle)

    def take_a(self, amount: Amount, ctx: TxContext) -> Balance:
        with self._lock:
            taken, self._reserve_a = split(self._reserve_a, amount, ctx)
        return taken

    def take_b(self, amount: Amount, ctx: TxContext) -> Balance:
        with self._lock:
            taken, self._reserve_b = split(self._reserve_b, amount, ctx)
        return taken

    def get_constant_product(self) -> int:
        """
        Compute k = reserve_a * reserve_b.

        Returns:
            Constant product k
        """
        return self.snapshot().constant_product()

    def verify_invariant(self, min_k: int = 0) -> bool:
        """
        Verify CPMM invariant: reserve_a * reserve_b >= min_k.

        Args:
            min_k: Minimum allowed constant product

        Returns:
            True if invariant holds
        """
        return self.get_constant_product() >= min_k

    def invariant_violations(self) -> List[str]:
        """List the structural invariants the current state breaks (empty when healthy)."""
        snap = self.snapshot()
        violations: List[str] = []
        if (snap.reserve_a == 0) != (snap.reserve_b == 0):
            violations.append("exactly one reserve is empty")
        if snap.lp_supply > 0 and (snap.reserve_a == 0 or snap.reserve_b == 0):
            violations.append("lp supply outstanding against an empty reserve")
        if snap.lp_supply == 0 and (snap.reserve_a > 0 or snap.reserve_b > 0):
            violations.append("reserves held with no lp supply")
        return violations

    def __repr__(self) -> str:
        snap = self.snapshot()
        return (
            f"Pool(pool_id={snap.pool_id[:16]}..., "
            f"assets=({snap.asset_a[:8]}..., {snap.asset_b[:8]}...), "
            f"reserves=({snap.reserve_a}, {snap.reserve_b}), "
            f"lp_supply={snap.lp_supply})"
        )

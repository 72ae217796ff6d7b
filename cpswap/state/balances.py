"""
Asset handles with move-only accounting.

Implements the value-bearing handle contract used by the pool:
- `Balance` carries an asset id and a u64 amount,
- `split` / `merge` / `destroy_zero` consume their inputs,
- `TokenSupply` is the only way new units come into existence (or leave it).

Every unit that enters an operation leaves it in exactly one output handle.
"""

from __future__ import annotations

from typing import Tuple

from ..errors import (
    ArithmeticOverflowError,
    AssetError,
    AssetMismatchError,
    ConsumedHandleError,
)
from .context import ObjectId, TxContext


# Type aliases
AssetId = str  # 32-byte hex string (0x...)
Amount = int  # Non-negative integer that must fit in u64

U64_MAX = (1 << 64) - 1


def require_u64(name: str, value: int) -> int:
    """
    Check that `value` is an int in [0, U64_MAX].

    Raises:
        TypeError: If value is not an int (bools are rejected)
        ValueError: If value is negative
        ArithmeticOverflowError: If value exceeds U64_MAX
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int")
    if value < 0:
        raise ValueError(f"{name} must be non-negative: {value}")
    if value > U64_MAX:
        raise ArithmeticOverflowError(name, value)
    return value


class Balance:
    """
    Non-copyable handle to `value` units of one asset.

    Handles are created by `TokenSupply.mint`, `zero` and `split`, and are used up by
    `merge`, `split`, `destroy_zero` and `TokenSupply.burn`. A used-up handle raises
    `ConsumedHandleError` on any further access.
    """

    __slots__ = ("_object_id", "_asset", "_value", "_consumed")

    def __init__(self, *, object_id: ObjectId, asset: AssetId, value: Amount) -> None:
        if not isinstance(asset, str) or not asset:
            raise TypeError("asset must be a non-empty str")
        self._object_id = object_id
        self._asset = asset
        self._value = require_u64("value", value)
        self._consumed = False

    @property
    def object_id(self) -> ObjectId:
        return self._object_id

    @property
    def asset(self) -> AssetId:
        return self._asset

    @property
    def consumed(self) -> bool:
        return self._consumed

    def value(self) -> Amount:
        """Amount carried by this handle."""
        self._require_live()
        return self._value

    def _require_live(self) -> None:
        if self._consumed:
            raise ConsumedHandleError(f"handle {self._object_id} was already consumed")

    def _consume(self) -> Amount:
        self._require_live()
        self._consumed = True
        value = self._value
        self._value = 0
        return value

    def __copy__(self) -> "Balance":
        raise TypeError("Balance handles cannot be copied")

    def __deepcopy__(self, memo: dict) -> "Balance":
        raise TypeError("Balance handles cannot be copied")

    def __reduce__(self):
        raise TypeError("Balance handles cannot be pickled")

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else str(self._value)
        return f"Balance(asset={self._asset[:10]}..., value={state})"


def zero(asset: AssetId, ctx: TxContext) -> Balance:
    """Create an empty handle for `asset`."""
    return Balance(object_id=ctx.fresh_id(), asset=asset, value=0)


def split(handle: Balance, amount: Amount, ctx: TxContext) -> Tuple[Balance, Balance]:
    """
    Split `amount` off `handle`.

    The input handle is consumed; the result is `(taken, remainder)` with
    `taken.value() + remainder.value()` equal to the input value.

    Raises:
        ConsumedHandleError: If handle was already consumed
        AssetError: If amount exceeds the handle value
    """
    require_u64("amount", amount)
    current = handle.value()
    if amount > current:
        raise AssetError(f"cannot split {amount} from a handle holding {current}")
    asset = handle.asset
    handle._consume()
    taken = Balance(object_id=ctx.fresh_id(), asset=asset, value=amount)
    remainder = Balance(object_id=ctx.fresh_id(), asset=asset, value=current - amount)
    return taken, remainder


def merge(into: Balance, from_: Balance) -> None:
    """
    Move all of `from_` into `into`; `from_` is consumed.

    Raises:
        ConsumedHandleError: If either handle was already consumed
        AssetMismatchError: If the handles carry different assets
        ArithmeticOverflowError: If the merged value would exceed U64_MAX
    """
    if into is from_:
        raise AssetError("cannot merge a handle into itself")
    into._require_live()
    from_._require_live()
    if into.asset != from_.asset:
        raise AssetMismatchError(f"cannot merge {from_.asset} into {into.asset}")
    merged = require_u64("merged value", into._value + from_._value)
    into._value = merged
    from_._consume()


def destroy_zero(handle: Balance) -> None:
    """Consume an empty handle."""
    if handle.value() != 0:
        raise AssetError(f"cannot destroy a handle holding {handle.value()}")
    handle._consume()


class TokenSupply:
    """
    Minting authority for one asset kind.

    Tracks `total_supply` so that total minted minus total burned is always known.
    """

    def __init__(self, *, asset: AssetId, authority_id: ObjectId) -> None:
        if not isinstance(asset, str) or not asset:
            raise TypeError("asset must be a non-empty str")
        self._asset = asset
        self._authority_id = authority_id
        self._total_supply: Amount = 0

    @property
    def asset(self) -> AssetId:
        return self._asset

    @property
    def authority_id(self) -> ObjectId:
        return self._authority_id

    @property
    def total_supply(self) -> Amount:
        return self._total_supply

    def mint(self, amount: Amount, ctx: TxContext) -> Balance:
        """
        Create a new handle of `amount` units.

        Raises:
            ArithmeticOverflowError: If the total supply would exceed U64_MAX
        """
        require_u64("amount", amount)
        new_total = require_u64("total_supply", self._total_supply + amount)
        handle = Balance(object_id=ctx.fresh_id(), asset=self._asset, value=amount)
        self._total_supply = new_total
        return handle

    def burn(self, handle: Balance) -> Amount:
        """
        Destroy `handle` and remove its units from the total supply.

        Returns:
            The burned amount
        """
        if handle.asset != self._asset:
            raise AssetMismatchError(f"cannot burn {handle.asset} with the {self._asset} authority")
        amount = handle.value()
        if amount > self._total_supply:
            raise AssetError(f"burn of {amount} exceeds total supply {self._total_supply}")
        handle._consume()
        self._total_supply -= amount
        return amount

    def __repr__(self) -> str:
        return f"TokenSupply(asset={self._asset[:10]}..., total_supply={self._total_supply})"

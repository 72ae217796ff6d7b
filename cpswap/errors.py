"""Exception types raised by the pool core.

Every failure is raised before any state is mutated, so a caller (or an outer
transactional layer) can abort cleanly. All types derive from ``ValueError``
to stay catchable by callers written against the plain validation guards.
"""

from __future__ import annotations


class CpSwapError(ValueError):
    """Base class for pool failures surfaced to callers."""


class ArithmeticOverflowError(CpSwapError):
    """Raised when a value to be stored does not fit the u64 amount domain."""

    def __init__(self, name: str, value: int) -> None:
        self.name = name
        self.value = value
        super().__init__(f"{name} overflows u64: {value}")


class InsufficientReserveError(CpSwapError):
    """Raised when an output would drain or exceed a reserve."""


class InvalidShareAmountError(CpSwapError):
    """Raised when an LP share amount exceeds the outstanding supply."""


class DegeneratePoolError(CpSwapError):
    """Raised when an operation needs non-zero reserves and the pool has none."""


class AssetError(CpSwapError):
    """Raised when an asset handle or minting authority is misused."""


class ConsumedHandleError(AssetError):
    """Raised when a handle is used after it was merged, split, burned or destroyed."""


class AssetMismatchError(AssetError):
    """Raised when a handle of the wrong asset kind is presented."""


class AuthorityMismatchError(AssetError):
    """Raised when the presented minting authority does not govern the pool's LP asset."""
